#!/usr/bin/env python3
"""
Per-table schema descriptors.

A TableDescriptor is built from one DESCRIBE of the source table and is the
single source of column order for both the CREATE TABLE and the positional
INSERT issued against the destination.
"""

from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from core.type_mapper import StorageClass, map_type

# One row as returned by the source driver, in column-definition order
RowRecord = Tuple[Any, ...]


@dataclass(frozen=True)
class ColumnDescriptor:
    """A source column: its name and raw MySQL type string"""
    name: str
    source_type: str

    @property
    def storage_class(self) -> StorageClass:
        return map_type(self.source_type)

    def to_sql(self) -> str:
        # Identifiers are emitted as-is; names needing quotes break the DDL.
        return f"{self.name} {self.storage_class.value}"


@dataclass(frozen=True)
class TableDescriptor:
    """A source table and its ordered columns"""
    name: str
    columns: Tuple[ColumnDescriptor, ...] = field(default_factory=tuple)

    @classmethod
    def from_columns(cls, name: str, columns: Sequence[ColumnDescriptor]) -> 'TableDescriptor':
        return cls(name=name, columns=tuple(columns))

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]

    def column_definitions(self) -> List[str]:
        return [col.to_sql() for col in self.columns]

    def create_table_sql(self) -> str:
        return f"CREATE TABLE IF NOT EXISTS {self.name} ({', '.join(self.column_definitions())})"

    def insert_sql(self) -> str:
        placeholders = ', '.join(['?'] * len(self.columns))
        return f"INSERT INTO {self.name} VALUES ({placeholders})"
