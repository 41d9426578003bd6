#!/usr/bin/env python3
"""
Exporter Test Configuration - PyTest Configuration and Fixtures

Shared fixtures: an in-memory stand-in for the MySQL adapter, a temporary
SQLite destination path, and a MigrationConfig pointing at it.
"""

import pytest
import os
import sys
from typing import Dict, List, Sequence, Tuple

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.migration_config import MigrationConfig
from core.errors import ResourceReleaseError, SchemaFetchError
from core.schema import ColumnDescriptor
from extensions.plugins.mysql_adapter import ConnectionConfig


class FakeMySQLSource:
    """Stands in for MySQLAdapter; tables are {name: (columns, rows)}"""

    def __init__(self, tables: Dict[str, Tuple[Sequence[Tuple[str, str]], List[tuple]]],
                 fail_on_close: bool = False):
        self.tables = tables
        self.fail_on_close = fail_on_close
        self.close_calls = 0
        self.calls: List[str] = []

    def get_tables(self) -> List[str]:
        self.calls.append('get_tables')
        return list(self.tables)

    def get_schema(self, table_name: str) -> List[ColumnDescriptor]:
        self.calls.append(f'get_schema:{table_name}')
        if table_name not in self.tables:
            raise SchemaFetchError(f"Table '{table_name}' doesn't exist", table=table_name)
        columns, _ = self.tables[table_name]
        return [ColumnDescriptor(name, source_type) for name, source_type in columns]

    def extract_data(self, table_name: str) -> List[tuple]:
        self.calls.append(f'extract_data:{table_name}')
        _, rows = self.tables[table_name]
        return [tuple(row) for row in rows]

    def close(self) -> None:
        self.close_calls += 1
        if self.fail_on_close:
            raise ResourceReleaseError("Failed to close MySQL connection: broken pipe", endpoint='mysql')


@pytest.fixture
def sqlite_path(tmp_path):
    """Destination file inside a per-test temporary directory"""
    return str(tmp_path / "export.sqlite")


@pytest.fixture
def migration_config(sqlite_path):
    return MigrationConfig(
        source=ConnectionConfig(host='localhost', port=3306, database='shop', user='reader', password='secret'),
        output_path=sqlite_path,
    )


@pytest.fixture
def sample_tables():
    """Two small tables; users is the documented example"""
    return {
        'users': (
            [('id', 'int(11)'), ('name', 'varchar(50)')],
            [(1, 'Alice'), (2, 'Bob'), (3, 'Carol')],
        ),
        'orders': (
            [('id', 'int(11)'), ('user_id', 'bigint(20)'), ('total', 'decimal(10,2)'),
             ('placed_at', 'datetime'), ('receipt', 'mediumblob')],
            [(10, 1, 12.5, '2024-01-05 10:00:00', b'\x00\x01'),
             (11, 2, 99.0, '2024-01-06 11:30:00', None)],
        ),
    }


# Custom markers for test organization
def pytest_configure(config):
    """Configure custom pytest markers"""
    config.addinivalue_line(
        "markers", "integration: Tests that need a live MySQL server"
    )
