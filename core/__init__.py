#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exporter core: type mapping, schema descriptors and errors.

The migration runner lives in core.migration and is not imported here, so
that the adapters can import core.schema and core.errors without a cycle.
"""

from core.errors import (
    ErrorCode,
    MigrationError,
    ConfigError,
    ConnectionError,
    SchemaFetchError,
    TableCreationError,
    RowFetchError,
    RowInsertError,
    TransactionError,
    ResourceReleaseError,
)
from core.type_mapper import StorageClass, TypeMapper, map_type
from core.schema import ColumnDescriptor, TableDescriptor, RowRecord

__version__ = "1.0.0"

__all__ = [
    'ErrorCode',
    'MigrationError',
    'ConfigError',
    'ConnectionError',
    'SchemaFetchError',
    'TableCreationError',
    'RowFetchError',
    'RowInsertError',
    'TransactionError',
    'ResourceReleaseError',
    'StorageClass',
    'TypeMapper',
    'map_type',
    'ColumnDescriptor',
    'TableDescriptor',
    'RowRecord',
]
