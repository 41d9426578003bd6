#!/usr/bin/env python3
"""
Migration Error Hierarchy
Canonical exception classes for the MySQL -> SQLite exporter.
"""

from enum import Enum

class ErrorCode(Enum):
    UNKNOWN = "UNKNOWN_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    SCHEMA_FETCH_ERROR = "SCHEMA_FETCH_ERROR"
    TABLE_CREATION_ERROR = "TABLE_CREATION_ERROR"
    ROW_FETCH_ERROR = "ROW_FETCH_ERROR"
    ROW_INSERT_ERROR = "ROW_INSERT_ERROR"
    TRANSACTION_ERROR = "TRANSACTION_ERROR"
    RESOURCE_RELEASE_ERROR = "RESOURCE_RELEASE_ERROR"

class MigrationError(Exception):
    """Base class for all migration exceptions"""
    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

class ConfigError(MigrationError):
    """Raised when the environment holds an unusable setting"""
    def __init__(self, message: str, key: str = None):
        super().__init__(message, ErrorCode.CONFIG_ERROR, {'key': key})

class ConnectionError(MigrationError):
    """Raised when the source or destination cannot be opened"""
    def __init__(self, message: str, endpoint: str = None):
        super().__init__(message, ErrorCode.CONNECTION_ERROR, {'endpoint': endpoint})

class SchemaFetchError(MigrationError):
    """Raised when listing tables or describing columns fails"""
    def __init__(self, message: str, table: str = None):
        super().__init__(message, ErrorCode.SCHEMA_FETCH_ERROR, {'table': table})

class TableCreationError(MigrationError):
    """Raised when the destination rejects a CREATE TABLE"""
    def __init__(self, message: str, table: str = None):
        super().__init__(message, ErrorCode.TABLE_CREATION_ERROR, {'table': table})

class RowFetchError(MigrationError):
    """Raised when reading the rows of a source table fails"""
    def __init__(self, message: str, table: str = None):
        super().__init__(message, ErrorCode.ROW_FETCH_ERROR, {'table': table})

class RowInsertError(MigrationError):
    """Raised when the destination rejects a single row"""
    def __init__(self, message: str, table: str = None, row_number: int = None):
        super().__init__(message, ErrorCode.ROW_INSERT_ERROR,
                         {'table': table, 'row_number': row_number})

class TransactionError(MigrationError):
    """Raised when BEGIN, COMMIT or ROLLBACK fails"""
    def __init__(self, message: str, table: str = None):
        super().__init__(message, ErrorCode.TRANSACTION_ERROR, {'table': table})

class ResourceReleaseError(MigrationError):
    """Raised when closing a connection fails"""
    def __init__(self, message: str, endpoint: str = None):
        super().__init__(message, ErrorCode.RESOURCE_RELEASE_ERROR, {'endpoint': endpoint})
