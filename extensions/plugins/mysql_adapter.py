#!/usr/bin/env python3
"""
MySQL Source Adapter

Read-side wrapper around PyMySQL used by the exporter:
- Single connection opened eagerly, closed exactly once
- Table listing in server order (SHOW TABLES)
- Ordered column descriptions (DESCRIBE)
- Whole-table extraction as positional tuples

Every statement is attempted once; PyMySQL errors are re-raised as the
matching MigrationError kind.

Usage:
    adapter = MySQLAdapter(ConnectionConfig(
        host='localhost',
        database='shop',
        user='reader',
        password='secret'
    ))
    for table in adapter.get_tables():
        columns = adapter.get_schema(table)
        rows = adapter.extract_data(table)
    adapter.close()
"""

import pymysql
import pymysql.cursors
from pymysql import MySQLError
import logging
import time
from typing import Dict, List, Any, Optional, Tuple
from dataclasses import dataclass
from enum import Enum

from core.errors import ConnectionError, SchemaFetchError, RowFetchError, ResourceReleaseError
from core.schema import ColumnDescriptor, RowRecord

# Configure logging
logger = logging.getLogger(__name__)

class ConnectionState(Enum):
    """Connection states"""
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    CLOSED = "closed"

@dataclass
class ConnectionConfig:
    """MySQL connection configuration"""
    host: str = "localhost"
    port: int = 3306
    database: Optional[str] = None
    user: Optional[str] = None
    password: str = ""

    # MySQL specific settings
    charset: str = "utf8mb4"
    connect_timeout: int = 10
    autocommit: bool = True

    def to_connection_params(self) -> Dict[str, Any]:
        """Convert to PyMySQL connection parameters"""
        return {
            'host': self.host,
            'port': self.port,
            'database': self.database,
            'user': self.user,
            'password': self.password,
            'charset': self.charset,
            'connect_timeout': self.connect_timeout,
            'autocommit': self.autocommit,
            # Tuples keep values in column-definition order for positional inserts
            'cursorclass': pymysql.cursors.Cursor
        }

    def describe(self) -> str:
        return f"{self.user or ''}@{self.host}:{self.port}/{self.database or ''}"


def _text(value: Any) -> str:
    """DESCRIBE/SHOW output may come back as bytes depending on server version"""
    if isinstance(value, (bytes, bytearray)):
        return value.decode('utf-8')
    return value


class MySQLAdapter:
    """
    MySQL source for the exporter.

    The connection is opened in the constructor; a failure there raises
    ConnectionError and leaves nothing to close.
    """

    def __init__(self, config: Optional[ConnectionConfig] = None, **kwargs):
        """Initialize MySQL adapter"""
        if config:
            self.config = config
        else:
            self.config = ConnectionConfig(**kwargs)

        self.state = ConnectionState.DISCONNECTED
        self._connection = None

        self.stats = {
            'queries_executed': 0,
            'rows_fetched': 0,
            'total_execution_time': 0.0,
            'start_time': time.time()
        }

        self._connect()
        logger.debug(f"MySQL adapter initialized for {self.config.describe()}")

    def _connect(self) -> None:
        """Establish database connection."""
        try:
            self._connection = pymysql.connect(**self.config.to_connection_params())
        except MySQLError as e:
            raise ConnectionError(
                f"Failed to connect to MySQL at {self.config.host}:{self.config.port}: {e}",
                endpoint='mysql'
            ) from e
        self.state = ConnectionState.CONNECTED

    def query(self, sql: str, params: Optional[Tuple] = None) -> List[Tuple]:
        """Run one statement and return every row it produces."""
        if self._connection is None:
            raise MySQLError("MySQL connection is not open")

        start_time = time.time()
        with self._connection.cursor() as cursor:
            cursor.execute(sql, params)
            rows = list(cursor.fetchall()) if cursor.description else []

        self.stats['queries_executed'] += 1
        self.stats['rows_fetched'] += len(rows)
        self.stats['total_execution_time'] += time.time() - start_time
        return rows

    def get_tables(self) -> List[str]:
        """
        Get table names of the current database, in the order the server
        returns them.
        """
        try:
            rows = self.query("SHOW TABLES")
        except MySQLError as e:
            raise SchemaFetchError(f"Failed to list tables: {e}") from e

        tables = [_text(row[0]) for row in rows]
        logger.debug(f"Found {len(tables)} tables: {tables}")
        return tables

    def get_schema(self, table_name: str) -> List[ColumnDescriptor]:
        """
        Describe a table's columns.

        Args:
            table_name: Table name

        Returns:
            ColumnDescriptors in column-definition order
        """
        try:
            rows = self.query(f"DESCRIBE {table_name}")
        except MySQLError as e:
            raise SchemaFetchError(f"Failed to describe table {table_name}: {e}", table=table_name) from e

        # Field, Type, Null, Key, Default, Extra
        return [ColumnDescriptor(name=_text(row[0]), source_type=_text(row[1])) for row in rows]

    def extract_data(self, table_name: str) -> List[RowRecord]:
        """Fetch every row of a table into memory."""
        try:
            return [tuple(row) for row in self.query(f"SELECT * FROM {table_name}")]
        except MySQLError as e:
            raise RowFetchError(f"Failed to fetch rows from {table_name}: {e}", table=table_name) from e

    def get_statistics(self) -> Dict[str, Any]:
        """Get adapter statistics"""
        total_queries = self.stats['queries_executed']
        return {
            'uptime_seconds': time.time() - self.stats['start_time'],
            'state': self.state.value,
            'queries_executed': total_queries,
            'rows_fetched': self.stats['rows_fetched'],
            'avg_execution_time': self.stats['total_execution_time'] / max(total_queries, 1),
        }

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._connection is None:
            return

        connection, self._connection = self._connection, None
        self.state = ConnectionState.CLOSED
        try:
            connection.close()
        except MySQLError as e:
            raise ResourceReleaseError(f"Failed to close MySQL connection: {e}", endpoint='mysql') from e

        logger.info("MySQL connection closed")
        logger.debug(f"MySQL adapter final stats: {self.get_statistics()}")
