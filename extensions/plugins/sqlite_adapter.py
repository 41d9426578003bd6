#!/usr/bin/env python3
"""
SQLite Destination Adapter

Write-side wrapper around the stdlib sqlite3 driver used by the exporter:
- Opens (or creates) a single database file
- Runs statements with positional parameters
- Explicit BEGIN TRANSACTION / COMMIT / ROLLBACK statements
- Read helpers (tables, columns, row counts) for verification

The connection runs with isolation_level=None so that the driver never
opens or commits transactions on its own.
"""

import sqlite3
import logging
import datetime
from decimal import Decimal
from typing import Any, List, Optional, Sequence

from core.errors import ConnectionError, TransactionError, ResourceReleaseError
from core.schema import ColumnDescriptor, RowRecord

logger = logging.getLogger(__name__)


# PyMySQL hands back Decimal/datetime/timedelta values; sqlite3 cannot bind
# them natively, so they are stored as their text form.
def _adapt_decimal(value: Decimal) -> str:
    return str(value)


def _adapt_timedelta(value: datetime.timedelta) -> str:
    # MySQL TIME columns come back as timedelta and may be negative
    total_us = value // datetime.timedelta(microseconds=1)
    sign = '-' if total_us < 0 else ''
    seconds_total, micros = divmod(abs(total_us), 1_000_000)
    hours, remainder = divmod(seconds_total, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
    # TIME(n) fractions
    return f"{text}.{micros:06d}" if micros else text


def _adapt_isoformat(value) -> str:
    return value.isoformat(sep=' ') if isinstance(value, datetime.datetime) else value.isoformat()


sqlite3.register_adapter(Decimal, _adapt_decimal)
sqlite3.register_adapter(datetime.timedelta, _adapt_timedelta)
sqlite3.register_adapter(datetime.datetime, _adapt_isoformat)
sqlite3.register_adapter(datetime.date, _adapt_isoformat)
sqlite3.register_adapter(datetime.time, _adapt_isoformat)


class SQLiteAdapter:
    """SQLite destination for the exporter."""

    def __init__(self, database: str, timeout: float = 30.0):
        """
        Open the destination database.

        Args:
            database: Path to the SQLite file (created if missing)
            timeout: Busy timeout in seconds

        Raises:
            ConnectionError: if the file cannot be opened or created
        """
        self.database = str(database)
        self.timeout = timeout
        self._connection: Optional[sqlite3.Connection] = None
        self.in_transaction = False
        self._connect()
        logger.debug(f"SQLite adapter initialized for {self.database}")

    def _connect(self) -> None:
        """Establish database connection."""
        try:
            self._connection = sqlite3.connect(
                self.database,
                timeout=self.timeout,
                isolation_level=None
            )
        except sqlite3.Error as e:
            raise ConnectionError(f"Failed to open SQLite database {self.database}: {e}",
                                  endpoint='sqlite') from e

    def run(self, sql: str, params: Optional[Sequence[Any]] = None) -> int:
        """
        Execute one statement.

        Args:
            sql: SQL statement
            params: Positional parameters (optional)

        Returns:
            Number of rows affected

        Raises:
            sqlite3.Error: whatever the driver raises; callers decide which
                MigrationError kind it becomes
        """
        if self._connection is None:
            raise sqlite3.ProgrammingError("SQLite connection is not open")

        cursor = self._connection.execute(sql, params if params is not None else ())
        return cursor.rowcount

    def begin(self) -> None:
        try:
            self.run("BEGIN TRANSACTION")
        except sqlite3.Error as e:
            raise TransactionError(f"Failed to begin transaction: {e}") from e
        self.in_transaction = True

    def commit(self) -> None:
        try:
            self.run("COMMIT")
        except sqlite3.Error as e:
            raise TransactionError(f"Failed to commit transaction: {e}") from e
        self.in_transaction = False

    def rollback(self) -> None:
        try:
            self.run("ROLLBACK")
        except sqlite3.Error as e:
            raise TransactionError(f"Failed to roll back transaction: {e}") from e
        finally:
            self.in_transaction = False

    # Read helpers

    def get_tables(self) -> List[str]:
        """Get user table names in creation order."""
        cursor = self._connection.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY rowid"
        )
        return [row[0] for row in cursor.fetchall()]

    def get_schema(self, table_name: str) -> List[ColumnDescriptor]:
        """Get declared columns of a table, in order."""
        cursor = self._connection.execute(f"PRAGMA table_info('{table_name}')")
        # cid, name, type, notnull, dflt_value, pk
        return [ColumnDescriptor(name=row[1], source_type=row[2]) for row in cursor.fetchall()]

    def count_rows(self, table_name: str) -> int:
        cursor = self._connection.execute(f"SELECT COUNT(*) FROM {table_name}")
        return cursor.fetchone()[0]

    def fetch_rows(self, table_name: str) -> List[RowRecord]:
        cursor = self._connection.execute(f"SELECT * FROM {table_name} ORDER BY rowid")
        return [tuple(row) for row in cursor.fetchall()]

    def close(self) -> None:
        """Close database connection. Safe to call more than once."""
        if self._connection is None:
            return

        connection, self._connection = self._connection, None
        try:
            connection.close()
        except sqlite3.Error as e:
            raise ResourceReleaseError(f"Failed to close SQLite database: {e}", endpoint='sqlite') from e

        logger.info("SQLite connection closed")
