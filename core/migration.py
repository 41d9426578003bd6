"""
MySQL -> SQLite Migration Runner
================================

Copies every table of a MySQL database into a SQLite file:
- one DESCRIBE per table drives both CREATE TABLE and the positional INSERT
- all rows of a table are fetched, then inserted inside one transaction
- the first rejected row rolls that table back and aborts the run

Tables are processed one at a time, in the order the source lists them.
"""

import logging
import sqlite3
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from config.migration_config import MigrationConfig
from core.errors import MigrationError, TableCreationError, RowInsertError, TransactionError
from core.schema import RowRecord, TableDescriptor
from extensions.plugins.mysql_adapter import ConnectionConfig, MySQLAdapter
from extensions.plugins.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 1000


@dataclass
class MigrationReport:
    """Outcome of a successful run"""
    tables: List[str] = field(default_factory=list)
    rows_per_table: Dict[str, int] = field(default_factory=dict)
    duration_seconds: float = 0.0

    @property
    def total_rows(self) -> int:
        return sum(self.rows_per_table.values())

    def record(self, table_name: str, rows: int) -> None:
        self.tables.append(table_name)
        self.rows_per_table[table_name] = self.rows_per_table.get(table_name, 0) + rows

    def summary_lines(self) -> List[str]:
        lines = [f"  {name}: {self.rows_per_table[name]:,} rows" for name in self.tables]
        lines.append(f"  Total: {len(self.tables)} tables, {self.total_rows:,} rows "
                     f"in {self.duration_seconds:.2f}s")
        return lines


class MySQLToSQLiteMigrator:
    """Copies a MySQL database into a SQLite file."""

    def __init__(self, config: MigrationConfig,
                 source_factory: Callable[[ConnectionConfig], MySQLAdapter] = MySQLAdapter,
                 destination_factory: Callable[[str], SQLiteAdapter] = SQLiteAdapter):
        self.config = config
        self.source_factory = source_factory
        self.destination_factory = destination_factory

    def migrate(self) -> MigrationReport:
        """
        Run the whole export.

        Returns:
            MigrationReport for the completed run

        Raises:
            MigrationError: the first error encountered; tables committed
                before it keep their rows
        """
        started = time.time()
        report = MigrationReport()
        source = None
        destination = None
        in_flight: Optional[BaseException] = None

        try:
            logger.info("Connecting to MySQL...")
            source = self.source_factory(self.config.source)

            logger.info(f"Connecting to SQLite ({self.config.output_path})...")
            destination = self.destination_factory(self.config.output_path)

            logger.info("Fetching tables from MySQL...")
            tables = source.get_tables()
            if not tables:
                logger.info("No tables found in source database")

            for table_name in tables:
                rows_copied = self._migrate_table(source, destination, table_name)
                report.record(table_name, rows_copied)

            report.duration_seconds = time.time() - started
            logger.info("✓ Data has been successfully exported to SQLite.")
            return report

        except MigrationError as e:
            in_flight = e
            logger.error(f"Error during migration: {e}")
            raise
        except BaseException as e:
            in_flight = e
            raise
        finally:
            release_errors = self._release(source, destination)
            if release_errors and in_flight is None:
                raise release_errors[0]

    def _migrate_table(self, source: MySQLAdapter, destination: SQLiteAdapter, table_name: str) -> int:
        """Copy one table; returns the number of rows inserted."""
        logger.info(f"Processing table: {table_name}")

        table = TableDescriptor.from_columns(table_name, source.get_schema(table_name))

        logger.info(f"Creating table: {table_name}")
        try:
            destination.run(table.create_table_sql())
        except sqlite3.Error as e:
            raise TableCreationError(f"Failed to create table {table_name}: {e}", table=table_name) from e

        logger.info(f"Fetching data from {table_name}...")
        rows = source.extract_data(table_name)

        if not rows:
            logger.info(f"No data found in {table_name}")
            return 0

        logger.info(f"Inserting {len(rows)} rows into {table_name}...")
        inserted = self._insert_rows(destination, table, rows)
        logger.info(f"✓ Completed {table_name} - {inserted} rows inserted")
        return inserted

    def _insert_rows(self, destination: SQLiteAdapter, table: TableDescriptor, rows: List[RowRecord]) -> int:
        insert_sql = table.insert_sql()
        total = len(rows)
        inserted = 0

        destination.begin()
        try:
            for row in rows:
                try:
                    destination.run(insert_sql, row)
                except (sqlite3.Error, OverflowError) as e:
                    # OverflowError: integers past 64 bits (BIGINT UNSIGNED) cannot be bound
                    raise RowInsertError(
                        f"Failed to insert row {inserted + 1} of {total} into {table.name}: {e}",
                        table=table.name, row_number=inserted + 1
                    ) from e
                inserted += 1

                if inserted % PROGRESS_INTERVAL == 0:
                    logger.info(f"  Progress: {inserted}/{total} rows ({int(inserted * 100 / total + 0.5)}%)")

            destination.commit()
        except Exception:
            self._rollback(destination, table.name)
            raise

        return inserted

    def _rollback(self, destination: SQLiteAdapter, table_name: str) -> None:
        logger.warning(f"Rolling back {table_name}")
        try:
            destination.rollback()
        except TransactionError as e:
            # SQLite may already have rolled back on its own (e.g. failed COMMIT)
            logger.error(f"Rollback of {table_name} failed: {e}")

    def _release(self, source: Optional[MySQLAdapter], destination: Optional[SQLiteAdapter]) -> List[MigrationError]:
        """Close whatever was opened; returns the close failures."""
        errors = []
        for adapter in (source, destination):
            if adapter is None:
                continue
            try:
                adapter.close()
            except MigrationError as e:
                logger.error(f"Error releasing connection: {e}")
                errors.append(e)
        return errors


def migrate(config: MigrationConfig) -> MigrationReport:
    """Run one export with the default MySQL and SQLite adapters."""
    return MySQLToSQLiteMigrator(config).migrate()
