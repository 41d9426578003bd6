#!/usr/bin/env python3
"""
MySQL -> SQLite Exporter
========================

Copies every table of a MySQL database into a single SQLite file.

Connection settings come from the environment (or a .env file):

    MYSQL_USER, MYSQL_PASSWORD, MYSQL_HOST, MYSQL_DATABASE, MYSQL_PORT (3306)
    SQLITE_OUTPUT_FILE (output_database.sqlite)
    MIGRATION_LOG_LEVEL (INFO)

Usage:
    mysql-to-sqlite
    mysql-to-sqlite --env-file prod.env --output /tmp/shop.sqlite

Primary keys, indexes and constraints are not carried over. Running twice
against the same file appends the rows again.
"""

import argparse
import logging
import sys
from typing import List, Optional

from config.migration_config import MigrationConfig, load_config
from core.errors import ConfigError, MigrationError
from core.migration import MySQLToSQLiteMigrator

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO),
                        format='%(asctime)s - %(levelname)s - %(message)s')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export a MySQL database to a SQLite file")
    parser.add_argument("--env-file", help="Read settings from this .env file (default: ./.env if present)")
    parser.add_argument("--output", help="SQLite file to write (overrides SQLITE_OUTPUT_FILE)")
    parser.add_argument("--log-level", choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help="Console log level (overrides MIGRATION_LOG_LEVEL)")
    return parser


def resolve_config(args: argparse.Namespace) -> MigrationConfig:
    config = load_config(args.env_file)
    if args.output:
        config.output_path = args.output
    if args.log_level:
        config.log_level = args.log_level
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
    except ConfigError as e:
        configure_logging('INFO')
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    configure_logging(config.log_level)
    logger.debug(f"Configuration: {config.get_safe_dict()}")

    try:
        report = MySQLToSQLiteMigrator(config).migrate()
    except MigrationError as e:
        logger.error(f"Migration failed: {e}")
        return EXIT_FAILURE

    for line in report.summary_lines():
        logger.info(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
