#!/usr/bin/env python3
"""
Configuration for the MySQL -> SQLite exporter.
Resolves environment variables (and an optional .env file) once, into an
explicit MigrationConfig that is handed to the migrator.
"""

import os
from pathlib import Path
from typing import Dict, Any, Mapping, Optional, Union
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

from core.errors import ConfigError
from extensions.plugins.mysql_adapter import ConnectionConfig

DEFAULT_MYSQL_PORT = 3306
DEFAULT_OUTPUT_FILE = 'output_database.sqlite'
DEFAULT_LOG_LEVEL = 'INFO'


@dataclass
class MigrationConfig:
    """Exporter configuration settings"""

    source: ConnectionConfig = field(default_factory=ConnectionConfig)
    output_path: str = DEFAULT_OUTPUT_FILE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'MigrationConfig':
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)
        """
        env = os.environ if environ is None else environ

        raw_port = env.get('MYSQL_PORT') or str(DEFAULT_MYSQL_PORT)
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigError(f"MYSQL_PORT must be an integer, got {raw_port!r}", key='MYSQL_PORT')

        source = ConnectionConfig(
            host=env.get('MYSQL_HOST') or 'localhost',
            port=port,
            database=env.get('MYSQL_DATABASE'),
            user=env.get('MYSQL_USER'),
            password=env.get('MYSQL_PASSWORD') or '',
        )

        return cls(
            source=source,
            output_path=env.get('SQLITE_OUTPUT_FILE') or DEFAULT_OUTPUT_FILE,
            log_level=(env.get('MIGRATION_LOG_LEVEL') or DEFAULT_LOG_LEVEL).upper(),
        )

    def get_safe_dict(self) -> Dict[str, Any]:
        """Get configuration as dict without sensitive values"""
        return {
            'mysql_host': self.source.host,
            'mysql_port': self.source.port,
            'mysql_database': self.source.database,
            'mysql_user': self.source.user,
            'mysql_password': '***' if self.source.password else '',
            'sqlite_output_file': self.output_path,
            'log_level': self.log_level,
        }


def load_config(env_file: Optional[Union[str, Path]] = None) -> MigrationConfig:
    """Load configuration from a .env file and the environment.

    Priority (highest to lowest):
    1. Exported environment variables
    2. .env file (env_file, or ./.env when not given)
    3. MigrationConfig defaults
    """
    if env_file is not None and not Path(env_file).exists():
        raise ConfigError(f"Environment file not found: {env_file}", key='env_file')

    dotenv_path = env_file if env_file is not None else find_dotenv(usecwd=True)
    # override=False keeps exported variables ahead of the file
    load_dotenv(dotenv_path=dotenv_path, override=False)
    return MigrationConfig.from_env()
