"""
=============================================
Configuration management for the DDL builder.
=============================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration system covers:
- Logging settings (level, file output, colors)
- Default table options applied by CREATE TABLE / CREATE DATABASE

Environment variables:
    MIGRATION_LOG_LEVEL: Logging level (default INFO)
    MIGRATION_LOG_FILE: Optional log file name
    MIGRATION_LOG_DIR: Directory for the log file (default logs)
    MIGRATION_LOG_COLORS: Colored console output (default true)
    MIGRATION_TABLE_ENGINE: Default storage engine, e.g. InnoDB
    MIGRATION_TABLE_CHARSET: Default character set, e.g. utf8mb4
    MIGRATION_TABLE_COLLATION: Default collation, e.g. utf8mb4_unicode_ci

Example:
    >>> from core.config import config
    >>>
    >>> print(f"Default engine: {config.table_engine}")
    >>> migration = Migration(defaults=config.migration)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
TRUE_VALUES = ('1', 'true', 'yes', 'on')
FALSE_VALUES = ('0', 'false', 'no', 'off')


class ConfigurationError(Exception):
    """Exception raised for invalid configuration values.

    Raised when an environment variable holds a value that cannot be
    converted to the expected type.
    """
    pass


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _optional(value: Optional[str]) -> Optional[str]:
    """Treat empty strings as unset."""
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass
class LoggingConfig:
    """Logging configuration settings.

    Attributes:
        level: Logging level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name
        log_dir: Directory holding the log file
        use_colors: If True, colored console output
    """

    level: str
    log_file: Optional[str]
    log_dir: Path
    use_colors: bool


@dataclass
class MigrationDefaults:
    """Default options applied to rendered statements.

    Attributes:
        engine: Storage engine for CREATE TABLE (ENGINE=...)
        charset: Character set for CREATE TABLE and CREATE DATABASE
        collation: Collation for CREATE TABLE and CREATE DATABASE
    """

    engine: Optional[str] = None
    charset: Optional[str] = None
    collation: Optional[str] = None


class Config:
    """Centralized configuration manager.

    Provides access to all configuration settings loaded from environment
    variables (.env file).

    Attributes:
        logging: LoggingConfig instance
        migration: MigrationDefaults instance

    Example:
        >>> config = Config()
        >>> config.log_level
        'INFO'
        >>> config = Config(environ={'MIGRATION_TABLE_ENGINE': 'InnoDB'})
        >>> config.table_engine
        'InnoDB'
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """Initialize configuration from environment variables.

        Args:
            environ: Optional mapping to read instead of os.environ

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        level = env.get('MIGRATION_LOG_LEVEL', 'INFO').strip().upper()
        if level not in LOG_LEVELS:
            raise ConfigurationError(
                f"MIGRATION_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
            )

        self.logging = LoggingConfig(
            level=level,
            log_file=_optional(env.get('MIGRATION_LOG_FILE')),
            log_dir=Path(env.get('MIGRATION_LOG_DIR', 'logs')),
            use_colors=_parse_bool('MIGRATION_LOG_COLORS', env.get('MIGRATION_LOG_COLORS', 'true'))
        )

        self.migration = MigrationDefaults(
            engine=_optional(env.get('MIGRATION_TABLE_ENGINE')),
            charset=_optional(env.get('MIGRATION_TABLE_CHARSET')),
            collation=_optional(env.get('MIGRATION_TABLE_COLLATION'))
        )

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return self.logging.level

    @property
    def table_engine(self) -> Optional[str]:
        """Get default storage engine."""
        return self.migration.engine

    @property
    def table_charset(self) -> Optional[str]:
        """Get default character set."""
        return self.migration.charset

    @property
    def table_collation(self) -> Optional[str]:
        """Get default collation."""
        return self.migration.collation


# Global configuration instance
config = Config()
