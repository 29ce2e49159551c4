"""
================================================
Core infrastructure package for the DDL builder.
================================================

This package provides centralized configuration management and logging
infrastructure used throughout the project.

Modules:
    config: Configuration management from environment variables
    logger: Centralized logging configuration and utilities

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Default engine: {config.table_engine}")
"""

__version__ = "0.1.0"
__all__ = [
    'get_logger', 'setup_logging', 'setup_logging_from_config', 'get_module_logger',
    'config', 'Config', 'ConfigurationError', 'MigrationDefaults'
]

from core.config import Config, ConfigurationError, MigrationDefaults, config
from core.logger import get_logger, get_module_logger, setup_logging, setup_logging_from_config
