"""
=====================================================
Centralized logging configuration for the DDL builder.
=====================================================

Provides consistent logging setup across all modules with:
- File and console output
- Configurable log levels
- Colored console output with emojis
- Module-specific loggers

Library modules only call logging.getLogger(__name__); nothing is
configured on import. Applications call setup_logging() once, or
setup_logging_from_config() to use the MIGRATION_LOG_* settings.

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> setup_logging(log_level='DEBUG', log_file='migrations.log')
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendered DROP TABLE")
"""

import copy
import logging
import sys
from pathlib import Path
from typing import Optional

from core.config import Config, config

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
COLORED_FORMAT = '%(emoji)s %(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for console output.

    Adds ANSI color codes and emoji indicators to log messages for
    improved readability in terminal output. The record passed in is left
    untouched so other handlers still see the plain level name.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
        EMOJI: Dict mapping log levels to emoji indicators
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    EMOJI = {
        'DEBUG': '🔍',
        'INFO': 'ℹ️ ',
        'WARNING': '⚠️ ',
        'ERROR': '❌',
        'CRITICAL': '🔥'
    }

    def format(self, record):
        """Format log record with colors and emojis.

        Args:
            record: LogRecord instance to format

        Returns:
            Formatted log message string with ANSI colors and emoji
        """
        record = copy.copy(record)
        levelname = record.levelname
        record.emoji = self.EMOJI.get(levelname, '')
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"

        return super().format(record)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional logging level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Configured Logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> debug_logger = get_logger(__name__, level='DEBUG')
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    return logger


def setup_logging(
    log_level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
    use_colors: bool = True
) -> None:
    """Setup centralized logging configuration.

    Configures the root logger with console and/or file handlers.
    Should be called once at application startup; calling it again
    replaces the previous handlers.

    Args:
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name (e.g., 'migrations.log')
        log_dir: Optional log directory path (defaults to 'logs/')
        console_output: If True, output to console (stdout)
        use_colors: If True, use colored output for console
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Console handler
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        if use_colors:
            console_formatter = ColoredFormatter(COLORED_FORMAT, datefmt=DATE_FORMAT)
        else:
            console_formatter = logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT)

        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_path = Path(log_dir) if log_dir else Path('logs')
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)


def setup_logging_from_config(settings: Optional[Config] = None) -> None:
    """Setup logging from the MIGRATION_LOG_* configuration.

    Args:
        settings: Config instance (defaults to the global config)
    """
    settings = settings or config
    setup_logging(
        log_level=settings.logging.level,
        log_file=settings.logging.log_file,
        log_dir=str(settings.logging.log_dir),
        use_colors=settings.logging.use_colors
    )


def get_module_logger(module_name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Convenience function equivalent to get_logger() without a level.
    """
    return logging.getLogger(module_name)
