"""
==================================================
SQL package for building DDL migration statements.
==================================================

This package assembles MySQL Data Definition Language statements from
chained method calls. Every module produces plain SQL strings; nothing is
executed.

The package follows a clear organization:
    - quoting.py: Identifier quoting and literal formatting
    - data_types.py: Column type clause compilers
    - ddl.py: Statement templates (DROP/CREATE TABLE and DATABASE)
    - migration.py: The fluent Migration builder

Architecture:
    - migration.py imports from the other modules (not vice versa)
    - quoting.py, data_types.py and ddl.py are pure functions (no side effects)

Example:
    >>> from sql import Migration
    >>>
    >>> Migration().drop_table('users').if_exists().get_sql()
    'DROP TABLE IF EXISTS `users`;'
"""

__version__ = "1.0.0"
__all__ = [
    # Builder
    'Migration', 'MigrationError', 'StatementType', 'ColumnDefinition',
    # Quoting
    'quote_name', 'quote_string', 'compile_name', 'compile_value',
    # Data types
    'DataTypeError',
    # DDL templates
    'drop_table_sql', 'create_table_sql', 'drop_database_sql', 'create_database_sql',
]

from .data_types import DataTypeError
from .ddl import (
    create_database_sql,
    create_table_sql,
    drop_database_sql,
    drop_table_sql,
)
from .migration import ColumnDefinition, Migration, MigrationError, StatementType
from .quoting import compile_name, compile_value, quote_name, quote_string
