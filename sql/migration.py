"""
===================================================
Fluent builder for DDL migration statements.
===================================================

Assembles DROP TABLE, CREATE TABLE, DROP DATABASE and CREATE DATABASE
statements from chained method calls. Quoting is delegated to sql.quoting,
type clauses to sql.data_types and the final templates to sql.ddl.

Lifecycle: construct, chain calls, render with get_sql() (or str()), discard.
Selecting a statement (drop_table, create_table, ...) resets the builder, so
one instance can be reused for several statements in sequence.

Key Features:
    - Backtick quoting of dotted and aliased names
    - MySQL column types with sizes, UNSIGNED, precision and value lists
    - Column constraints (NOT NULL, DEFAULT, AUTO_INCREMENT, ...)
    - Table options (ENGINE, DEFAULT CHARSET, COLLATE) with configurable defaults
    - Raw expressions for names and column definitions
    - SQLAlchemy TextClause output via to_text()

Example:
    >>> from sql.migration import Migration
    >>>
    >>> Migration().drop_table('users').if_exists().get_sql()
    'DROP TABLE IF EXISTS `users`;'
    >>>
    >>> sql = (
    ...     Migration()
    ...     .create_table('users').if_not_exists()
    ...     .column('id').int_(unsigned=True).not_null().auto_increment().primary_key()
    ...     .column('email').varchar(255).not_null().unique()
    ...     .column('status').enum('active', 'banned').default('active')
    ...     .engine('InnoDB')
    ...     .get_sql()
    ... )
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import TextClause, text

from core.config import MigrationDefaults, config
from sql.data_types import (
    compile_float_data_type,
    compile_integer_data_type,
    compile_list_data_type,
    compile_string_data_type,
    compile_temporal_data_type,
)
from sql.ddl import create_database_sql, create_table_sql, drop_database_sql, drop_table_sql
from sql.quoting import compile_name, compile_value

logger = logging.getLogger(__name__)

OPTION_WORD = re.compile(r'[A-Za-z0-9_]+')

# Single-quoted literals and backtick identifiers, with backslash escapes
QUOTED_SEGMENT = re.compile(r"'(?:[^'\\]|\\.)*'|`(?:[^`\\]|\\.)*`", re.DOTALL)


class MigrationError(Exception):
    """Exception raised for invalid builder usage.

    Raised when a column method is called without a current column, when a
    statement is rendered without a target or without columns, or when an
    option does not apply to the selected statement.
    """
    pass


class StatementType(Enum):
    """DDL statement selected by the builder."""

    DROP_TABLE = 'drop_table'
    CREATE_TABLE = 'create_table'
    DROP_DATABASE = 'drop_database'
    CREATE_DATABASE = 'create_database'


DROP_STATEMENTS = (StatementType.DROP_TABLE, StatementType.DROP_DATABASE)
CREATE_STATEMENTS = (StatementType.CREATE_TABLE, StatementType.CREATE_DATABASE)


@dataclass
class ColumnDefinition:
    """One column of a CREATE TABLE statement.

    Attributes:
        name: Quoted column name, or the full definition for raw columns
        data_type: Compiled type clause (None until a type method is called)
        constraints: Constraint clauses keyed by slot, in first-call order
        raw: If True, name is rendered verbatim and nothing else is added
    """

    name: str
    data_type: Optional[str] = None
    constraints: Dict[str, str] = field(default_factory=dict)
    raw: bool = False

    def compile(self) -> str:
        """Render the column definition."""
        if self.raw:
            return self.name

        if self.data_type is None:
            message = f"Column {self.name} has no data type"
            logger.error(message)
            raise MigrationError(message)

        return " ".join([self.name, self.data_type, *self.constraints.values()])


class Migration:
    """Fluent DDL statement builder.

    Attributes:
        type: Selected StatementType
        parts: Target name, IF [NOT] EXISTS flags and table options
        columns: Ordered ColumnDefinition list for CREATE TABLE
        defaults: MigrationDefaults supplying fallback table options

    Example:
        >>> migration = Migration()
        >>> str(migration.drop_database('shop'))
        'DROP DATABASE `shop`;'
    """

    def __init__(self, defaults: Optional[MigrationDefaults] = None):
        """Initialize an empty builder.

        Args:
            defaults: Fallback table options (defaults to config.migration)
        """
        self.defaults = defaults if defaults is not None else config.migration
        self.type = StatementType.DROP_TABLE
        self.parts = self._empty_parts()
        self.columns: List[ColumnDefinition] = []

        self._renderers = {
            StatementType.DROP_TABLE: self._get_sql_for_drop_table,
            StatementType.CREATE_TABLE: self._get_sql_for_create_table,
            StatementType.DROP_DATABASE: self._get_sql_for_drop_database,
            StatementType.CREATE_DATABASE: self._get_sql_for_create_database,
        }

    # ------------------------------------------------------------------
    # Statement selection
    # ------------------------------------------------------------------

    def drop_table(self, table_name: Any) -> 'Migration':
        """Select DROP TABLE for a (possibly qualified) table name."""
        return self._select(StatementType.DROP_TABLE, compile_name(table_name))

    def drop_table_raw(self, expression: str) -> 'Migration':
        """Select DROP TABLE with an unquoted target expression."""
        return self._select(StatementType.DROP_TABLE, expression)

    def create_table(self, table_name: Any) -> 'Migration':
        """Select CREATE TABLE for a (possibly qualified) table name."""
        return self._select(StatementType.CREATE_TABLE, compile_name(table_name))

    def create_table_raw(self, expression: str) -> 'Migration':
        """Select CREATE TABLE with an unquoted target expression."""
        return self._select(StatementType.CREATE_TABLE, expression)

    def drop_database(self, database_name: Any) -> 'Migration':
        """Select DROP DATABASE."""
        return self._select(StatementType.DROP_DATABASE, compile_name(database_name))

    def drop_database_raw(self, expression: str) -> 'Migration':
        """Select DROP DATABASE with an unquoted target expression."""
        return self._select(StatementType.DROP_DATABASE, expression)

    def create_database(self, database_name: Any) -> 'Migration':
        """Select CREATE DATABASE."""
        return self._select(StatementType.CREATE_DATABASE, compile_name(database_name))

    def create_database_raw(self, expression: str) -> 'Migration':
        """Select CREATE DATABASE with an unquoted target expression."""
        return self._select(StatementType.CREATE_DATABASE, expression)

    # ------------------------------------------------------------------
    # Statement options
    # ------------------------------------------------------------------

    def if_exists(self) -> 'Migration':
        """Add IF EXISTS to a DROP statement."""
        self._require_type('if_exists()', DROP_STATEMENTS)
        self.parts['if_exists'] = True
        return self

    def if_not_exists(self) -> 'Migration':
        """Add IF NOT EXISTS to a CREATE statement."""
        self._require_type('if_not_exists()', CREATE_STATEMENTS)
        self.parts['if_not_exists'] = True
        return self

    def engine(self, name: str) -> 'Migration':
        """Set the storage engine of a CREATE TABLE statement."""
        self._require_type('engine()', (StatementType.CREATE_TABLE,))
        self.parts['engine'] = self._check_option_word('engine', name)
        return self

    def charset(self, name: str) -> 'Migration':
        """Set the character set of a CREATE TABLE or CREATE DATABASE statement."""
        self._require_type('charset()', CREATE_STATEMENTS)
        self.parts['charset'] = self._check_option_word('charset', name)
        return self

    def collate(self, name: str) -> 'Migration':
        """Set the collation of a CREATE TABLE or CREATE DATABASE statement."""
        self._require_type('collate()', CREATE_STATEMENTS)
        self.parts['collation'] = self._check_option_word('collation', name)
        return self

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def column(self, column_name: Any) -> 'Migration':
        """Append a column; follow with a type method and optional constraints."""
        self._require_type('column()', (StatementType.CREATE_TABLE,))
        self.columns.append(ColumnDefinition(name=compile_name(column_name)))
        return self

    def column_raw(self, expression: str) -> 'Migration':
        """Append a complete column definition rendered verbatim."""
        self._require_type('column_raw()', (StatementType.CREATE_TABLE,))
        self.columns.append(ColumnDefinition(name=expression, raw=True))
        return self

    # Integer types

    def int_(self, size: Optional[int] = None, unsigned: bool = False) -> 'Migration':
        """Set INT with optional display size and UNSIGNED."""
        return self._set_data_type(compile_integer_data_type('INT', size, unsigned))

    def tiny_int(self, size: Optional[int] = None, unsigned: bool = False) -> 'Migration':
        """Set TINYINT with optional display size and UNSIGNED."""
        return self._set_data_type(compile_integer_data_type('TINYINT', size, unsigned))

    def small_int(self, size: Optional[int] = None, unsigned: bool = False) -> 'Migration':
        """Set SMALLINT with optional display size and UNSIGNED."""
        return self._set_data_type(compile_integer_data_type('SMALLINT', size, unsigned))

    def medium_int(self, size: Optional[int] = None, unsigned: bool = False) -> 'Migration':
        """Set MEDIUMINT with optional display size and UNSIGNED."""
        return self._set_data_type(compile_integer_data_type('MEDIUMINT', size, unsigned))

    def big_int(self, size: Optional[int] = None, unsigned: bool = False) -> 'Migration':
        """Set BIGINT.

        Args:
            size: Optional display width
            unsigned: If True, append UNSIGNED

        Returns:
            self, for chaining

        Raises:
            DataTypeError: If size is not a positive integer
            MigrationError: If there is no current column or it is raw
        """
        return self._set_data_type(compile_integer_data_type('BIGINT', size, unsigned))

    # Floating and fixed point types

    def float_(self, size: Optional[int] = None, digits: Optional[int] = None) -> 'Migration':
        """Set FLOAT with optional precision (size) and scale (digits)."""
        return self._set_data_type(compile_float_data_type('FLOAT', size, digits))

    def double(self, size: Optional[int] = None, digits: Optional[int] = None) -> 'Migration':
        """Set DOUBLE with optional precision (size) and scale (digits)."""
        return self._set_data_type(compile_float_data_type('DOUBLE', size, digits))

    def decimal(self, size: Optional[int] = None, digits: Optional[int] = None) -> 'Migration':
        """Set DECIMAL.

        Args:
            size: Optional total number of digits
            digits: Optional digits after the decimal point, at most size

        Returns:
            self, for chaining

        Raises:
            DataTypeError: If digits is given without size or exceeds it
            MigrationError: If there is no current column or it is raw
        """
        return self._set_data_type(compile_float_data_type('DECIMAL', size, digits))

    # String types

    def text(self) -> 'Migration':
        """Set TEXT."""
        return self._set_data_type('TEXT')

    def tiny_text(self) -> 'Migration':
        """Set TINYTEXT."""
        return self._set_data_type('TINYTEXT')

    def medium_text(self) -> 'Migration':
        """Set MEDIUMTEXT."""
        return self._set_data_type('MEDIUMTEXT')

    def long_text(self) -> 'Migration':
        """Set LONGTEXT."""
        return self._set_data_type('LONGTEXT')

    def char(self, size: int) -> 'Migration':
        """Set CHAR(size); size is required."""
        return self._set_data_type(compile_string_data_type('CHAR', size))

    def varchar(self, size: int) -> 'Migration':
        """Set VARCHAR(size); size is required."""
        return self._set_data_type(compile_string_data_type('VARCHAR', size))

    def enum(self, *values: Any) -> 'Migration':
        """Set an ENUM type; values may be passed as arguments or as one iterable."""
        return self._set_data_type(compile_list_data_type('ENUM', self._value_list(values)))

    def set_(self, *values: Any) -> 'Migration':
        """Set a SET type; values may be passed as arguments or as one iterable."""
        return self._set_data_type(compile_list_data_type('SET', self._value_list(values)))

    # Date and time types

    def date(self) -> 'Migration':
        """Set DATE."""
        return self._set_data_type('DATE')

    def year(self) -> 'Migration':
        """Set YEAR."""
        return self._set_data_type('YEAR')

    def time(self, precision: Optional[int] = None) -> 'Migration':
        """Set TIME with optional fractional seconds precision (0-6)."""
        return self._set_data_type(compile_temporal_data_type('TIME', precision))

    def datetime(self, precision: Optional[int] = None) -> 'Migration':
        """Set DATETIME with optional fractional seconds precision (0-6)."""
        return self._set_data_type(compile_temporal_data_type('DATETIME', precision))

    def timestamp(self, precision: Optional[int] = None) -> 'Migration':
        """Set TIMESTAMP with optional fractional seconds precision (0-6)."""
        return self._set_data_type(compile_temporal_data_type('TIMESTAMP', precision))

    # Column constraints

    def not_null(self) -> 'Migration':
        """Add NOT NULL, replacing NULL."""
        return self._add_constraint('nullability', 'NOT NULL')

    def nullable(self) -> 'Migration':
        """Add NULL, replacing NOT NULL."""
        return self._add_constraint('nullability', 'NULL')

    def default(self, value: Any) -> 'Migration':
        """Add DEFAULT with the value formatted as a SQL literal."""
        return self._add_constraint('default', f"DEFAULT {compile_value(value)}")

    def auto_increment(self) -> 'Migration':
        """Add AUTO_INCREMENT."""
        return self._add_constraint('auto_increment', 'AUTO_INCREMENT')

    def unique(self) -> 'Migration':
        """Add UNIQUE."""
        return self._add_constraint('unique', 'UNIQUE')

    def primary_key(self) -> 'Migration':
        """Add PRIMARY KEY."""
        return self._add_constraint('primary_key', 'PRIMARY KEY')

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def get_sql(self) -> str:
        """Render the selected statement.

        Returns:
            SQL statement terminated with a semicolon

        Raises:
            MigrationError: If no target was selected, CREATE TABLE has no
                columns, or a column has no data type
        """
        if self.parts['name'] is None:
            message = (
                f"No target selected for {self.type.value}; call "
                "drop_table(), create_table(), drop_database() or create_database() first"
            )
            logger.error(message)
            raise MigrationError(message)

        sql = self._renderers[self.type]()
        logger.debug(f"Rendered {self.type.value} statement for {self.parts['name']}")
        return sql

    def to_text(self) -> TextClause:
        """Render the statement as a SQLAlchemy TextClause.

        ``:name`` placeholders produced by compile_value become bind
        parameters of the clause. Colons inside quoted literals and
        identifiers are escaped so they stay literal text.
        """
        sql = QUOTED_SEGMENT.sub(lambda match: match.group(0).replace(':', '\\:'), self.get_sql())
        return text(sql)

    def __str__(self) -> str:
        return self.get_sql()

    def __repr__(self) -> str:
        return f"Migration(type={self.type.value}, name={self.parts['name']!r}, columns={len(self.columns)})"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _empty_parts() -> Dict[str, Any]:
        return {
            'name': None,
            'if_exists': False,
            'if_not_exists': False,
            'engine': None,
            'charset': None,
            'collation': None,
        }

    def _select(self, statement_type: StatementType, name: str) -> 'Migration':
        """Switch statement type, clearing parts and columns."""
        self.type = statement_type
        self.parts = self._empty_parts()
        self.columns = []
        self.parts['name'] = name
        return self

    def _require_type(self, method: str, allowed: tuple) -> None:
        if self.type not in allowed:
            allowed_names = ', '.join(statement.value for statement in allowed)
            message = f"{method} does not apply to {self.type.value} (allowed: {allowed_names})"
            logger.error(message)
            raise MigrationError(message)

    @staticmethod
    def _check_option_word(option: str, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if not OPTION_WORD.fullmatch(str(value)):
            message = f"Invalid {option} {value!r}: only letters, digits and _ allowed"
            logger.error(message)
            raise MigrationError(message)
        return str(value)

    @staticmethod
    def _value_list(values: tuple) -> list:
        """Unpack a single non-string iterable argument, else use the arguments."""
        if len(values) == 1 and isinstance(values[0], Iterable) and not isinstance(values[0], (str, bytes)):
            return list(values[0])
        return list(values)

    def _current_column(self, method: str) -> ColumnDefinition:
        if not self.columns:
            message = f"{method} requires a column; call column() first"
            logger.error(message)
            raise MigrationError(message)

        current = self.columns[-1]
        if current.raw:
            message = f"{method} cannot modify raw column {current.name!r}"
            logger.error(message)
            raise MigrationError(message)

        return current

    def _set_data_type(self, data_type: str) -> 'Migration':
        current = self._current_column(data_type)
        if current.data_type is not None:
            logger.debug(f"Column {current.name}: data type {current.data_type} replaced by {data_type}")
        current.data_type = data_type
        return self

    def _add_constraint(self, slot: str, clause: str) -> 'Migration':
        self._current_column(clause).constraints[slot] = clause
        return self

    def _option(self, name: str) -> Optional[str]:
        """Explicit option, else the configured default."""
        if self.parts[name] is not None:
            return self.parts[name]
        return self._check_option_word(name, getattr(self.defaults, name))

    def _get_sql_for_drop_table(self) -> str:
        return drop_table_sql(self.parts['name'], if_exists=self.parts['if_exists'])

    def _get_sql_for_create_table(self) -> str:
        if not self.columns:
            message = f"CREATE TABLE {self.parts['name']} requires at least one column"
            logger.error(message)
            raise MigrationError(message)

        return create_table_sql(
            self.parts['name'],
            columns=[column.compile() for column in self.columns],
            if_not_exists=self.parts['if_not_exists'],
            engine=self._option('engine'),
            charset=self._option('charset'),
            collation=self._option('collation')
        )

    def _get_sql_for_drop_database(self) -> str:
        return drop_database_sql(self.parts['name'], if_exists=self.parts['if_exists'])

    def _get_sql_for_create_database(self) -> str:
        return create_database_sql(
            self.parts['name'],
            if_not_exists=self.parts['if_not_exists'],
            charset=self._option('charset'),
            collation=self._option('collation')
        )
