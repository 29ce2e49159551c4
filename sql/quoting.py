"""
===========================================
Identifier quoting and literal formatting.
===========================================

Low-level helpers shared by every DDL renderer. Identifiers are wrapped in
MySQL backticks, string literals in single quotes.

Functions:
    quote_name: Quote a single identifier segment
    quote_string: Quote and escape a string literal
    compile_name: Quote a dotted and optionally aliased name
    compile_value: Format a Python value as a SQL literal

Example:
    >>> from sql.quoting import compile_name, compile_value
    >>>
    >>> compile_name('shop.users AS u')
    '`shop`.`users` AS `u`'
    >>> compile_value("O'Brien")
    "'O\\\\'Brien'"
    >>> compile_value(':status')
    ':status'
"""

import re
from decimal import Decimal
from typing import Any

ALIAS_SEPARATOR = re.compile(r'\s+as\s+', re.IGNORECASE)
SEGMENT_SEPARATOR = re.compile(r'\s*\.\s*')

# A name is at most database.table.column
MAX_NAME_SEGMENTS = 3


def quote_name(name: str) -> str:
    """Wrap an identifier in backticks.

    Embedded backticks are escaped with a backslash. The wildcard ``*`` is
    returned unchanged.

    Args:
        name: Identifier segment (no dots)

    Returns:
        Quoted identifier

    Example:
        >>> quote_name('order')
        '`order`'
        >>> quote_name('*')
        '*'
    """
    if name == '*':
        return name

    return '`' + name.replace('`', '\\`') + '`'


def quote_string(value: str) -> str:
    """Wrap text in single quotes, escaping backslashes and quotes."""
    escaped = value.replace('\\', '\\\\').replace("'", "\\'")
    return f"'{escaped}'"


def compile_name(name: Any) -> str:
    """Quote a possibly qualified and aliased name.

    Splits off a case-insensitive ``AS`` alias, splits the rest on dots and
    quotes every segment on its own.

    Args:
        name: Name such as ``users``, ``shop.users`` or ``shop.users AS u``

    Returns:
        Quoted name, e.g. ```shop`.`users` AS `u```
    """
    name = str(name)

    parts = ALIAS_SEPARATOR.split(name, maxsplit=1)
    name = parts[0]
    alias = parts[1] if len(parts) > 1 else None

    segments = SEGMENT_SEPARATOR.split(name, maxsplit=MAX_NAME_SEGMENTS - 1)
    compiled = '.'.join(quote_name(segment) for segment in segments)

    if alias:
        compiled += ' AS ' + quote_name(alias)

    return compiled


def compile_value(value: Any) -> str:
    """Format a Python value as a SQL literal.

    Args:
        value: None, bool, number or anything convertible to str

    Returns:
        ``NULL``, ``TRUE``/``FALSE``, the number as text, or a quoted string.
        Placeholders (``?`` and ``:name``) are returned unquoted so the
        result can serve as a parameterized template.

    Example:
        >>> compile_value(None)
        'NULL'
        >>> compile_value(True)
        'TRUE'
        >>> compile_value('?')
        '?'
    """
    if value is None:
        return 'NULL'

    # bool is a subclass of int
    if value is True:
        return 'TRUE'
    if value is False:
        return 'FALSE'

    if isinstance(value, (int, float, Decimal)):
        return str(value)

    value = str(value)

    if value == '?' or value.startswith(':'):
        return value

    return quote_string(value)
