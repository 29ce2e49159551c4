"""
==================================
Column data type clause compilers.
==================================

Pure functions that turn type arguments into MySQL column type clauses.
Used by sql.migration.Migration; can also be called directly.

Functions:
    compile_integer_data_type: INT, BIGINT, ... with display size and UNSIGNED
    compile_float_data_type: FLOAT, DOUBLE, DECIMAL with precision and scale
    compile_string_data_type: CHAR(n), VARCHAR(n)
    compile_list_data_type: ENUM(...) and SET(...)
    compile_temporal_data_type: TIME, DATETIME, TIMESTAMP with fractional seconds

Example:
    >>> from sql.data_types import compile_integer_data_type, compile_list_data_type
    >>>
    >>> compile_integer_data_type('INT', 11, unsigned=True)
    'INT(11) UNSIGNED'
    >>> compile_list_data_type('ENUM', ['draft', 'published'])
    "ENUM('draft', 'published')"
"""

import logging
from typing import Any, Iterable, Optional

from sql.quoting import compile_value

logger = logging.getLogger(__name__)


# MySQL allows at most microsecond precision
MAX_FRACTIONAL_PRECISION = 6


class DataTypeError(Exception):
    """Exception raised for invalid column type arguments.

    Raised when a size is missing, negative or not an integer, or when an
    ENUM/SET value list is empty, or when a scale is given without or above
    its precision.
    """
    pass


def _check_int(value: Any, argument: str, type_name: str, minimum: int = 0) -> None:
    # bool passes isinstance(int) but is never a valid size
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        message = f"{type_name} {argument} must be an integer >= {minimum}, got {value!r}"
        logger.error(message)
        raise DataTypeError(message)


def compile_integer_data_type(
    name: str,
    size: Optional[int] = None,
    unsigned: bool = False
) -> str:
    """Compile an integer type clause.

    Args:
        name: Integer type keyword (INT, BIGINT, ...)
        size: Optional display width
        unsigned: If True, append UNSIGNED

    Returns:
        Type clause such as ``INT``, ``INT(11)`` or ``INT(11) UNSIGNED``

    Raises:
        DataTypeError: If size is not a positive integer
    """
    data_type = name

    if size is not None:
        _check_int(size, 'size', name, minimum=1)
        data_type += f"({size})"

    if unsigned:
        data_type += " UNSIGNED"

    return data_type


def compile_float_data_type(
    name: str,
    size: Optional[int] = None,
    digits: Optional[int] = None
) -> str:
    """Compile a floating point or fixed point type clause.

    Digits are only valid together with a size and may not exceed it.

    Args:
        name: Type keyword (FLOAT, DOUBLE, DECIMAL)
        size: Optional total number of digits
        digits: Optional number of digits after the decimal point

    Returns:
        Type clause such as ``DECIMAL``, ``DECIMAL(10)`` or ``DECIMAL(10, 2)``

    Raises:
        DataTypeError: If size or digits is not a non-negative integer, digits
            is given without size, or digits exceeds size
    """
    if size is None:
        if digits is not None:
            message = f"{name} digits require a size, got digits={digits!r} without size"
            logger.error(message)
            raise DataTypeError(message)
        return name

    _check_int(size, 'size', name, minimum=1)

    if digits is None:
        return f"{name}({size})"

    _check_int(digits, 'digits', name)
    if digits > size:
        message = f"{name} digits ({digits}) cannot exceed size ({size})"
        logger.error(message)
        raise DataTypeError(message)

    return f"{name}({size}, {digits})"


def compile_string_data_type(name: str, size: int) -> str:
    """Compile CHAR(n) or VARCHAR(n); size is mandatory."""
    _check_int(size, 'size', name, minimum=1)
    return f"{name}({size})"


def compile_list_data_type(name: str, values: Iterable[Any]) -> str:
    """Compile an ENUM or SET clause.

    Args:
        name: ENUM or SET
        values: Allowed values, each formatted with compile_value

    Returns:
        Type clause such as ``ENUM('a', 'b')``

    Raises:
        DataTypeError: If no values are given
    """
    values = list(values)
    if not values:
        message = f"{name} requires at least one value"
        logger.error(message)
        raise DataTypeError(message)

    return f"{name}(" + ", ".join(compile_value(value) for value in values) + ")"


def compile_temporal_data_type(name: str, precision: Optional[int] = None) -> str:
    """Compile a date/time clause with optional fractional seconds precision."""
    if precision is None:
        return name

    _check_int(precision, 'precision', name)
    if precision > MAX_FRACTIONAL_PRECISION:
        message = f"{name} precision must be at most {MAX_FRACTIONAL_PRECISION}, got {precision}"
        logger.error(message)
        raise DataTypeError(message)

    return f"{name}({precision})"
