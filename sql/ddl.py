"""
=========================================================
Data Definition Language (DDL) statement templates.
=========================================================

Provides the renderer functions behind sql.migration.Migration. Every
function receives names that are already quoted (see sql.quoting) and column
definitions that are already compiled, and returns one MySQL statement
terminated with a semicolon.

Functions:
    drop_table_sql: Generate DROP TABLE statement
    create_table_sql: Generate CREATE TABLE statement with table options
    drop_database_sql: Generate DROP DATABASE statement
    create_database_sql: Generate CREATE DATABASE statement

Example:
    >>> from sql.ddl import create_table_sql, drop_table_sql
    >>>
    >>> drop_table_sql('`users`', if_exists=True)
    'DROP TABLE IF EXISTS `users`;'
    >>>
    >>> print(create_table_sql(
    ...     '`users`',
    ...     columns=['`id` INT UNSIGNED NOT NULL AUTO_INCREMENT', '`email` VARCHAR(255)'],
    ...     if_not_exists=True,
    ...     engine='InnoDB'
    ... ))
    CREATE TABLE IF NOT EXISTS `users` (
        `id` INT UNSIGNED NOT NULL AUTO_INCREMENT,
        `email` VARCHAR(255)
    ) ENGINE=InnoDB;
"""

from typing import List, Optional

COLUMN_INDENT = "    "


def drop_table_sql(table_name: str, if_exists: bool = False) -> str:
    """Generate DROP TABLE statement.

    Args:
        table_name: Quoted table name
        if_exists: If True, add IF EXISTS clause

    Returns:
        SQL DROP TABLE statement

    Example:
        >>> drop_table_sql('`users`')
        'DROP TABLE `users`;'
    """
    sql_parts = ["DROP TABLE"]

    if if_exists:
        sql_parts.append("IF EXISTS")

    sql_parts.append(table_name)

    return " ".join(sql_parts) + ";"


def create_table_sql(
    table_name: str,
    columns: List[str],
    if_not_exists: bool = False,
    engine: Optional[str] = None,
    charset: Optional[str] = None,
    collation: Optional[str] = None
) -> str:
    """Generate CREATE TABLE statement.

    Args:
        table_name: Quoted table name
        columns: Compiled column definitions, one per line in the output
        if_not_exists: If True, add IF NOT EXISTS clause
        engine: Optional storage engine (ENGINE=...)
        charset: Optional default character set (DEFAULT CHARSET=...)
        collation: Optional default collation (COLLATE=...)

    Returns:
        SQL CREATE TABLE statement
    """
    sql_parts = ["CREATE TABLE"]

    if if_not_exists:
        sql_parts.append("IF NOT EXISTS")

    sql_parts.append(table_name)

    column_defs = [f"{COLUMN_INDENT}{column}" for column in columns]
    sql = " ".join(sql_parts) + " (\n" + ",\n".join(column_defs) + "\n)"

    # Table options
    if engine:
        sql += f" ENGINE={engine}"
    if charset:
        sql += f" DEFAULT CHARSET={charset}"
    if collation:
        sql += f" COLLATE={collation}"

    return sql + ";"


def drop_database_sql(database_name: str, if_exists: bool = False) -> str:
    """
    Generate DROP DATABASE statement.

    Args:
        database_name: Quoted database name
        if_exists: Add IF EXISTS clause

    Returns:
        SQL DROP DATABASE statement
    """
    sql_parts = ["DROP DATABASE"]

    if if_exists:
        sql_parts.append("IF EXISTS")

    sql_parts.append(database_name)

    return " ".join(sql_parts) + ";"


def create_database_sql(
    database_name: str,
    if_not_exists: bool = False,
    charset: Optional[str] = None,
    collation: Optional[str] = None
) -> str:
    """
    Generate CREATE DATABASE statement.

    Args:
        database_name: Quoted database name
        if_not_exists: Add IF NOT EXISTS clause
        charset: Optional CHARACTER SET
        collation: Optional COLLATE

    Returns:
        SQL CREATE DATABASE statement
    """
    sql_parts = ["CREATE DATABASE"]

    if if_not_exists:
        sql_parts.append("IF NOT EXISTS")

    sql_parts.append(database_name)

    if charset:
        sql_parts.append(f"CHARACTER SET {charset}")

    if collation:
        sql_parts.append(f"COLLATE {collation}")

    return " ".join(sql_parts) + ";"
