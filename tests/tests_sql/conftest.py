"""
Shared fixtures for the sql package tests.

Key fixtures:
- migration: a Migration with empty defaults, independent of the environment.
- migration_factory: builds Migration instances with custom MigrationDefaults.
"""

import pytest

from core.config import MigrationDefaults


@pytest.fixture
def migration_factory():
    """
    Factory that creates a Migration with explicit defaults so MIGRATION_TABLE_*
    variables in the environment never leak into rendered SQL.
    """
    from sql.migration import Migration

    def factory(**defaults):
        return Migration(defaults=MigrationDefaults(**defaults))

    return factory


@pytest.fixture
def migration(migration_factory):
    """Migration with no default table options."""
    return migration_factory()
