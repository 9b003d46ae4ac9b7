"""
Migrations package - versioned schema changes and the runner that applies them.
"""

from migrations.runner import Migration, MigrationInfo, MigrationRunner, MigrationStatus
from migrations.v001_initial_schema import migration as initial_schema
from migrations.v002_add_indexes import migration as add_indexes

ALL_MIGRATIONS = (initial_schema, add_indexes)


def register_migrations(runner: MigrationRunner) -> None:
    """Register every known migration with ``runner`` (skipping ones already there)."""
    known = {m.version for m in runner.get_migrations()}
    for migration in ALL_MIGRATIONS:
        if migration.version not in known:
            runner.register(migration)


__all__ = [
    "Migration",
    "MigrationInfo",
    "MigrationRunner",
    "MigrationStatus",
    "ALL_MIGRATIONS",
    "register_migrations",
]
