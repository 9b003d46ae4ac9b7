"""
Versioned schema migrations.

The applied version lives in the database header (PRAGMA user_version), so
the runner needs no bookkeeping table. Each migration is applied together
with its version bump inside one transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List

from pydantic import BaseModel

from adapters.sqlite_adapter import DatabaseConnection
from app.exceptions import DatabaseError, MigrationError

logger = logging.getLogger("recipe_keeper.migrations")

MigrationStep = Callable[[DatabaseConnection], None]


@dataclass(frozen=True)
class Migration:
    """One versioned schema change. ``up``/``down`` must be idempotent."""

    version: int
    name: str
    description: str
    up: MigrationStep
    down: MigrationStep


class MigrationInfo(BaseModel):
    version: int
    name: str
    description: str
    applied: bool


class MigrationStatus(BaseModel):
    """Diagnostic snapshot of the schema version."""

    current_version: int
    latest_version: int
    pending_count: int
    is_up_to_date: bool
    migrations: List[MigrationInfo]


class MigrationRunner:
    """Applies registered migrations in ascending version order."""

    def __init__(self, connection: DatabaseConnection):
        self.connection = connection
        self._migrations: List[Migration] = []

    def register(self, migration: Migration) -> None:
        """Add a migration; the run order is by version regardless of call order."""
        if any(m.version == migration.version for m in self._migrations):
            raise MigrationError(
                f"Migration version {migration.version} is already registered",
                version=migration.version,
                migration_name=migration.name,
                code="DUPLICATE_VERSION",
            )
        self._migrations.append(migration)
        self._migrations.sort(key=lambda m: m.version)

    def get_migrations(self) -> List[Migration]:
        return list(self._migrations)

    def get_latest_version(self) -> int:
        if not self._migrations:
            return 0
        return self._migrations[-1].version

    def get_current_version(self) -> int:
        return self.connection.get_user_version()

    def pending_migrations(self) -> List[Migration]:
        current = self.get_current_version()
        return [m for m in self._migrations if m.version > current]

    def is_up_to_date(self) -> bool:
        return self.get_current_version() >= self.get_latest_version()

    # ------------------ Apply ------------------

    def run_migrations(self) -> List[int]:
        """Apply every pending migration and return the versions applied.

        Stops at the first failure; the stored version then points at the
        last migration that succeeded.
        """
        pending = self.pending_migrations()
        if not pending:
            logger.info("No pending migrations to run")
            return []

        logger.info("Running %d pending migrations...", len(pending))
        applied = []
        for migration in pending:
            self.run_migration(migration)
            applied.append(migration.version)

        logger.info("All migrations completed successfully")
        return applied

    def run_migration(self, migration: Migration) -> None:
        logger.info("Running migration %d: %s", migration.version, migration.name)
        try:
            with self.connection.transaction() as conn:
                migration.up(conn)
                conn.set_user_version(migration.version)
        except Exception as exc:
            logger.error("Migration %d failed: %s", migration.version, exc)
            raise MigrationError(
                f"Migration {migration.version} ({migration.name}) failed",
                version=migration.version,
                migration_name=migration.name,
            ) from exc
        logger.info("Migration %d completed successfully", migration.version)

    # ------------------ Revert ------------------

    def rollback_to_version(self, target_version: int) -> List[int]:
        """Revert every applied migration above ``target_version``, newest first."""
        current = self.get_current_version()
        if target_version >= current:
            logger.info("Already at version %d, no rollback needed", current)
            return []

        to_revert = sorted(
            (m for m in self._migrations if target_version < m.version <= current),
            key=lambda m: m.version,
            reverse=True,
        )
        logger.info(
            "Rolling back %d migrations to version %d...", len(to_revert), target_version
        )
        reverted = []
        for migration in to_revert:
            self.rollback_migration(migration)
            reverted.append(migration.version)

        logger.info("Rollback to version %d completed successfully", target_version)
        return reverted

    def rollback_migration(self, migration: Migration) -> None:
        logger.info("Rolling back migration %d: %s", migration.version, migration.name)
        previous = max(
            (m.version for m in self._migrations if m.version < migration.version),
            default=0,
        )
        try:
            with self.connection.transaction() as conn:
                migration.down(conn)
                conn.set_user_version(previous)
        except Exception as exc:
            logger.error("Rollback of migration %d failed: %s", migration.version, exc)
            raise MigrationError(
                f"Rollback of migration {migration.version} ({migration.name}) failed",
                version=migration.version,
                migration_name=migration.name,
                code="ROLLBACK_FAILED",
            ) from exc
        logger.info("Migration %d rolled back successfully", migration.version)

    def reset(self) -> None:
        """Run every down step, newest first, and set the version back to 0.

        Unlike rollback_to_version this keeps going when a step fails, so a
        half-broken schema can still be cleared.
        """
        logger.info("Resetting database to version 0...")
        for migration in sorted(self._migrations, key=lambda m: m.version, reverse=True):
            try:
                migration.down(self.connection)
            except DatabaseError as exc:
                logger.warning(
                    "Failed to roll back migration %d during reset: %s", migration.version, exc
                )
        self.connection.set_user_version(0)
        logger.info("Database reset completed")

    # ------------------ Diagnostics ------------------

    def get_status(self) -> MigrationStatus:
        current = self.get_current_version()
        latest = self.get_latest_version()
        return MigrationStatus(
            current_version=current,
            latest_version=latest,
            pending_count=sum(1 for m in self._migrations if m.version > current),
            is_up_to_date=current >= latest,
            migrations=[
                MigrationInfo(
                    version=m.version,
                    name=m.name,
                    description=m.description,
                    applied=m.version <= current,
                )
                for m in self._migrations
            ],
        )
