"""
Database bootstrap service.
Opens the connection, brings the schema to the latest version and seeds an
empty store.
"""

import logging
import time
from typing import Optional

from adapters.sqlite_adapter import DatabaseConnection
from app.config import settings
from app.exceptions import DatabaseError
from migrations import MigrationRunner, MigrationStatus, register_migrations
from services.seed_service import SeedService

logger = logging.getLogger("recipe_keeper.database")


class DatabaseService:
    """Startup sequence and diagnostics for the embedded database."""

    def __init__(
        self,
        connection: DatabaseConnection,
        runner: MigrationRunner,
        seeder: Optional[SeedService] = None,
    ):
        self.connection = connection
        self.runner = runner
        self.seeder = seeder

    def initialize(self, seed: Optional[bool] = None) -> MigrationStatus:
        """
        Connect, migrate, and seed when the store is empty.

        Args:
            seed: Override settings.seed_on_startup

        Returns:
            Migration status after startup

        Raises:
            DatabaseError: any failure; unexpected errors are wrapped with
                code INIT_FAILED
        """
        should_seed = settings.seed_on_startup if seed is None else seed
        start = time.perf_counter()
        try:
            logger.info("Starting database initialization...")
            self.connection.initialize()

            register_migrations(self.runner)
            applied = self.runner.run_migrations()
            logger.info(f"Migrations completed ({len(applied)} applied)")

            if should_seed and self.seeder is not None:
                if self.seeder.needs_seeding():
                    logger.info("Database is empty, starting seed process...")
                    self.seeder.seed_database()
                else:
                    logger.info("Database already has data, skipping seed")
        except DatabaseError:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.error(f"Database initialization failed after {elapsed_ms:.0f}ms")
            raise
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.error(f"Database initialization failed after {elapsed_ms:.0f}ms: {e}")
            raise DatabaseError(
                "Database initialization failed", details={"error": str(e)}, code="INIT_FAILED"
            ) from e

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Database initialization completed in {elapsed_ms:.0f}ms")
        if elapsed_ms > settings.slow_init_warning_ms:
            logger.warning(
                f"Database initialization took longer than "
                f"{settings.slow_init_warning_ms}ms ({elapsed_ms:.0f}ms)"
            )
        return self.runner.get_status()

    def get_status(self) -> MigrationStatus:
        return self.runner.get_status()

    def is_ready(self) -> bool:
        return self.connection.is_ready()

    def health_check(self) -> bool:
        return self.connection.health_check()
