"""SQLite adapter: owns the single database handle of the application.

Every other component reaches storage through a ``DatabaseConnection``
instance created by the composition root; nothing else opens its own
handle.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, TypeVar

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.exceptions import (
    ConnectionFailedError,
    DatabaseError,
    NotInitializedError,
    QueryFailedError,
    WriteFailedError,
)

logger = logging.getLogger("recipe_keeper.database")

T = TypeVar("T")

MEMORY_DATABASE = ":memory:"

# Fixed storage policy applied to every new handle.
SQLITE_PRAGMAS = (
    "PRAGMA foreign_keys = ON",
    "PRAGMA journal_mode = WAL",
    "PRAGMA synchronous = NORMAL",
)


def _install_sqlite_hooks(engine: Engine) -> None:
    """Take transaction control away from the sqlite3 module.

    pysqlite opens transactions lazily and silently commits around DDL, which
    would break migrations that mix DDL with the version bump. Switching the
    DBAPI handle to autocommit and emitting BEGIN ourselves gives real
    BEGIN/COMMIT/ROLLBACK semantics.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        try:
            for pragma in SQLITE_PRAGMAS:
                cursor.execute(pragma)
        finally:
            cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


class DatabaseConnection:
    """Connection manager exposing execute/query/transaction primitives."""

    def __init__(self, database_path: Optional[str] = None, echo: Optional[bool] = None):
        self.database_path = database_path or settings.database_path
        self.echo = settings.db_echo if echo is None else echo
        self._engine: Optional[Engine] = None
        self._connection: Optional[Connection] = None

    # ------------------ Lifecycle ------------------

    def initialize(self) -> None:
        """Open the database file and apply the storage pragmas.

        Calling it again on a ready connection does nothing.
        """
        if self.is_ready():
            return

        try:
            if self.database_path != MEMORY_DATABASE:
                Path(self.database_path).parent.mkdir(parents=True, exist_ok=True)

            engine = create_engine(
                f"sqlite:///{self.database_path}",
                echo=self.echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
            _install_sqlite_hooks(engine)
            self._connection = engine.connect()
            self._engine = engine
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Failed to initialize database connection: %s", exc)
            self._connection = None
            self._engine = None
            raise ConnectionFailedError(
                "Failed to initialize database connection",
                details={"database_path": self.database_path},
            ) from exc

        logger.info("Database connection initialized (path=%s)", self.database_path)

    def is_ready(self) -> bool:
        return self._connection is not None and not self._connection.closed

    def close(self) -> None:
        """Close the handle; a later initialize() opens a fresh one."""
        if self._connection is None:
            return
        try:
            self._connection.close()
            if self._engine is not None:
                self._engine.dispose()
            logger.info("Database connection closed")
        except SQLAlchemyError as exc:
            logger.error("Failed to close database connection: %s", exc)
            raise DatabaseError(
                "Failed to close database connection", code="CLOSE_FAILED"
            ) from exc
        finally:
            self._connection = None
            self._engine = None

    def health_check(self) -> bool:
        """Return True when the handle is open and answers a trivial query."""
        if not self.is_ready():
            return False
        try:
            self.query("SELECT 1")
            return True
        except DatabaseError as exc:
            logger.warning("Database health check failed: %s", exc)
            return False

    def _require_connection(self) -> Connection:
        if not self.is_ready():
            raise NotInitializedError()
        return self._connection

    # ------------------ Statements ------------------

    def execute(self, statement: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """Run one mutating statement and return the number of affected rows."""
        conn = self._require_connection()
        try:
            if conn.in_transaction():
                result = conn.execute(text(statement), dict(params or {}))
            else:
                with conn.begin():
                    result = conn.execute(text(statement), dict(params or {}))
        except SQLAlchemyError as exc:
            logger.error(
                "Statement execution failed: %s params=%s error=%s",
                statement.strip(),
                params,
                exc,
            )
            raise WriteFailedError("Statement execution failed", statement, params) from exc
        return result.rowcount

    def query(
        self, statement: str, params: Optional[Mapping[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Run one read statement and return its rows as plain dicts."""
        conn = self._require_connection()
        try:
            if conn.in_transaction():
                rows = conn.execute(text(statement), dict(params or {})).mappings().all()
            else:
                with conn.begin():
                    rows = conn.execute(text(statement), dict(params or {})).mappings().all()
        except SQLAlchemyError as exc:
            logger.error(
                "Select query failed: %s params=%s error=%s",
                statement.strip(),
                params,
                exc,
            )
            raise QueryFailedError("Select query failed", statement, params) from exc
        return [dict(row) for row in rows]

    def query_one(
        self, statement: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        rows = self.query(statement, params)
        return rows[0] if rows else None

    # ------------------ Transactions ------------------

    def in_transaction(self) -> bool:
        return self._require_connection().in_transaction()

    @contextmanager
    def transaction(self) -> Iterator["DatabaseConnection"]:
        """BEGIN, then COMMIT when the block finishes or ROLLBACK and re-raise.

        Transactions do not nest: opening one inside another joins the outer
        transaction, which alone decides whether to commit or roll back.
        """
        conn = self._require_connection()
        if conn.in_transaction():
            yield self
            return

        trans = conn.begin()
        try:
            yield self
        except BaseException as exc:
            self._finish(trans.rollback, "ROLLBACK")
            logger.error("Transaction failed, rolled back: %s", exc)
            raise
        else:
            try:
                self._finish(trans.commit, "COMMIT")
            except WriteFailedError:
                if conn.in_transaction():
                    self._finish(trans.rollback, "ROLLBACK")
                raise

    @staticmethod
    def _finish(step: Callable[[], None], statement: str) -> None:
        try:
            step()
        except SQLAlchemyError as exc:
            logger.error("%s failed: %s", statement, exc)
            raise WriteFailedError(f"{statement} failed", statement, {}) from exc

    def run_in_transaction(self, operation: Callable[["DatabaseConnection"], T]) -> T:
        """Call ``operation(self)`` inside one transaction and return its result."""
        with self.transaction():
            return operation(self)

    # ------------------ Schema version ------------------

    def get_user_version(self) -> int:
        """Schema version stored in the database header (PRAGMA user_version)."""
        row = self.query_one("PRAGMA user_version")
        return int(row["user_version"]) if row else 0

    def set_user_version(self, version: int) -> None:
        if not isinstance(version, int) or isinstance(version, bool) or version < 0:
            raise ValueError(f"Schema version must be a non-negative integer, got {version!r}")
        # PRAGMA does not accept bound parameters
        self.execute(f"PRAGMA user_version = {version}")
