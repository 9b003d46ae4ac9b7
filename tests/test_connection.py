"""
Tests for the SQLite connection manager.

This test suite covers the single-handle database adapter:
- Lifecycle: initialize, is_ready, close, health_check
- Storage pragmas applied on connect
- execute/query primitives and statement error wrapping
- Transactions: commit, rollback, joining an outer transaction
- Schema version stored in PRAGMA user_version
"""

from unittest.mock import patch

import pytest
from sqlalchemy.engine.base import RootTransaction
from sqlalchemy.exc import OperationalError

from adapters.sqlite_adapter import MEMORY_DATABASE, DatabaseConnection
from app.exceptions import (
    ConnectionFailedError,
    NotInitializedError,
    QueryFailedError,
    WriteFailedError,
)

from test_fixtures import db_path, db_connection


@pytest.fixture
def notes(db_connection):
    db_connection.execute("CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT NOT NULL)")
    return db_connection


# =============================================================================
# LIFECYCLE TESTS
# =============================================================================


def test_operations_before_initialize_raise_not_initialized(db_path):
    """
    Verifies:
    - every primitive fails with NotInitializedError before initialize()
    - health_check() answers False instead of raising
    """
    connection = DatabaseConnection(db_path)

    assert connection.is_ready() is False
    with pytest.raises(NotInitializedError):
        connection.execute("SELECT 1")
    with pytest.raises(NotInitializedError):
        connection.query("SELECT 1")
    with pytest.raises(NotInitializedError):
        with connection.transaction():
            pass
    with pytest.raises(NotInitializedError):
        connection.get_user_version()
    assert connection.health_check() is False


def test_initialize_is_idempotent_and_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "app.db"
    connection = DatabaseConnection(str(path))

    connection.initialize()
    connection.initialize()

    assert connection.is_ready()
    assert path.parent.is_dir()
    assert connection.health_check() is True
    connection.close()
    assert connection.is_ready() is False


def test_close_then_initialize_reopens(db_connection):
    db_connection.close()
    assert db_connection.health_check() is False

    db_connection.initialize()
    assert db_connection.health_check() is True


def test_initialize_failure_raises_connection_failed(tmp_path):
    """A path whose parent is a regular file cannot be created."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    connection = DatabaseConnection(str(blocker / "app.db"))

    with pytest.raises(ConnectionFailedError) as exc_info:
        connection.initialize()

    assert exc_info.value.code == "CONNECTION_FAILED"
    assert connection.is_ready() is False


def test_pragmas_applied_on_connect(db_connection):
    """
    Verifies:
    - foreign keys are enforced
    - write-ahead logging is active on file databases
    - synchronous mode is NORMAL (1)
    """
    assert db_connection.query_one("PRAGMA foreign_keys")["foreign_keys"] == 1
    assert db_connection.query_one("PRAGMA journal_mode")["journal_mode"].lower() == "wal"
    assert db_connection.query_one("PRAGMA synchronous")["synchronous"] == 1


def test_memory_database_supported():
    connection = DatabaseConnection(MEMORY_DATABASE)
    connection.initialize()
    try:
        connection.execute("CREATE TABLE t (x INTEGER)")
        connection.execute("INSERT INTO t (x) VALUES (:x)", {"x": 7})
        assert connection.query("SELECT x FROM t") == [{"x": 7}]
    finally:
        connection.close()


# =============================================================================
# STATEMENT TESTS
# =============================================================================


def test_execute_returns_affected_rows(notes):
    assert notes.execute("INSERT INTO notes (body) VALUES (:body)", {"body": "a"}) == 1
    notes.execute("INSERT INTO notes (body) VALUES (:body)", {"body": "b"})

    assert notes.execute("UPDATE notes SET body = 'z'") == 2
    assert notes.execute("DELETE FROM notes WHERE body = :body", {"body": "missing"}) == 0


def test_query_returns_plain_dicts(notes):
    notes.execute("INSERT INTO notes (body) VALUES (:body)", {"body": "hello"})

    rows = notes.query("SELECT id, body FROM notes")

    assert rows == [{"id": 1, "body": "hello"}]
    assert notes.query_one("SELECT body FROM notes WHERE id = :id", {"id": 99}) is None


def test_write_failure_wraps_statement_and_params(notes):
    statement = "INSERT INTO notes (body) VALUES (:body)"

    with pytest.raises(WriteFailedError) as exc_info:
        notes.execute(statement, {"body": None})

    error = exc_info.value
    assert error.code == "WRITE_FAILED"
    assert error.statement == statement
    assert error.params == {"body": None}
    assert error.__cause__ is not None


def test_query_failure_wraps_statement(db_connection):
    with pytest.raises(QueryFailedError) as exc_info:
        db_connection.query("SELECT * FROM no_such_table")

    assert exc_info.value.statement == "SELECT * FROM no_such_table"
    assert exc_info.value.to_dict()["code"] == "QUERY_FAILED"


# =============================================================================
# TRANSACTION TESTS
# =============================================================================


def test_transaction_commits_on_success(notes):
    with notes.transaction() as conn:
        conn.execute("INSERT INTO notes (body) VALUES ('one')")
        conn.execute("INSERT INTO notes (body) VALUES ('two')")
        assert notes.in_transaction()

    assert notes.in_transaction() is False
    assert notes.query_one("SELECT COUNT(*) AS n FROM notes")["n"] == 2


def test_transaction_rolls_back_and_reraises(notes):
    with pytest.raises(RuntimeError):
        with notes.transaction() as conn:
            conn.execute("INSERT INTO notes (body) VALUES ('lost')")
            raise RuntimeError("boom")

    assert notes.query_one("SELECT COUNT(*) AS n FROM notes")["n"] == 0


def test_transaction_rolls_back_after_failed_statement(notes):
    with pytest.raises(WriteFailedError):
        with notes.transaction() as conn:
            conn.execute("INSERT INTO notes (body) VALUES ('first')")
            conn.execute("INSERT INTO notes (body) VALUES (NULL)")

    assert notes.query("SELECT * FROM notes") == []


def test_failed_commit_wrapped_and_rolled_back(notes):
    locked = OperationalError("COMMIT", {}, Exception("database is locked"))

    with patch.object(RootTransaction, "commit", side_effect=locked):
        with pytest.raises(WriteFailedError) as exc_info:
            with notes.transaction() as conn:
                conn.execute("INSERT INTO notes (body) VALUES ('pending')")

    assert exc_info.value.statement == "COMMIT"
    assert exc_info.value.__cause__ is locked
    assert notes.in_transaction() is False
    assert notes.query("SELECT * FROM notes") == []


def test_nested_transaction_joins_outer(notes):
    """
    Verifies:
    - an inner transaction() does not commit on its own
    - a failure after the inner block rolls back the inner writes too
    """
    with pytest.raises(ValueError):
        with notes.transaction():
            with notes.transaction() as inner:
                inner.execute("INSERT INTO notes (body) VALUES ('inner')")
            raise ValueError("outer fails")

    assert notes.query("SELECT * FROM notes") == []


def test_run_in_transaction_returns_result(notes):
    def insert_two(conn):
        conn.execute("INSERT INTO notes (body) VALUES ('a')")
        conn.execute("INSERT INTO notes (body) VALUES ('b')")
        return "done"

    assert notes.run_in_transaction(insert_two) == "done"
    assert len(notes.query("SELECT * FROM notes")) == 2


# =============================================================================
# SCHEMA VERSION TESTS
# =============================================================================


def test_user_version_round_trip(db_connection):
    assert db_connection.get_user_version() == 0

    db_connection.set_user_version(3)

    assert db_connection.get_user_version() == 3


def test_user_version_survives_reopen(db_path):
    connection = DatabaseConnection(db_path)
    connection.initialize()
    connection.set_user_version(2)
    connection.close()

    reopened = DatabaseConnection(db_path)
    reopened.initialize()
    try:
        assert reopened.get_user_version() == 2
    finally:
        reopened.close()


@pytest.mark.parametrize("bad", [-1, "2", 1.5, True])
def test_set_user_version_rejects_invalid(db_connection, bad):
    with pytest.raises(ValueError):
        db_connection.set_user_version(bad)
