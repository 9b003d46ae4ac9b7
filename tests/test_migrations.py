"""
Tests for the migration runner and the bundled migrations.

Covers:
- Registration order vs. run order
- Pending list, idempotent re-runs, status reporting
- Failure handling: rollback of the failing migration, version left at last success
- Rollback to an earlier version and full reset
- Schema produced by 001/002 (tables, constraints, cascades, indexes)
"""

import pytest

from app.exceptions import MigrationError, WriteFailedError
from migrations import ALL_MIGRATIONS, Migration, MigrationRunner, register_migrations
from migrations.v001_initial_schema import migration as initial_schema
from migrations.v002_add_indexes import INDEXES, migration as add_indexes

from test_fixtures import db_path, db_connection, migrated


def _tables(connection):
    rows = connection.query("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {row["name"] for row in rows}


def _indexes(connection):
    rows = connection.query(
        "SELECT name FROM sqlite_master WHERE type = 'index' AND name LIKE 'idx_%'"
    )
    return {row["name"] for row in rows}


def _recording_migration(version, log, fail=False):
    def up(conn):
        conn.execute(f"CREATE TABLE IF NOT EXISTS t{version} (id INTEGER)")
        log.append(("up", version))
        if fail:
            raise RuntimeError(f"migration {version} exploded")

    def down(conn):
        conn.execute(f"DROP TABLE IF EXISTS t{version}")
        log.append(("down", version))

    return Migration(version, f"{version:03d}_test", f"test migration {version}", up, down)


# =============================================================================
# ORDERING AND IDEMPOTENCE
# =============================================================================


def test_registration_order_does_not_change_run_order(db_connection):
    """
    Verifies:
    - registering 002 before 001 still applies 001 first
    - run_migrations() returns the applied versions in order
    """
    runner = MigrationRunner(db_connection)
    runner.register(add_indexes)
    runner.register(initial_schema)

    assert [m.version for m in runner.get_migrations()] == [1, 2]
    assert runner.run_migrations() == [1, 2]
    assert runner.get_current_version() == 2


def test_second_run_is_noop(db_connection):
    runner = MigrationRunner(db_connection)
    register_migrations(runner)

    runner.run_migrations()

    assert runner.pending_migrations() == []
    assert runner.run_migrations() == []
    assert runner.is_up_to_date()


def test_pending_migrations_above_stored_version(db_connection):
    log = []
    runner = MigrationRunner(db_connection)
    for version in (3, 1, 2):
        runner.register(_recording_migration(version, log))
    db_connection.set_user_version(1)

    assert [m.version for m in runner.pending_migrations()] == [2, 3]
    runner.run_migrations()
    assert log == [("up", 2), ("up", 3)]


def test_duplicate_version_rejected(db_connection):
    runner = MigrationRunner(db_connection)
    runner.register(initial_schema)

    with pytest.raises(MigrationError) as exc_info:
        runner.register(initial_schema)

    assert exc_info.value.code == "DUPLICATE_VERSION"
    assert len(runner.get_migrations()) == 1


def test_register_migrations_skips_known_versions(db_connection):
    runner = MigrationRunner(db_connection)
    register_migrations(runner)
    register_migrations(runner)

    assert [m.version for m in runner.get_migrations()] == [m.version for m in ALL_MIGRATIONS]


def test_empty_runner_is_up_to_date(db_connection):
    runner = MigrationRunner(db_connection)

    assert runner.get_latest_version() == 0
    assert runner.is_up_to_date()
    assert runner.run_migrations() == []


# =============================================================================
# FAILURE HANDLING
# =============================================================================


def test_failed_migration_stops_and_keeps_last_good_version(db_connection):
    """
    Verifies:
    - the failing migration's DDL is rolled back with it
    - later migrations are not attempted
    - stored version stays at the last successful migration
    - MigrationError carries version, name and the underlying cause
    """
    log = []
    runner = MigrationRunner(db_connection)
    runner.register(_recording_migration(1, log))
    runner.register(_recording_migration(2, log, fail=True))
    runner.register(_recording_migration(3, log))

    with pytest.raises(MigrationError) as exc_info:
        runner.run_migrations()

    error = exc_info.value
    assert error.version == 2
    assert error.migration_name == "002_test"
    assert isinstance(error.__cause__, RuntimeError)
    assert log == [("up", 1), ("up", 2)]
    assert runner.get_current_version() == 1
    assert "t1" in _tables(db_connection)
    assert "t2" not in _tables(db_connection)


# =============================================================================
# ROLLBACK AND RESET
# =============================================================================


def test_rollback_to_version_runs_downs_newest_first(db_connection):
    log = []
    runner = MigrationRunner(db_connection)
    for version in (1, 2, 3):
        runner.register(_recording_migration(version, log))
    runner.run_migrations()
    log.clear()

    reverted = runner.rollback_to_version(1)

    assert reverted == [3, 2]
    assert log == [("down", 3), ("down", 2)]
    assert runner.get_current_version() == 1
    assert _tables(db_connection) >= {"t1"}
    assert not {"t2", "t3"} & _tables(db_connection)


def test_rollback_to_current_or_higher_is_noop(migrated):
    runner = MigrationRunner(migrated)
    register_migrations(runner)

    assert runner.rollback_to_version(2) == []
    assert runner.rollback_to_version(5) == []
    assert runner.get_current_version() == 2


def test_rollback_to_zero_drops_schema(migrated):
    runner = MigrationRunner(migrated)
    register_migrations(runner)

    runner.rollback_to_version(0)

    assert runner.get_current_version() == 0
    assert not {"recipes", "meal_plans", "shopping_list_items"} & _tables(migrated)
    assert _indexes(migrated) == set()


def test_reset_then_migrate_again(migrated):
    runner = MigrationRunner(migrated)
    register_migrations(runner)

    runner.reset()
    assert runner.get_current_version() == 0
    assert "recipes" not in _tables(migrated)

    assert runner.run_migrations() == [1, 2]
    assert "recipes" in _tables(migrated)


# =============================================================================
# STATUS
# =============================================================================


def test_status_reports_applied_and_pending(db_connection):
    runner = MigrationRunner(db_connection)
    register_migrations(runner)
    runner.run_migration(initial_schema)

    status = runner.get_status()

    assert status.current_version == 1
    assert status.latest_version == 2
    assert status.pending_count == 1
    assert status.is_up_to_date is False
    assert [(m.version, m.applied) for m in status.migrations] == [(1, True), (2, False)]


# =============================================================================
# BUNDLED SCHEMA
# =============================================================================


def test_initial_schema_creates_tables_and_indexes(migrated):
    assert {"recipes", "meal_plans", "shopping_list_items"} <= _tables(migrated)
    assert _indexes(migrated) == {name for name, _ in INDEXES}


def test_migrations_up_are_idempotent(migrated):
    initial_schema.up(migrated)
    add_indexes.up(migrated)

    assert _indexes(migrated) == {name for name, _ in INDEXES}


def test_schema_check_constraints(migrated):
    migrated.execute(
        """
        INSERT INTO recipes (id, title, servings, category, ingredients, steps, createdAt, updatedAt)
        VALUES ('r1', 'Soup', 2, 'lunch', '[]', '[]', '2025-01-01T00:00:00.000Z', '2025-01-01T00:00:00.000Z')
        """
    )
    with pytest.raises(WriteFailedError):
        migrated.execute(
            "INSERT INTO meal_plans (id, recipeId, date, mealType, createdAt) "
            "VALUES ('m1', 'r1', '2025-01-01', 'brunch', 'now')"
        )
    with pytest.raises(WriteFailedError):
        migrated.execute(
            "INSERT INTO shopping_list_items (id, name, checked, createdAt) "
            "VALUES ('s1', 'Milk', 2, 'now')"
        )


def test_hard_delete_of_recipe_row_cascades(migrated):
    migrated.execute(
        """
        INSERT INTO recipes (id, title, servings, category, ingredients, steps, createdAt, updatedAt)
        VALUES ('r1', 'Soup', 2, 'lunch', '[]', '[]', 'now', 'now')
        """
    )
    migrated.execute(
        "INSERT INTO meal_plans (id, recipeId, date, mealType, createdAt) "
        "VALUES ('m1', 'r1', '2025-01-01', 'lunch', 'now')"
    )
    migrated.execute(
        "INSERT INTO shopping_list_items (id, name, checked, mealPlanId, createdAt) "
        "VALUES ('s1', 'Leeks', 0, 'm1', 'now')"
    )

    migrated.execute("DELETE FROM recipes WHERE id = 'r1'")

    assert migrated.query("SELECT * FROM meal_plans") == []
    assert migrated.query("SELECT * FROM shopping_list_items") == []
