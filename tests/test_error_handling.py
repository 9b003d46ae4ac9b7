"""
Error handling and edge case tests.

This test suite covers the error taxonomy and how failures surface:
- Exception shape (message, code, details, to_dict)
- Malformed input converted to ServiceValidationError
- Storage engine failures wrapped, never swallowed
- Repositories used before the connection is initialized
- Update statement builder guards
"""

import pytest

from adapters.sqlite_adapter import DatabaseConnection
from app.exceptions import (
    DatabaseError,
    MigrationError,
    NotFoundError,
    NotInitializedError,
    QueryFailedError,
    ServiceValidationError,
    WriteFailedError,
)
from domain.schemas import CreateRecipeInput, parse_input
from repositories import RecipeRepository, ShoppingListItemRepository, build_update_statement

from test_fixtures import db_connection, db_path, make_recipe_input, migrated, recipe_repo


# =============================================================================
# EXCEPTION SHAPE
# =============================================================================


def test_validation_error_joins_messages():
    error = ServiceValidationError("Recipe", ["Title is required", "At least one step is required"])

    assert error.message == "Recipe validation failed: Title is required, At least one step is required"
    assert str(error) == error.message
    assert error.to_dict() == {
        "message": error.message,
        "code": "VALIDATION_ERROR",
        "details": {"errors": ["Title is required", "At least one step is required"]},
    }


@pytest.mark.parametrize(
    "error, code",
    [
        (NotInitializedError(), "NOT_INITIALIZED"),
        (NotFoundError("gone"), "NOT_FOUND"),
        (QueryFailedError("bad", "SELECT 1", {}), "QUERY_FAILED"),
        (WriteFailedError("bad", "DELETE FROM x", {"id": 1}), "WRITE_FAILED"),
        (MigrationError("boom", version=3, migration_name="003_x"), "MIGRATION_FAILED"),
        (DatabaseError("custom", code="INIT_FAILED"), "INIT_FAILED"),
    ],
)
def test_error_codes(error, code):
    assert isinstance(error, DatabaseError)
    assert error.code == code


def test_migration_error_details():
    error = MigrationError("boom", version=3, migration_name="003_x", code="ROLLBACK_FAILED")

    assert error.details == {"version": 3, "name": "003_x"}
    assert error.code == "ROLLBACK_FAILED"


# =============================================================================
# INPUT PARSING
# =============================================================================


def test_parse_input_reports_each_bad_field():
    with pytest.raises(ServiceValidationError) as exc_info:
        parse_input(CreateRecipeInput, {"title": "Soup"}, "Recipe")

    missing = {message.split(":")[0] for message in exc_info.value.errors}
    assert missing == {"servings", "category", "ingredients", "steps"}


def test_parse_input_passes_model_instances_through():
    payload = CreateRecipeInput.model_validate(make_recipe_input("tea"))

    assert parse_input(CreateRecipeInput, payload, "Recipe") is payload


def test_bad_ingredient_unit_is_rejected(recipe_repo):
    with pytest.raises(ServiceValidationError) as exc_info:
        recipe_repo.create_recipe(
            make_recipe_input("tea", ingredients=[{"name": "water", "unit": "bucket"}])
        )

    assert any(message.startswith("ingredients.0.unit") for message in exc_info.value.errors)


def test_update_without_id_is_rejected(recipe_repo):
    with pytest.raises(ServiceValidationError):
        recipe_repo.update_recipe({"title": "No id"})


# =============================================================================
# STORAGE FAILURES
# =============================================================================


def test_repository_before_initialize(db_path):
    repo = RecipeRepository(DatabaseConnection(db_path))

    with pytest.raises(NotInitializedError):
        repo.get_recipe_count()
    with pytest.raises(NotInitializedError):
        repo.create_recipe(make_recipe_input("tea"))


def test_repository_on_unmigrated_database(db_connection):
    """Missing tables surface as wrapped query/write failures."""
    recipes = RecipeRepository(db_connection)
    shopping = ShoppingListItemRepository(db_connection)

    with pytest.raises(QueryFailedError) as exc_info:
        recipes.get_all_recipes()
    assert "FROM recipes" in exc_info.value.statement

    with pytest.raises(WriteFailedError) as exc_info:
        shopping.create_shopping_item({"name": "Milk"})
    assert exc_info.value.params["name"] == "Milk"
    assert exc_info.value.__cause__ is not None


def test_duplicate_id_write_fails(migrated, recipe_repo):
    created = recipe_repo.create_recipe(make_recipe_input("tea"))
    row = migrated.query_one("SELECT * FROM recipes WHERE id = :id", {"id": created.id})
    columns = ", ".join(row)
    placeholders = ", ".join(f":{name}" for name in row)

    with pytest.raises(WriteFailedError):
        migrated.execute(f"INSERT INTO recipes ({columns}) VALUES ({placeholders})", row)


# =============================================================================
# UPDATE STATEMENT BUILDER
# =============================================================================


def test_build_update_statement_binds_values():
    statement, params = build_update_statement(
        "recipes", {"title": "X", "updatedAt": "now"}, {"id": "r-1"}
    )

    assert statement == (
        "UPDATE recipes SET title = :set_title, updatedAt = :set_updatedAt "
        "WHERE id = :where_id"
    )
    assert params == {"set_title": "X", "set_updatedAt": "now", "where_id": "r-1"}


@pytest.mark.parametrize("columns, where", [({}, {"id": "r-1"}), ({"title": "X"}, {})])
def test_build_update_statement_requires_set_and_where(columns, where):
    with pytest.raises(ValueError):
        build_update_statement("recipes", columns, where)
