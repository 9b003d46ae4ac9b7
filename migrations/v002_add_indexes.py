"""Indexes for the common lookup and range queries."""

from adapters.sqlite_adapter import DatabaseConnection
from migrations.runner import Migration

INDEXES = (
    ("idx_meal_plans_date_meal_type", "meal_plans(date, mealType)"),
    ("idx_meal_plans_recipe_id", "meal_plans(recipeId)"),
    ("idx_meal_plans_date", "meal_plans(date)"),
    ("idx_shopping_list_items_checked", "shopping_list_items(checked)"),
    ("idx_shopping_list_items_recipe_id", "shopping_list_items(recipeId)"),
    ("idx_shopping_list_items_meal_plan_id", "shopping_list_items(mealPlanId)"),
    ("idx_shopping_list_items_name", "shopping_list_items(name)"),
    ("idx_recipes_deleted_at", "recipes(deletedAt)"),
    ("idx_recipes_category", "recipes(category)"),
    ("idx_recipes_title", "recipes(title)"),
    ("idx_recipes_created_at", "recipes(createdAt)"),
    ("idx_recipes_updated_at", "recipes(updatedAt)"),
    # active (not deleted) recipes, newest first
    ("idx_recipes_active", "recipes(deletedAt, createdAt)"),
)


def up(conn: DatabaseConnection) -> None:
    for name, target in INDEXES:
        conn.execute(f"CREATE INDEX IF NOT EXISTS {name} ON {target}")


def down(conn: DatabaseConnection) -> None:
    for name, _ in reversed(INDEXES):
        conn.execute(f"DROP INDEX IF EXISTS {name}")


migration = Migration(
    version=2,
    name="002_add_indexes",
    description="Add performance indexes for common query patterns",
    up=up,
    down=down,
)
