"""Initial schema: recipes, meal_plans and shopping_list_items tables."""

from adapters.sqlite_adapter import DatabaseConnection
from migrations.runner import Migration


def up(conn: DatabaseConnection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS recipes (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            servings INTEGER NOT NULL CHECK (servings >= 1 AND servings <= 50),
            category TEXT NOT NULL,
            ingredients TEXT NOT NULL,
            steps TEXT NOT NULL,
            imageUri TEXT NULL,
            prepTime INTEGER NULL CHECK (prepTime >= 0 AND prepTime <= 1440),
            cookTime INTEGER NULL CHECK (cookTime >= 0 AND cookTime <= 1440),
            tags TEXT NULL,
            createdAt TEXT NOT NULL,
            updatedAt TEXT NOT NULL,
            deletedAt TEXT NULL
        )
    """)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS meal_plans (
            id TEXT PRIMARY KEY,
            recipeId TEXT NOT NULL,
            date TEXT NOT NULL CHECK (date LIKE '____-__-__'),
            mealType TEXT NOT NULL CHECK (mealType IN ('breakfast', 'lunch', 'dinner', 'snack')),
            createdAt TEXT NOT NULL,
            FOREIGN KEY (recipeId) REFERENCES recipes(id) ON DELETE CASCADE
        )
    """)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS shopping_list_items (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL CHECK (length(name) > 0 AND length(name) <= 100),
            quantity REAL NULL CHECK (quantity IS NULL OR (quantity > 0 AND quantity <= 1000)),
            unit TEXT NULL,
            checked INTEGER NOT NULL DEFAULT 0 CHECK (checked IN (0, 1)),
            recipeId TEXT NULL,
            mealPlanId TEXT NULL,
            createdAt TEXT NOT NULL,
            FOREIGN KEY (recipeId) REFERENCES recipes(id) ON DELETE CASCADE,
            FOREIGN KEY (mealPlanId) REFERENCES meal_plans(id) ON DELETE CASCADE
        )
    """)


def down(conn: DatabaseConnection) -> None:
    # Children first because of the foreign keys
    conn.execute("DROP TABLE IF EXISTS shopping_list_items")
    conn.execute("DROP TABLE IF EXISTS meal_plans")
    conn.execute("DROP TABLE IF EXISTS recipes")


migration = Migration(
    version=1,
    name="001_initial_schema",
    description="Create recipes, meal_plans and shopping_list_items tables",
    up=up,
    down=down,
)
