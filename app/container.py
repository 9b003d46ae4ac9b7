"""
Composition root.
Creates the single DatabaseConnection and hands it to every component that
needs storage.
"""

from dataclasses import dataclass
from typing import Optional

from adapters.sqlite_adapter import DatabaseConnection
from migrations import MigrationRunner
from repositories import MealPlanRepository, RecipeRepository, ShoppingListItemRepository
from services import DatabaseService, SeedService


@dataclass
class RecipeKeeper:
    connection: DatabaseConnection
    runner: MigrationRunner
    recipes: RecipeRepository
    meal_plans: MealPlanRepository
    shopping: ShoppingListItemRepository
    seeder: SeedService
    database: DatabaseService

    def close(self) -> None:
        self.connection.close()


def build_container(
    database_path: Optional[str] = None, echo: Optional[bool] = None
) -> RecipeKeeper:
    """Wire every component around one connection. Nothing is opened yet."""
    connection = DatabaseConnection(database_path, echo=echo)
    runner = MigrationRunner(connection)
    recipes = RecipeRepository(connection)
    seeder = SeedService(recipes)
    return RecipeKeeper(
        connection=connection,
        runner=runner,
        recipes=recipes,
        meal_plans=MealPlanRepository(connection),
        shopping=ShoppingListItemRepository(connection),
        seeder=seeder,
        database=DatabaseService(connection, runner, seeder),
    )
