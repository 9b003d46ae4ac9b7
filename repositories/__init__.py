"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository, build_update_statement
from repositories.recipe_repository import RecipeRepository
from repositories.meal_plan_repository import MealPlanRepository
from repositories.shopping_repository import ShoppingListItemRepository

__all__ = [
    "BaseRepository",
    "build_update_statement",
    "RecipeRepository",
    "MealPlanRepository",
    "ShoppingListItemRepository",
]
