"""
Domain models package - entities persisted by the repositories.
"""

from domain.models.base import DomainModel, new_id, utc_now_iso
from domain.models.recipe import Ingredient, Recipe
from domain.models.meal_plan import MealPlan, MealPlanWithRecipe
from domain.models.shopping_list import ShoppingListItem, ShoppingListItemWithRecipe

__all__ = [
    # Helpers
    "DomainModel",
    "new_id",
    "utc_now_iso",
    # Recipe models
    "Ingredient",
    "Recipe",
    # Meal plan models
    "MealPlan",
    "MealPlanWithRecipe",
    # Shopping models
    "ShoppingListItem",
    "ShoppingListItemWithRecipe",
]
