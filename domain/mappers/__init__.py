"""
Domain mappers package.
Per-entity schema utilities: build from input, validate, convert to and from
table rows, apply partial updates.
"""

from domain.mappers.recipe_mapper import RecipeMapper, RECIPE_COLUMNS
from domain.mappers.meal_plan_mapper import MealPlanMapper, MEAL_PLAN_COLUMNS
from domain.mappers.shopping_mapper import ShoppingListItemMapper, SHOPPING_ITEM_COLUMNS

__all__ = [
    "RecipeMapper",
    "RECIPE_COLUMNS",
    "MealPlanMapper",
    "MEAL_PLAN_COLUMNS",
    "ShoppingListItemMapper",
    "SHOPPING_ITEM_COLUMNS",
]
