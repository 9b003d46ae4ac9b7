"""
Domain schemas package - Pydantic input models for the repositories.
"""

from domain.schemas.base import InputSchema, parse_input, patch_fields, format_errors
from domain.schemas.recipe_schemas import CreateRecipeInput, UpdateRecipeInput
from domain.schemas.plan_schemas import CreateMealPlanInput, UpdateMealPlanInput
from domain.schemas.shopping_schemas import (
    CreateShoppingListItemInput,
    UpdateShoppingListItemInput,
)

__all__ = [
    # Helpers
    "InputSchema",
    "parse_input",
    "patch_fields",
    "format_errors",
    # Recipe schemas
    "CreateRecipeInput",
    "UpdateRecipeInput",
    # Meal plan schemas
    "CreateMealPlanInput",
    "UpdateMealPlanInput",
    # Shopping schemas
    "CreateShoppingListItemInput",
    "UpdateShoppingListItemInput",
]
