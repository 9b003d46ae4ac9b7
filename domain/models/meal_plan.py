"""
Meal plan entity: one recipe scheduled for one meal slot on one day.
"""

from typing import Optional

from domain.enums import MealType
from domain.models.base import DomainModel


class MealPlan(DomainModel):
    """Scheduled meal. Hard-deleted; no updated_at."""

    id: str = ""
    recipe_id: str
    date: str  # YYYY-MM-DD
    meal_type: MealType
    created_at: str


class MealPlanWithRecipe(MealPlan):
    """Meal plan joined with a summary of its recipe (None when the recipe row is gone)."""

    recipe_title: Optional[str] = None
    recipe_image_uri: Optional[str] = None
    recipe_servings: Optional[int] = None
    recipe_prep_time: Optional[int] = None
    recipe_cook_time: Optional[int] = None
