from __future__ import annotations

from typing import Optional

from domain.enums import MealType
from domain.schemas.base import InputSchema


class CreateMealPlanInput(InputSchema):
    recipe_id: str
    date: str
    meal_type: MealType


class UpdateMealPlanInput(InputSchema):
    id: str
    recipe_id: Optional[str] = None
    date: Optional[str] = None
    meal_type: Optional[MealType] = None
