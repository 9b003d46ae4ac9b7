"""Input schemas for shopping list items"""

from typing import Optional

from pydantic import field_validator

from domain.enums import MeasurementUnit
from domain.schemas.base import InputSchema


class CreateShoppingListItemInput(InputSchema):
    """New item; leave recipe_id and meal_plan_id empty for a manually added item."""

    name: str
    quantity: Optional[float] = None
    unit: Optional[MeasurementUnit] = None
    checked: bool = False
    recipe_id: Optional[str] = None
    meal_plan_id: Optional[str] = None


class UpdateShoppingListItemInput(InputSchema):
    """Patch for an item. Recipe and meal plan links are fixed at creation."""

    id: str
    name: Optional[str] = None
    quantity: Optional[float] = None
    unit: Optional[MeasurementUnit] = None
    checked: Optional[bool] = None

    @field_validator("name", "checked")
    @classmethod
    def reject_null(cls, v):
        """Omit the field to keep it; these columns cannot be cleared"""
        if v is None:
            raise ValueError("cannot be null")
        return v
