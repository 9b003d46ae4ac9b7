"""
Shopping list item entity.
"""

from typing import Optional

from domain.enums import MeasurementUnit
from domain.models.base import DomainModel


class ShoppingListItem(DomainModel):
    """Item on the shopping list; recipe_id/meal_plan_id are both None for manual items."""

    id: str = ""
    name: str
    quantity: Optional[float] = None
    unit: Optional[MeasurementUnit] = None
    checked: bool = False
    recipe_id: Optional[str] = None
    meal_plan_id: Optional[str] = None
    created_at: str


class ShoppingListItemWithRecipe(ShoppingListItem):
    recipe_title: Optional[str] = None
    recipe_image_uri: Optional[str] = None
