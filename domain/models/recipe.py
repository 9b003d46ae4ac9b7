"""
Recipe entity and its embedded ingredient.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from domain.enums import DishCategory, MeasurementUnit
from domain.models.base import DomainModel


class Ingredient(BaseModel):
    """Embedded ingredient in a recipe (stored inside the ingredients JSON column)."""

    name: str
    quantity: Optional[float] = None
    unit: Optional[MeasurementUnit] = None


class Recipe(DomainModel):
    """Recipe with ordered ingredients and steps; soft-deleted via deleted_at."""

    id: str = ""
    title: str
    servings: int
    category: DishCategory
    ingredients: List[Ingredient]
    steps: List[str]
    image_uri: Optional[str] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    created_at: str
    updated_at: str
    deleted_at: Optional[str] = None
