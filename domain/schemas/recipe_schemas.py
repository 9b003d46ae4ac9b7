"""Input schemas for creating and patching recipes."""

from typing import List, Optional

from domain.enums import DishCategory
from domain.models.recipe import Ingredient
from domain.schemas.base import InputSchema


class CreateRecipeInput(InputSchema):
    """Everything needed for a new recipe; id and timestamps are assigned on create."""

    title: str
    servings: int
    category: DishCategory
    ingredients: List[Ingredient]
    steps: List[str]
    image_uri: Optional[str] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    tags: Optional[List[str]] = None


class UpdateRecipeInput(InputSchema):
    """Patch for an existing recipe.

    Only fields present in the payload are applied; passing ``None`` for an
    optional field clears it.
    """

    id: str
    title: Optional[str] = None
    servings: Optional[int] = None
    category: Optional[DishCategory] = None
    ingredients: Optional[List[Ingredient]] = None
    steps: Optional[List[str]] = None
    image_uri: Optional[str] = None
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    tags: Optional[List[str]] = None
