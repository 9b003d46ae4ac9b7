"""
Recipe domain mapper.
Builds, validates and patches Recipe entities and converts them to and from
table rows. All functions are pure; nothing here touches the database.
"""

import json
from typing import Any, Dict, List, Mapping, Optional

from domain.enums import ValidationConstraints as C
from domain.enums import TagCategory, get_tag_category
from domain.enums import is_valid_dish_category, is_valid_measurement_unit
from domain.models import Recipe, utc_now_iso
from domain.schemas import CreateRecipeInput, UpdateRecipeInput, parse_input, patch_fields

# entity field -> column name
RECIPE_COLUMNS = {
    "id": "id",
    "title": "title",
    "servings": "servings",
    "category": "category",
    "ingredients": "ingredients",
    "steps": "steps",
    "image_uri": "imageUri",
    "prep_time": "prepTime",
    "cook_time": "cookTime",
    "tags": "tags",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
    "deleted_at": "deletedAt",
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


class RecipeMapper:
    """Schema utilities for recipes."""

    @staticmethod
    def create(data: Any) -> Recipe:
        """
        Build a new Recipe from create input.

        Fills defaults (empty tag list, None optionals) and stamps both
        timestamps. The id is left empty; the repository assigns it.

        Raises:
            ServiceValidationError: if the input cannot be parsed at all
        """
        payload = parse_input(CreateRecipeInput, data, "Recipe")
        now = utc_now_iso()
        return Recipe(
            id="",
            title=payload.title,
            servings=payload.servings,
            category=payload.category,
            ingredients=list(payload.ingredients),
            steps=list(payload.steps),
            image_uri=payload.image_uri,
            prep_time=payload.prep_time,
            cook_time=payload.cook_time,
            tags=list(payload.tags or []),
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )

    @staticmethod
    def validate(recipe: Recipe) -> List[str]:
        """
        Check every recipe invariant.

        Returns:
            List of violation messages; empty when the recipe is valid
        """
        errors: List[str] = []

        title = recipe.title
        if not isinstance(title, str) or not title.strip():
            errors.append("Title is required")
        elif len(title) > C.RECIPE_TITLE_MAX_LENGTH:
            errors.append(f"Title must be {C.RECIPE_TITLE_MAX_LENGTH} characters or less")

        servings = recipe.servings
        if not _is_int(servings) or not (
            C.RECIPE_SERVINGS_MIN <= servings <= C.RECIPE_SERVINGS_MAX
        ):
            errors.append(
                f"Servings must be between {C.RECIPE_SERVINGS_MIN} and {C.RECIPE_SERVINGS_MAX}"
            )

        if not is_valid_dish_category(recipe.category):
            errors.append("Valid category is required")

        if not recipe.ingredients:
            errors.append("At least one ingredient is required")
        else:
            for index, ingredient in enumerate(recipe.ingredients, start=1):
                errors.extend(RecipeMapper._validate_ingredient(index, ingredient))

        if not recipe.steps:
            errors.append("At least one step is required")
        else:
            for index, step in enumerate(recipe.steps, start=1):
                if not isinstance(step, str) or not step.strip():
                    errors.append(f"Step {index}: cannot be empty")
                elif len(step) > C.INSTRUCTION_STEP_MAX_LENGTH:
                    errors.append(
                        f"Step {index}: must be {C.INSTRUCTION_STEP_MAX_LENGTH} characters or less"
                    )

        if recipe.prep_time is not None and not (
            _is_int(recipe.prep_time) and 0 <= recipe.prep_time <= C.RECIPE_PREP_TIME_MAX
        ):
            errors.append(f"Prep time must be between 0 and {C.RECIPE_PREP_TIME_MAX} minutes")

        if recipe.cook_time is not None and not (
            _is_int(recipe.cook_time) and 0 <= recipe.cook_time <= C.RECIPE_COOK_TIME_MAX
        ):
            errors.append(f"Cook time must be between 0 and {C.RECIPE_COOK_TIME_MAX} minutes")

        tags = recipe.tags or []
        if len(tags) > C.MAX_TAGS_PER_RECIPE:
            errors.append(f"Maximum {C.MAX_TAGS_PER_RECIPE} tags allowed")
        for tag in tags:
            if not isinstance(tag, str) or not tag.strip():
                errors.append("Tags cannot be empty")
            elif len(tag) > C.TAG_NAME_MAX_LENGTH:
                errors.append(f"Tag '{tag}' must be {C.TAG_NAME_MAX_LENGTH} characters or less")

        return errors

    @staticmethod
    def _validate_ingredient(index: int, ingredient) -> List[str]:
        errors = []
        name = ingredient.name
        if not isinstance(name, str) or not name.strip():
            errors.append(f"Ingredient {index}: name is required")
        elif len(name) > C.INGREDIENT_NAME_MAX_LENGTH:
            errors.append(
                f"Ingredient {index}: name must be {C.INGREDIENT_NAME_MAX_LENGTH} characters or less"
            )
        quantity = ingredient.quantity
        if quantity is not None and not (
            _is_number(quantity) and 0 < quantity <= C.INGREDIENT_QUANTITY_MAX
        ):
            errors.append(
                f"Ingredient {index}: quantity must be between 0 and {C.INGREDIENT_QUANTITY_MAX}"
            )
        if ingredient.unit is not None and not is_valid_measurement_unit(ingredient.unit):
            errors.append(f"Ingredient {index}: invalid unit")
        return errors

    @staticmethod
    def to_row(recipe: Recipe) -> Dict[str, Any]:
        """Flatten a recipe into column values; list fields become JSON text."""
        return {
            "id": recipe.id,
            "title": recipe.title,
            "servings": recipe.servings,
            "category": _enum_value(recipe.category),
            "ingredients": json.dumps(
                [ingredient.model_dump(mode="json") for ingredient in recipe.ingredients],
                ensure_ascii=False,
            ),
            "steps": json.dumps(list(recipe.steps), ensure_ascii=False),
            "imageUri": recipe.image_uri,
            "prepTime": recipe.prep_time,
            "cookTime": recipe.cook_time,
            "tags": json.dumps(list(recipe.tags or []), ensure_ascii=False),
            "createdAt": recipe.created_at,
            "updatedAt": recipe.updated_at,
            "deletedAt": recipe.deleted_at,
        }

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> Recipe:
        """Inverse of to_row."""
        tags = row.get("tags")
        return Recipe(
            id=row["id"],
            title=row["title"],
            servings=row["servings"],
            category=row["category"],
            ingredients=json.loads(row["ingredients"]),
            steps=json.loads(row["steps"]),
            image_uri=row.get("imageUri"),
            prep_time=row.get("prepTime"),
            cook_time=row.get("cookTime"),
            tags=json.loads(tags) if tags else [],
            created_at=row["createdAt"],
            updated_at=row["updatedAt"],
            deleted_at=row.get("deletedAt"),
        )

    @staticmethod
    def changed_fields(data: Any) -> Dict[str, Any]:
        """Fields supplied by an update payload, keyed by entity field name."""
        return patch_fields(parse_input(UpdateRecipeInput, data, "Recipe"))

    @staticmethod
    def update(existing: Recipe, data: Any) -> Recipe:
        """Apply only the supplied fields and refresh updated_at."""
        changes = RecipeMapper.changed_fields(data)
        if "tags" in changes and changes["tags"] is None:
            changes["tags"] = []
        changes["updated_at"] = utc_now_iso()
        return existing.model_copy(update=changes, deep=True)

    @staticmethod
    def soft_delete(recipe: Recipe) -> Recipe:
        """Copy of the recipe marked deleted now."""
        now = utc_now_iso()
        return recipe.model_copy(update={"deleted_at": now, "updated_at": now}, deep=True)

    @staticmethod
    def is_deleted(recipe: Recipe) -> bool:
        return recipe.deleted_at is not None

    @staticmethod
    def get_total_time(recipe: Recipe) -> Optional[int]:
        """Prep plus cook minutes, or None when neither is known."""
        if recipe.prep_time is None and recipe.cook_time is None:
            return None
        return (recipe.prep_time or 0) + (recipe.cook_time or 0)

    @staticmethod
    def group_tags_by_category(recipe: Recipe) -> Dict[str, List[str]]:
        """
        Split a recipe's tags into predefined categories.

        Keys are TagCategory values plus "custom" for tags outside the
        predefined lists; empty groups are omitted.
        """
        groups: Dict[str, List[str]] = {}
        for tag in recipe.tags or []:
            category = get_tag_category(tag)
            key = category.value if isinstance(category, TagCategory) else "custom"
            groups.setdefault(key, []).append(tag)
        return groups
