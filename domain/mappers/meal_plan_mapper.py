"""
Meal plan domain mapper.
"""

import re
from collections import defaultdict
from datetime import date as date_type
from typing import Any, Dict, Iterable, List, Mapping

from domain.enums import MealType, is_valid_meal_type
from domain.models import MealPlan, MealPlanWithRecipe, utc_now_iso
from domain.schemas import CreateMealPlanInput, UpdateMealPlanInput, parse_input, patch_fields

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MEAL_PLAN_COLUMNS = {
    "id": "id",
    "recipe_id": "recipeId",
    "date": "date",
    "meal_type": "mealType",
    "created_at": "createdAt",
}


def _meal_type_value(value: Any) -> Any:
    return getattr(value, "value", value)


class MealPlanMapper:
    """Schema utilities for meal plans."""

    @staticmethod
    def create(data: Any) -> MealPlan:
        payload = parse_input(CreateMealPlanInput, data, "Meal plan")
        return MealPlan(
            id="",
            recipe_id=payload.recipe_id,
            date=payload.date,
            meal_type=payload.meal_type,
            created_at=utc_now_iso(),
        )

    @staticmethod
    def validate(meal_plan: MealPlan) -> List[str]:
        errors: List[str] = []
        recipe_id = meal_plan.recipe_id
        if not isinstance(recipe_id, str) or not recipe_id.strip():
            errors.append("Recipe ID is required")
        if not MealPlanMapper.is_valid_date(meal_plan.date):
            errors.append("Valid date is required (YYYY-MM-DD)")
        if not MealPlanMapper.is_valid_meal_type(meal_plan.meal_type):
            errors.append("Valid meal type is required")
        return errors

    @staticmethod
    def to_row(meal_plan: MealPlan) -> Dict[str, Any]:
        return {
            "id": meal_plan.id,
            "recipeId": meal_plan.recipe_id,
            "date": meal_plan.date,
            "mealType": _meal_type_value(meal_plan.meal_type),
            "createdAt": meal_plan.created_at,
        }

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> MealPlan:
        return MealPlan(
            id=row["id"],
            recipe_id=row["recipeId"],
            date=row["date"],
            meal_type=row["mealType"],
            created_at=row["createdAt"],
        )

    @staticmethod
    def from_joined_row(row: Mapping[str, Any]) -> MealPlanWithRecipe:
        """Meal plan row extended with the recipe summary columns of a LEFT JOIN."""
        return MealPlanWithRecipe(
            id=row["id"],
            recipe_id=row["recipeId"],
            date=row["date"],
            meal_type=row["mealType"],
            created_at=row["createdAt"],
            recipe_title=row.get("recipeTitle"),
            recipe_image_uri=row.get("recipeImageUri"),
            recipe_servings=row.get("recipeServings"),
            recipe_prep_time=row.get("recipePrepTime"),
            recipe_cook_time=row.get("recipeCookTime"),
        )

    @staticmethod
    def changed_fields(data: Any) -> Dict[str, Any]:
        return patch_fields(parse_input(UpdateMealPlanInput, data, "Meal plan"))

    @staticmethod
    def update(existing: MealPlan, data: Any) -> MealPlan:
        """Apply the supplied fields only. Meal plans carry no updated_at."""
        return existing.model_copy(update=MealPlanMapper.changed_fields(data), deep=True)

    # ------------------ Helpers ------------------

    @staticmethod
    def is_valid_date(value: Any) -> bool:
        """True for a real calendar date written as YYYY-MM-DD."""
        if not isinstance(value, str) or not _DATE_PATTERN.match(value):
            return False
        try:
            date_type.fromisoformat(value)
        except ValueError:
            return False
        return True

    @staticmethod
    def is_valid_meal_type(value: Any) -> bool:
        return value is not None and is_valid_meal_type(value)

    @staticmethod
    def group_by_date(meal_plans: Iterable[MealPlan]) -> Dict[str, List[MealPlan]]:
        grouped: Dict[str, List[MealPlan]] = defaultdict(list)
        for plan in meal_plans:
            grouped[plan.date].append(plan)
        return dict(grouped)

    @staticmethod
    def group_by_meal_type(meal_plans: Iterable[MealPlan]) -> Dict[MealType, List[MealPlan]]:
        grouped: Dict[MealType, List[MealPlan]] = defaultdict(list)
        for plan in meal_plans:
            grouped[MealType(_meal_type_value(plan.meal_type))].append(plan)
        return dict(grouped)

    @staticmethod
    def is_meal_slot_available(
        meal_plans: Iterable[MealPlan], date: str, meal_type: Any
    ) -> bool:
        """True when none of ``meal_plans`` already occupies (date, meal_type)."""
        wanted = _meal_type_value(meal_type)
        return not any(
            plan.date == date and _meal_type_value(plan.meal_type) == wanted
            for plan in meal_plans
        )
