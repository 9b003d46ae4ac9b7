"""
Meal Plan Repository - Data access layer for meal plan operations
"""

import logging
from typing import Any, Iterable, List, Optional

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import DbTables
from domain.mappers import MEAL_PLAN_COLUMNS, MealPlanMapper
from domain.models import MealPlan, MealPlanWithRecipe, new_id
from domain.schemas import UpdateMealPlanInput, parse_input, patch_fields
from repositories.base import BaseRepository, build_update_statement, changed_columns

logger = logging.getLogger("recipe_keeper.meal_plans")

TABLE = DbTables.MEAL_PLANS

INSERT_MEAL_PLAN = f"""
    INSERT INTO {TABLE} (id, recipeId, date, mealType, createdAt)
    VALUES (:id, :recipeId, :date, :mealType, :createdAt)
"""

SELECT_WITH_RECIPE = f"""
    SELECT mp.*,
           r.title AS recipeTitle,
           r.imageUri AS recipeImageUri,
           r.servings AS recipeServings,
           r.prepTime AS recipePrepTime,
           r.cookTime AS recipeCookTime
    FROM {TABLE} mp
    LEFT JOIN {DbTables.RECIPES} r ON mp.recipeId = r.id
"""


def _value(value: Any) -> Any:
    return getattr(value, "value", value)


class MealPlanRepository(BaseRepository):
    """Repository for meal plan data access. Meal plans are hard-deleted."""

    def create_meal_plan(self, data: Any) -> MealPlan:
        """
        Validate and insert a meal plan.

        The (date, meal type) slot is not checked here; use
        is_meal_slot_available() first when one meal per slot is wanted.

        Raises:
            ServiceValidationError: if any invariant fails; nothing is written
        """
        meal_plan = MealPlanMapper.create(data).model_copy(update={"id": new_id()})
        errors = MealPlanMapper.validate(meal_plan)
        if errors:
            raise ServiceValidationError("Meal plan", errors)

        self.connection.execute(INSERT_MEAL_PLAN, MealPlanMapper.to_row(meal_plan))
        logger.info(
            "Created meal plan %s (%s %s)",
            meal_plan.id,
            meal_plan.date,
            _value(meal_plan.meal_type),
        )
        return meal_plan

    def get_meal_plan_by_id(self, meal_plan_id: str) -> Optional[MealPlan]:
        row = self.connection.query_one(
            f"SELECT * FROM {TABLE} WHERE id = :id", {"id": meal_plan_id}
        )
        return MealPlanMapper.from_row(row) if row else None

    def get_all_meal_plans(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        recipe_id: Optional[str] = None,
        meal_type: Any = None,
    ) -> List[MealPlan]:
        """
        List meal plans newest first.

        Args:
            limit: Page size (defaults to the configured page size)
            offset: Rows to skip
            start_date: Inclusive lower bound (YYYY-MM-DD)
            end_date: Inclusive upper bound (YYYY-MM-DD)
            recipe_id: Only plans for this recipe
            meal_type: Only plans in this MealType slot

        Returns:
            List of meal plans
        """
        conditions = []
        params = self._page(limit, offset)
        if start_date is not None:
            conditions.append("date >= :start_date")
            params["start_date"] = start_date
        if end_date is not None:
            conditions.append("date <= :end_date")
            params["end_date"] = end_date
        if recipe_id is not None:
            conditions.append("recipeId = :recipe_id")
            params["recipe_id"] = recipe_id
        if meal_type is not None:
            conditions.append("mealType = :meal_type")
            params["meal_type"] = _value(meal_type)

        statement = f"SELECT * FROM {TABLE}"
        if conditions:
            statement += " WHERE " + " AND ".join(conditions)
        statement += " ORDER BY createdAt DESC, rowid DESC LIMIT :limit OFFSET :offset"

        return [MealPlanMapper.from_row(row) for row in self.connection.query(statement, params)]

    def get_meal_plans_by_date(self, date: str) -> List[MealPlan]:
        """All plans for one day, ordered by meal type."""
        rows = self.connection.query(
            f"SELECT * FROM {TABLE} WHERE date = :date ORDER BY mealType",
            {"date": date},
        )
        return [MealPlanMapper.from_row(row) for row in rows]

    def get_meal_plans_by_date_range(self, start_date: str, end_date: str) -> List[MealPlan]:
        """Plans between two dates inclusive, ordered by date then meal type."""
        rows = self.connection.query(
            f"""
            SELECT * FROM {TABLE}
            WHERE date >= :start_date AND date <= :end_date
            ORDER BY date, mealType
            """,
            {"start_date": start_date, "end_date": end_date},
        )
        return [MealPlanMapper.from_row(row) for row in rows]

    def get_meal_plans_by_recipe(self, recipe_id: str) -> List[MealPlan]:
        rows = self.connection.query(
            f"SELECT * FROM {TABLE} WHERE recipeId = :recipe_id ORDER BY date DESC",
            {"recipe_id": recipe_id},
        )
        return [MealPlanMapper.from_row(row) for row in rows]

    def get_meal_plans_with_recipe(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[MealPlanWithRecipe]:
        """
        Meal plans with a summary of their recipe, ordered by date then meal type.

        The range applies only when both bounds are given. Recipe fields are
        None when the recipe row no longer exists.
        """
        statement = SELECT_WITH_RECIPE
        params = {}
        if start_date is not None and end_date is not None:
            statement += " WHERE mp.date >= :start_date AND mp.date <= :end_date"
            params = {"start_date": start_date, "end_date": end_date}
        statement += " ORDER BY mp.date, mp.mealType"
        return [
            MealPlanMapper.from_joined_row(row)
            for row in self.connection.query(statement, params)
        ]

    def update_meal_plan(self, data: Any) -> MealPlan:
        """
        Apply a partial update. An empty patch returns the stored plan unchanged.

        Raises:
            NotFoundError: if the meal plan does not exist
            ServiceValidationError: if the patched plan breaks an invariant
        """
        patch = parse_input(UpdateMealPlanInput, data, "Meal plan")
        existing = self.get_meal_plan_by_id(patch.id)
        if existing is None:
            raise NotFoundError(
                f"Meal plan with id {patch.id} not found", details={"id": patch.id}
            )

        fields = set(patch_fields(patch))
        if not fields:
            return existing

        updated = MealPlanMapper.update(existing, patch)
        errors = MealPlanMapper.validate(updated)
        if errors:
            raise ServiceValidationError("Meal plan", errors)

        columns = changed_columns(MealPlanMapper.to_row(updated), fields, MEAL_PLAN_COLUMNS)
        statement, params = build_update_statement(TABLE, columns, {"id": updated.id})
        self.connection.execute(statement, params)
        logger.info("Updated meal plan %s (fields: %s)", updated.id, ", ".join(sorted(fields)))
        return updated

    def delete_meal_plan(self, meal_plan_id: str) -> int:
        """Hard delete. An unknown id affects no rows and is not an error."""
        affected = self.connection.execute(
            f"DELETE FROM {TABLE} WHERE id = :id", {"id": meal_plan_id}
        )
        logger.info("Deleted meal plan %s (%d rows)", meal_plan_id, affected)
        return affected

    def delete_meal_plans_by_date(self, date: str) -> int:
        affected = self.connection.execute(
            f"DELETE FROM {TABLE} WHERE date = :date", {"date": date}
        )
        logger.info("Deleted %d meal plans on %s", affected, date)
        return affected

    def delete_meal_plans_by_recipe(self, recipe_id: str) -> int:
        affected = self.connection.execute(
            f"DELETE FROM {TABLE} WHERE recipeId = :recipe_id", {"recipe_id": recipe_id}
        )
        logger.info("Deleted %d meal plans for recipe %s", affected, recipe_id)
        return affected

    def get_meal_plan_count(self) -> int:
        return self._count(self.connection.query_one(f"SELECT COUNT(*) AS count FROM {TABLE}"))

    def is_meal_slot_available(self, date: str, meal_type: Any) -> bool:
        """True when no plan exists yet for (date, meal_type)."""
        row = self.connection.query_one(
            f"""
            SELECT COUNT(*) AS count FROM {TABLE}
            WHERE date = :date AND mealType = :meal_type
            """,
            {"date": date, "meal_type": _value(meal_type)},
        )
        return self._count(row) == 0

    # ------------------ Batch ------------------

    def create_meal_plans_batch(self, inputs: Iterable[Any]) -> List[MealPlan]:
        """Create every meal plan or none of them."""
        items = list(inputs)
        created = self.execute_in_transaction(
            lambda repo: [repo.create_meal_plan(item) for item in items]
        )
        logger.info("Created %d meal plans in batch", len(created))
        return created

    def delete_meal_plans_batch(self, meal_plan_ids: Iterable[str]) -> int:
        ids = list(meal_plan_ids)
        affected = self.execute_in_transaction(
            lambda repo: sum(repo.delete_meal_plan(meal_plan_id) for meal_plan_id in ids)
        )
        logger.info("Deleted %d meal plans in batch", affected)
        return affected
