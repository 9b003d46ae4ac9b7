"""
Shopping List Repository - Data access layer for shopping list items
"""

import logging
from typing import Any, Iterable, List, Optional

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import DbTables
from domain.mappers import SHOPPING_ITEM_COLUMNS, ShoppingListItemMapper
from domain.models import ShoppingListItem, ShoppingListItemWithRecipe, new_id
from domain.schemas import UpdateShoppingListItemInput, parse_input, patch_fields
from repositories.base import BaseRepository, build_update_statement, changed_columns

logger = logging.getLogger("recipe_keeper.shopping")

TABLE = DbTables.SHOPPING_LIST_ITEMS

INSERT_SHOPPING_ITEM = f"""
    INSERT INTO {TABLE} (id, name, quantity, unit, checked, recipeId, mealPlanId, createdAt)
    VALUES (:id, :name, :quantity, :unit, :checked, :recipeId, :mealPlanId, :createdAt)
"""

# Unchecked items first, newest first within each group.
LIST_ORDER = "checked ASC, createdAt DESC, rowid DESC"


class ShoppingListItemRepository(BaseRepository):
    """Repository for shopping list item data access. Items are hard-deleted."""

    def create_shopping_item(self, data: Any) -> ShoppingListItem:
        """
        Validate and insert a shopping list item.

        Raises:
            ServiceValidationError: if any invariant fails; nothing is written
        """
        item = ShoppingListItemMapper.create(data).model_copy(update={"id": new_id()})
        errors = ShoppingListItemMapper.validate(item)
        if errors:
            raise ServiceValidationError("Shopping list item", errors)

        self.connection.execute(INSERT_SHOPPING_ITEM, ShoppingListItemMapper.to_row(item))
        logger.info("Created shopping item %s (%s)", item.id, item.name)
        return item

    def get_shopping_item_by_id(self, item_id: str) -> Optional[ShoppingListItem]:
        row = self.connection.query_one(
            f"SELECT * FROM {TABLE} WHERE id = :id", {"id": item_id}
        )
        return ShoppingListItemMapper.from_row(row) if row else None

    def get_all_shopping_items(
        self,
        checked_only: bool = False,
        unchecked_only: bool = False,
        recipe_only: bool = False,
        manual_only: bool = False,
        recipe_id: Optional[str] = None,
        meal_plan_id: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[ShoppingListItem]:
        """
        List shopping items, unchecked first and then newest first.

        Args:
            checked_only: Only checked items
            unchecked_only: Only unchecked items
            recipe_only: Only items generated from a recipe
            manual_only: Only items added by hand (no recipe)
            recipe_id: Only items for this recipe
            meal_plan_id: Only items for this meal plan
            limit: Page size (defaults to the configured page size)
            offset: Rows to skip

        Returns:
            List of shopping items
        """
        conditions = []
        params = self._page(limit, offset)
        if checked_only:
            conditions.append("checked = 1")
        if unchecked_only:
            conditions.append("checked = 0")
        if recipe_only:
            conditions.append("recipeId IS NOT NULL")
        if manual_only:
            conditions.append("recipeId IS NULL")
        if recipe_id is not None:
            conditions.append("recipeId = :recipe_id")
            params["recipe_id"] = recipe_id
        if meal_plan_id is not None:
            conditions.append("mealPlanId = :meal_plan_id")
            params["meal_plan_id"] = meal_plan_id

        statement = f"SELECT * FROM {TABLE}"
        if conditions:
            statement += " WHERE " + " AND ".join(conditions)
        statement += f" ORDER BY {LIST_ORDER} LIMIT :limit OFFSET :offset"

        return [
            ShoppingListItemMapper.from_row(row)
            for row in self.connection.query(statement, params)
        ]

    def get_shopping_items_with_recipe(self) -> List[ShoppingListItemWithRecipe]:
        """Every item with the title and image of its recipe (None for manual items)."""
        rows = self.connection.query(
            f"""
            SELECT sli.*, r.title AS recipeTitle, r.imageUri AS recipeImageUri
            FROM {TABLE} sli
            LEFT JOIN {DbTables.RECIPES} r ON sli.recipeId = r.id
            ORDER BY sli.checked ASC, sli.createdAt DESC, sli.rowid DESC
            """
        )
        return [ShoppingListItemMapper.from_joined_row(row) for row in rows]

    def get_shopping_items_by_recipe(self, recipe_id: str) -> List[ShoppingListItem]:
        rows = self.connection.query(
            f"SELECT * FROM {TABLE} WHERE recipeId = :recipe_id ORDER BY createdAt DESC, rowid DESC",
            {"recipe_id": recipe_id},
        )
        return [ShoppingListItemMapper.from_row(row) for row in rows]

    def get_shopping_items_by_meal_plan(self, meal_plan_id: str) -> List[ShoppingListItem]:
        rows = self.connection.query(
            f"SELECT * FROM {TABLE} WHERE mealPlanId = :meal_plan_id ORDER BY createdAt DESC, rowid DESC",
            {"meal_plan_id": meal_plan_id},
        )
        return [ShoppingListItemMapper.from_row(row) for row in rows]

    def update_checked_state(self, item_id: str, checked: bool) -> ShoppingListItem:
        """
        Set the checked flag of one item.

        Raises:
            NotFoundError: if the item does not exist
        """
        return self.update_shopping_item({"id": item_id, "checked": bool(checked)})

    def update_shopping_item(self, data: Any) -> ShoppingListItem:
        """
        Apply a partial update. An empty patch returns the stored item unchanged.

        Raises:
            NotFoundError: if the item does not exist
            ServiceValidationError: if the patched item breaks an invariant
        """
        patch = parse_input(UpdateShoppingListItemInput, data, "Shopping list item")
        existing = self.get_shopping_item_by_id(patch.id)
        if existing is None:
            raise NotFoundError(
                f"Shopping list item with id {patch.id} not found", details={"id": patch.id}
            )

        fields = set(patch_fields(patch))
        if not fields:
            return existing

        updated = ShoppingListItemMapper.update(existing, patch)
        errors = ShoppingListItemMapper.validate(updated)
        if errors:
            raise ServiceValidationError("Shopping list item", errors)

        columns = changed_columns(
            ShoppingListItemMapper.to_row(updated), fields, SHOPPING_ITEM_COLUMNS
        )
        statement, params = build_update_statement(TABLE, columns, {"id": updated.id})
        self.connection.execute(statement, params)
        logger.info(
            "Updated shopping item %s (fields: %s)", updated.id, ", ".join(sorted(fields))
        )
        return updated

    def delete_shopping_item(self, item_id: str) -> int:
        """Hard delete. An unknown id affects no rows and is not an error."""
        affected = self.connection.execute(
            f"DELETE FROM {TABLE} WHERE id = :id", {"id": item_id}
        )
        logger.info("Deleted shopping item %s (%d rows)", item_id, affected)
        return affected

    def delete_all_checked_items(self) -> int:
        affected = self.connection.execute(f"DELETE FROM {TABLE} WHERE checked = 1")
        logger.info("Deleted %d checked shopping items", affected)
        return affected

    def delete_shopping_items_by_recipe(self, recipe_id: str) -> int:
        affected = self.connection.execute(
            f"DELETE FROM {TABLE} WHERE recipeId = :recipe_id", {"recipe_id": recipe_id}
        )
        logger.info("Deleted %d shopping items for recipe %s", affected, recipe_id)
        return affected

    def delete_shopping_items_by_meal_plan(self, meal_plan_id: str) -> int:
        affected = self.connection.execute(
            f"DELETE FROM {TABLE} WHERE mealPlanId = :meal_plan_id",
            {"meal_plan_id": meal_plan_id},
        )
        logger.info("Deleted %d shopping items for meal plan %s", affected, meal_plan_id)
        return affected

    def check_all_items(self) -> int:
        return self.connection.execute(f"UPDATE {TABLE} SET checked = 1 WHERE checked = 0")

    def uncheck_all_items(self) -> int:
        return self.connection.execute(f"UPDATE {TABLE} SET checked = 0 WHERE checked = 1")

    def get_shopping_item_count(
        self, checked_only: bool = False, unchecked_only: bool = False
    ) -> int:
        statement = f"SELECT COUNT(*) AS count FROM {TABLE}"
        if checked_only:
            statement += " WHERE checked = 1"
        elif unchecked_only:
            statement += " WHERE checked = 0"
        return self._count(self.connection.query_one(statement))

    # ------------------ Batch ------------------

    def create_shopping_items_batch(self, inputs: Iterable[Any]) -> List[ShoppingListItem]:
        """Create every item or none of them."""
        items = list(inputs)
        created = self.execute_in_transaction(
            lambda repo: [repo.create_shopping_item(item) for item in items]
        )
        logger.info("Created %d shopping items in batch", len(created))
        return created

    def delete_shopping_items_batch(self, item_ids: Iterable[str]) -> int:
        ids = list(item_ids)
        affected = self.execute_in_transaction(
            lambda repo: sum(repo.delete_shopping_item(item_id) for item_id in ids)
        )
        logger.info("Deleted %d shopping items in batch", affected)
        return affected
