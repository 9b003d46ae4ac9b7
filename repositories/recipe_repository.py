"""
Recipe Repository - Data access layer for recipe operations
"""

import logging
from typing import Any, Iterable, List, Optional

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import DbTables
from domain.mappers import RECIPE_COLUMNS, RecipeMapper
from domain.models import Recipe, new_id
from domain.schemas import UpdateRecipeInput, parse_input, patch_fields
from repositories.base import BaseRepository, build_update_statement, changed_columns

logger = logging.getLogger("recipe_keeper.recipes")

TABLE = DbTables.RECIPES

INSERT_RECIPE = f"""
    INSERT INTO {TABLE} (
        id, title, servings, category, ingredients, steps, imageUri,
        prepTime, cookTime, tags, createdAt, updatedAt, deletedAt
    ) VALUES (
        :id, :title, :servings, :category, :ingredients, :steps, :imageUri,
        :prepTime, :cookTime, :tags, :createdAt, :updatedAt, :deletedAt
    )
"""

# Tag membership is checked inside SQLite so LIMIT/OFFSET apply to matches only.
TAG_FILTER = (
    f"EXISTS (SELECT 1 FROM json_each({TABLE}.tags) WHERE json_each.value = :tag)"
)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class RecipeRepository(BaseRepository):
    """Repository for recipe data access. Deleting a recipe is a soft delete."""

    def create_recipe(self, data: Any) -> Recipe:
        """
        Validate and insert a new recipe.

        Args:
            data: CreateRecipeInput or a mapping with the same fields

        Returns:
            The created recipe with its new id

        Raises:
            ServiceValidationError: if any invariant fails; nothing is written
        """
        recipe = RecipeMapper.create(data).model_copy(update={"id": new_id()})
        errors = RecipeMapper.validate(recipe)
        if errors:
            raise ServiceValidationError("Recipe", errors)

        self.connection.execute(INSERT_RECIPE, RecipeMapper.to_row(recipe))
        logger.info("Created recipe %s (%s)", recipe.id, recipe.title)
        return recipe

    def get_recipe_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Get an active recipe by id; None if it does not exist or was deleted."""
        row = self.connection.query_one(
            f"SELECT * FROM {TABLE} WHERE id = :id AND deletedAt IS NULL",
            {"id": recipe_id},
        )
        return RecipeMapper.from_row(row) if row else None

    def get_all_recipes(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
        include_deleted: bool = False,
        category: Any = None,
        tag: Optional[str] = None,
    ) -> List[Recipe]:
        """
        List recipes newest first.

        Args:
            limit: Page size (defaults to the configured page size)
            offset: Rows to skip
            include_deleted: Also return soft-deleted recipes
            category: Only recipes of this DishCategory
            tag: Only recipes carrying this tag

        Returns:
            List of recipes
        """
        conditions = []
        params = self._page(limit, offset)
        if not include_deleted:
            conditions.append("deletedAt IS NULL")
        if category is not None:
            conditions.append("category = :category")
            params["category"] = getattr(category, "value", category)
        if tag is not None:
            conditions.append(TAG_FILTER)
            params["tag"] = tag

        statement = f"SELECT * FROM {TABLE}"
        if conditions:
            statement += " WHERE " + " AND ".join(conditions)
        statement += " ORDER BY createdAt DESC, rowid DESC LIMIT :limit OFFSET :offset"

        return [RecipeMapper.from_row(row) for row in self.connection.query(statement, params)]

    def update_recipe(self, data: Any) -> Recipe:
        """
        Apply a partial update to an active recipe.

        Only the supplied fields and updatedAt are written.

        Raises:
            NotFoundError: if no active recipe has the given id
            ServiceValidationError: if the patched recipe breaks an invariant
        """
        patch = parse_input(UpdateRecipeInput, data, "Recipe")
        existing = self.get_recipe_by_id(patch.id)
        if existing is None:
            raise NotFoundError(f"Recipe with id {patch.id} not found", details={"id": patch.id})

        updated = RecipeMapper.update(existing, patch)
        errors = RecipeMapper.validate(updated)
        if errors:
            raise ServiceValidationError("Recipe", errors)

        fields = set(patch_fields(patch)) | {"updated_at"}
        columns = changed_columns(RecipeMapper.to_row(updated), fields, RECIPE_COLUMNS)
        statement, params = build_update_statement(TABLE, columns, {"id": updated.id})
        self.connection.execute(statement, params)
        logger.info("Updated recipe %s (fields: %s)", updated.id, ", ".join(sorted(fields)))
        return updated

    def delete_recipe(self, recipe_id: str) -> int:
        """
        Soft delete: set deletedAt and keep the row.

        Meal plans and shopping items that reference the recipe are left in
        place; callers remove them explicitly when they want to.

        Raises:
            NotFoundError: if no active recipe has the given id
        """
        existing = self.get_recipe_by_id(recipe_id)
        if existing is None:
            raise NotFoundError(f"Recipe with id {recipe_id} not found", details={"id": recipe_id})

        deleted = RecipeMapper.soft_delete(existing)
        statement, params = build_update_statement(
            TABLE,
            {"deletedAt": deleted.deleted_at, "updatedAt": deleted.updated_at},
            {"id": recipe_id},
        )
        affected = self.connection.execute(statement, params)
        logger.info("Soft-deleted recipe %s", recipe_id)
        return affected

    def search_recipes(
        self, term: str, limit: Optional[int] = None, offset: int = 0
    ) -> List[Recipe]:
        """Active recipes whose title contains ``term``, newest first."""
        params = self._page(limit, offset)
        params["term"] = f"%{_escape_like(term)}%"
        rows = self.connection.query(
            f"""
            SELECT * FROM {TABLE}
            WHERE title LIKE :term ESCAPE '\\' AND deletedAt IS NULL
            ORDER BY createdAt DESC, rowid DESC
            LIMIT :limit OFFSET :offset
            """,
            params,
        )
        return [RecipeMapper.from_row(row) for row in rows]

    def get_recipes_by_category(
        self, category: Any, limit: Optional[int] = None, offset: int = 0
    ) -> List[Recipe]:
        return self.get_all_recipes(limit=limit, offset=offset, category=category)

    def get_recipes_by_tag(
        self, tag: str, limit: Optional[int] = None, offset: int = 0
    ) -> List[Recipe]:
        return self.get_all_recipes(limit=limit, offset=offset, tag=tag)

    def get_recipe_count(self, include_deleted: bool = False) -> int:
        statement = f"SELECT COUNT(*) AS count FROM {TABLE}"
        if not include_deleted:
            statement += " WHERE deletedAt IS NULL"
        return self._count(self.connection.query_one(statement))

    # ------------------ Batch ------------------

    def create_recipes_batch(self, inputs: Iterable[Any]) -> List[Recipe]:
        """Create every recipe or none of them."""
        items = list(inputs)
        created = self.execute_in_transaction(
            lambda repo: [repo.create_recipe(item) for item in items]
        )
        logger.info("Created %d recipes in batch", len(created))
        return created

    def delete_recipes_batch(self, recipe_ids: Iterable[str]) -> int:
        """Soft-delete every recipe or none of them (one missing id aborts the batch)."""
        ids = list(recipe_ids)
        affected = self.execute_in_transaction(
            lambda repo: sum(repo.delete_recipe(recipe_id) for recipe_id in ids)
        )
        logger.info("Soft-deleted %d recipes in batch", affected)
        return affected
