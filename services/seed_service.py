"""Sample data seeding"""

import logging
from typing import Any, Iterable, Optional

from app.exceptions import DatabaseError, SeedError
from data.sample_recipes import SAMPLE_RECIPES
from repositories.recipe_repository import RecipeRepository

logger = logging.getLogger("recipe_keeper.seed")


class SeedService:
    """Populates an empty store with sample recipes."""

    def __init__(self, recipes: RecipeRepository, samples: Optional[Iterable[Any]] = None):
        self.recipes = recipes
        self.samples = list(SAMPLE_RECIPES if samples is None else samples)

    def needs_seeding(self) -> bool:
        """True when there are no active recipes. A failed count check answers False."""
        try:
            return self.recipes.get_recipe_count() == 0
        except DatabaseError as e:
            logger.error(f"Could not check whether seeding is needed: {e}")
            return False

    def seed_database(self) -> int:
        """
        Create every sample recipe, skipping the run if recipes already exist.

        Each sample is written on its own so one bad sample does not block
        the rest.

        Returns:
            Number of recipes created

        Raises:
            SeedError: if one or more samples failed (code SEED_PARTIAL_FAILURE)
        """
        existing = self.recipes.get_recipe_count()
        if existing > 0:
            logger.info(f"Database already has {existing} recipes. Skipping seed.")
            return 0

        logger.info("Database is empty. Starting seed process...")
        success_count = 0
        failures = []
        for sample in self.samples:
            title = sample.get("title") if isinstance(sample, dict) else getattr(sample, "title", None)
            try:
                self.recipes.create_recipe(sample)
                success_count += 1
                logger.debug(f"Seeded recipe: {title} ({success_count}/{len(self.samples)})")
            except DatabaseError as e:
                failures.append(title)
                logger.error(f"Failed to seed recipe {title}: {e}")

        logger.info(
            f"Seed summary: total={len(self.samples)}, "
            f"succeeded={success_count}, failed={len(failures)}"
        )
        if failures:
            raise SeedError(
                f"Seeding completed with {len(failures)} errors",
                details={"failed": failures, "succeeded": success_count},
                code="SEED_PARTIAL_FAILURE",
            )
        return success_count

    def clear_database(self) -> int:
        """Soft-delete every active recipe; returns how many were deleted."""
        ids = []
        offset = 0
        while True:
            page = self.recipes.get_all_recipes(limit=100, offset=offset)
            if not page:
                break
            ids.extend(recipe.id for recipe in page)
            offset += len(page)

        deleted = self.recipes.delete_recipes_batch(ids) if ids else 0
        logger.info(f"Cleared {deleted} recipes")
        return deleted

    def reset_database(self) -> int:
        """Clear, then seed again."""
        self.clear_database()
        return self.seed_database()
