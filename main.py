"""
RecipeKeeper storage bootstrap
Opens the database, applies migrations, seeds an empty store and reports status.
"""

import logging
import sys

from app.config import settings
from app.container import build_container
from app.exceptions import DatabaseError
from app.logging_config import configure_logging

_logger = logging.getLogger("recipe_keeper.main")


def main() -> int:
    configure_logging()
    _logger.info(
        f"Starting {settings.app_name} {settings.app_version} "
        f"in {settings.environment.value} mode"
    )

    keeper = build_container()
    try:
        status = keeper.database.initialize()
    except DatabaseError as e:
        _logger.error(f"Startup failed [{e.code}]: {e.message}")
        return 1

    try:
        _logger.info(
            "Schema version %d/%d, %d pending",
            status.current_version,
            status.latest_version,
            status.pending_count,
        )
        _logger.info(
            "Store holds %d recipes, %d meal plans, %d shopping items",
            keeper.recipes.get_recipe_count(),
            keeper.meal_plans.get_meal_plan_count(),
            keeper.shopping.get_shopping_item_count(),
        )
    finally:
        _logger.info(f"Shutting down {settings.app_name}")
        keeper.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
