"""
Shopping list domain mapper.
Builds, validates and converts shopping list items; also holds the small
list helpers used by the shopping screen (grouping, counts, display text).
"""

from typing import Any, Dict, Iterable, List, Mapping

from domain.enums import ValidationConstraints as C
from domain.enums import is_valid_measurement_unit
from domain.models import ShoppingListItem, ShoppingListItemWithRecipe, utc_now_iso
from domain.schemas import (
    CreateShoppingListItemInput,
    UpdateShoppingListItemInput,
    parse_input,
    patch_fields,
)

SHOPPING_ITEM_COLUMNS = {
    "id": "id",
    "name": "name",
    "quantity": "quantity",
    "unit": "unit",
    "checked": "checked",
    "recipe_id": "recipeId",
    "meal_plan_id": "mealPlanId",
    "created_at": "createdAt",
}


def _unit_value(unit: Any) -> Any:
    return getattr(unit, "value", unit)


class ShoppingListItemMapper:
    """Schema utilities for shopping list items."""

    @staticmethod
    def create(data: Any) -> ShoppingListItem:
        payload = parse_input(CreateShoppingListItemInput, data, "Shopping list item")
        return ShoppingListItem(
            id="",
            name=payload.name,
            quantity=payload.quantity,
            unit=payload.unit,
            checked=payload.checked,
            recipe_id=payload.recipe_id,
            meal_plan_id=payload.meal_plan_id,
            created_at=utc_now_iso(),
        )

    @staticmethod
    def validate(item: ShoppingListItem) -> List[str]:
        errors: List[str] = []
        name = item.name
        if not isinstance(name, str) or not name.strip():
            errors.append("Item name is required")
        elif len(name) > C.SHOPPING_ITEM_NAME_MAX_LENGTH:
            errors.append(
                f"Item name must be {C.SHOPPING_ITEM_NAME_MAX_LENGTH} characters or less"
            )
        quantity = item.quantity
        if quantity is not None and (
            isinstance(quantity, bool)
            or not isinstance(quantity, (int, float))
            or not 0 < quantity <= C.SHOPPING_ITEM_QUANTITY_MAX
        ):
            errors.append(f"Quantity must be between 0 and {C.SHOPPING_ITEM_QUANTITY_MAX}")
        if item.unit is not None and not is_valid_measurement_unit(item.unit):
            errors.append("Invalid unit")
        return errors

    @staticmethod
    def to_row(item: ShoppingListItem) -> Dict[str, Any]:
        return {
            "id": item.id,
            "name": item.name,
            "quantity": item.quantity,
            "unit": _unit_value(item.unit),
            "checked": 1 if item.checked else 0,
            "recipeId": item.recipe_id,
            "mealPlanId": item.meal_plan_id,
            "createdAt": item.created_at,
        }

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> ShoppingListItem:
        return ShoppingListItem(
            id=row["id"],
            name=row["name"],
            quantity=row.get("quantity"),
            unit=row.get("unit"),
            checked=bool(row["checked"]),
            recipe_id=row.get("recipeId"),
            meal_plan_id=row.get("mealPlanId"),
            created_at=row["createdAt"],
        )

    @staticmethod
    def from_joined_row(row: Mapping[str, Any]) -> ShoppingListItemWithRecipe:
        item = ShoppingListItemMapper.from_row(row)
        return ShoppingListItemWithRecipe(
            **item.model_dump(),
            recipe_title=row.get("recipeTitle"),
            recipe_image_uri=row.get("recipeImageUri"),
        )

    @staticmethod
    def changed_fields(data: Any) -> Dict[str, Any]:
        return patch_fields(
            parse_input(UpdateShoppingListItemInput, data, "Shopping list item")
        )

    @staticmethod
    def update(existing: ShoppingListItem, data: Any) -> ShoppingListItem:
        return existing.model_copy(
            update=ShoppingListItemMapper.changed_fields(data), deep=True
        )

    # ------------------ Helpers ------------------

    @staticmethod
    def is_from_recipe(item: ShoppingListItem) -> bool:
        return item.recipe_id is not None

    @staticmethod
    def is_manual(item: ShoppingListItem) -> bool:
        return item.recipe_id is None

    @staticmethod
    def toggle_checked(item: ShoppingListItem) -> ShoppingListItem:
        return item.model_copy(update={"checked": not item.checked})

    @staticmethod
    def format_quantity(item: ShoppingListItem) -> str:
        """Display text: "2 l Milk", "2 Milk", "Milk (l)" or "Milk"."""
        unit = _unit_value(item.unit)
        if item.quantity is not None and unit:
            return f"{item.quantity:g} {unit} {item.name}"
        if item.quantity is not None:
            return f"{item.quantity:g} {item.name}"
        if unit:
            return f"{item.name} ({unit})"
        return item.name

    @staticmethod
    def group_by_checked_status(
        items: Iterable[ShoppingListItem],
    ) -> Dict[str, List[ShoppingListItem]]:
        grouped: Dict[str, List[ShoppingListItem]] = {"checked": [], "unchecked": []}
        for item in items:
            grouped["checked" if item.checked else "unchecked"].append(item)
        return grouped

    @staticmethod
    def get_checked_count(items: Iterable[ShoppingListItem]) -> int:
        return sum(1 for item in items if item.checked)

    @staticmethod
    def get_unchecked_count(items: Iterable[ShoppingListItem]) -> int:
        return sum(1 for item in items if not item.checked)

    @staticmethod
    def are_all_checked(items: Iterable[ShoppingListItem]) -> bool:
        """False for an empty list."""
        items = list(items)
        return bool(items) and all(item.checked for item in items)
