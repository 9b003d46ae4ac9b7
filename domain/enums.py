"""
Domain enums for Recipe Keeper.
Contains all enumeration types and validation limits used across the domain models.
"""

import enum


class DishCategory(str, enum.Enum):
    """Dish categories for recipe classification"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    DESSERT = "dessert"
    APPETIZER = "appetizer"
    BEVERAGE = "beverage"
    OTHER = "other"


class MeasurementUnit(str, enum.Enum):
    """Measurement units for ingredients and shopping items"""

    # Volume
    TSP = "tsp"
    TBSP = "tbsp"
    CUP = "cup"
    FL_OZ = "fl oz"
    ML = "ml"
    LITER = "l"

    # Weight
    OZ = "oz"
    LB = "lb"
    GRAM = "g"
    KG = "kg"

    # Count
    UNIT = "unit"
    PIECE = "piece"
    SLICE = "slice"
    CLOVE = "clove"
    HEAD = "head"
    BUNCH = "bunch"
    CAN = "can"
    BOTTLE = "bottle"
    PACKAGE = "package"
    BAG = "bag"
    BOX = "box"


class MealType(str, enum.Enum):
    """Meal slots for meal planning"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class TagCategory(str, enum.Enum):
    """Tag categories for recipe organization"""

    CUISINE = "cuisine"
    DIETARY = "dietary"
    MEAL_TYPE = "meal_type"
    COOKING_METHOD = "cooking_method"


CUISINE_TAGS = (
    "Italian", "Mexican", "Asian", "Chinese", "Japanese", "Thai",
    "Indian", "Mediterranean", "French", "American", "Other",
)

DIETARY_TAGS = (
    "Vegetarian", "Vegan", "Gluten-Free", "Dairy-Free", "Nut-Free",
    "Low-Carb", "Keto", "Paleo", "Other",
)

MEAL_TYPE_TAGS = (
    "Breakfast", "Lunch", "Dinner", "Snack", "Dessert", "Appetizer", "Beverage", "Other",
)

COOKING_METHOD_TAGS = (
    "Baking", "Grilling", "Roasting", "Sautéing", "Slow Cooker",
    "Instant Pot", "Stovetop", "No-Cook", "Other",
)

PREDEFINED_TAGS = {
    TagCategory.CUISINE: CUISINE_TAGS,
    TagCategory.DIETARY: DIETARY_TAGS,
    TagCategory.MEAL_TYPE: MEAL_TYPE_TAGS,
    TagCategory.COOKING_METHOD: COOKING_METHOD_TAGS,
}


class DbTables:
    """Table names"""

    RECIPES = "recipes"
    MEAL_PLANS = "meal_plans"
    SHOPPING_LIST_ITEMS = "shopping_list_items"


class ValidationConstraints:
    """Field limits shared by validation and the table CHECK constraints"""

    RECIPE_TITLE_MAX_LENGTH = 200
    RECIPE_SERVINGS_MIN = 1
    RECIPE_SERVINGS_MAX = 50
    RECIPE_PREP_TIME_MAX = 1440  # minutes
    RECIPE_COOK_TIME_MAX = 1440  # minutes
    INGREDIENT_NAME_MAX_LENGTH = 100
    INGREDIENT_QUANTITY_MAX = 1000
    INSTRUCTION_STEP_MAX_LENGTH = 1000
    TAG_NAME_MAX_LENGTH = 30
    MAX_TAGS_PER_RECIPE = 20
    SHOPPING_ITEM_NAME_MAX_LENGTH = 100
    SHOPPING_ITEM_QUANTITY_MAX = 1000


def _value_of(value) -> str:
    return value.value if isinstance(value, enum.Enum) else value


def is_valid_dish_category(value) -> bool:
    return _value_of(value) in DishCategory._value2member_map_


def is_valid_measurement_unit(value) -> bool:
    return _value_of(value) in MeasurementUnit._value2member_map_


def is_valid_meal_type(value) -> bool:
    return _value_of(value) in MealType._value2member_map_


def get_tag_category(tag: str):
    """Category of a predefined tag, matched case-insensitively; None for custom tags."""
    wanted = tag.strip().lower()
    for category, tags in PREDEFINED_TAGS.items():
        if wanted != "other" and wanted in (t.lower() for t in tags):
            return category
    return None
