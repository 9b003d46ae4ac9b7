"""
Sample recipes written into an empty store on first start.
8 recipes: 2 breakfast, 2 lunch, 3 dinner, 1 dessert.
"""

from domain.enums import DishCategory, MeasurementUnit as U


def _ingredient(name, quantity=None, unit=None):
    return {"name": name, "quantity": quantity, "unit": unit}


SAMPLE_RECIPES = [
    {
        "title": "Fluffy Buttermilk Pancakes",
        "servings": 4,
        "category": DishCategory.BREAKFAST,
        "ingredients": [
            _ingredient("all-purpose flour", 2, U.CUP),
            _ingredient("sugar", 2, U.TBSP),
            _ingredient("baking powder", 2, U.TSP),
            _ingredient("baking soda", 1, U.TSP),
            _ingredient("salt", 0.5, U.TSP),
            _ingredient("buttermilk", 2, U.CUP),
            _ingredient("eggs", 2, U.UNIT),
            _ingredient("butter", 4, U.TBSP),
            _ingredient("vanilla extract", 1, U.TSP),
        ],
        "steps": [
            "In a large bowl, whisk together flour, sugar, baking powder, baking soda, and salt.",
            "In another bowl, whisk buttermilk, eggs, melted butter, and vanilla extract.",
            "Pour wet ingredients into dry ingredients and stir until just combined.",
            "Heat a griddle over medium heat and lightly grease.",
            "Pour 1/4 cup batter for each pancake and cook until bubbles form, 2-3 minutes.",
            "Flip and cook until golden brown, 1-2 minutes more.",
            "Serve warm with maple syrup and fresh berries.",
        ],
        "prep_time": 10,
        "cook_time": 20,
        "tags": ["quick", "family-friendly", "American"],
    },
    {
        "title": "Hearty Cinnamon Oatmeal",
        "servings": 2,
        "category": DishCategory.BREAKFAST,
        "ingredients": [
            _ingredient("rolled oats", 1, U.CUP),
            _ingredient("milk", 2, U.CUP),
            _ingredient("cinnamon", 1, U.TSP),
            _ingredient("honey", 2, U.TBSP),
            _ingredient("banana", 1, U.UNIT),
            _ingredient("walnuts", 0.25, U.CUP),
            _ingredient("salt", 0.25, U.TSP),
        ],
        "steps": [
            "In a medium saucepan, bring milk and salt to a gentle boil.",
            "Stir in rolled oats and reduce heat to medium-low.",
            "Cook, stirring occasionally, for 5-7 minutes until creamy.",
            "Stir in cinnamon and honey.",
            "Top with sliced banana and chopped walnuts.",
        ],
        "prep_time": 5,
        "cook_time": 10,
        "tags": ["quick", "Vegetarian", "healthy"],
    },
    {
        "title": "Classic Chicken Caesar Salad",
        "servings": 4,
        "category": DishCategory.LUNCH,
        "ingredients": [
            _ingredient("romaine lettuce", 2, U.HEAD),
            _ingredient("chicken breast", 500, U.GRAM),
            _ingredient("parmesan cheese", 0.5, U.CUP),
            _ingredient("croutons", 2, U.CUP),
            _ingredient("caesar dressing", 0.5, U.CUP),
            _ingredient("olive oil", 2, U.TBSP),
            _ingredient("lemon", 1, U.UNIT),
            _ingredient("black pepper"),
        ],
        "steps": [
            "Season chicken breasts with salt, pepper, and olive oil.",
            "Grill chicken over medium-high heat for 6-7 minutes per side.",
            "Let chicken rest for 5 minutes, then slice.",
            "Wash and chop romaine lettuce into bite-sized pieces.",
            "Toss lettuce with dressing, parmesan, and croutons.",
            "Top with sliced chicken and a squeeze of lemon.",
        ],
        "prep_time": 15,
        "cook_time": 15,
        "tags": ["Grilling", "high-protein"],
    },
    {
        "title": "Fresh Caprese Sandwich",
        "servings": 2,
        "category": DishCategory.LUNCH,
        "ingredients": [
            _ingredient("ciabatta bread", 1, U.UNIT),
            _ingredient("fresh mozzarella", 200, U.GRAM),
            _ingredient("tomatoes", 2, U.UNIT),
            _ingredient("fresh basil", 1, U.BUNCH),
            _ingredient("balsamic glaze", 2, U.TBSP),
            _ingredient("olive oil", 1, U.TBSP),
        ],
        "steps": [
            "Slice ciabatta in half lengthwise and lightly toast.",
            "Slice mozzarella and tomatoes into rounds.",
            "Brush bread with olive oil.",
            "Layer mozzarella, tomato, and basil leaves.",
            "Drizzle with balsamic glaze, close the sandwich, and cut in half.",
        ],
        "prep_time": 10,
        "cook_time": 5,
        "tags": ["Italian", "Vegetarian", "No-Cook"],
    },
    {
        "title": "Classic Spaghetti Bolognese",
        "servings": 6,
        "category": DishCategory.DINNER,
        "ingredients": [
            _ingredient("spaghetti", 500, U.GRAM),
            _ingredient("ground beef", 500, U.GRAM),
            _ingredient("onion", 1, U.UNIT),
            _ingredient("garlic", 3, U.CLOVE),
            _ingredient("carrot", 1, U.UNIT),
            _ingredient("crushed tomatoes", 1, U.CAN),
            _ingredient("tomato paste", 2, U.TBSP),
            _ingredient("red wine", 120, U.ML),
            _ingredient("olive oil", 2, U.TBSP),
            _ingredient("salt"),
        ],
        "steps": [
            "Finely dice onion and carrot; mince garlic.",
            "Heat olive oil in a large pot and soften onion and carrot for 5 minutes.",
            "Add garlic and cook for 1 minute.",
            "Brown the beef, breaking it up as it cooks.",
            "Stir in tomato paste, then deglaze with red wine.",
            "Add crushed tomatoes and simmer for 45 minutes.",
            "Cook spaghetti until al dente and serve topped with the sauce.",
        ],
        "prep_time": 15,
        "cook_time": 60,
        "tags": ["Italian", "Stovetop", "family-friendly"],
    },
    {
        "title": "Quick Vegetable Chicken Stir-Fry",
        "servings": 4,
        "category": DishCategory.DINNER,
        "ingredients": [
            _ingredient("chicken breast", 450, U.GRAM),
            _ingredient("bell pepper", 2, U.UNIT),
            _ingredient("broccoli", 1, U.HEAD),
            _ingredient("soy sauce", 3, U.TBSP),
            _ingredient("ginger", 1, U.TBSP),
            _ingredient("garlic", 2, U.CLOVE),
            _ingredient("vegetable oil", 2, U.TBSP),
            _ingredient("cooked rice", 4, U.CUP),
        ],
        "steps": [
            "Slice chicken into thin strips and cut vegetables into bite-sized pieces.",
            "Heat oil in a wok over high heat.",
            "Stir-fry chicken until cooked through, then set aside.",
            "Stir-fry broccoli and peppers for 3-4 minutes.",
            "Add garlic, ginger, soy sauce, and the chicken; toss to coat.",
            "Serve over rice.",
        ],
        "prep_time": 15,
        "cook_time": 15,
        "tags": ["Asian", "quick", "Stovetop"],
    },
    {
        "title": "Lemon Herb Baked Salmon",
        "servings": 4,
        "category": DishCategory.DINNER,
        "ingredients": [
            _ingredient("salmon fillets", 4, U.PIECE),
            _ingredient("lemon", 2, U.UNIT),
            _ingredient("fresh dill", 2, U.TBSP),
            _ingredient("garlic", 2, U.CLOVE),
            _ingredient("butter", 3, U.TBSP),
            _ingredient("salt", 1, U.TSP),
        ],
        "steps": [
            "Preheat oven to 200°C and line a baking sheet.",
            "Melt butter with minced garlic, lemon juice, and dill.",
            "Place salmon on the sheet and brush with the butter mixture.",
            "Top with lemon slices and season with salt.",
            "Bake for 12-15 minutes until the salmon flakes easily.",
        ],
        "prep_time": 10,
        "cook_time": 15,
        "tags": ["Baking", "Gluten-Free", "healthy"],
    },
    {
        "title": "Rich Chocolate Cake",
        "servings": 12,
        "category": DishCategory.DESSERT,
        "ingredients": [
            _ingredient("all-purpose flour", 2, U.CUP),
            _ingredient("sugar", 2, U.CUP),
            _ingredient("cocoa powder", 0.75, U.CUP),
            _ingredient("baking soda", 2, U.TSP),
            _ingredient("eggs", 2, U.UNIT),
            _ingredient("buttermilk", 1, U.CUP),
            _ingredient("vegetable oil", 0.5, U.CUP),
            _ingredient("hot coffee", 1, U.CUP),
            _ingredient("vanilla extract", 2, U.TSP),
        ],
        "steps": [
            "Preheat oven to 175°C and grease two round cake pans.",
            "Whisk flour, sugar, cocoa, and baking soda together.",
            "Beat in eggs, buttermilk, oil, and vanilla.",
            "Stir in hot coffee; the batter will be thin.",
            "Divide between the pans and bake for 30-35 minutes.",
            "Cool completely before frosting.",
        ],
        "prep_time": 20,
        "cook_time": 35,
        "tags": ["Baking", "celebration"],
    },
]
