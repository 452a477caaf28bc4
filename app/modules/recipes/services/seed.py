"""
Starter recipe catalogue, grouped by cuisine.

``seed_recipes`` replaces whatever is in the recipes table with this data.
"""
from typing import Dict, List
import logging

from sqlalchemy.orm import Session

from app.core.ids import new_id
from app.modules.recipes.models.recipe import Recipe

logger = logging.getLogger(__name__)

RECIPE_DATA: Dict[str, List[dict]] = {
    "Italian": [
        {
            "recipe_name": "Spaghetti Carbonara",
            "region": "European",
            "fun_facts": [
                "Carbonara is usually traced to Rome in the 1940s, when eggs and bacon were plentiful.",
            ],
            "ingredients": [
                "1 pound spaghetti",
                "4 large eggs",
                "1/2 cup grated Pecorino Romano cheese",
                "1/2 cup grated Parmigiano-Reggiano",
                "4 ounces pancetta or guanciale, diced",
                "4 cloves garlic, minced",
                "Black pepper to taste",
                "Salt for pasta water",
            ],
            "instructions": [
                "Bring a large pot of salted water to boil",
                "Cook spaghetti according to package directions",
                "Meanwhile, cook pancetta in a large skillet until crispy",
                "In a bowl, whisk together eggs, cheeses, and black pepper",
                "Drain pasta, reserving 1 cup of pasta water",
                "Add hot pasta to skillet with pancetta",
                "Remove from heat and quickly stir in egg mixture",
                "Add pasta water as needed to create a creamy sauce",
                "Serve immediately with extra cheese and black pepper",
            ],
            "prep_time": "10 minutes",
            "cook_time": "15 minutes",
            "servings": 4,
            "difficulty": "Medium",
            "tags": ["pasta", "italian", "eggs", "quick"],
            "spice_level": "Mild",
        },
    ],
    "Japanese": [
        {
            "recipe_name": "Miso Soup",
            "region": "East Asian",
            "fun_facts": ["Miso soup is served with breakfast in many Japanese homes."],
            "ingredients": [
                "4 cups dashi",
                "3 tablespoons white miso paste",
                "7 ounces silken tofu, cubed",
                "2 tablespoons dried wakame",
                "2 green onions, sliced",
            ],
            "instructions": [
                "Soak the wakame in water for 5 minutes, then drain",
                "Warm the dashi over medium heat without boiling",
                "Whisk the miso with a ladle of dashi until smooth",
                "Stir the miso back into the pot",
                "Add tofu and wakame and heat through",
                "Serve topped with green onions",
            ],
            "prep_time": "5 minutes",
            "cook_time": "10 minutes",
            "servings": 4,
            "difficulty": "Easy",
            "tags": ["soup", "japanese", "tofu", "quick"],
            "is_vegetarian": True,
            "spice_level": "Mild",
        },
    ],
    "Mexican": [
        {
            "recipe_name": "Chicken Tinga Tacos",
            "region": "Latin American",
            "fun_facts": ["Tinga comes from Puebla, where it is often served on tostadas."],
            "ingredients": [
                "1 pound chicken breast",
                "2 chipotle peppers in adobo",
                "1 can crushed tomatoes",
                "1 white onion, sliced",
                "2 cloves garlic",
                "12 corn tortillas",
            ],
            "instructions": [
                "Poach the chicken until cooked through, then shred",
                "Blend tomatoes, chipotles and garlic into a sauce",
                "Soften the onion in a skillet",
                "Add the sauce and simmer for 10 minutes",
                "Fold in the chicken and simmer until thick",
                "Serve on warm tortillas",
            ],
            "prep_time": "15 minutes",
            "cook_time": "30 minutes",
            "servings": 4,
            "difficulty": "Easy",
            "tags": ["tacos", "mexican", "chicken", "spicy"],
            "is_gluten_free": True,
            "spice_level": "Hot",
        },
    ],
    "Indian": [
        {
            "recipe_name": "Chana Masala",
            "region": "South Asian",
            "fun_facts": ["Chana masala is a staple of Punjabi street food stalls."],
            "ingredients": [
                "2 cans chickpeas, drained",
                "1 onion, finely chopped",
                "2 tomatoes, pureed",
                "1 tablespoon ginger garlic paste",
                "2 teaspoons garam masala",
                "1 teaspoon cumin seeds",
                "Fresh coriander",
            ],
            "instructions": [
                "Toast cumin seeds in oil until fragrant",
                "Cook the onion until golden",
                "Add ginger garlic paste and cook for 1 minute",
                "Add tomatoes and spices and cook until the oil separates",
                "Stir in chickpeas with a splash of water and simmer for 15 minutes",
                "Finish with coriander",
            ],
            "prep_time": "10 minutes",
            "cook_time": "30 minutes",
            "servings": 4,
            "difficulty": "Easy",
            "tags": ["curry", "indian", "chickpeas", "vegan"],
            "is_vegetarian": True,
            "is_vegan": True,
            "is_gluten_free": True,
            "spice_level": "Medium",
        },
    ],
}

def seed_recipes(db: Session, data: Dict[str, List[dict]] = RECIPE_DATA) -> int:
    """Clear the recipes table and insert ``data``; returns how many were added"""
    removed = db.query(Recipe).delete()
    logger.info(f"Cleared {removed} existing recipes")

    added = 0
    for cuisine, recipes in data.items():
        for fields in recipes:
            db.add(Recipe(id=new_id(), cuisine=cuisine, **fields))
            logger.info(f"Added: {fields['recipe_name']}")
            added += 1

    db.commit()
    return added
