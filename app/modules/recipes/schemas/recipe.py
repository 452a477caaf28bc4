from typing import List, Optional
from datetime import datetime

from app.core.schemas import APIModel

class Recipe(APIModel):
    """Recipe model returned to client"""
    id: str
    recipe_name: str
    cuisine: str
    region: Optional[str] = None
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    servings: Optional[int] = None
    difficulty: Optional[str] = None
    image: Optional[str] = None
    image_url: Optional[str] = None
    shortform_video_url: Optional[str] = None
    longform_video_url: Optional[str] = None
    fun_facts: List[str] = []
    ingredients: List[str] = []
    instructions: List[str] = []
    tags: List[str] = []
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    spice_level: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class RecipePagination(APIModel):
    current: int
    total: int
    has_more: bool

class RecipePage(APIModel):
    recipes: List[Recipe]
    pagination: RecipePagination

class RecipeList(APIModel):
    recipes: List[Recipe]

class RecipeSearch(APIModel):
    query: Optional[str] = None

class RecipeVideosUpdate(APIModel):
    shortform_video_url: Optional[str] = None
    longform_video_url: Optional[str] = None

class RecipeResponse(APIModel):
    recipe: Recipe
