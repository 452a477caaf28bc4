from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError
from app.db.session import get_db
from app.modules.recipes.schemas.recipe import (
    RecipeList, RecipePage, RecipeResponse, RecipeSearch, RecipeVideosUpdate
)
from app.modules.recipes.services.recipe import (
    get_cuisines, get_recipe, get_recipes_by_cuisine, list_recipes, search_recipes, update_recipe_videos
)

router = APIRouter()

@router.get("/cuisines", response_model=List[str])
def read_cuisines(db: Session = Depends(get_db)) -> Any:
    """Distinct cuisines, alphabetically"""
    return get_cuisines(db)

@router.get("", response_model=RecipePage)
def read_recipes(
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    cuisine: Optional[str] = None,
) -> Any:
    recipes, pagination = list_recipes(db, cuisine=cuisine, page=page, limit=limit)
    return RecipePage(recipes=recipes, pagination=pagination)

@router.get("/cuisine/{cuisine}", response_model=RecipeList)
def read_recipes_by_cuisine(cuisine: str, db: Session = Depends(get_db)) -> Any:
    return RecipeList(recipes=get_recipes_by_cuisine(db, cuisine))

@router.post("/search", response_model=RecipeList)
def search(body: RecipeSearch, db: Session = Depends(get_db)) -> Any:
    if not body.query or not body.query.strip():
        raise BadRequestError("Search query is required")
    return RecipeList(recipes=search_recipes(db, body.query.strip()))

@router.get("/{recipe_id}", response_model=RecipeResponse)
def read_recipe(recipe_id: str, db: Session = Depends(get_db)) -> Any:
    return RecipeResponse(recipe=get_recipe(db, recipe_id))

@router.put("/{recipe_id}/videos", response_model=RecipeResponse)
def update_videos(recipe_id: str, videos: RecipeVideosUpdate, db: Session = Depends(get_db)) -> Any:
    """Set the short-form and long-form video URLs of a recipe"""
    return RecipeResponse(recipe=update_recipe_videos(db, recipe_id, videos))
