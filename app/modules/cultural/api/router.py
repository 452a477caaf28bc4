from typing import Any
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError
from app.db.session import get_db
from app.modules.cultural.schemas.insight import InsightHealth, InsightRecipe, InsightRequest, InsightResponse
from app.modules.cultural.services.insight import generate_insight, openai_configured
from app.modules.recipes.services.recipe import get_recipe

router = APIRouter()

@router.get("/insight/{recipe_id}", response_model=InsightResponse)
def read_recipe_insight(recipe_id: str, db: Session = Depends(get_db)) -> Any:
    """Cultural insight for a recipe in the catalogue"""
    recipe = get_recipe(db, recipe_id)
    insight = generate_insight(recipe.recipe_name, recipe.cuisine, recipe.ingredients)
    return InsightResponse(
        recipe=InsightRecipe(id=recipe.id, name=recipe.recipe_name, cuisine=recipe.cuisine),
        insight=insight,
        generated_at=datetime.utcnow(),
    )

@router.post("/insight", response_model=InsightResponse)
def create_custom_insight(body: InsightRequest) -> Any:
    """Cultural insight for a dish that is not in the catalogue"""
    if not body.recipe_name or not body.cuisine:
        raise BadRequestError("Recipe name and cuisine are required.")
    insight = generate_insight(body.recipe_name, body.cuisine, body.ingredients)
    return InsightResponse(
        recipe=InsightRecipe(name=body.recipe_name, cuisine=body.cuisine),
        insight=insight,
        generated_at=datetime.utcnow(),
    )

@router.get("/health", response_model=InsightHealth)
def health() -> Any:
    return InsightHealth(
        status="OK",
        service="Cultural Insights API",
        openai_configured=openai_configured(),
        timestamp=datetime.utcnow(),
    )
