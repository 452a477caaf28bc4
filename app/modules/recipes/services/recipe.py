"""
Queries over the recipe catalogue.

Cuisine filtering knows three broad groups that expand to several concrete
cuisines; any other value is a case-insensitive substring on the cuisine name
or the tags.
"""
from typing import List, Optional, Tuple
import logging
import math

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.db.filters import contains
from app.modules.recipes.models.recipe import Recipe
from app.modules.recipes.schemas.recipe import RecipePagination, RecipeVideosUpdate

logger = logging.getLogger(__name__)

CUISINE_GROUPS = {
    "asian": ("Japanese", "Chinese", "Korean", "Thai", "Vietnamese", "Indian"),
    "mediterranean": ("Greek", "Spanish", "Italian"),
    "latin": ("Mexican",),
}

def _tag_elements(dialect: str):
    """Table-valued function yielding one ``value`` row per element of Recipe.tags"""
    if dialect == "postgresql":
        return func.json_array_elements_text(Recipe.tags).table_valued("value")
    return func.json_each(Recipe.tags).table_valued("value")

def _tags_contain(term: str, dialect: str):
    # Compare decoded elements one at a time; the serialized array would
    # escape non-ASCII text and match across element boundaries
    elements = _tag_elements(dialect)
    return select(elements.c.value).where(contains(elements.c.value, term)).exists()

def cuisine_filter(cuisine: Optional[str], dialect: str = "sqlite"):
    """SQL predicate for a cuisine query value, or None when it does not filter"""
    if not cuisine or cuisine.lower() == "all":
        return None

    group = cuisine.lower()
    if group in CUISINE_GROUPS:
        members = CUISINE_GROUPS[group]
        return or_(
            Recipe.cuisine.in_(members),
            func.lower(Recipe.region) == group,
            _tags_contain(group, dialect),
            *[_tags_contain(member, dialect) for member in members],
        )
    return or_(contains(Recipe.cuisine, cuisine), _tags_contain(cuisine, dialect))

def _filtered(db: Session, cuisine: Optional[str]):
    query = db.query(Recipe)
    predicate = cuisine_filter(cuisine, db.get_bind().dialect.name)
    if predicate is not None:
        query = query.filter(predicate)
    return query

def get_cuisines(db: Session) -> List[str]:
    return sorted(row[0] for row in db.query(Recipe.cuisine).distinct().all() if row[0])

def list_recipes(db: Session, cuisine: Optional[str] = None, page: int = 1, limit: int = 12) -> Tuple[List[Recipe], RecipePagination]:
    query = _filtered(db, cuisine)
    total = query.count()
    skip = (page - 1) * limit
    recipes = query.order_by(Recipe.recipe_name).offset(skip).limit(limit).all()
    pagination = RecipePagination(
        current=page,
        total=math.ceil(total / limit),
        has_more=skip + len(recipes) < total,
    )
    return recipes, pagination

def get_recipes_by_cuisine(db: Session, cuisine: str) -> List[Recipe]:
    recipes = _filtered(db, cuisine).order_by(Recipe.recipe_name).all()
    logger.info(f"Found {len(recipes)} recipes for cuisine {cuisine!r}")
    return recipes

def search_recipes(db: Session, q: str) -> List[Recipe]:
    """Recipes whose name, cuisine or tags contain ``q``"""
    return (
        db.query(Recipe)
        .filter(or_(
            contains(Recipe.recipe_name, q),
            contains(Recipe.cuisine, q),
            _tags_contain(q, db.get_bind().dialect.name),
        ))
        .order_by(Recipe.recipe_name)
        .all()
    )

def get_recipe(db: Session, recipe_id: str) -> Recipe:
    recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
    if not recipe:
        raise NotFoundError("Recipe")
    return recipe

def update_recipe_videos(db: Session, recipe_id: str, videos: RecipeVideosUpdate) -> Recipe:
    """Set video URLs; values left empty keep what is stored"""
    recipe = get_recipe(db, recipe_id)
    if videos.shortform_video_url:
        recipe.shortform_video_url = videos.shortform_video_url
    if videos.longform_video_url:
        recipe.longform_video_url = videos.longform_video_url
    db.commit()
    db.refresh(recipe)
    logger.info(f"Updated video URLs for recipe {recipe.id}")
    return recipe
