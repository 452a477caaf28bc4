from datetime import datetime

from sqlalchemy import Boolean, Column, String, DateTime, Integer, JSON

from app.db.session import Base

class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(String, primary_key=True, index=True)
    recipe_name = Column(String, nullable=False)
    cuisine = Column(String, nullable=False, index=True)
    region = Column(String, nullable=True, index=True)
    prep_time = Column(String, nullable=True)
    cook_time = Column(String, nullable=True)
    servings = Column(Integer, nullable=True)
    difficulty = Column(String, default="Medium")
    image = Column(String, default="/api/placeholder/600/400")
    image_url = Column(String, nullable=True)
    shortform_video_url = Column(String, nullable=True)
    longform_video_url = Column(String, nullable=True)
    fun_facts = Column(JSON, default=list)
    ingredients = Column(JSON, default=list)
    instructions = Column(JSON, default=list)
    tags = Column(JSON, default=list)
    is_vegetarian = Column(Boolean, default=False)
    is_vegan = Column(Boolean, default=False)
    is_gluten_free = Column(Boolean, default=False)
    spice_level = Column(String, default="Medium")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
