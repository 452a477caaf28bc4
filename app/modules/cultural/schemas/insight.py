from typing import List, Optional
from datetime import datetime

from app.core.schemas import APIModel

class InsightRequest(APIModel):
    recipe_name: Optional[str] = None
    cuisine: Optional[str] = None
    ingredients: List[str] = []

class InsightRecipe(APIModel):
    id: Optional[str] = None
    name: str
    cuisine: str

class InsightResponse(APIModel):
    success: bool = True
    recipe: InsightRecipe
    insight: str
    generated_at: datetime

class InsightHealth(APIModel):
    status: str
    service: str
    openai_configured: bool
    timestamp: datetime
