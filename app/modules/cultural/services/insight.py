"""
Cultural background for a dish.

Text comes from the OpenAI chat completions API when a key is configured.
Without a key, or when the call fails, a fixed paragraph for the cuisine is
used instead so the endpoint always answers.
"""
from typing import Iterable, Optional
import logging

from openai import OpenAI, OpenAIError

from app.core.config import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a passionate food historian and cultural expert who loves sharing "
    "fascinating stories about food traditions around the world. Your responses "
    "are warm, engaging, and educational."
)

PROMPT_TEMPLATE = """Please provide interesting cultural insights about this recipe:

Recipe Name: {name}
Cuisine: {cuisine}
Ingredients: {ingredients}

Please cover:
1. Historical background and cultural significance
2. Traditional cooking techniques or customs
3. Regional variations or family traditions
4. Interesting cultural facts about the ingredients
5. How this dish connects people to their heritage

Keep the response engaging, informative, and about 200-300 words."""

FALLBACK_INSIGHTS = {
    "italian": (
        "{name} represents the heart of Italian cooking: simple, high-quality ingredients turned into "
        "something extraordinary. Italian cuisine centres on family gatherings around the table, where "
        "recipes are passed down through generations and every region keeps its own version of the classics."
    ),
    "chinese": (
        "{name} is rooted in thousands of years of Chinese culinary tradition, where cooking is both an art "
        "and a way to keep harmony and balance between flavours and textures. Food in Chinese culture stands "
        "for prosperity, luck and family unity at celebrations and daily meals alike."
    ),
    "indian": (
        "{name} shows the diversity of Indian cuisine, where spices are valued for their medicinal properties "
        "as much as for flavour. Many dishes carry religious meaning and are prepared for festivals, and spice "
        "blends often remain closely guarded family secrets."
    ),
    "japanese": (
        "{name} embodies washoku, the Japanese harmony between nature, ingredients and presentation. Japanese "
        "cooking favours seasonal produce, restraint and the natural taste of food, with every meal reflecting "
        "the changing seasons."
    ),
    "mexican": (
        "{name} comes from the fusion of indigenous Mesoamerican and Spanish colonial cooking. Corn, beans and "
        "chili peppers were sacred to pre-Hispanic cultures, and food is still central to Mexican celebrations "
        "and family life."
    ),
    "french": (
        "{name} reflects the French devotion to culinary excellence and the art de vivre. French technique has "
        "shaped cooking worldwide, and long shared meals remain a cornerstone of social life in France."
    ),
    "thai": (
        "{name} follows the Thai balance of sweet, sour, salty and spicy. Thai cooking values fresh ingredients "
        "and harmony, and sharing a meal is an everyday expression of hospitality and friendship."
    ),
    "american": (
        "{name} tells the melting-pot story of American food, blending immigrant traditions with local "
        "ingredients. American cooking prizes comfort, abundance and reinvention, and its regional styles "
        "trace the country's many heritages."
    ),
    "mediterranean": (
        "{name} belongs to the Mediterranean way of eating: olive oil, fresh vegetables, seafood and herbs, "
        "shaped by the climate of the region. Meals are shared slowly with family and friends, with "
        "conversation as important as the food."
    ),
}

GENERIC_INSIGHT = (
    "{name} is a wonderful example of {cuisine} cuisine, with cultural traditions and cooking techniques "
    "passed down through generations. Food is a universal language that connects us to our heritage and "
    "brings people together around the table."
)

def openai_configured() -> bool:
    return bool(settings.OPENAI_API_KEY)

def get_openai_client() -> OpenAI:
    return OpenAI(api_key=settings.OPENAI_API_KEY)

def fallback_insight(name: str, cuisine: str) -> str:
    template = FALLBACK_INSIGHTS.get((cuisine or "").lower(), GENERIC_INSIGHT)
    return template.format(name=name, cuisine=cuisine)

def generate_insight(name: str, cuisine: str, ingredients: Optional[Iterable[str]] = None) -> str:
    """Cultural insight text for a dish; never raises on provider errors"""
    if not openai_configured():
        logger.warning("OpenAI API key not configured, using fallback insight")
        return fallback_insight(name, cuisine)

    ingredient_list = ", ".join(ingredients or []) or "Not specified"
    try:
        completion = get_openai_client().chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": PROMPT_TEMPLATE.format(
                    name=name, cuisine=cuisine, ingredients=ingredient_list,
                )},
            ],
            max_tokens=500,
            temperature=0.7,
        )
        content = completion.choices[0].message.content
    except OpenAIError as e:
        logger.warning(f"OpenAI request failed, using fallback insight: {e}")
        return fallback_insight(name, cuisine)

    if not content:
        logger.warning("OpenAI returned an empty insight, using fallback")
        return fallback_insight(name, cuisine)
    return content.strip()
