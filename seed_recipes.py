"""
Recipe seeding script.
Replaces the recipe catalogue with the starter recipes.
Run this as: python seed_recipes.py
"""

import logging
import sys

from app.core.config import settings
from app.db.init_db import create_all_tables
from app.db.session import SessionLocal
from app.modules.recipes.services.seed import seed_recipes

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-seed")

def main() -> bool:
    if not create_all_tables():
        return False

    db = SessionLocal()
    try:
        added = seed_recipes(db)
        logger.info(f"Seeded {added} recipes")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Recipe seeding failed: {e}")
        return False
    finally:
        db.close()

if __name__ == "__main__":
    logger.info(f"Starting recipe seeding ({settings.ENVIRONMENT})")
    if main():
        logger.info("Recipe seeding completed successfully")
    else:
        sys.exit(1)
