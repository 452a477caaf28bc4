"""
Database initialization script.
Creates every table the API needs that does not exist yet.
Run this as: python init_db.py
"""

import logging
import sys

from sqlalchemy import inspect

from app.core.config import settings
from app.db.init_db import create_all_tables
from app.db.session import engine

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-init")

def init_db() -> bool:
    """Initialize the database by creating all tables."""
    logger.info(f"Initializing database at: {engine.url.render_as_string(hide_password=True)}")
    logger.info(f"Existing tables: {inspect(engine).get_table_names()}")

    if not create_all_tables():
        return False

    logger.info(f"Tables after creation: {inspect(engine).get_table_names()}")
    return True

if __name__ == "__main__":
    logger.info(f"Starting database initialization ({settings.ENVIRONMENT})")
    if init_db():
        logger.info("Database initialization completed successfully")
    else:
        logger.error("Database initialization failed")
        sys.exit(1)
