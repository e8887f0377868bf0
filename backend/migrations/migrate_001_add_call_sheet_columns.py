"""
Migration: Add weather snapshot and extended timing columns to production.

This migration:
1. Adds weather_city, weather_condition, weather_temp, sunrise_time, sunset_time
2. Adds wrap_time, lunch_time, estimated_wrap
3. Handles both PostgreSQL and SQLite

All columns are nullable text, so existing productions are preserved untouched.
"""
import logging
from sqlalchemy import text

logger = logging.getLogger(__name__)

NEW_COLUMNS = [
    "weather_city",
    "weather_condition",
    "weather_temp",
    "sunrise_time",
    "sunset_time",
    "wrap_time",
    "lunch_time",
    "estimated_wrap",
]


def is_postgres(engine):
    """Check if database is PostgreSQL."""
    return "postgresql" in str(engine.url).lower()


def migrate(engine):
    """Run migration."""
    with engine.connect() as conn:
        trans = conn.begin()

        try:
            if is_postgres(engine):
                migrate_postgres(conn)
            else:
                migrate_sqlite(conn)

            trans.commit()
            logger.info("Migration 001 completed successfully")
        except Exception as e:
            trans.rollback()
            logger.error(f"Migration 001 failed: {str(e)}")
            raise


def migrate_postgres(conn):
    """PostgreSQL migration."""
    logger.info("Running PostgreSQL migration for call sheet columns...")

    result = conn.execute(text("""
        SELECT column_name
        FROM information_schema.columns
        WHERE table_name = 'production'
    """))
    existing = {row[0] for row in result.fetchall()}

    if not existing:
        logger.info("Production table does not exist, skipping migration")
        return

    for column in NEW_COLUMNS:
        if column in existing:
            continue
        logger.info(f"Adding {column} column...")
        conn.execute(text(f"ALTER TABLE production ADD COLUMN IF NOT EXISTS {column} TEXT"))


def migrate_sqlite(conn):
    """SQLite migration."""
    logger.info("Running SQLite migration for call sheet columns...")

    result = conn.execute(text("""
        SELECT name FROM sqlite_master
        WHERE type='table' AND name='production'
    """))

    if not result.fetchone():
        logger.info("Production table does not exist, skipping migration")
        return

    result = conn.execute(text("PRAGMA table_info(production)"))
    existing = {row[1] for row in result.fetchall()}

    missing = [column for column in NEW_COLUMNS if column not in existing]
    if not missing:
        logger.info("Call sheet columns already exist, skipping migration")
        return

    for column in missing:
        logger.info(f"Adding {column} column (SQLite)...")
        try:
            conn.execute(text(f"ALTER TABLE production ADD COLUMN {column} TEXT"))
        except Exception as e:
            if "duplicate column" not in str(e).lower():
                raise
            logger.info(f"{column} column already exists")


if __name__ == "__main__":
    from db import engine
    migrate(engine)
