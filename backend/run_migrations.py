#!/usr/bin/env python3
"""
Manual script to run the schema and look-order migrations against the configured database.
Run this from the backend directory or adjust the import path.
"""
import sys
import os

# Add backend directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from db import engine
from migrations.migrate_001_add_call_sheet_columns import migrate as migrate_001
from migrations.migrate_002_compact_look_order import migrate as migrate_002
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    for name, migrate in (("001", migrate_001), ("002", migrate_002)):
        logger.info(f"Running migration {name} manually...")
        try:
            migrate(engine)
            logger.info(f"Migration {name} completed successfully")
        except Exception as e:
            logger.exception(f"Migration {name} failed: {e}")
            sys.exit(1)
