#!/usr/bin/env python3
"""
Script to verify look ordering before/after the compaction migration.
Read-only: reports productions whose looks are not numbered 0..N-1.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from db import engine
from sqlmodel import Session, select
from models import Look, Production
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def check_data() -> int:
    """Log every production with a gapped or duplicated look order. Returns the count."""
    with Session(engine) as session:
        productions = session.exec(select(Production).order_by(Production.id)).all()
        logger.info(f"Total productions in database: {len(productions)}")

        broken = 0
        for production in productions:
            orders = session.exec(
                select(Look.sequence_order)
                .where(Look.production_id == production.id)
                .order_by(Look.sequence_order, Look.created_at, Look.id)
            ).all()
            if list(orders) != list(range(len(orders))):
                broken += 1
                logger.warning(f"Production {production.id} ({production.name}) has look orders {list(orders)}")

        if broken:
            logger.warning(f"{broken} productions need compaction (run run_migrations.py)")
        else:
            logger.info("All look orders are dense - nothing to fix")
        return broken


if __name__ == "__main__":
    sys.exit(1 if check_data() else 0)
