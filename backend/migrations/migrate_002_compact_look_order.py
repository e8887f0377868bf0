"""
Migration: Renumber look sequence_order to a dense 0..N-1 per production.

Older clients deleted looks without renumbering, leaving gaps (and, after
concurrent edits, duplicates) in sequence_order. This migration:
1. Finds productions whose look orders are not exactly 0..N-1
2. Rewrites them in current display order (sequence_order, created_at, id)
3. Runs in one transaction and is safe to run repeatedly
"""
import logging
from collections import defaultdict
from sqlalchemy import text

logger = logging.getLogger(__name__)


def find_inconsistent_productions(conn) -> dict[int, list[int]]:
    """Return {production_id: [look ids in display order]} for productions with a broken order."""
    result = conn.execute(text("""
        SELECT id, production_id, sequence_order
        FROM look
        ORDER BY production_id, sequence_order, created_at, id
    """))

    ordered = defaultdict(list)
    orders = defaultdict(list)
    for look_id, production_id, sequence_order in result.fetchall():
        ordered[production_id].append(look_id)
        orders[production_id].append(sequence_order)

    return {
        production_id: ordered[production_id]
        for production_id, values in orders.items()
        if values != list(range(len(values)))
    }


def table_exists(conn, engine) -> bool:
    if "postgresql" in str(engine.url).lower():
        result = conn.execute(text("""
            SELECT table_name FROM information_schema.tables
            WHERE table_name = 'look'
        """))
    else:
        result = conn.execute(text("""
            SELECT name FROM sqlite_master
            WHERE type='table' AND name='look'
        """))
    return result.fetchone() is not None


def migrate(engine):
    """Run migration."""
    with engine.connect() as conn:
        trans = conn.begin()

        try:
            if not table_exists(conn, engine):
                logger.info("Look table does not exist, skipping migration")
                trans.commit()
                return

            broken = find_inconsistent_productions(conn)
            if not broken:
                logger.info("All look orders are dense, nothing to compact")
            for production_id, look_ids in broken.items():
                logger.info(f"Compacting {len(look_ids)} looks for production {production_id}")
                for index, look_id in enumerate(look_ids):
                    conn.execute(
                        text("UPDATE look SET sequence_order = :order WHERE id = :id"),
                        {"order": index, "id": look_id},
                    )

            trans.commit()
            logger.info(f"Migration 002 completed successfully ({len(broken)} productions compacted)")
        except Exception as e:
            trans.rollback()
            logger.error(f"Migration 002 failed: {str(e)}")
            raise


if __name__ == "__main__":
    from db import engine
    migrate(engine)
