"""Table-oriented record store over a SQLModel session.

Operations are keyed by table name and equality filters so the look manager,
crew roster and production service share one narrow persistence contract.
Any SQLAlchemy failure is rolled back and surfaced as ``StoreUnavailable``.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterable

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from errors import RecordNotFound, StoreUnavailable
from models import CrewMember, Look, Production

logger = logging.getLogger(__name__)

TABLES = {
    "production": Production,
    "crewmember": CrewMember,
    "look": Look,
}


class RecordStore:
    def __init__(self, session: Session):
        self.session = session
        self._depth = 0

    def _model(self, table: str):
        try:
            return TABLES[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}") from None

    def _where(self, stmt, model, filters: dict[str, Any] | None):
        for column, value in (filters or {}).items():
            stmt = stmt.where(getattr(model, column) == value)
        return stmt

    def _fail(self, operation: str, table: str, exc: Exception):
        self.session.rollback()
        logger.error(f"Store {operation} on {table} failed: {str(exc)}")
        raise StoreUnavailable(f"{operation} on {table} failed: {exc}") from exc

    def _commit(self, operation: str, table: str):
        if self._depth:
            return
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail(operation, table, e)

    @contextmanager
    def transaction(self):
        """Group several operations into one commit; roll everything back on failure."""
        self._depth += 1
        try:
            yield self
        except SQLAlchemyError as e:
            self._depth -= 1
            self._fail("transaction", "*", e)
        except Exception:
            self._depth -= 1
            self.session.rollback()
            raise
        else:
            self._depth -= 1
            self._commit("transaction", "*")

    def query(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: Iterable[str] = (),
    ) -> list:
        """Select rows matching all filters. A leading "-" in order_by sorts descending."""
        model = self._model(table)
        stmt = self._where(select(model), model, filters).execution_options(populate_existing=True)
        for key in order_by:
            column = getattr(model, key.lstrip("-"))
            stmt = stmt.order_by(column.desc() if key.startswith("-") else column)
        try:
            return list(self.session.exec(stmt).all())
        except SQLAlchemyError as e:
            self._fail("query", table, e)

    def get(self, table: str, record_id: int):
        model = self._model(table)
        try:
            row = self.session.get(model, record_id, populate_existing=True)
        except SQLAlchemyError as e:
            self._fail("get", table, e)
        if row is None:
            raise RecordNotFound(table, record_id)
        return row

    def insert(self, table: str, row: dict[str, Any]):
        model = self._model(table)
        record = model(**row)
        try:
            self.session.add(record)
            self.session.flush()
        except SQLAlchemyError as e:
            self._fail("insert", table, e)
        self._commit("insert", table)
        try:
            self.session.refresh(record)
        except SQLAlchemyError as e:
            self._fail("insert", table, e)
        return record

    def update(self, table: str, filters: dict[str, Any], patch: dict[str, Any]) -> int:
        model = self._model(table)
        stmt = self._where(update(model), model, filters).values(**patch)
        try:
            result = self.session.exec(stmt)
        except SQLAlchemyError as e:
            self._fail("update", table, e)
        self._commit("update", table)
        return result.rowcount

    def update_many(self, table: str, changes: list[tuple[dict[str, Any], dict[str, Any]]]) -> int:
        """Apply several (filters, patch) pairs in a single transaction."""
        count = 0
        with self.transaction():
            for filters, patch in changes:
                count += self.update(table, filters, patch)
        return count

    def delete(self, table: str, filters: dict[str, Any]) -> int:
        model = self._model(table)
        stmt = self._where(delete(model), model, filters)
        try:
            result = self.session.exec(stmt)
        except SQLAlchemyError as e:
            self._fail("delete", table, e)
        self._commit("delete", table)
        return result.rowcount
