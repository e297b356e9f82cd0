"""
Kickstarter ETL Database Writer

Writes kickstarts record by record: the dimension rows first, then the
fact row wired to the ids the store assigned to those dimension rows.

Two seams are pluggable:
1. DimensionResolver decides whether a dimension row is inserted or reused
2. UnitOfWork decides where commits (and rollbacks) happen
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.dml import Insert

from kickstarter_etl.core.exceptions import StoreError
from kickstarter_etl.core.logging import get_logger
from kickstarter_etl.database import models
from kickstarter_etl.etl.records import Kickstart

logger = get_logger(__name__)

# Called after every record with (processed, total)
ProgressCallback = Callable[[int, int], None]


def percent_complete(processed: int, total: int) -> int:
    """Integer percentage; an empty load counts as complete."""
    return processed * 100 // total if total > 0 else 100


class UnitOfWork(ABC):
    """Commit boundary around the inserts of one record"""

    def __init__(self, session: Session):
        self.session = session

    def begin(self) -> None:
        """Start a record. Sessions open their transaction lazily."""

    @abstractmethod
    def insert(self, statement: Insert) -> int:
        """Execute an INSERT and return the store-assigned primary key."""

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"committing record: {e}") from e

    def rollback(self) -> None:
        self.session.rollback()

    def _execute(self, statement: Insert) -> int:
        try:
            result = self.session.execute(statement)
            return result.inserted_primary_key[0]
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"inserting into {statement.table.name}: {e}") from e


class StatementUnitOfWork(UnitOfWork):
    """
    Commits after every insert.

    A failure part way through a record leaves the rows inserted before it
    in the store; rollback has nothing left to undo.
    """

    def insert(self, statement: Insert) -> int:
        row_id = self._execute(statement)
        self.commit()
        return row_id


class RecordUnitOfWork(UnitOfWork):
    """Commits once per record; a failed record leaves no rows behind."""

    def insert(self, statement: Insert) -> int:
        return self._execute(statement)


class DimensionResolver(ABC):
    """Turns a dimension value into the store id the fact row should reference"""

    @abstractmethod
    def resolve(self, unit_of_work: UnitOfWork, model: type, values: dict[str, Any], label: Any) -> int:
        """
        Args:
            unit_of_work: Where inserts are executed
            model: Dimension model class
            values: Column values of the dimension row
            label: Value identifying the row among its table

        Returns:
            Store-assigned id of the dimension row
        """

    def confirm(self) -> None:
        """Called once the record's rows are committed."""

    def discard(self) -> None:
        """Called when the record's rows were rolled back."""


class AlwaysInsert(DimensionResolver):
    """Inserts a fresh dimension row for every record, even for repeated labels."""

    def resolve(self, unit_of_work: UnitOfWork, model: type, values: dict[str, Any], label: Any) -> int:
        return unit_of_work.insert(insert(model.__table__).values(**values))


class CacheByLabel(DimensionResolver):
    """Reuses the row of a label already written during this load."""

    def __init__(self):
        self._ids: dict[tuple[str, Any], int] = {}
        self._pending: dict[tuple[str, Any], int] = {}

    def resolve(self, unit_of_work: UnitOfWork, model: type, values: dict[str, Any], label: Any) -> int:
        key = (model.__tablename__, label)
        if key in self._ids:
            return self._ids[key]
        if key in self._pending:
            return self._pending[key]

        row_id = unit_of_work.insert(insert(model.__table__).values(**values))
        self._pending[key] = row_id
        return row_id

    def confirm(self) -> None:
        self._ids.update(self._pending)
        self._pending.clear()

    def discard(self) -> None:
        # Ids of rolled back rows must never be handed out
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._ids)


class DatabaseWriter:
    """
    Writes kickstarts and their dimensions one record at a time.

    There is no merge logic: writing into a store that already holds rows
    duplicates dimensions and trips the unique kickstarter_id of products.
    """

    def __init__(
        self,
        session: Session,
        resolver: DimensionResolver | None = None,
        unit_of_work: UnitOfWork | None = None,
    ):
        """
        Initialize database writer.

        Args:
            session: SQLAlchemy session
            resolver: Dimension strategy (default: AlwaysInsert)
            unit_of_work: Commit strategy (default: StatementUnitOfWork)
        """
        self.session = session
        self.resolver = resolver if resolver is not None else AlwaysInsert()
        self.unit_of_work = unit_of_work if unit_of_work is not None else StatementUnitOfWork(session)
        logger.info(
            f"DatabaseWriter initialized (resolver={type(self.resolver).__name__}, "
            f"unit_of_work={type(self.unit_of_work).__name__})"
        )

    def write_all(self, kickstarts: Sequence[Kickstart], progress: ProgressCallback | None = None) -> int:
        """
        Write every kickstart in order.

        Args:
            kickstarts: Facts with their embedded dimensions
            progress: Called with (processed, total) after each record

        Returns:
            Number of kickstarts written

        Raises:
            StoreError: On the first failed insert; the load stops there
        """
        progress = progress or _log_progress
        total = len(kickstarts)
        logger.info(f"Writing {total:,} kickstarts")

        for processed, kickstart in enumerate(kickstarts, start=1):
            self.unit_of_work.begin()
            try:
                self.write_kickstart(kickstart)
                self.unit_of_work.commit()
            except StoreError as e:
                logger.error(f"Record {processed}/{total} (kickstarter_id={kickstart.product.kickstarter_id}) failed: {e}")
                self.unit_of_work.rollback()
                self.resolver.discard()
                raise
            self.resolver.confirm()
            progress(processed, total)

        if total == 0:
            progress(0, 0)

        logger.info(f"✓ Wrote {total:,} kickstarts successfully")
        return total

    def write_kickstart(self, kickstart: Kickstart) -> int:
        """
        Write one kickstart: dimension rows, then the fact row.

        Returns:
            Store-assigned id of the kickstarts row
        """
        ids = {
            "product_id": self._resolve(
                models.Product,
                {"kickstarter_id": kickstart.product.kickstarter_id, "name": kickstart.product.name},
                kickstart.product.kickstarter_id,
            ),
            "main_category_id": self._resolve(
                models.MainCategory, {"name": kickstart.main_category.name}, kickstart.main_category.name
            ),
            "category_id": self._resolve(models.Category, {"name": kickstart.category.name}, kickstart.category.name),
            "currency_id": self._resolve(models.Currency, {"type": kickstart.currency.type}, kickstart.currency.type),
            "state_id": self._resolve(models.State, {"state": kickstart.state.state}, kickstart.state.state),
            "area_id": self._resolve(models.Area, {"country": kickstart.area.country}, kickstart.area.country),
        }

        statement = insert(models.Kickstart.__table__).values(
            **ids,
            goal=kickstart.goal,
            goal_usd_real=kickstart.goal_usd_real,
            backers=kickstart.backers,
            pledged=kickstart.pledged,
            pledged_usd=kickstart.pledged_usd,
            pledged_usd_real=kickstart.pledged_usd_real,
        )
        return self.unit_of_work.insert(statement)

    def _resolve(self, model: type, values: dict[str, Any], label: Any) -> int:
        return self.resolver.resolve(self.unit_of_work, model, values, label)


def _log_progress(processed: int, total: int) -> None:
    if processed == total or processed % 10000 == 0:
        logger.info(f"  ✓ {processed:,}/{total:,} kickstarts ({percent_complete(processed, total)}%)")
