"""
Kickstarter ETL Data Transformer

Splits each source record into a fact and its dimensions.
"""
from __future__ import annotations

from collections.abc import Iterable

from kickstarter_etl.core.logging import get_logger
from kickstarter_etl.etl.records import (
    Area,
    Category,
    Currency,
    Date,
    Kickstart,
    MainCategory,
    Product,
    SourceRecord,
    State,
)

logger = get_logger(__name__)


class DataTransformer:
    """
    Transforms source records to the star schema.

    Every entity built from the record at position i (0-based) gets the
    surrogate key i + 1. Sharing one key across tables is only sound while
    dimensions are never deduplicated here.
    """

    def transform(self, records: Iterable[SourceRecord]) -> list[Kickstart]:
        kickstarts = [self.to_kickstart(key, record) for key, record in enumerate(records, start=1)]
        logger.info(f"Transformation complete: {len(kickstarts):,} kickstarts")
        return kickstarts

    @staticmethod
    def to_kickstart(key: int, record: SourceRecord) -> Kickstart:
        """Build the fact for one record, all entities keyed by ``key``."""
        return Kickstart(
            product=Product(id=key, kickstarter_id=record.id, name=record.name),
            main_category=MainCategory(id=key, name=record.main_category),
            category=Category(id=key, name=record.category),
            currency=Currency(id=key, type=record.currency),
            date=Date(id=key, launched=record.launched, deadline=record.deadline),
            state=State(id=key, state=record.state),
            area=Area(id=key, country=record.country),
            product_id=key,
            main_category_id=key,
            category_id=key,
            currency_id=key,
            date_id=key,
            state_id=key,
            area_id=key,
            backers=record.backers,
            goal=record.goal,
            goal_usd_real=record.usd_goal_real,
            pledged=record.pledged,
            pledged_usd=record.usd_pledged,
            pledged_usd_real=record.usd_pledged_real,
        )
