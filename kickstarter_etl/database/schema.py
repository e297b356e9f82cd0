"""
Kickstarter ETL Schema Management

Creates, drops and inspects the star schema in the target store.

Usage:
    from kickstarter_etl.database.schema import count_existing_tables, create_schema, drop_schema

    if count_existing_tables(engine) == 0:
        create_schema(engine)
"""
from __future__ import annotations

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from kickstarter_etl.core.exceptions import StoreError
from kickstarter_etl.core.logging import get_logger
from kickstarter_etl.database.models import ALL_MODELS

logger = get_logger(__name__)


def create_schema(engine: Engine) -> None:
    """
    Create every table that does not exist yet.

    Dimension tables are created before kickstarts, which references them.
    Safe to call when the tables already exist.

    Raises:
        StoreError: If a CREATE TABLE statement fails
    """
    for model in ALL_MODELS:
        table = model.__table__
        try:
            table.create(engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise StoreError(f"creating table {table.name}: {e}") from e
        logger.debug(f"Table ready: {table.name}")

    logger.info(f"Schema ready ({len(ALL_MODELS)} tables)")


def drop_schema(engine: Engine) -> None:
    """
    Drop all tables, kickstarts first.

    Tables that are already absent are skipped.

    Raises:
        StoreError: If a DROP TABLE statement fails
    """
    logger.warning("Dropping all kickstarter tables...")
    for model in reversed(ALL_MODELS):
        table = model.__table__
        try:
            table.drop(engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise StoreError(f"dropping table {table.name}: {e}") from e
        logger.debug(f"Table dropped: {table.name}")

    logger.info("All tables dropped")


def count_existing_tables(engine: Engine, schema: str | None = None) -> int:
    """
    Count the distinct tables defined under a schema.

    Any table counts, not only the ones this package manages. A load must
    only start against an empty schema because the writer never merges.

    Args:
        engine: Store engine
        schema: Schema (MySQL database) name; None uses the connection default

    Returns:
        Number of tables

    Raises:
        StoreError: If the store metadata cannot be read
    """
    try:
        table_names = inspect(engine).get_table_names(schema=schema)
    except SQLAlchemyError as e:
        raise StoreError(f"counting tables in schema {schema or '(default)'}: {e}") from e

    count = len(set(table_names))
    logger.debug(f"Schema {schema or '(default)'} has {count} tables")
    return count
