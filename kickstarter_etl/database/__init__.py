"""
Kickstarter ETL Database Package

Usage:
    # Engine for the configured store
    from kickstarter_etl.database.engine import create_store_engine
    engine = create_store_engine()

    # Schema management
    from kickstarter_etl.database.schema import count_existing_tables, create_schema, drop_schema

    # Access models
    from kickstarter_etl.database.models import Kickstart, Product
"""

from kickstarter_etl.database.engine import Base, check_connection, create_store_engine, get_session
from kickstarter_etl.database.schema import count_existing_tables, create_schema, drop_schema

__all__ = [
    "Base",
    "check_connection",
    "create_store_engine",
    "get_session",
    "count_existing_tables",
    "create_schema",
    "drop_schema",
]
