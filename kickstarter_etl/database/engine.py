"""
Kickstarter ETL Database Engine and Session Management

Usage:
    from kickstarter_etl.database.engine import create_store_engine, get_session

    engine = create_store_engine("sqlite:///kickstarter.db")
    with get_session(engine)() as session:
        session.execute(text("SELECT 1"))
"""
from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, NoSuchModuleError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from kickstarter_etl.core.config import settings
from kickstarter_etl.core.exceptions import ConfigError
from kickstarter_etl.core.logging import get_logger

logger = get_logger(__name__)

# Base class for all models
Base = declarative_base()


def create_store_engine(database_url: str | None = None) -> Engine:
    """
    Create a SQLAlchemy engine for the target store.

    Args:
        database_url: Connection URL (default from settings)

    Returns:
        Configured SQLAlchemy Engine

    Raises:
        ConfigError: If the URL is malformed or its driver is not installed
    """
    url = database_url or settings.database_url

    engine_kwargs = {
        "pool_pre_ping": True,  # Verify connections on checkout (handles DB restarts)
        "echo": False,  # Never echo SQL to stdout; use sqlalchemy.engine logger instead
    }
    if not url.startswith("sqlite"):
        engine_kwargs["pool_recycle"] = settings.database_pool_recycle

    try:
        engine = create_engine(url, **engine_kwargs)
    except (ArgumentError, NoSuchModuleError, ImportError) as e:
        raise ConfigError(f"opening store {url}: {e}") from e

    logger.debug(f"Store engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine


def check_connection(engine: Engine) -> None:
    """
    Open and close one connection to prove the store is reachable.

    Raises:
        ConfigError: If no connection can be established
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise ConfigError(f"connecting to store: {e}") from e


def get_session(engine: Engine) -> sessionmaker:
    """
    Get a session factory bound to the given engine.

    Args:
        engine: Store engine

    Returns:
        sessionmaker bound to the engine
    """
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
