"""
Kickstarter ETL Orchestrator

Coordinates the complete ETL pipeline:
Preflight check → Read → Transform → Create schema → Write
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from kickstarter_etl.core.config import settings
from kickstarter_etl.core.exceptions import KickstarterETLError
from kickstarter_etl.core.logging import get_logger
from kickstarter_etl.database.engine import get_session
from kickstarter_etl.database.schema import count_existing_tables, create_schema, drop_schema
from kickstarter_etl.etl.archive import open_archive_entry
from kickstarter_etl.etl.reader import CSVReader
from kickstarter_etl.etl.transformer import DataTransformer
from kickstarter_etl.etl.writer import (
    AlwaysInsert,
    DatabaseWriter,
    DimensionResolver,
    ProgressCallback,
    StatementUnitOfWork,
    UnitOfWork,
    percent_complete,
)

logger = get_logger(__name__)


class ETLStatus:
    """Track ETL job status"""

    def __init__(self, job_id: str):
        self.job_id = job_id
        self.status = "pending"  # pending, in_progress, completed, skipped, failed
        self.started_at = None
        self.completed_at = None
        self.error_message = None
        self.message = None

        # Preflight
        self.existing_tables = 0

        # Progress tracking
        self.rows_skipped = 0
        self.total_records = 0
        self.records_loaded = 0

    @property
    def percent_complete(self) -> int:
        return percent_complete(self.records_loaded, self.total_records)

    def to_dict(self) -> dict:
        """Convert status to dictionary"""
        return {
            "job_id": self.job_id,
            "status": self.status,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "error_message": self.error_message,
            "message": self.message,
            "existing_tables": self.existing_tables,
            "progress": {
                "rows_skipped": self.rows_skipped,
                "total_records": self.total_records,
                "records_loaded": self.records_loaded,
                "percent_complete": self.percent_complete,
            },
        }


class ETLLoader:
    """Main ETL orchestrator"""

    def __init__(
        self,
        engine: Engine,
        schema: str | None = None,
        resolver_factory: Callable[[], DimensionResolver] = AlwaysInsert,
        unit_of_work_factory: Callable[[Session], UnitOfWork] = StatementUnitOfWork,
    ):
        """
        Initialize ETL loader.

        Args:
            engine: Store engine
            schema: Schema checked by the preflight count (None = connection default)
            resolver_factory: Builds a fresh dimension strategy for every load
            unit_of_work_factory: Builds the writer's commit strategy from its session
        """
        self.engine = engine
        self.schema = schema
        self.resolver_factory = resolver_factory
        self.unit_of_work_factory = unit_of_work_factory
        self.transformer = DataTransformer()

    def run(
        self,
        archive_path: str | Path | None = None,
        entry_name: str | None = None,
        job_id: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> ETLStatus:
        """
        Load the archive into an empty store.

        Args:
            archive_path: Zip archive (default from settings)
            entry_name: CSV entry inside the archive (default from settings)
            job_id: Optional job identifier
            progress: Called with (processed, total) after each record

        Returns:
            ETLStatus; "skipped" when the store already has tables

        Raises:
            DecodeError: If the archive entry cannot be decoded
            StoreError: If a metadata query, DDL or insert fails
            ConfigError: If the archive cannot be opened
        """
        archive_path = archive_path or settings.data_archive_path
        entry_name = entry_name or settings.data_archive_entry
        status = self._start(job_id)

        if not self.preflight(status):
            return status

        try:
            with open_archive_entry(archive_path, entry_name) as stream:
                self._load(stream, entry_name, status, progress)
        except KickstarterETLError as e:
            self._fail(status, e)
            raise

        return self._complete(status)

    def run_stream(
        self,
        stream: BinaryIO,
        source_name: str = "<stream>",
        job_id: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> ETLStatus:
        """Same as run(), reading CSV bytes from an already open stream."""
        status = self._start(job_id)

        if not self.preflight(status):
            return status

        try:
            self._load(stream, source_name, status, progress)
        except KickstarterETLError as e:
            self._fail(status, e)
            raise

        return self._complete(status)

    def preflight(self, status: ETLStatus) -> bool:
        """
        Check the store is empty.

        The writer has no merge logic, so loading twice would duplicate rows
        or violate the unique kickstarter_id.

        Returns:
            True if the load may proceed
        """
        try:
            status.existing_tables = count_existing_tables(self.engine, self.schema)
        except KickstarterETLError as e:
            self._fail(status, e)
            raise

        if status.existing_tables == 0:
            return True

        status.status = "skipped"
        status.message = (
            f"Database is not empty (it has {status.existing_tables} tables). "
            "Please delete all tables or run the program with --delete"
        )
        status.completed_at = datetime.now()
        logger.warning(status.message)
        return False

    def reset(self) -> None:
        """Drop every kickstarter table."""
        drop_schema(self.engine)

    def _load(
        self,
        stream: BinaryIO,
        source_name: str,
        status: ETLStatus,
        progress: ProgressCallback | None,
    ) -> None:
        reader = CSVReader(stream, source_name)
        records = reader.read_records()
        status.rows_skipped = reader.rows_skipped

        logger.info("Transforming data")
        kickstarts = self.transformer.transform(records)
        status.total_records = len(kickstarts)

        logger.info("Creating tables")
        create_schema(self.engine)

        def on_progress(processed: int, total: int) -> None:
            status.records_loaded = processed
            if progress is not None:
                progress(processed, total)

        logger.info("Loading data")
        with get_session(self.engine)() as session:
            writer = DatabaseWriter(
                session,
                resolver=self.resolver_factory(),
                unit_of_work=self.unit_of_work_factory(session),
            )
            writer.write_all(kickstarts, progress=on_progress)

    @staticmethod
    def _start(job_id: str | None) -> ETLStatus:
        if job_id is None:
            job_id = f"load_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        status = ETLStatus(job_id)
        status.status = "in_progress"
        status.started_at = datetime.now()
        logger.info(f"Starting ETL job {job_id}")
        return status

    @staticmethod
    def _fail(status: ETLStatus, error: Exception) -> None:
        logger.error(f"ETL job {status.job_id} failed: {error}")
        status.status = "failed"
        status.error_message = str(error)
        status.completed_at = datetime.now()

    @staticmethod
    def _complete(status: ETLStatus) -> ETLStatus:
        status.status = "completed"
        status.completed_at = datetime.now()
        duration = (status.completed_at - status.started_at).total_seconds()
        logger.info(
            f"ETL job {status.job_id} completed successfully in {duration:.2f}s: "
            f"{status.records_loaded:,} kickstarts, {status.rows_skipped:,} rows skipped"
        )
        return status
