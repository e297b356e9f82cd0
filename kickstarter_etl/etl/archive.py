"""
Kickstarter ETL Archive Source

Locates the projects CSV inside the downloaded zip archive.
"""

from __future__ import annotations

import zipfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from kickstarter_etl.core.exceptions import ConfigError, DecodeError
from kickstarter_etl.core.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def open_archive_entry(archive_path: str | Path, entry_name: str) -> Generator[BinaryIO, None, None]:
    """
    Open one named entry of a zip archive for reading.

    Every entry is scanned; others are ignored.

    Args:
        archive_path: Path to the zip archive
        entry_name: Name of the CSV entry inside the archive

    Yields:
        Binary stream of the entry

    Raises:
        ConfigError: If the archive cannot be opened
        DecodeError: If no entry has the expected name or it cannot be read
    """
    try:
        archive = zipfile.ZipFile(archive_path)
    except (OSError, zipfile.BadZipFile) as e:
        raise ConfigError(f"reading zip file {archive_path}: {e}") from e

    with archive:
        names = archive.namelist()
        if entry_name not in names:
            raise DecodeError(
                f"entry {entry_name} not found in {archive_path} (entries: {', '.join(names) or 'none'})"
            )

        logger.info(f"Extracting data from {entry_name}")
        try:
            stream = archive.open(entry_name)
        except (OSError, zipfile.BadZipFile, RuntimeError) as e:
            raise DecodeError(f"reading data from {archive_path}: {e}") from e

        with stream:
            yield stream
