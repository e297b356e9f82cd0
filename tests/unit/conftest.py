"""
Pytest configuration - file-backed SQLite stores, no external database required
"""
import zipfile
from pathlib import Path

import pytest

from kickstarter_etl.database.engine import create_store_engine
from tests.unit.csv_factory import ENTRY_NAME, UNPARSEABLE_USD_PLEDGED_ROW, VALID_ROW, make_csv


@pytest.fixture
def store_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'kickstarter.db'}"


@pytest.fixture
def store_engine(store_url: str):
    """Empty SQLite store"""
    engine = create_store_engine(store_url)
    yield engine
    engine.dispose()


@pytest.fixture
def archive_path(tmp_path: Path) -> Path:
    """Zip archive holding the two-row CSV (second row has an unparseable usd_pledged)"""
    path = tmp_path / "ks-projects-201801.csv.zip"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr(ENTRY_NAME, make_csv(VALID_ROW, UNPARSEABLE_USD_PLEDGED_ROW))
    return path
