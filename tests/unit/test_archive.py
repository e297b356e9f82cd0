"""
Unit tests for the zip archive source
"""
import zipfile

import pytest

from kickstarter_etl.core.exceptions import ConfigError, DecodeError
from kickstarter_etl.etl.archive import open_archive_entry
from tests.unit.csv_factory import ENTRY_NAME


def write_archive(path, entries: dict[str, bytes]):
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return path


class TestOpenArchiveEntry:
    """Test entry lookup"""

    def test_reads_expected_entry(self, tmp_path):
        path = write_archive(tmp_path / "data.zip", {ENTRY_NAME: b"header\n"})

        with open_archive_entry(path, ENTRY_NAME) as stream:
            assert stream.read() == b"header\n"

    def test_entry_after_other_entries(self, tmp_path):
        """Test every entry is scanned, not only the first"""
        path = write_archive(
            tmp_path / "data.zip",
            {"README.txt": b"readme", "__MACOSX/._x": b"", ENTRY_NAME: b"expected"},
        )

        with open_archive_entry(path, ENTRY_NAME) as stream:
            assert stream.read() == b"expected"

    def test_missing_entry(self, tmp_path):
        path = write_archive(tmp_path / "data.zip", {"other.csv": b"x"})

        with pytest.raises(DecodeError, match="entries: other.csv"):
            with open_archive_entry(path, ENTRY_NAME):
                pass

    def test_empty_archive(self, tmp_path):
        path = write_archive(tmp_path / "data.zip", {})

        with pytest.raises(DecodeError, match="entries: none"):
            with open_archive_entry(path, ENTRY_NAME):
                pass

    def test_missing_archive(self, tmp_path):
        with pytest.raises(ConfigError, match="reading zip file"):
            with open_archive_entry(tmp_path / "nope.zip", ENTRY_NAME):
                pass

    def test_not_a_zip_file(self, tmp_path):
        path = tmp_path / "data.zip"
        path.write_text("plain text")

        with pytest.raises(ConfigError):
            with open_archive_entry(path, ENTRY_NAME):
                pass
