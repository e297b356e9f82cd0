"""
Kickstarter ETL CSV Reader

Decodes the Kickstarter projects CSV into typed source records using Polars.
"""

from __future__ import annotations

from typing import BinaryIO

import polars as pl

from kickstarter_etl.core.exceptions import DecodeError
from kickstarter_etl.core.logging import get_logger
from kickstarter_etl.etl.records import SourceRecord

logger = get_logger(__name__)

# Fixed positional layout of ks-projects-201801.csv
COLUMNS = (
    "id",
    "name",
    "category",
    "main_category",
    "currency",
    "deadline",
    "goal",
    "launched",
    "pledged",
    "state",
    "backers",
    "country",
    "usd_pledged",
    "usd_pledged_real",
    "usd_goal_real",
)
COLUMN_INDEX = {name: index for index, name in enumerate(COLUMNS)}

STRING_FIELDS = ("name", "category", "main_category", "currency", "deadline", "launched", "state", "country")

# Rows whose value here does not parse are dropped instead of failing the decode
LENIENT_FIELD = "usd_pledged"


class CSVReader:
    """Reads Kickstarter campaign rows from a CSV byte stream"""

    def __init__(self, stream: BinaryIO, source_name: str = "<stream>"):
        """
        Initialize CSV reader.

        Args:
            stream: Readable binary stream holding UTF-8 CSV text with a header row
            source_name: Name used in log messages
        """
        self.stream = stream
        self.source_name = source_name
        self.rows_read = 0
        self.rows_skipped = 0

    def read_records(self) -> list[SourceRecord]:
        """
        Decode every data row of the stream.

        The stream is consumed once; calling this again yields nothing new.

        Returns:
            Source records in input order

        Raises:
            DecodeError: If the header cannot be read or a mandatory field does not parse
        """
        df = self._read_frame()
        logger.info(f"Decoding {len(df):,} rows from {self.source_name}")

        records = []
        for row_number, row in enumerate(df.iter_rows(), start=1):
            self.rows_read += 1
            record = self._decode_row(row_number, row)
            if record is None:
                self.rows_skipped += 1
                continue
            records.append(record)

        logger.info(
            f"Decoded {len(records):,} records from {self.source_name} "
            f"({self.rows_skipped:,} rows skipped for unparseable {LENIENT_FIELD})"
        )
        return records

    def _read_frame(self) -> pl.DataFrame:
        """Read the whole stream as string columns, header row excluded."""
        data = self.stream.read()
        if not data:
            raise DecodeError(f"reading header of {self.source_name}: empty input")

        try:
            df = pl.read_csv(
                data,
                has_header=True,
                infer_schema_length=0,  # Read everything as strings
                encoding="utf8",
            )
        except pl.exceptions.PolarsError as e:
            raise DecodeError(f"reading CSV {self.source_name}: {e}") from e

        if len(df.columns) < len(COLUMNS):
            raise DecodeError(
                f"reading header of {self.source_name}: "
                f"expected {len(COLUMNS)} columns, found {len(df.columns)}"
            )
        return df

    def _decode_row(self, row_number: int, row: tuple) -> SourceRecord | None:
        """
        Decode one row.

        Fields are parsed in column order, so a strict failure before the
        lenient column aborts the decode while one after it does not.

        Returns:
            SourceRecord, or None if the lenient field does not parse
        """
        # Polars pads short rows with nulls; an absent last field means the row was cut short
        if row[COLUMN_INDEX[COLUMNS[-1]]] is None:
            raise DecodeError(f"row {row_number}: expected {len(COLUMNS)} fields, {COLUMNS[-1]} is missing")

        values = {name: row[COLUMN_INDEX[name]] or "" for name in STRING_FIELDS}

        values["id"] = _parse_int(row_number, "id", row[COLUMN_INDEX["id"]])
        values["goal"] = _parse_float(row_number, "goal", row[COLUMN_INDEX["goal"]])
        values["pledged"] = _parse_float(row_number, "pledged", row[COLUMN_INDEX["pledged"]])
        values["backers"] = _parse_int(row_number, "backers", row[COLUMN_INDEX["backers"]])

        raw = row[COLUMN_INDEX[LENIENT_FIELD]]
        try:
            values[LENIENT_FIELD] = float(_numeric_text(raw))
        except (TypeError, ValueError):
            logger.debug(f"Row {row_number}: skipping, {LENIENT_FIELD} is {raw!r}")
            return None

        for name in ("usd_pledged_real", "usd_goal_real"):
            values[name] = _parse_float(row_number, name, row[COLUMN_INDEX[name]])

        return SourceRecord(**values)


def _numeric_text(raw: str | None) -> str | None:
    """Reject the padding and digit separators int() and float() would otherwise accept."""
    if raw is not None and (raw != raw.strip() or "_" in raw):
        raise ValueError("surrounding whitespace or '_' in number")
    return raw


def _parse_int(row_number: int, name: str, raw: str | None) -> int:
    try:
        return int(_numeric_text(raw))
    except (TypeError, ValueError) as e:
        raise DecodeError(f"row {row_number}: parsing {name} {raw!r}: {e}") from e


def _parse_float(row_number: int, name: str, raw: str | None) -> float:
    try:
        return float(_numeric_text(raw))
    except (TypeError, ValueError) as e:
        raise DecodeError(f"row {row_number}: parsing {name} {raw!r}: {e}") from e
