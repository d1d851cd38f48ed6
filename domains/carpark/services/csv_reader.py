"""Streaming CSV reader for car park datasets.

Rows are produced lazily, one at a time, and validated into column values
ready for the ``carparks`` table.
"""

from __future__ import annotations

import csv
import io
import math
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO, Any, Iterator, Union

from domains.carpark.core.constants import CSV_COLUMNS, YES_FLAG
from domains.carpark.core.exceptions import ParseError, RowValidationError, StreamError

CsvSource = Union[str, "os.PathLike[str]", IO[str], IO[bytes]]

SOURCE_ENCODING = "utf-8-sig"
BOM = "\ufeff"
FLOAT_COLUMNS = ("x_coord", "y_coord", "gantry_height")
INT_COLUMNS = ("car_park_decks",)
FLAG_COLUMNS = ("night_parking", "car_park_basement")
TEXT_COLUMNS = ("address", "short_term_parking", "free_parking")
NON_EMPTY_COLUMNS = ("car_park_no", "car_park_type", "type_of_parking_system")


@dataclass(frozen=True)
class CarparkRow:
    """One validated CSV record."""

    line: int
    values: dict[str, Any]
    car_park_type: str
    parking_system_type: str

    @property
    def car_park_no(self) -> str:
        return self.values["car_park_no"]


@contextmanager
def open_source(source: CsvSource) -> Iterator[IO[str]]:
    """Yield a text stream for a path or an already open text/binary stream.

    Paths are opened and closed here; caller-owned streams are left open.
    """
    if isinstance(source, (str, os.PathLike)):
        try:
            stream = open(source, "r", encoding=SOURCE_ENCODING, newline="")
        except OSError as exc:
            raise StreamError(f"Cannot open CSV source {os.fspath(source)!r}: {exc}") from exc
        with stream:
            yield stream
        return

    try:
        is_binary = isinstance(source.read(0), bytes)
    except (OSError, ValueError) as exc:
        raise StreamError(f"CSV source is not readable: {exc}") from exc

    if not is_binary:
        yield source
        return

    wrapper = io.TextIOWrapper(source, encoding=SOURCE_ENCODING, newline="")
    try:
        yield wrapper
    finally:
        wrapper.detach()


def iter_rows(stream: IO[str]) -> Iterator[tuple[int, dict[str, str]]]:
    """Yield ``(line_number, row)`` for every non-blank data line.

    The generator consumes ``stream`` once and cannot be restarted.
    """
    reader = csv.DictReader(stream)
    try:
        fieldnames = reader.fieldnames
        if not fieldnames:
            raise ParseError("CSV source has no header row", line=1)
        reader.fieldnames = [name.lstrip(BOM).strip() for name in fieldnames]
        missing = [column for column in CSV_COLUMNS if column not in reader.fieldnames]
        if missing:
            raise ParseError(f"CSV header is missing columns: {', '.join(missing)}", line=1)

        for row in reader:
            if None in row:
                raise ParseError("Row has more fields than the header", line=reader.line_num)
            short = [column for column in CSV_COLUMNS if row.get(column) is None]
            if short:
                raise ParseError(
                    "Row has fewer fields than the header",
                    line=reader.line_num,
                    column=short[0],
                )
            yield reader.line_num, row
    except csv.Error as exc:
        raise ParseError(f"Malformed CSV: {exc}", line=reader.line_num) from exc
    except UnicodeDecodeError as exc:
        raise StreamError(f"CSV source is not valid UTF-8: {exc}", line=reader.line_num) from exc
    except OSError as exc:
        raise StreamError(f"Failed reading CSV source: {exc}", line=reader.line_num) from exc


def _parse_float(row: dict[str, str], column: str, line: int) -> float:
    raw = row[column]
    try:
        value = float(raw.strip())
    except ValueError:
        raise RowValidationError(column, raw, line=line) from None
    if not math.isfinite(value):
        raise RowValidationError(column, raw, line=line)
    return value


def _parse_int(row: dict[str, str], column: str, line: int) -> int:
    raw = row[column]
    try:
        return int(raw.strip())
    except ValueError:
        raise RowValidationError(column, raw, line=line) from None


def _is_yes(value: str) -> bool:
    return value.strip().upper() == YES_FLAG


def transform_row(row: dict[str, str], line: int) -> CarparkRow:
    """Validate one raw CSV row and convert it to column values."""
    for column in NON_EMPTY_COLUMNS:
        if not row[column].strip():
            raise ParseError("Required value is empty", line=line, column=column)

    values: dict[str, Any] = {"car_park_no": row["car_park_no"].strip()}
    values.update({column: row[column].strip() for column in TEXT_COLUMNS})
    values.update({column: _parse_float(row, column, line) for column in FLOAT_COLUMNS})
    values.update({column: _parse_int(row, column, line) for column in INT_COLUMNS})
    values.update({column: _is_yes(row[column]) for column in FLAG_COLUMNS})

    return CarparkRow(
        line=line,
        values=values,
        car_park_type=row["car_park_type"].strip(),
        parking_system_type=row["type_of_parking_system"].strip(),
    )


def read_carpark_rows(stream: IO[str]) -> Iterator[CarparkRow]:
    """Lazily parse and validate every record in ``stream``."""
    for line, row in iter_rows(stream):
        yield transform_row(row, line)
