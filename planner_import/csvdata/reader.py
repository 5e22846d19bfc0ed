from __future__ import annotations

import csv
import io
import logging
import re
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

"""CSV byte decoding and delimited-record parsing.

The raw upload is decoded as UTF-8, a leading byte-order-mark is dropped and
CRLF / lone CR line endings become LF. The text is then read with pandas
without a header and with every cell kept as the parsed string ("NA", "null"
and friends stay verbatim); the first line with content becomes the header
afterwards.

Malformed lines do not abort the file:
- a line with more fields than the header is skipped and its width recorded
- a line with fewer fields keeps its missing cells as NA
- blank lines and lines whose cells are all empty are dropped

A quoted field that is never closed does abort it (CsvImportError).
"""

__all__ = [
    "CsvData",
    "CsvImportError",
    "decode_csv_bytes",
    "read_csv_text",
]

logger = logging.getLogger(__name__)

BOM = "\ufeff"
EMPTY_LINE_RE = re.compile(r"[\s,]*")


class CsvImportError(Exception):
    """Raised when a CSV file cannot be decoded or parsed at all."""


@dataclass
class CsvData:
    columns: list[str]
    rows: list[dict[str, Any]]  # header -> cell, in file order
    malformed_lines: list[int] = field(default_factory=list)  # field counts of skipped lines


def decode_csv_bytes(data: bytes) -> str:
    """Decode an uploaded buffer to text with LF line endings.

    Raises:
        CsvImportError: If the buffer is not valid UTF-8
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CsvImportError(f"Unable to decode CSV file as UTF-8: {e}") from e
    if text.startswith(BOM):
        text = text[1:]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _is_empty_cell(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return bool(pd.isna(value))


def _check_quoting(text: str) -> None:
    """Raise CsvImportError on quoting the strict csv dialect rejects.

    pandas' python engine reads with the same strict dialect, but with an
    on_bad_lines callable it drops these errors silently together with every
    line after an unterminated quote.
    """
    reader = csv.reader(io.StringIO(text), strict=True)
    try:
        for _ in reader:
            pass
    except csv.Error as e:
        raise CsvImportError(f"CSV parsing error near line {reader.line_num}: {e}") from e


def _drop_leading_empty_lines(text: str) -> str:
    # pandas sizes rows by the first line, so the header has to lead
    lines = text.split("\n")
    start = 0
    while start < len(lines) and EMPTY_LINE_RE.fullmatch(lines[start]):
        start += 1
    return "\n".join(lines[start:])


def read_csv_text(text: str) -> CsvData:
    """Parse CSV text whose first line with content is the header.

    Steps:
    1. Reject unterminated quoted fields
    2. Read all lines headerless, one object column per header field
    3. Take the first line as header (as written, untrimmed)
    4. Build one dict per remaining line, skipping lines with no content

    Raises:
        CsvImportError: On the parser's non-recoverable errors (e.g. an
            unterminated quoted field)
    """
    _check_quoting(text)
    text = _drop_leading_empty_lines(text)
    malformed: list[int] = []

    def _skip_bad_line(bad_line: list[str]) -> None:
        if not all(_is_empty_cell(v) for v in bad_line):
            malformed.append(len(bad_line))
        return None

    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=",",
            header=None,
            dtype=object,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_skip_bad_line,
        )
    except pd.errors.EmptyDataError:
        return CsvData(columns=[], rows=[])
    except pd.errors.ParserError as e:
        raise CsvImportError(f"CSV parsing error: {e}") from e

    if df.shape[0] == 0:
        return CsvData(columns=[], rows=[], malformed_lines=malformed)

    columns = ["" if _is_empty_cell(c) else str(c) for c in df.iloc[0].tolist()]
    rows: list[dict[str, Any]] = []
    for values in df.iloc[1:].itertuples(index=False, name=None):
        if all(_is_empty_cell(v) for v in values):
            continue
        row: dict[str, Any] = {}
        for column, value in zip(columns, values):
            row.setdefault(column, value)  # repeated header: left-most column wins
        rows.append(row)

    logger.debug(
        "parsed csv columns=%s rows=%d malformed_lines=%d", columns, len(rows), len(malformed)
    )
    return CsvData(columns=columns, rows=rows, malformed_lines=malformed)
