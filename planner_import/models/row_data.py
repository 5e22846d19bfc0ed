from __future__ import annotations

from dataclasses import dataclass

"""RowData model for the CSV user importer.

RowData carries one data line of the CSV through the pipeline: the
spreadsheet row number and the canonical values after header normalization.
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single CSV data row after normalization.

    The row_number is the spreadsheet line number: the header is row 1, so the
    first data row is row 2.
    """
    row_number: int  # header = 1, first data row = 2
    values: dict[str, str]  # canonical field -> trimmed value
