from __future__ import annotations

import logging

from ..csvdata.reader import CsvImportError, decode_csv_bytes, read_csv_text
from ..models.import_report import ImportReport, ValidationOutcome
from ..models.row_data import RowData
from ..models.user_record import UserRecord
from .normalizer import normalize_row
from .record_builder import build_user_record
from .validator import validate_row

"""End-to-end CSV user import pass.

parse_users_csv drives one synchronous pass over an uploaded buffer:

    bytes -> decode / BOM strip / LF line endings -> CSV parse
          -> per row: normalize -> validate -> build record (if accepted)
          -> ImportReport

Row-level problems never interrupt the pass; they end up as messages in the
report. Only an undecodable buffer or a non-recoverable parser error raises
CsvImportError.
"""

__all__ = [
    "EMPTY_FILE_ERROR",
    "NO_RECORDS_ERROR",
    "CsvImportError",
    "parse_users_csv",
]

logger = logging.getLogger(__name__)

EMPTY_FILE_ERROR = "CSV file is empty or does not contain valid data"
NO_RECORDS_ERROR = "No valid user records found in CSV"

# header occupies row 1
FIRST_DATA_ROW = 2


def _summary_warning(rows_processed: int, rows_accepted: int) -> str:
    return f"Processed {rows_processed} rows, found {rows_accepted} valid user records."


def parse_users_csv(data: bytes) -> ImportReport:
    """Parse and validate a CSV of user accounts.

    Args:
        data: Raw file contents, first line = headers

    Returns:
        ImportReport with accepted records and row-ordered messages

    Raises:
        CsvImportError: If the buffer is not UTF-8 or cannot be parsed at all
    """
    text = decode_csv_bytes(data)
    if not text.strip():
        return ImportReport(errors=[EMPTY_FILE_ERROR])

    csv_data = read_csv_text(text)
    if not csv_data.columns:
        return ImportReport(errors=[EMPTY_FILE_ERROR])

    accepted: list[UserRecord] = []
    errors: list[str] = []
    warnings: list[str] = []
    rejected: list[ValidationOutcome] = []

    expected_fields = len(csv_data.columns)
    for width in csv_data.malformed_lines:
        warnings.append(
            f"Skipped malformed line: expected {expected_fields} fields, saw {width}"
        )

    for index, raw in enumerate(csv_data.rows):
        row = RowData(
            row_number=index + FIRST_DATA_ROW,
            values=normalize_row(raw),
        )
        outcome = validate_row(row.values, row.row_number)
        errors.extend(outcome.errors)
        warnings.extend(outcome.warnings)
        if outcome.accepted:
            accepted.append(build_user_record(row.values))
        else:
            rejected.append(outcome)
            logger.debug("row=%d rejected errors=%d", row.row_number, len(outcome.errors))

    rows_processed = len(csv_data.rows)
    if rows_processed == 0:
        errors.append(NO_RECORDS_ERROR)
    else:
        warnings.append(_summary_warning(rows_processed, len(accepted)))

    return ImportReport(
        accepted=accepted,
        errors=errors,
        warnings=warnings,
        rows_processed=rows_processed,
        rejected=rejected,
    )
