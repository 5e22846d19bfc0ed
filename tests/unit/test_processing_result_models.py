from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime
from pathlib import Path

import pytest

from planner_import.models import (
    CsvFile,
    FileStat,
    FileStatus,
    ImportReport,
    ProcessingResult,
    RowData,
    UserRecord,
    ValidationOutcome,
)


def test_file_status_values():
    assert [s.value for s in FileStatus] == ["pending", "processing", "success", "failed"]


def test_csv_file_counts_come_from_report():
    report = ImportReport(
        accepted=[UserRecord("abc", "secret1", "abc")],
        rows_processed=3,
    )
    f = CsvFile(path=Path("data/a.csv"), name="a.csv", report=report, status=FileStatus.SUCCESS)
    assert f.rows_processed == 3
    assert f.rows_accepted == 1


def test_csv_file_without_report_counts_zero():
    f = CsvFile(path=Path("data/a.csv"), name="a.csv", status=FileStatus.FAILED, error="too large")
    assert f.rows_processed == 0
    assert f.rows_accepted == 0


def test_validation_outcome_accepted_iff_no_errors():
    assert ValidationOutcome(2, warnings=("Row 2: w",)).accepted is True
    assert ValidationOutcome(2, errors=("Row 2: e",)).accepted is False


def test_import_report_rows_accepted_tracks_accepted_list():
    report = ImportReport()
    assert report.rows_accepted == 0
    report.accepted.append(UserRecord("abc", "secret1", "abc"))
    assert report.rows_accepted == 1


def test_row_data_is_frozen():
    row = RowData(row_number=2, values={"username": "abc"})
    with pytest.raises(FrozenInstanceError):
        row.row_number = 3  # type: ignore[misc]


def test_processing_result_optional_fields():
    now = datetime.now(UTC)
    result = ProcessingResult(
        success_files=1, failed_files=0, rows_processed=1, rows_accepted=1,
        users_created=1, users_skipped=0, row_errors=0, row_warnings=1,
        start_time=now, end_time=now, elapsed_seconds=0.0, throughput_rows_per_sec=0.0,
    )
    assert result.file_stats is None
    assert result.error_log_path is None
    stat = FileStat("a.csv", "success", 1, 1, 1, 0, 0.01)
    assert stat.status == FileStatus.SUCCESS.value
