from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..csvdata.reader import CsvImportError
from ..db.batch_insert import BatchInsertError
from ..db.users import persist_users
from ..importer.pipeline import NO_RECORDS_ERROR, parse_users_csv
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ImportConfig
from ..models.csv_file import CsvFile, FileStatus
from ..models.error_record import FILE_LEVEL_ROW
from ..models.import_report import ImportReport
from ..models.processing_result import FileStat, ProcessingResult
from .progress import ImportProgress

"""Service orchestration for batch CSV user imports.

process_all scans the configured directory for .csv files and imports each one
inside its own transaction:

    BEGIN -> upload rules -> parse_users_csv -> persist_users -> COMMIT

Any failure rolls the file back, is written to the error log with row=-1 and
processing continues with the next file. Rejected rows do not fail a file;
they are written to the error log with their row number.
"""

logger = logging.getLogger(__name__)

CSV_SUFFIX = ".csv"


class ProcessingError(Exception):
    """Fatal error that prevents a batch run from starting."""


class FileRejectedError(Exception):
    """Raised when a file breaks the upload rules (extension or size)."""


def check_upload(path: Path, size: int, max_bytes: int) -> None:
    """Apply the planner's upload rules to one file.

    Raises:
        FileRejectedError: If the extension is not .csv or the file is too large
    """
    if path.suffix.lower() != CSV_SUFFIX:
        raise FileRejectedError(
            f"Invalid file extension '{path.suffix}'. Please upload a file with .csv extension."
        )
    if size > max_bytes:
        raise FileRejectedError(f"File is too large ({size} bytes, limit {max_bytes} bytes)")


def scan_csv_files(directory: Path) -> list[Path]:
    """Scan directory for .csv files (non-recursive), sorted by name.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == CSV_SUFFIX
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def process_all(
    config: ImportConfig,
    cursor: Any = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Import every CSV file of the configured directory.

    Args:
        config: Import configuration
        cursor: Database cursor (None = mock mode)
        error_log: Error log buffer; a fresh one writing to ./logs by default

    Returns:
        ProcessingResult with aggregated metrics and file stats

    Raises:
        ProcessingError: For fatal errors that prevent processing
    """
    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer()

    file_paths = scan_csv_files(Path(config.source_directory))

    results: list[CsvFile] = []
    with ImportProgress(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.begin(file_path)
            file_result = _process_single_file(file_path, config, cursor, error_log)
            progress.record(file_result.status == FileStatus.SUCCESS, file_result.users_created)
            results.append(file_result)

    error_log_path: Path | None = None
    try:
        error_log_path = error_log.flush()
    except OSError as e:
        logger.warning(f"could not write error log: {e}")

    reports = [r.report for r in results if r.report is not None]
    rows_processed = sum(r.rows_processed for r in results)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = rows_processed / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=progress.ok,
        failed_files=progress.failed,
        rows_processed=rows_processed,
        rows_accepted=sum(r.rows_accepted for r in results),
        users_created=progress.created,
        users_skipped=sum(r.users_skipped for r in results),
        row_errors=sum(len(report.errors) for report in reports),
        row_warnings=sum(len(report.warnings) for report in reports),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        file_stats=[_file_stat(r) for r in results],
        error_log_path=str(error_log_path) if error_log_path is not None else None,
    )


def _file_stat(result: CsvFile) -> FileStat:
    elapsed = 0.0
    if result.start_time is not None and result.end_time is not None:
        elapsed = (result.end_time - result.start_time).total_seconds()
    return FileStat(
        file_name=result.name,
        status=result.status.value,
        rows_processed=result.rows_processed,
        rows_accepted=result.rows_accepted,
        users_created=result.users_created,
        users_skipped=result.users_skipped,
        elapsed_seconds=elapsed,
    )


def _log_report(file_name: str, report: ImportReport, error_log: ErrorLogBuffer) -> None:
    for outcome in report.rejected:
        for message in outcome.errors:
            error_log.append(
                ErrorRecord.create(
                    file=file_name,
                    row=outcome.row_number,
                    error_type="ROW_VALIDATION_ERROR",
                    message=message,
                )
            )
    for message in report.errors:
        logger.warning(f"{file_name}: {message}")
    for message in report.warnings:
        logger.info(f"{file_name}: {message}")


def _rollback(cursor: Any, file_name: str, error_log: ErrorLogBuffer) -> None:
    if cursor is None:
        return
    try:
        cursor.execute("ROLLBACK")
    except Exception as e:
        # keep the original failure; only record the rollback problem
        error_log.append(
            ErrorRecord.create(
                file=file_name,
                row=FILE_LEVEL_ROW,
                error_type="TRANSACTION_ROLLBACK_ERROR",
                message=str(e),
            )
        )


def _failed(
    file_path: Path,
    start_time: datetime,
    error_log: ErrorLogBuffer,
    error_type: str,
    message: str,
    report: ImportReport | None = None,
) -> CsvFile:
    error_log.append(
        ErrorRecord.create(
            file=file_path.name,
            row=FILE_LEVEL_ROW,
            error_type=error_type,
            message=message,
        )
    )
    logger.error(f"{file_path.name}: {message}")
    return CsvFile(
        path=file_path,
        name=file_path.name,
        report=report,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error=message,
    )


def _process_single_file(
    file_path: Path,
    config: ImportConfig,
    cursor: Any,
    error_log: ErrorLogBuffer,
) -> CsvFile:
    """Import one CSV file inside its own transaction.

    On success the transaction is committed; on any failure it is rolled back
    and the file is reported FAILED so that processing continues with the
    next file.
    """
    start_time = datetime.now(UTC)
    name = file_path.name

    if cursor is not None:
        try:
            cursor.execute("BEGIN")
        except Exception as e:
            return _failed(
                file_path, start_time, error_log, "TRANSACTION_BEGIN_ERROR",
                f"Failed to begin transaction: {e}",
            )

    report: ImportReport | None = None
    try:
        check_upload(file_path, file_path.stat().st_size, config.max_file_size_bytes)
        report = parse_users_csv(file_path.read_bytes())
        _log_report(name, report, error_log)

        if not report.accepted:
            _rollback(cursor, name, error_log)
            reason = report.errors[0] if report.rows_processed == 0 else NO_RECORDS_ERROR
            return _failed(file_path, start_time, error_log, "NO_VALID_RECORDS", reason, report)

        persisted = persist_users(cursor, config.users_table, report.accepted)
        for skipped in persisted.skipped:
            logger.info(f"{name}: skipped '{skipped.username}': {skipped.reason}")

        if cursor is not None:
            try:
                cursor.execute("COMMIT")
            except Exception as e:
                _rollback(cursor, name, error_log)
                return _failed(
                    file_path, start_time, error_log, "TRANSACTION_COMMIT_ERROR",
                    f"commit failed: {e}", report,
                )

        logger.info(
            f"{name}: {len(persisted.created)} users created, {len(persisted.skipped)} skipped"
        )
        return CsvFile(
            path=file_path,
            name=name,
            report=report,
            start_time=start_time,
            end_time=datetime.now(UTC),
            status=FileStatus.SUCCESS,
            users_created=len(persisted.created),
            users_skipped=len(persisted.skipped),
        )

    except FileRejectedError as e:
        _rollback(cursor, name, error_log)
        return _failed(file_path, start_time, error_log, "FILE_REJECTED", str(e))
    except CsvImportError as e:
        _rollback(cursor, name, error_log)
        return _failed(file_path, start_time, error_log, "CSV_PARSE_ERROR", str(e))
    except BatchInsertError as e:
        _rollback(cursor, name, error_log)
        return _failed(file_path, start_time, error_log, "DATABASE_INSERT_ERROR", str(e), report)
    except Exception as e:
        _rollback(cursor, name, error_log)
        return _failed(file_path, start_time, error_log, "UNEXPECTED_ERROR", str(e), report)
