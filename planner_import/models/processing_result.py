from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models for the batch CSV importer.

ProcessingResult aggregates every file of one run and feeds the SUMMARY line;
FileStat keeps the per-file numbers.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics (internal helper for ProcessingResult)."""
    file_name: str
    status: str  # success/failed
    rows_processed: int
    rows_accepted: int
    users_created: int
    users_skipped: int
    elapsed_seconds: float


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results and summary output for one batch run."""
    success_files: int
    failed_files: int
    rows_processed: int  # data rows read across all parsed files
    rows_accepted: int  # rows that passed validation
    users_created: int  # rows actually inserted (or counted in mock mode)
    users_skipped: int  # accepted rows whose username already existed
    row_errors: int  # rejected-row messages across files
    row_warnings: int  # warnings across files, summary lines included
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float  # rows_processed / elapsed
    file_stats: list[FileStat] | None = None
    error_log_path: str | None = None  # set when the run wrote error records
