from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .import_report import ImportReport

"""CsvFile domain model and FileStatus enum.

CsvFile is the processing context for a single CSV file in a batch run,
tracking its status from discovery through commit or rollback.
"""


class FileStatus(Enum):
    """Status of a CsvFile.

    State transitions: pending -> processing -> (success | failed)
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class CsvFile:
    """Processing context and outcome for one CSV file."""
    path: Path
    name: str
    report: ImportReport | None = None  # None when the file never parsed
    start_time: datetime | None = None  # UTC
    end_time: datetime | None = None  # UTC
    status: FileStatus = FileStatus.PENDING
    users_created: int = 0
    users_skipped: int = 0
    error: str | None = None  # Failure reason summary

    @property
    def rows_processed(self) -> int:
        return self.report.rows_processed if self.report is not None else 0

    @property
    def rows_accepted(self) -> int:
        return self.report.rows_accepted if self.report is not None else 0
