from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Run-scoped error log.

Rejected rows and failed files are collected while a run walks its CSV files
and written once at the end, one JSON object per line, to
logs/errors-YYYYMMDD-HHMMSS.log (UTC). A clean run leaves no file behind.
"""

__all__ = [
    "ErrorLogBuffer",
    "ErrorRecord",
]

LOGS_DIR = Path("logs")
LOG_NAME_FORMAT = "errors-%Y%m%d-%H%M%S.log"


class ErrorLogBuffer:
    """Collects the ErrorRecords of one run; flush() appends them to disk.

    The file name is fixed on first use so that repeated flushes of a run
    land in the same file. Serial use only.
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self.logs_dir = LOGS_DIR if logs_dir is None else logs_dir
        self._pending: list[ErrorRecord] = []
        self._path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._path is None:
            self._path = self.logs_dir / datetime.now(UTC).strftime(LOG_NAME_FORMAT)
        return self._path

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Write pending records and clear them.

        Returns:
            The log file path, or None when nothing was pending
        """
        if not self._pending:
            return None
        path = self.file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = "".join(f"{record.to_json_line()}\n" for record in self._pending)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(payload)
        self._pending.clear()
        return path
