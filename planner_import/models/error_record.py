from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""One entry of the importer's JSON Lines error log."""

__all__ = [
    "FILE_LEVEL_ROW",
    "ErrorRecord",
]

# row value for failures of a whole file
FILE_LEVEL_ROW = -1


@dataclass(frozen=True)
class ErrorRecord:
    """A rejected row or a failed file.

    Attributes:
        timestamp: UTC time, ISO 8601 with millisecond precision and a 'Z' suffix
        file: CSV file name (no directory)
        row: Line number of the rejected row (header = 1), or FILE_LEVEL_ROW
        error_type: ROW_VALIDATION_ERROR, FILE_REJECTED, CSV_PARSE_ERROR, ...
        message: Validator message or exception text
    """
    timestamp: str
    file: str
    row: int
    error_type: str
    message: str

    @classmethod
    def create(cls, file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        stamp = datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return cls(timestamp=stamp, file=file, row=row, error_type=error_type, message=message)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, separators=(",", ":"))
