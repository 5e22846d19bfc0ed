from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

"""File-level progress for a batch import run.

The bar advances once per CSV file and carries the run's ok / failed / created
counters as its postfix. Without a TTY (CI, redirected output) nothing is
drawn; the counters are still kept.
"""

__all__ = [
    "ImportProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return True if stdout is a TTY and a bar may be drawn."""
    return sys.stdout.isatty()


class ImportProgress:
    """Progress bar plus running counters for one import run."""

    def __init__(
        self,
        total_files: int,
        *,
        description: str = "Importing users",
        enabled: bool | None = None,
    ) -> None:
        self.total_files = total_files
        self.description = description
        self.ok = 0
        self.failed = 0
        self.created = 0
        self.enabled = is_tty_enabled() if enabled is None else enabled
        self.bar: Any | None = None
        if self.enabled and total_files > 0:
            self.bar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                ncols=80,
                ascii=True,
            )

    @property
    def done(self) -> int:
        return self.ok + self.failed

    def begin(self, file_path: Path) -> None:
        if self.bar is not None:
            self.bar.set_description_str(f"{self.description} ({file_path.name})")

    def record(self, succeeded: bool, users_created: int = 0) -> None:
        """Count one finished file and advance the bar."""
        if succeeded:
            self.ok += 1
        else:
            self.failed += 1
        self.created += users_created
        if self.bar is not None:
            self.bar.set_description_str(self.description)
            self.bar.set_postfix(ok=self.ok, failed=self.failed, created=self.created, refresh=False)
            self.bar.update(1)

    def close(self) -> None:
        if self.bar is not None:
            self.bar.close()
            self.bar = None

    def __enter__(self) -> ImportProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
