from __future__ import annotations

from dataclasses import dataclass, field

from .user_record import UserRecord

"""Validation outcome and import report models.

ValidationOutcome is the per-row verdict of the validator; ImportReport is the
aggregate that parse_users_csv hands back to its caller. The caller owns the
report once returned.
"""

__all__ = [
    "ImportReport",
    "ValidationOutcome",
]


@dataclass(frozen=True)
class ValidationOutcome:
    """Per-row verdict: ordered errors (reject) and warnings (accept, flag).

    A row is accepted iff it produced no errors; warnings never block it.
    """
    row_number: int
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def accepted(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ImportReport:
    """Aggregated result of one CSV import pass.

    Attributes:
        accepted: User records built from accepted rows, in row order
        errors: Row-rejecting and file-level error messages, in row order
        warnings: Non-fatal messages plus the trailing summary line
        rows_processed: Number of data rows read (header excluded)
        rejected: Validation outcomes of the rejected rows, in row order
    """
    accepted: list[UserRecord] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    rows_processed: int = 0
    rejected: list[ValidationOutcome] = field(default_factory=list)

    @property
    def rows_accepted(self) -> int:
        return len(self.accepted)
