from __future__ import annotations

import re
from collections.abc import Mapping

from ..models.import_report import ValidationOutcome

"""Per-row validation of canonical user rows.

All rules are evaluated in a fixed order and none short-circuits the others,
so one row may yield several messages. Errors reject the row; warnings only
flag it. Every message starts with "Row {n}:" and is meant to be shown to the
importing administrator verbatim.
"""

__all__ = [
    "MIN_PASSWORD_LENGTH",
    "MIN_USERNAME_LENGTH",
    "VALID_ROLES",
    "validate_row",
]

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
VALID_ROLES = frozenset({"admin", "teacher"})

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _present(row: Mapping[str, str], field: str) -> str | None:
    value = row.get(field)
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_row(row: Mapping[str, str], row_number: int) -> ValidationOutcome:
    """Validate one canonical row.

    Args:
        row: Canonical row as produced by normalize_row
        row_number: Row number embedded in every message

    Returns:
        ValidationOutcome with the ordered errors and warnings
    """
    errors: list[str] = []
    warnings: list[str] = []

    username = _present(row, "username")
    if username is None:
        errors.append(f"Row {row_number}: Missing required field 'username'")
    else:
        if len(username) < MIN_USERNAME_LENGTH:
            errors.append(
                f"Row {row_number}: Username '{username}' is too short "
                f"(minimum {MIN_USERNAME_LENGTH} characters)"
            )
        if not USERNAME_PATTERN.match(username):
            errors.append(
                f"Row {row_number}: Username '{username}' may only contain "
                "letters, numbers, and underscores"
            )

    password = _present(row, "password")
    if password is None:
        errors.append(f"Row {row_number}: Missing required field 'password'")
    elif len(password) < MIN_PASSWORD_LENGTH:
        # never echo the password itself
        errors.append(
            f"Row {row_number}: Password is too short "
            f"(minimum {MIN_PASSWORD_LENGTH} characters)"
        )

    email = _present(row, "email")
    if email is not None and not EMAIL_PATTERN.match(email):
        warnings.append(
            f"Row {row_number}: Email '{email}' does not look like a valid email address"
        )

    role = _present(row, "role")
    if role is not None and role.lower() not in VALID_ROLES:
        warnings.append(f"Row {row_number}: Unknown role '{role}', assuming 'teacher'")

    return ValidationOutcome(
        row_number=row_number,
        errors=tuple(errors),
        warnings=tuple(warnings),
    )
