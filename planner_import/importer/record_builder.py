from __future__ import annotations

from collections.abc import Mapping

from ..models.user_record import UserRecord

__all__ = [
    "build_user_record",
]


def build_user_record(row: Mapping[str, str]) -> UserRecord:
    """Build a UserRecord from a canonical row the validator accepted.

    Missing full names fall back to the username; anything other than the
    role "admin" (any case) yields a non-admin account.
    """
    username = row["username"]
    full_name = row.get("fullName") or username
    role = row.get("role") or ""
    return UserRecord(
        username=username,
        password=row["password"],
        full_name=full_name,
        email=row.get("email") or "",
        is_admin=role.lower() == "admin",
    )
