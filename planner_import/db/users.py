from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from ..models.user_record import UserRecord
from ..security.passwords import hash_password
from .batch_insert import BatchInsertError, batch_insert

"""Persistence of imported user records into the planner's users table.

Each accepted record gets its password hashed, then all records of a file go
out in one batched INSERT ... ON CONFLICT (username) DO NOTHING RETURNING
username. Usernames the database did not return already existed and are
reported as skipped; usernames repeated inside the same file are skipped
before reaching the database.
"""

__all__ = [
    "USER_COLUMNS",
    "PersistResult",
    "SkippedUser",
    "persist_users",
    "validate_table_name",
]

logger = logging.getLogger(__name__)

USER_COLUMNS = ("username", "password", "full_name", "email", "is_admin")
TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")

REASON_EXISTS = "Username already exists"
REASON_DUPLICATE = "Duplicate username in file"


@dataclass(frozen=True)
class SkippedUser:
    username: str
    reason: str


@dataclass(frozen=True)
class PersistResult:
    created: list[str] = field(default_factory=list)  # usernames inserted
    skipped: list[SkippedUser] = field(default_factory=list)


def validate_table_name(table: str) -> str:
    """Return table unchanged if it is a plain (optionally schema-qualified) identifier."""
    if not TABLE_NAME_PATTERN.match(table):
        raise BatchInsertError(f"invalid table name: {table!r}")
    return table


def _to_row(record: UserRecord) -> list[Any]:
    return [record.username, record.password, record.full_name, record.email or None, record.is_admin]


def persist_users(
    cursor: Any,
    table: str,
    records: Iterable[UserRecord],
    hasher: Callable[[str], str] = hash_password,
) -> PersistResult:
    """Hash and insert user records, skipping usernames that already exist.

    Args:
        cursor: psycopg2 cursor inside an open transaction, or None for mock
            mode (nothing is written, every unique username counts as created)
        table: users table name
        records: accepted records with plaintext passwords
        hasher: password hashing function

    Raises:
        BatchInsertError: On invalid table names and database failures
    """
    validate_table_name(table)

    unique: list[UserRecord] = []
    skipped: list[SkippedUser] = []
    seen: set[str] = set()
    for record in records:
        if record.username in seen:
            skipped.append(SkippedUser(record.username, REASON_DUPLICATE))
            continue
        seen.add(record.username)
        unique.append(record)

    if cursor is None:
        logger.debug("mock mode: %d users counted as created", len(unique))
        return PersistResult(created=[r.username for r in unique], skipped=skipped)

    rows = [_to_row(r.with_password(hasher(r.password))) for r in unique]
    result = batch_insert(
        cursor,
        table=table,
        columns=USER_COLUMNS,
        rows=rows,
        returning=["username"],
        on_conflict="username",
    )
    inserted = {row[0] for row in result.returned_values or []}
    created = [r.username for r in unique if r.username in inserted]
    skipped.extend(
        SkippedUser(r.username, REASON_EXISTS) for r in unique if r.username not in inserted
    )
    logger.debug("table=%s created=%d skipped=%d", table, len(created), len(skipped))
    return PersistResult(created=created, skipped=skipped)
