from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import pandas as pd

"""Header/value normalization for CSV user rows.

Header names are lower-cased and trimmed, then renamed through a fixed synonym
table to the canonical fields (username, password, fullName, email, role).
Unknown headers pass through under their normalized name. Normalization never
fails; missing or malformed values are left for the validator.

When two headers of the same row resolve to one canonical field, the left-most
column that has a cell wins.
"""

__all__ = [
    "HEADER_SYNONYMS",
    "normalize_header",
    "normalize_row",
]

HEADER_SYNONYMS: Mapping[str, str] = MappingProxyType({
    "username": "username",
    "user": "username",
    "user name": "username",
    "login": "username",
    "password": "password",
    "pwd": "password",
    "pass": "password",
    "fullname": "fullName",
    "full name": "fullName",
    "full_name": "fullName",
    "name": "fullName",
    "email": "email",
    "mail": "email",
    "e-mail": "email",
    "email address": "email",
    "role": "role",
    "admin": "role",
    "user role": "role",
    "userrole": "role",
    "user type": "role",
    "usertype": "role",
})


def normalize_header(name: Any) -> str:
    """Map a free-text header to its canonical field name.

    >>> normalize_header(" User ")
    'username'
    >>> normalize_header("Grade")
    'grade'
    """
    key = str(name).strip().lower()
    return HEADER_SYNONYMS.get(key, key)


def _normalize_value(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip()
    # pandas fills cells of short lines with NaN
    if pd.isna(value):
        return None
    return str(value).strip()


def normalize_row(raw: Mapping[Any, Any]) -> dict[str, str]:
    """Rename the keys of a raw row to canonical names and trim its values.

    Absent cells (None / NaN) are omitted from the result.
    """
    row: dict[str, str] = {}
    for header, value in raw.items():
        key = normalize_header(header)
        if key in row:
            continue  # first wins
        normalized = _normalize_value(value)
        if normalized is None:
            continue
        row[key] = normalized
    return row
