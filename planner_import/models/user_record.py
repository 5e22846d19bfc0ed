from __future__ import annotations

from dataclasses import dataclass

"""UserRecord model: the importer's output unit.

One UserRecord is built per accepted CSV row. The password is still plaintext
here; hashing happens in planner_import.security.passwords right before the
record is persisted.
"""

__all__ = [
    "UserRecord",
]


@dataclass(frozen=True)
class UserRecord:
    username: str
    password: str  # plaintext, pre-hash
    full_name: str
    email: str = ""
    is_admin: bool = False

    def with_password(self, password: str) -> UserRecord:
        """Return a copy carrying a different (typically hashed) password."""
        return UserRecord(
            username=self.username,
            password=password,
            full_name=self.full_name,
            email=self.email,
            is_admin=self.is_admin,
        )
