from __future__ import annotations

import hashlib
import hmac
import secrets

"""scrypt password hashing compatible with the planner's stored hashes.

Stored format: "{derived_key_hex}.{salt_hex}". The salt is 16 random bytes
rendered as hex, and that hex string (not the raw bytes) is the scrypt salt
input. Parameters are scrypt's common defaults N=16384, r=8, p=1 with a 64
byte key.
"""

__all__ = [
    "PasswordHashError",
    "hash_password",
    "verify_password",
]

SALT_BYTES = 16
KEY_LENGTH = 64
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1


class PasswordHashError(Exception):
    pass


def _derive(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive(password, salt).hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    """Check a plaintext password against a stored "key.salt" value.

    Raises:
        PasswordHashError: If stored is not in "key.salt" hex format
    """
    key_hex, sep, salt = stored.partition(".")
    if not sep or not key_hex or not salt:
        raise PasswordHashError("stored password is not in 'key.salt' format")
    try:
        expected = bytes.fromhex(key_hex)
    except ValueError as e:
        raise PasswordHashError(f"stored password key is not hex: {e}") from e
    return hmac.compare_digest(_derive(password, salt), expected)
