"""
Password hashing and verification.

bcrypt with a per-hash salt; the work factor comes from
``config.bcrypt_rounds`` (12 unless overridden). bcrypt only reads the
first 72 bytes of a password, so longer passwords are cut to that length
before hashing and before checking.
"""

from __future__ import annotations

import bcrypt

from config.settings import config

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Return a salted bcrypt hash of ``password``."""
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
    return bcrypt.hashpw(_encode(password), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode())
    except (ValueError, TypeError):
        return False
