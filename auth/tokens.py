"""
Bearer token creation and verification.

Tokens are base64-encoded JSON payloads ``{"user_id", "exp"}`` signed with
HMAC-SHA256. Secret and lifetime come from ``config.jwt_secret`` and
``config.jwt_expiry_seconds`` (env: ``JWT_SECRET``, ``JWT_EXPIRY_SECONDS``).

Verification is stateless; an issued token stays valid until it expires.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import logging
import time
from base64 import b64decode, b64encode

from fastapi import status

from config.settings import config
from utils.errors import AuthError

logger = logging.getLogger(__name__)


class InvalidTokenError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid or expired token"


def _sign(raw: bytes) -> str:
    return hmac.new(config.jwt_secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(user_id: str, expires_in: int | None = None, now: float | None = None) -> str:
    """Create a signed token for ``user_id``."""
    issued_at = int(now if now is not None else time.time())
    lifetime = expires_in if expires_in is not None else config.jwt_expiry_seconds
    payload = {
        "user_id": user_id,
        "exp": issued_at + lifetime,
    }
    raw = json.dumps(payload).encode()
    return b64encode(raw).decode() + "." + _sign(raw)


def verify_token(token: str) -> str:
    """
    Verify token and return ``user_id``.

    Raises ``InvalidTokenError`` for a malformed token, a bad signature or an
    expired token alike.
    """
    try:
        encoded, sig = token.split(".", 1)
        raw = b64decode(encoded, validate=True)
        if not hmac.compare_digest(sig, _sign(raw)):
            raise ValueError("bad signature")
        payload = json.loads(raw)
        if payload.get("exp", 0) < time.time():
            raise ValueError("token expired")
        user_id = payload["user_id"]
    except (ValueError, KeyError, TypeError, AttributeError, binascii.Error) as exc:
        logger.debug("Token rejected: %s", exc)
        raise InvalidTokenError() from exc
    return str(user_id)
