"""
Signup and login flows.

Validation runs in a fixed order and the first failing rule decides the
message. Login answers unknown email and wrong password with the same
message.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from auth.models import User
from auth.store import DuplicateKeyError, UserStore, normalize_email
from auth.tokens import create_token
from utils.errors import AuthError, ConflictError, ValidationError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PASSWORD_MIN_LENGTH = 6
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
EMAIL_MAX_LENGTH = 255


@dataclass
class AuthResult:
    user: User
    token: str


def validate_signup(username: Optional[str], email: Optional[str], password: Optional[str]) -> None:
    if not username or not email or not password:
        raise ValidationError("All fields are required")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(email) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError("Please enter a valid email")
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
        )


def conflict_for(existing: User, email: str) -> ConflictError:
    """Email collisions are reported ahead of username collisions."""
    if existing.email == normalize_email(email):
        return ConflictError("Email already exists")
    return ConflictError("Username already exists")


class AuthService:
    def __init__(self, store: UserStore) -> None:
        self.store = store

    async def signup(
        self,
        username: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        # Usernames are stored trimmed, so the length rule applies to the trimmed value.
        if username is not None:
            username = username.strip()
        validate_signup(username, email, password)

        existing = await self.store.find_by_email_or_username(email, username)
        if existing is not None:
            error = conflict_for(existing, email)
            logger.info("Signup rejected: %s", error.message)
            raise error

        try:
            user = await self.store.create(username, email, password)
        except DuplicateKeyError as exc:
            # Lost a race with a concurrent signup for the same email/username.
            existing = await self.store.find_by_email_or_username(email, username)
            if existing is not None:
                raise conflict_for(existing, email) from exc
            raise ConflictError() from exc

        logger.info("Registered user %s (%s)", user.username, user.id)
        return AuthResult(user=user, token=create_token(str(user.id)))

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self.store.find_by_email(email)
        if user is None or not await self.store.verify_password(user, password):
            logger.info("Login failed for %s", normalize_email(email))
            raise ValidationError("Invalid credentials")

        logger.info("Login: %s (%s)", user.username, user.id)
        return AuthResult(user=user, token=create_token(str(user.id)))

    async def resolve_token_user(self, user_id: str) -> User:
        """Load the user a verified token points at."""
        user = await self.store.find_by_id(user_id)
        if user is None:
            raise AuthError("User not found")
        return user
