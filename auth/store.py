"""
Credential store — user lookups and writes over an injected async session.

Passwords are hashed here, explicitly, in ``create`` and ``update_password``
and nowhere else. Uniqueness of ``username`` and ``email`` is enforced by the
table's unique constraints; callers check first, and a constraint violation
that slips past the check surfaces as ``DuplicateKeyError``.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import User
from auth.password import hash_password, verify_password

logger = logging.getLogger(__name__)


class DuplicateKeyError(Exception):
    """Insert rejected by a unique constraint."""


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        """The user owning ``email`` if there is one, otherwise the one owning ``username``."""
        user = await self.find_by_email(email)
        if user is not None:
            return user
        result = await self.session.execute(
            select(User).where(User.username == username.strip())
        )
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        try:
            uid = uuid.UUID(user_id) if isinstance(user_id, str) else user_id
        except ValueError:
            return None
        return await self.session.get(User, uid)

    async def create(self, username: str, email: str, password: str) -> User:
        """Hash ``password`` and insert a new user."""
        password_hash = await asyncio.to_thread(hash_password, password)
        user = User(
            id=uuid.uuid4(),
            username=username.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
        )
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning("Duplicate key on user insert (%s / %s)", user.username, user.email)
            raise DuplicateKeyError(str(exc.orig)) from exc
        return user

    async def update_password(self, user: User, new_password: str) -> User:
        user.password_hash = await asyncio.to_thread(hash_password, new_password)
        await self.session.flush()
        return user

    async def verify_password(self, user: User, candidate: str) -> bool:
        return await asyncio.to_thread(verify_password, candidate, user.password_hash)
