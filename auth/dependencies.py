"""
FastAPI dependencies for authentication.

Provides ``get_user_store``, ``get_auth_service`` and the
``get_current_user`` gate used by protected routes.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import User
from auth.service import AuthService
from auth.store import UserStore
from auth.tokens import verify_token
from database.session import get_db_session
from utils.errors import AuthError

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_user_store(session: AsyncSession = Depends(get_db_session)) -> UserStore:
    return UserStore(session)


async def get_auth_service(store: UserStore = Depends(get_user_store)) -> AuthService:
    return AuthService(store)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Resolve the ``Authorization: Bearer <token>`` header to a ``User``.

    401 when the header is missing, 403 when the token does not verify,
    401 when the token's user no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Access token required")

    user_id = verify_token(credentials.credentials)
    return await service.resolve_token_user(user_id)
