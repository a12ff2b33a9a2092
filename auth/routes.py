"""
Auth API routes — signup, login, verify.

Mounted at the application root (no prefix).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from auth.dependencies import get_auth_service, get_current_user
from auth.models import User, UserOut
from auth.service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class SignupRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class VerifyResponse(BaseModel):
    message: str
    user: UserOut


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: Optional[SignupRequest] = None,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Register a new user and return a token for them."""
    req = req or SignupRequest()
    logger.info("Signup attempt: username=%s", req.username)
    result = await service.signup(req.username, req.email, req.password)
    return {
        "message": "User created successfully",
        "token": result.token,
        "user": UserOut.from_user(result.user),
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    req: Optional[LoginRequest] = None,
    service: AuthService = Depends(get_auth_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    req = req or LoginRequest()
    result = await service.login(req.email, req.password)
    return {
        "message": "Login successful",
        "token": result.token,
        "user": UserOut.from_user(result.user),
    }


@router.get("/verify", response_model=VerifyResponse)
async def verify(user: User = Depends(get_current_user)) -> Dict[str, Any]:
    logger.debug("Token verified for %s", user.username)
    return {"message": "Token is valid", "user": UserOut.from_user(user)}
