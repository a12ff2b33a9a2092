"""
Health probe and the todos endpoint.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from auth.dependencies import get_current_user
from auth.models import User
from config.settings import config

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", tags=["health"])
async def health() -> Dict[str, Any]:
    return {
        "message": "Todo API is running!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config.environment,
    }


@router.get("/todos", tags=["todos"])
async def list_todos(user: User = Depends(get_current_user)) -> Dict[str, Any]:
    """Placeholder: greets the caller, no todo rows are read."""
    logger.info("Todos accessed by %s", user.username)
    return {
        "message": f"Welcome to todos, {user.username}!",
        "user": user.username,
    }
