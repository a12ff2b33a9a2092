"""
Shared fixtures: an in-memory user store wired into the app in place of the
SQLAlchemy-backed one.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from auth.dependencies import get_user_store
from auth.models import User
from auth.password import hash_password
from auth.store import DuplicateKeyError, UserStore, normalize_email
from config.settings import config
from main import create_app


class InMemoryUserStore(UserStore):
    """Dict-backed store; keeps the real hashing and password checks."""

    def __init__(self):
        super().__init__(session=AsyncMock())
        self.users = {}
        self.create_calls = 0

    async def find_by_email_or_username(self, email, username):
        user = await self.find_by_email(email)
        if user is not None:
            return user
        username = username.strip()
        return next((u for u in self.users.values() if u.username == username), None)

    async def find_by_email(self, email):
        email = normalize_email(email)
        return next((u for u in self.users.values() if u.email == email), None)

    async def find_by_id(self, user_id):
        try:
            return self.users.get(uuid.UUID(str(user_id)))
        except ValueError:
            return None

    async def create(self, username, email, password):
        self.create_calls += 1
        username, email = username.strip(), normalize_email(email)
        if any(u.email == email or u.username == username for u in self.users.values()):
            raise DuplicateKeyError("users unique constraint")
        now = datetime.now(timezone.utc)
        user = User(
            id=uuid.uuid4(),
            username=username,
            email=email,
            password_hash=hash_password(password),
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        return user


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch):
    monkeypatch.setattr(config, "bcrypt_rounds", 4)
    monkeypatch.setattr(config, "jwt_secret", "test-secret")


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def app(store):
    application = create_app()
    application.dependency_overrides[get_user_store] = lambda: store
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def signup(client):
    def _signup(username="alice", email="a@b.com", password="secret1"):
        return client.post(
            "/signup",
            json={"username": username, "email": email, "password": password},
        )

    return _signup
