"""Shared test fixtures."""

import os
import uuid

os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("JWT_SECRET", "test-secret-strong")
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from src.db import client as db_client
from src.main import app
from src.middleware.rate_limiter import auth_limiter
from tests.fake_supabase import FakeSupabase


@pytest.fixture
def db(monkeypatch):
    """Swap the Supabase client for an empty in-memory database."""
    fake = FakeSupabase()
    monkeypatch.setattr(db_client, "_client", fake)
    return fake


@pytest.fixture(autouse=True)
def reset_throttle():
    auth_limiter.reset()
    yield
    auth_limiter.reset()


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def test_password():
    return "SecureTestPass123"


@pytest.fixture
def register(client, test_password):
    """Register a user through the API and return the response data."""

    def _register(name: str = "Alice", email: str | None = None) -> dict:
        email = email or f"{name.lower()}_{uuid.uuid4().hex[:8]}@example.com"
        resp = client.post("/api/v1/auth/register", json={"email": email, "name": name, "password": test_password})
        assert resp.status_code == 201
        return resp.json()["data"]

    return _register


@pytest.fixture
def auth_tokens(register):
    return register("Alice")


@pytest.fixture
def auth_header(auth_tokens):
    return {"Authorization": f"Bearer {auth_tokens['access_token']}"}
