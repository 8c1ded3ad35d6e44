"""
Point the app at a throw-away SQLite file *before* `config` is imported.
"""
import os
import tempfile
import uuid

import pytest

_TMP = tempfile.mkdtemp(prefix="nutriplan-test-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP}/test.db"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["CHECK_EMAIL_DOMAIN"] = "false"
os.environ["ADMIN_EMAIL"] = "admin@example.com"

from fastapi.testclient import TestClient  # noqa: E402

from main import app  # noqa: E402


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


def _email(tag: str = "user") -> str:
    return f"{tag}-{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture()
def signup(client):
    """Register a fresh user; returns (auth headers, response json)."""

    def _do(email: str | None = None, password: str = "secret123", username: str = "Ada"):
        r = client.post(
            "/api/v1/auth/signup",
            json={"username": username, "email": email or _email(), "password": password},
        )
        assert r.status_code == 201, r.text
        data = r.json()
        return {"Authorization": f"Bearer {data['token']}"}, data

    return _do


@pytest.fixture()
def onboarded(client, signup):
    headers, _ = signup()
    r = client.post(
        "/api/v1/onboarding",
        json={"age": 25, "height": 175, "weight": 70, "goal": "lose weight"},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    return headers
