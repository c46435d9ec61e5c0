"""
Shared fixtures: every test gets its own SQLite file and a TestClient
whose lifespan creates the tables. Gemini and USDA start unconfigured.
"""
from __future__ import annotations

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test-dietitian.db")

import pytest
from fastapi.testclient import TestClient

from config import settings
from services import db as db_service

USER = {
    "name": "Sara",
    "email": "sara@example.com",
    "password": "s3cret-pass",
    "goal": "lose_weight",
    "age": 30,
    "currentWeight": 70,
    "targetWeight": 62,
    "gender": "male",
    "activityLevel": "moderate",
    "height": 175,
}


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    db_service.use_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(settings, "gemini_api_key", None)
    monkeypatch.setattr(settings, "usda_api_key", None)
    yield


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as c:
        yield c


def register_and_login(client: TestClient, **overrides) -> dict[str, str]:
    body = {**USER, **overrides}
    r = client.post("/api/auth/register", json=body)
    assert r.status_code == 201, r.text
    r = client.post(
        "/api/auth/login", json={"email": body["email"], "password": body["password"]}
    )
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    return register_and_login(client)
