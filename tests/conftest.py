"""Pytest configuration and fixtures for testing.

MongoDB is replaced by an in-memory fake patched in at
``app.services.database.get_database`` and no live services are needed.
"""

import copy
import os
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Set env vars before importing the app so Settings picks them up
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB_NAME", "advice_test")
os.environ.setdefault("JWT_SECRET", "test_jwt_secret")
os.environ.setdefault("JWT_BCRYPT_ROUNDS", "4")
os.environ.setdefault("SERVICES_ADVICE_URL", "https://advice.test/getAdvice")
os.environ.setdefault("SERVICES_TRANSLATE_URL", "https://translate.test/translate")
os.environ.setdefault("LOG_LEVEL", "INFO")

from app.main import app  # noqa: E402
from app.services import database  # noqa: E402


class FakeCollection:
    """In-memory stand-in for the subset of pymongo's Collection API in use."""

    def __init__(self):
        self.docs: list[dict] = []

    @staticmethod
    def _matches(doc: dict, query: dict) -> bool:
        return all(doc.get(key) == value for key, value in query.items())

    @staticmethod
    def _project(doc: dict, projection: dict | None) -> dict:
        doc = copy.deepcopy(doc)
        if projection and projection.get("_id") == 0:
            doc.pop("_id", None)
        return doc

    def find_one(self, query: dict, projection: dict | None = None):
        for doc in self.docs:
            if self._matches(doc, query):
                return self._project(doc, projection)
        return None

    def find(self, query: dict, projection: dict | None = None):
        return [
            self._project(doc, projection)
            for doc in self.docs
            if self._matches(doc, query)
        ]

    def replace_one(self, query: dict, replacement: dict, upsert: bool = False):
        result = MagicMock()
        for i, doc in enumerate(self.docs):
            if self._matches(doc, query):
                self.docs[i] = {"_id": doc["_id"], **copy.deepcopy(replacement)}
                result.matched_count = 1
                return result
        result.matched_count = 0
        if upsert:
            self.docs.append({"_id": len(self.docs) + 1, **copy.deepcopy(replacement)})
        return result

    def update_one(self, query: dict, update: dict, upsert: bool = False):
        result = MagicMock()
        target = next((doc for doc in self.docs if self._matches(doc, query)), None)
        if target is None:
            result.matched_count = 0
            if not upsert:
                return result
            target = {"_id": len(self.docs) + 1, **query}
            self.docs.append(target)
        else:
            result.matched_count = 1

        for key, amount in update.get("$inc", {}).items():
            target[key] = target.get(key, 0) + amount
        target.update(copy.deepcopy(update.get("$set", {})))
        return result

    def delete_one(self, query: dict):
        result = MagicMock()
        result.deleted_count = 0
        for i, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[i]
                result.deleted_count = 1
                break
        return result


class FakeDatabase:
    """Fake MongoDB database that lazily creates collections."""

    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection()
        return self.collections[name]

    def command(self, name: str) -> dict:
        return {"ok": 1.0, "command": name}


@pytest.fixture
def fake_db(monkeypatch):
    """Fresh in-memory database for each test."""
    db = FakeDatabase()
    monkeypatch.setattr(database, "get_database", lambda: db)
    return db


@pytest.fixture
def test_client(fake_db):  # noqa: ARG001
    """Create a test client for the FastAPI application."""

    client = TestClient(app)

    return client


class FakeResponse:
    """Minimal requests.Response replacement for outbound service calls."""

    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        import requests

        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self._payload


@pytest.fixture
def fake_services(monkeypatch):
    """Patch outbound POSTs and record each call in ``fake_services.calls``.

    Set ``fake_services.response`` to change what the services return.
    """
    from app.services import inference_client

    calls = []

    def fake_post(url, json=None, timeout=None):  # noqa: A002
        calls.append({"url": url, "json": json, "timeout": timeout})
        return recorder.response

    recorder = SimpleNamespace(
        calls=calls, response=FakeResponse({"advice": "Drink more water."})
    )
    monkeypatch.setattr(inference_client.requests, "post", fake_post)
    return recorder


USER = {"name": "A", "email": "a@x.com", "password": "abc"}


def register(client, payload=None):
    return client.post("/register", json=payload or USER)


def login(client, email=USER["email"], password=USER["password"]):
    return client.post("/login", json={"email": email, "password": password})


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_token(test_client) -> str:
    """Register the default user and return a fresh token for them."""
    assert register(test_client).status_code == 201
    response = login(test_client)
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def admin_token(test_client, fake_db) -> str:
    """Register an admin account directly in the store and log in."""
    from app.models.user import UserCredential
    from app.security import hash_password
    from app.services.credentials import CredentialStore

    store = CredentialStore("authentication")
    store.put(
        UserCredential(
            email="admin@x.com",
            name="Admin",
            password=hash_password("secret"),
            is_admin=True,
        )
    )
    response = login(test_client, "admin@x.com", "secret")
    assert response.status_code == 200
    return response.json()["token"]
