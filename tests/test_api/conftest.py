"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from graphkit.api.app import create_app
from graphkit.api.auth import verify_api_key


@pytest.fixture
def sample_payload() -> dict:
    """A->B, B->C, A->C, C->D over four vertices."""
    return {
        "relationships": [
            {"from": "A", "to": "B", "weight": 1},
            {"from": "B", "to": "C", "weight": 1},
            {"from": "A", "to": "C", "weight": 1},
            {"from": "C", "to": "D", "weight": 1},
        ],
        "vertices": ["A", "B", "C", "D"],
    }


@pytest.fixture
def client():
    """FastAPI TestClient with authentication bypassed."""
    app = create_app()
    app.dependency_overrides[verify_api_key] = lambda: "test-key"

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def secured_client(monkeypatch):
    """FastAPI TestClient with two API keys configured."""
    monkeypatch.setenv("API_KEYS", "secret-key-1, secret-key-2")
    app = create_app()

    with TestClient(app) as c:
        yield c
