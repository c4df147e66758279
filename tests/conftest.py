from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from main import create_app
from services.memory_store import InMemoryStore
from tests.helpers import ONBOARDING, signup


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def client(store: InMemoryStore) -> TestClient:
    return TestClient(create_app(store=store))


@pytest.fixture()
def auth(client: TestClient) -> dict[str, str]:
    return signup(client)


@pytest.fixture()
def onboarded(client: TestClient, auth: dict[str, str]) -> dict[str, str]:
    r = client.post("/api/v1/profile/onboarding", json=ONBOARDING, headers=auth)
    assert r.status_code == 200, r.text
    return auth
