"""Shared fixtures: settings, an in-memory roster and an API client."""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from tracker.common.config import Settings
from tracker.storage.base import FULL_TIME, PART_TIME
from tracker.storage.memory import MemoryStorage

ADMIN_PASSWORD = "correct-horse"

PRODUCTIVITY_HEADER = "Emp No.,Name,Month,Productive Hours,Hours,Productivity"
ROSTER_HEADER = (
    "Name,ID,Personal Email,Work Email,Work Location,Position,Start Date,Separation Date,Birthday"
)


class FakeClock:
    """Deterministic clock; every call moves one minute forward."""

    def __init__(self, start: datetime = datetime(2025, 9, 1, 12, 0, 0)):
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="test",
        storage_backend="memory",
        seed_on_startup=False,
        admin_password=ADMIN_PASSWORD,
        password_file=str(tmp_path / "admin-password.json"),
        jwt_secret="test-secret",
    )


@pytest.fixture
def storage():
    """Memory storage with a small roster: two full time, one part time, one archived."""
    store = MemoryStorage(clock=FakeClock())
    store.create_contractor({"id": 1, "name": "Avery Quinn", "contractor_type": FULL_TIME})
    store.create_contractor({"id": 2, "name": "Jordan Ellis", "contractor_type": FULL_TIME})
    store.create_contractor({"id": 3, "name": "Riley Park", "contractor_type": PART_TIME})
    store.create_contractor({"id": 4, "name": "Casey Morgan", "status": "archived"})
    return store


@pytest.fixture
def client(settings, storage):
    app = create_app(settings=settings, storage=storage)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client):
    response = client.post("/api/auth/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
