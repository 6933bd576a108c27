"""
Pytest fixtures for the relay device registry tests.

Provides:
- In-memory MongoDB (mongomock) database per test
- DeviceDirectory bound to that database
- API test client with the directory dependency overridden
"""

import mongomock
import pytest
from fastapi.testclient import TestClient

from api.main import app, db_conn
from device_db.directory import DeviceDirectory


@pytest.fixture(scope="function")
def mongo_db():
    """Fresh in-memory database for each test."""
    client = mongomock.MongoClient()
    yield client["relay_devices_test"]
    client.close()


@pytest.fixture(scope="function")
def directory(mongo_db):
    directory = DeviceDirectory(mongo_db, "devices")
    directory.ensure_indexes()
    return directory


@pytest.fixture(scope="function")
def client(directory):
    """Test client wired to the in-memory directory."""
    app.dependency_overrides[db_conn] = lambda: directory

    yield TestClient(app)

    app.dependency_overrides.clear()


# ============================================================
# Test Data Fixtures
# ============================================================

@pytest.fixture
def sample_device():
    return {
        "uid": "relay-01",
        "ip": "192.168.1.40",
        "type": "gpio-relay",
        "data": "65f1c0ffee0000000000beef",
    }
