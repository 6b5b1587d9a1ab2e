# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from medibridge.common.config import Settings
from medibridge.common.database.database import DatabaseManager
from medibridge.main import create_app

TRUSTED_ORIGIN = "http://localhost:8765"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "medibridge.db"


@pytest.fixture
def database(db_path):
    """An initialized database image backed by a temporary file."""
    manager = DatabaseManager(db_path)
    manager.initialize()

    yield manager

    manager.close()


@pytest.fixture
def db(database):
    return database.connection


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DATA_DIR=tmp_path / "data",
        BRIDGE_URL="",
        BRIDGE_ALLOWED_ORIGINS=[TRUSTED_ORIGIN],
        BRIDGE_CALL_TIMEOUT_MS=500,
    )


@pytest.fixture
def app(test_settings, db_path):
    return create_app(test_settings, DatabaseManager(db_path))


@pytest.fixture
def client(app):
    """Test client with the lifespan running, so the bridge is exposed."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def patient_payload():
    return {
        "fullName": "Nimal Perera",
        "nic": "851234567V",
        "contact": "0771234567",
        "dob": "1985-04-12",
        "allergies": "Penicillin",
    }
