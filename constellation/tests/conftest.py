import os

# must be set before constellation.main builds its module-level app
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("SEED_ON_EMPTY", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from constellation.core.config import Settings
from constellation.main import create_app
from constellation.store.memory import InMemoryStore
from constellation.store.snapshot import Snapshot


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret_key="test-secret",
        data_file=str(tmp_path / "store.json"),
        seed_on_empty=False,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def store():
    return InMemoryStore(Snapshot())
