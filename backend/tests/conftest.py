import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from api.main import create_app  # noqa: E402
from repositories import RecordStore  # noqa: E402
from settings import Settings  # noqa: E402


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def app_settings():
    return Settings()


@pytest.fixture
def client(store, app_settings):
    app = create_app(store=store, app_settings=app_settings)
    return TestClient(app)
