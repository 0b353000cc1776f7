# backend/tests/conftest.py
import os
import sys
import pytest
from fastapi.testclient import TestClient

# Make /Project/backend importable as top-level
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

# Settings are read at import time; a dummy key registers the Google adapters
# (their HTTP calls are mocked with respx)
os.environ.setdefault("GOOGLE_API_KEY", "test-key")
os.environ.setdefault("ENABLE_HAVERSINE", "1")

# Import app only after setting env
from main import app

GOOGLE_BASE = "https://maps.googleapis.com"


@pytest.fixture(scope="session")
def client():
    # Use context manager so FastAPI lifespan (startup/shutdown) runs
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="session")
def has_google_key():
    return os.getenv("GOOGLE_API_KEY", "test-key") != "test-key"
