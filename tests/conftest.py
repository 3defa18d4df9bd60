import os
import time
from typing import Optional

import pytest
import requests
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

# Defaults must be in place before products_api.core.config is imported.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("MONGO_URL", "mongodb://localhost:27017/products_test_db")

from products_api.core.deps import get_products_collection  # noqa: E402
from products_api.main import app  # noqa: E402


@pytest.fixture
def collection():
    """In-memory products collection, fresh for each test."""
    return AsyncMongoMockClient()["products_test_db"]["products"]


@pytest.fixture
def client(collection):
    app.dependency_overrides[get_products_collection] = lambda: collection
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_products_collection, None)


class _UnreachableCursor:
    async def to_list(self, length=None):
        raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")


class UnreachableCollection:
    """Collection whose every round trip fails like a MongoDB that is down."""

    def _fail(self):
        raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")

    def find(self, *args, **kwargs):
        return _UnreachableCursor()

    async def find_one(self, *args, **kwargs):
        self._fail()

    async def insert_one(self, *args, **kwargs):
        self._fail()

    async def find_one_and_update(self, *args, **kwargs):
        self._fail()

    async def delete_one(self, *args, **kwargs):
        self._fail()


@pytest.fixture
def unreachable_collection():
    return UnreachableCollection()


# =========================
# HTTP tests against a running service (optional)
# =========================
@pytest.fixture(scope="session")
def base_url() -> str:
    """
    Base URL of a running products-api (container or local uvicorn).
    """
    url = os.getenv("PRODUCTS_BASE_URL", "http://localhost:8003").strip()
    return url.rstrip("/")


@pytest.fixture(scope="session")
def wait_for_service_http(base_url: str) -> str:
    """
    Wait for /health so the first HTTP test does not race container startup.
    """
    deadline = time.time() + 60.0
    last: Optional[Exception] = None
    while time.time() < deadline:
        try:
            r = requests.get(f"{base_url}/health", timeout=3)
            if r.status_code == 200:
                return base_url
        except requests.RequestException as e:
            last = e
        time.sleep(1.0)

    raise RuntimeError(f"products-api not responding on {base_url}/health. Last error: {last}")
