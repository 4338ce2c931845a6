from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tests.helpers import AUTH, make_settings
from user_api.main import create_app
from user_api.user_store import InMemoryUserStore


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def client(store: InMemoryUserStore) -> TestClient:
    app = create_app(settings=make_settings(), store=store)
    return TestClient(app, headers=AUTH)
