# This project was developed with assistance from AI tools.
"""Shared fixtures.

Route tests run against the real app from ``portal_api.main`` with the DB
session and the LOS bridge overridden; the lifespan (which builds the real
bridge) is not entered because ``TestClient`` is not used as a context
manager.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from portal_db import LOSPushStatus, get_db

from portal_api.main import app as real_app
from portal_api.services.los_bridge import get_los_bridge


@pytest.fixture(autouse=True)
def _clean_overrides():
    """Clear app dependency overrides after each test."""
    yield
    real_app.dependency_overrides.clear()


@pytest.fixture
def mock_bridge():
    bridge = MagicMock()
    bridge.enabled = True
    bridge.push = AsyncMock(return_value=LOSPushStatus.SENT)
    return bridge


@pytest.fixture
def make_client(mock_bridge):
    """Factory fixture: wire a mock session and the mock bridge into the app."""

    def _make(session: AsyncMock) -> TestClient:
        async def _get_db():
            yield session

        real_app.dependency_overrides[get_db] = _get_db
        real_app.dependency_overrides[get_los_bridge] = lambda: mock_bridge
        return TestClient(real_app)

    return _make
