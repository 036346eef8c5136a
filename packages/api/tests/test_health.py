# This project was developed with assistance from AI tools.
"""Tests for the health endpoint."""

from unittest.mock import AsyncMock

from sqlalchemy.exc import SQLAlchemyError

from portal_api import __version__


def test_health_reports_api_and_database(make_client):
    client = make_client(AsyncMock())

    resp = client.get("/health/")

    assert resp.status_code == 200
    data = resp.json()
    assert [item["name"] for item in data] == ["API", "Database"]
    assert all(item["status"] == "healthy" for item in data)
    assert data[0]["version"] == __version__


def test_health_reports_unreachable_database(make_client):
    session = AsyncMock()
    session.execute = AsyncMock(side_effect=SQLAlchemyError("connection refused"))
    client = make_client(session)

    resp = client.get("/health/")

    assert resp.status_code == 200
    db_item = next(item for item in resp.json() if item["name"] == "Database")
    assert db_item["status"] == "unhealthy"
    assert "PostgreSQL" in db_item["message"]
