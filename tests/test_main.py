"""
Tests for the application factory's error handling.
"""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from library_api import main


@pytest.fixture
def failing_client():
    """An app with one route that raises an unexpected error."""
    app = main.create_app()

    @app.get("/explode")
    def explode():
        raise RuntimeError("connection string leaked")

    return TestClient(app, raise_server_exceptions=False)


class TestUnhandledErrors:
    """The catch-all handler decides how much of the error to show."""

    def test_debug_shows_detail(self, failing_client, monkeypatch):
        monkeypatch.setattr(main.settings, "debug", True)
        monkeypatch.setattr(main.settings, "environment", "development")

        response = failing_client.get("/explode")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "connection string leaked"

    def test_production_hides_detail_even_in_debug(self, failing_client, monkeypatch):
        monkeypatch.setattr(main.settings, "debug", True)
        monkeypatch.setattr(main.settings, "environment", "production")

        response = failing_client.get("/explode")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "An internal error occurred."

    def test_hidden_without_debug(self, failing_client, monkeypatch):
        monkeypatch.setattr(main.settings, "debug", False)

        response = failing_client.get("/explode")

        assert response.json()["detail"] == "An internal error occurred."
