"""Fixtures wiring CLI commands to an in-process server."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from taskboard.server import create_app
from taskboard.services.api.client import APIClient

BASE_URL = "http://testserver/api"


@pytest.fixture
def server_app():
    """Seeded app that every command in the test talks to."""
    return create_app(seed=True)


@pytest.fixture
def live_api(server_app):
    """Route the commands' API clients to ``server_app`` through ASGI."""

    def make_client() -> APIClient:
        return APIClient(
            base_url=BASE_URL, timeout=5, transport=httpx.ASGITransport(app=server_app)
        )

    with patch("taskboard.commands.utils.get_client", side_effect=make_client):
        with patch("taskboard.commands.reminders.get_client", side_effect=make_client):
            with patch("taskboard.main.get_client", side_effect=make_client):
                yield server_app


@pytest.fixture
def dead_api():
    """API clients whose every request fails to connect."""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    def make_client() -> APIClient:
        return APIClient(base_url=BASE_URL, timeout=5, transport=httpx.MockTransport(refuse))

    with patch("taskboard.commands.utils.get_client", side_effect=make_client):
        with patch("taskboard.main.get_client", side_effect=make_client):
            yield
