"""Shared fixtures for the Nectar CRM SDK tests."""

import json

import httpx
import pytest
from unittest.mock import Mock

from nectar_crm.core.models import ClientConfig
from nectar_crm.client.crm_client import NectarCRMClient


@pytest.fixture
def make_response():
    """Factory for real httpx responses with an attached request."""

    def _make(status_code: int = 200, body=None, text: str | None = None, url: str = "https://api.test.com/x"):
        if text is None:
            text = "" if body is None else json.dumps(body)
        return httpx.Response(
            status_code,
            content=text.encode("utf-8"),
            headers={"Content-Type": "application/json"},
            request=httpx.Request("GET", url),
        )

    return _make


@pytest.fixture
def mock_http_client():
    """Create a mock HTTP client."""
    return Mock(spec=httpx.Client)


@pytest.fixture
def client_config():
    """Create a client configuration pointing at a test host."""
    return ClientConfig(token="test_token", base_url="https://api.test.com")


@pytest.fixture
def crm_client(client_config, mock_http_client):
    """Create a CRM client for testing."""
    return NectarCRMClient(config=client_config, http_client=mock_http_client)
