"""Pytest configuration and fixtures for the CEP weather tests."""

from typing import Any, Dict, Optional
from unittest.mock import MagicMock
from urllib.parse import urlsplit

import pytest
import requests


def create_mock_response(
    status_code: int = 200,
    json_data: Any = None,
    json_error: Optional[Exception] = None,
    content: bytes = b"",
    headers: Optional[Dict[str, str]] = None,
) -> MagicMock:
    """Create a configured mock requests.Response.

    Args:
        status_code: HTTP status code
        json_data: Data to return from json()
        json_error: Exception raised by json() instead of returning data
        content: Raw body bytes
        headers: Response headers

    Returns:
        Configured MagicMock response
    """
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.headers = headers or {"content-type": "application/json"}
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock requests Session."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def viacep_session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def weather_session() -> MagicMock:
    return MagicMock(spec=requests.Session)


class InProcessSession:
    """Routes requests-style GET calls to a FastAPI TestClient.

    Lets the gateway's ResolverClient talk to the resolver app without
    opening a socket.
    """

    def __init__(self, client) -> None:
        self.client = client
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        return self.client.get(urlsplit(url).path, params=params)
