"""Shared test fixtures."""

from pathlib import Path
from unittest.mock import Mock

import pytest
import requests

from open_exchange_rates import OpenExchangeRatesClient

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> bytes:
    return (FIXTURES / name).read_bytes()


def make_response(status_code: int, body: bytes) -> requests.Response:
    """Build a real :class:`requests.Response` with an already-read body."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response._content_consumed = True
    response.headers["Content-Type"] = "application/json; charset=utf-8"
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return OpenExchangeRatesClient("1234", session=session)


@pytest.fixture
def respond(session):
    """Make the mocked session answer every GET with ``status`` and ``body``."""

    def _respond(body: bytes, status_code: int = 200) -> None:
        session.get.return_value = make_response(status_code, body)

    return _respond
