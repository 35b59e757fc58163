"""Shared pytest fixtures for netsuite_client tests."""

import logging
from unittest.mock import MagicMock

import pytest
import requests

from netsuite_client.cli import remove_console_handlers
from netsuite_client.client import NetSuiteClient
from netsuite_client.config import ConnectionConfig

BASE_URL = "https://rest.example.netsuite.com"


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {"records": []}
    return response


@pytest.fixture
def make_response():
    """Factory for fake requests.Response objects returning ``payload`` from .json()."""
    return _response


@pytest.fixture
def config():
    return ConnectionConfig(
        account_id="123456",
        consumer_key="test-consumer-key",
        consumer_secret="test-consumer-secret",
        token_id="test-token-id",
        token_secret="test-token-secret",
        base_url=BASE_URL,
    )


@pytest.fixture
def session():
    """A fake HTTP session answering every GET with an empty envelope."""
    fake = MagicMock(spec=requests.Session)
    fake.get.return_value = _response()
    return fake


@pytest.fixture
def client(config, session):
    return NetSuiteClient(config, session=session)


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """Drop the stdout handler the CLI installs so it does not outlive a test."""
    root = logging.getLogger()
    level = root.level
    yield
    remove_console_handlers()
    root.setLevel(level)
