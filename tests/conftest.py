"""Shared fixtures: throwaway RSA keys, configs and fake HTTP responses."""

import json
from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from config import KalshiConfig


@pytest.fixture(scope="session")
def rsa_key():
    """RSA private key generated once per test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_key) -> str:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture
def config(private_key_pem) -> KalshiConfig:
    return KalshiConfig(api_key_id="test-key-id-1234", private_key_pem=private_key_pem)


@pytest.fixture
def trading_config(private_key_pem) -> KalshiConfig:
    return KalshiConfig(
        api_key_id="test-key-id-1234",
        private_key_pem=private_key_pem,
        trading_enabled=True,
    )


def make_response(body: Any = None, status_code: int = 200, text: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response with the given body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = "https://example.test"
    if text is not None:
        response._content = text.encode()
    elif body is not None:
        response._content = json.dumps(body).encode()
    else:
        response._content = b""
    return response


@pytest.fixture
def session():
    """Mock standing in for requests.Session."""
    mock = Mock(spec=requests.Session)
    mock.request.return_value = make_response({})
    return mock


class SleepRecorder:
    """Replacement for time.sleep that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def http_response():
    """Factory for fake HTTP responses."""
    return make_response
