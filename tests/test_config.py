"""Tests for configuration loading."""

import pytest
from unittest.mock import patch

from config import KalshiConfig, DEFAULT_BASE_URL
from kalshi.api.errors import ConfigurationError


ENV_VARS = [
    "KALSHI_API_KEY_ID",
    "KALSHI_PRIVATE_KEY_PATH",
    "KALSHI_BASE_URL",
    "KALSHI_TRADING_ENABLED",
    "PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the real environment and any .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    with patch("config.load_dotenv"):
        yield


@pytest.fixture
def key_file(tmp_path, private_key_pem):
    path = tmp_path / "kalshi.pem"
    path.write_text(private_key_pem + "\n")
    return path


class TestFromEnv:
    """Tests for KalshiConfig.from_env."""

    def test_loads_credentials(self, monkeypatch, key_file, private_key_pem):
        monkeypatch.setenv("KALSHI_API_KEY_ID", "abc123")
        monkeypatch.setenv("KALSHI_PRIVATE_KEY_PATH", str(key_file))

        config = KalshiConfig.from_env()

        assert config.api_key_id == "abc123"
        assert config.private_key_pem == private_key_pem.strip()
        assert config.base_url == DEFAULT_BASE_URL
        assert config.port == 3000
        assert config.trading_enabled is False

    def test_optional_settings(self, monkeypatch, key_file):
        monkeypatch.setenv("KALSHI_API_KEY_ID", "abc123")
        monkeypatch.setenv("KALSHI_PRIVATE_KEY_PATH", str(key_file))
        monkeypatch.setenv("KALSHI_BASE_URL", "https://demo-api.kalshi.co")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("KALSHI_TRADING_ENABLED", "true")

        config = KalshiConfig.from_env()

        assert config.base_url == "https://demo-api.kalshi.co"
        assert config.port == 8080
        assert config.trading_enabled is True

    def test_missing_key_id(self, monkeypatch, key_file):
        monkeypatch.setenv("KALSHI_PRIVATE_KEY_PATH", str(key_file))
        with pytest.raises(ConfigurationError, match="KALSHI_API_KEY_ID"):
            KalshiConfig.from_env()

    def test_missing_key_path(self, monkeypatch):
        monkeypatch.setenv("KALSHI_API_KEY_ID", "abc123")
        with pytest.raises(ConfigurationError, match="KALSHI_PRIVATE_KEY_PATH"):
            KalshiConfig.from_env()

    def test_unreadable_key_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("KALSHI_API_KEY_ID", "abc123")
        monkeypatch.setenv("KALSHI_PRIVATE_KEY_PATH", str(tmp_path / "missing.pem"))
        with pytest.raises(ConfigurationError, match="Failed to load private key"):
            KalshiConfig.from_env()

    def test_bad_port(self, monkeypatch, key_file):
        monkeypatch.setenv("KALSHI_API_KEY_ID", "abc123")
        monkeypatch.setenv("KALSHI_PRIVATE_KEY_PATH", str(key_file))
        monkeypatch.setenv("PORT", "http")
        with pytest.raises(ConfigurationError):
            KalshiConfig.from_env()


def test_empty_key_material_rejected():
    with pytest.raises(ConfigurationError):
        KalshiConfig(api_key_id="abc", private_key_pem="")


def test_repr_hides_key_material(private_key_pem):
    config = KalshiConfig(api_key_id="abcdefghijkl", private_key_pem=private_key_pem)
    assert "PRIVATE KEY" not in repr(config)
