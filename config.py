"""Runtime configuration loaded from the environment or a .env file."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from kalshi.api.errors import ConfigurationError


DEFAULT_BASE_URL = "https://api.elections.kalshi.com"
DEFAULT_API_PREFIX = "/trade-api/v2"
DEFAULT_PORT = 3000

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class KalshiConfig:
    """Credentials and connection settings for a client."""

    api_key_id: str
    private_key_pem: str
    base_url: str = DEFAULT_BASE_URL
    api_prefix: str = DEFAULT_API_PREFIX
    port: int = DEFAULT_PORT
    trading_enabled: bool = False

    def __post_init__(self):
        if not self.api_key_id:
            raise ConfigurationError("KALSHI_API_KEY_ID must be set")
        if not self.private_key_pem:
            raise ConfigurationError("Private key material is empty")

    def __repr__(self) -> str:
        return (
            f"KalshiConfig(api_key_id={self.api_key_id[:8]}..., "
            f"base_url={self.base_url!r}, trading_enabled={self.trading_enabled})"
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "KalshiConfig":
        """
        Build a config from environment variables.

        Reads KALSHI_API_KEY_ID, KALSHI_PRIVATE_KEY_PATH, KALSHI_BASE_URL,
        PORT and KALSHI_TRADING_ENABLED after loading a .env file.
        """
        load_dotenv(env_file)

        api_key_id = os.getenv("KALSHI_API_KEY_ID")
        if not api_key_id:
            raise ConfigurationError("KALSHI_API_KEY_ID must be set in .env file")

        pem_path_env = os.getenv("KALSHI_PRIVATE_KEY_PATH")
        if not pem_path_env:
            raise ConfigurationError("KALSHI_PRIVATE_KEY_PATH must be set in .env file")

        return cls(
            api_key_id=api_key_id,
            private_key_pem=read_private_key(Path(pem_path_env)),
            base_url=os.getenv("KALSHI_BASE_URL", DEFAULT_BASE_URL),
            port=read_port(),
            trading_enabled=os.getenv("KALSHI_TRADING_ENABLED", "").strip().lower() in TRUTHY,
        )


def read_private_key(pem_path: Path) -> str:
    """Read PEM key material from disk."""
    try:
        with open(pem_path, "r") as f:
            return f.read().strip()
    except OSError as e:
        raise ConfigurationError(f"Failed to load private key from {pem_path}: {e}") from e


def read_port(default: int = DEFAULT_PORT) -> int:
    """Listening port for the status server."""
    value = os.getenv("PORT")
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"PORT must be an integer, got {value!r}") from e
