"""Exception hierarchy for Kalshi API access."""

from typing import Any, Optional


class KalshiError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(KalshiError):
    """Missing credentials or unreadable key material."""


class AuthenticationError(KalshiError):
    """A request could not be signed."""


class TransportError(KalshiError):
    """Network failure or non-success HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class PartialDataError(KalshiError):
    """Order book enrichment failed for a single market."""

    def __init__(self, ticker: str, cause: Exception):
        super().__init__(f"Failed to get orderbook for {ticker}: {cause}")
        self.ticker = ticker
        self.cause = cause


class TradingDisabledError(KalshiError):
    """An order helper was called while trading is switched off."""
