"""Kalshi API client components."""

from .client import KalshiClient, build_limit_order
from .gate import TradingGate
from .errors import (
    KalshiError,
    ConfigurationError,
    AuthenticationError,
    TransportError,
    PartialDataError,
    TradingDisabledError,
)
from .signer import RequestSigner

__all__ = [
    "KalshiClient",
    "build_limit_order",
    "RequestSigner",
    "TradingGate",
    "KalshiError",
    "ConfigurationError",
    "AuthenticationError",
    "TransportError",
    "PartialDataError",
    "TradingDisabledError",
]
