"""Kalshi data models."""

from .market import MarketRecord, parse_timestamp
from .orderbook import OrderBookLevel, TopOfBook, calculate_spread

__all__ = [
    "MarketRecord",
    "OrderBookLevel",
    "TopOfBook",
    "calculate_spread",
    "parse_timestamp",
]
