"""Execution layer - round-trip trade check."""

from .round_trip import RoundTripTest, RoundTripResult

__all__ = [
    "RoundTripTest",
    "RoundTripResult",
]
