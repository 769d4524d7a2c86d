"""Switch that keeps order helpers from placing real orders by accident."""

import logging

from .errors import TradingDisabledError


logger = logging.getLogger(__name__)


class TradingGate:
    """
    Explicit opt-in for order placement.

    Disabled unless constructed with enabled=True, which normally comes from
    KALSHI_TRADING_ENABLED.
    """

    def __init__(self, enabled: bool = False):
        self.enabled = enabled

    def check(self, action: str) -> None:
        """Raise unless trading is enabled."""
        if not self.enabled:
            logger.warning(f"Blocked {action} order: trading is disabled")
            raise TradingDisabledError(
                f"Refusing to {action}: set KALSHI_TRADING_ENABLED=1 to place real orders"
            )
