"""Buy-then-sell sanity check against a live market."""

import logging
import time
from dataclasses import dataclass, asdict
from typing import Callable, Optional, TYPE_CHECKING

from kalshi.models import TopOfBook

if TYPE_CHECKING:
    from kalshi.api import KalshiClient


logger = logging.getLogger(__name__)


@dataclass
class RoundTripResult:
    """Outcome of a round trip. Order ids are None on a dry run."""

    market: str
    share_count: int
    buy_price: int
    sell_price: int
    buy_order: Optional[str] = None
    sell_order: Optional[str] = None
    dry_run: bool = True

    def to_dict(self) -> dict:
        """Plain dict of the result."""
        return asdict(self)


class RoundTripTest:
    """
    Buys a few cents worth of a reasonably priced market, waits, and sells.

    Defaults to a dry run that only logs the orders it would place. A live
    run also needs trading enabled on the client.
    """

    def __init__(
        self,
        client: "KalshiClient",
        target_cents: int = 10,
        min_price: int = 5,
        max_price: int = 95,
        hold_seconds: float = 2.0,
        scan_limit: int = 50,
        sleep: Callable[[float], None] = time.sleep,
        dry_run: bool = True,
    ):
        self.client = client
        self.target_cents = target_cents
        self.min_price = min_price
        self.max_price = max_price
        self.hold_seconds = hold_seconds
        self.scan_limit = scan_limit
        self.sleep = sleep
        self.dry_run = dry_run

    def run(self) -> Optional[RoundTripResult]:
        """Run the sequence, returning None when no market qualifies."""
        if not self.dry_run:
            self.client.gate.check("round-trip")

        logger.info("Starting test trading sequence...")
        try:
            return self._run()
        except Exception as e:
            logger.error(f"Test trading failed: {e}")
            raise

    def _run(self) -> Optional[RoundTripResult]:
        response = self.client.get_markets(limit=self.scan_limit, status="open")
        markets = response.get("markets") or []
        if not markets:
            logger.info("No open markets found for testing")
            return None

        selected = self.select_market(markets)
        if selected is None:
            logger.info("No suitable market found for testing")
            return None

        ticker, yes_ask = selected
        share_count = max(1, self.target_cents // yes_ask)
        logger.info(
            f"Selected {ticker}: buying {share_count} contracts at {yes_ask} cents "
            f"(~{share_count * yes_ask} cents total)"
        )

        buy_order = self._place("buy", ticker, share_count, yes_ask)

        logger.info(f"Waiting {self.hold_seconds} seconds before selling...")
        self.sleep(self.hold_seconds)

        book = TopOfBook.from_api_response(ticker, self.client.get_orderbook(ticker))
        sell_price = book.yes.bid if book.yes.bid is not None else yes_ask - 1

        sell_order = self._place("sell", ticker, share_count, sell_price)

        result = RoundTripResult(
            market=ticker,
            share_count=share_count,
            buy_price=yes_ask,
            sell_price=sell_price,
            buy_order=buy_order,
            sell_order=sell_order,
            dry_run=self.dry_run,
        )
        logger.info(f"Test trading sequence completed: {result}")
        return result

    def select_market(self, markets: list[dict]) -> Optional[tuple[str, int]]:
        """First market whose best yes ask is inside the price band."""
        for market in markets:
            ticker = market["ticker"]
            try:
                book = TopOfBook.from_api_response(ticker, self.client.get_orderbook(ticker))
            except Exception as e:
                logger.warning(f"Skipping market {ticker}: {e}")
                continue

            yes_ask = book.yes.ask
            if yes_ask is not None and self.min_price <= yes_ask <= self.max_price:
                return ticker, yes_ask

        return None

    def _place(self, action: str, ticker: str, count: int, price: int) -> Optional[str]:
        if self.dry_run:
            logger.info(f"[dry run] would {action} {count} {ticker} yes at {price} cents")
            return None

        if action == "buy":
            response = self.client.buy_position(ticker, count, price, "yes")
        else:
            response = self.client.sell_position(ticker, count, price, "yes")

        order_id = response.get("order_id") or (response.get("order") or {}).get("order_id")
        logger.info(f"{action.capitalize()} order created: {order_id}")
        return order_id
