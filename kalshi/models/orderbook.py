"""Order book data model."""

from dataclasses import dataclass
from typing import Optional


ORDERBOOK_SIDES = ("yes", "no")


@dataclass(frozen=True)
class OrderBookLevel:
    """
    Single price level on one side of the book.

    Levels arrive as arrays of (price, counter price, bid size, ask size);
    short arrays leave the missing trailing fields as None.
    """

    bid: Optional[int] = None
    ask: Optional[int] = None
    bid_size: Optional[int] = None
    ask_size: Optional[int] = None

    @property
    def spread(self) -> Optional[int]:
        """Ask minus bid."""
        return calculate_spread(self.bid, self.ask)

    @classmethod
    def from_api_level(cls, level) -> "OrderBookLevel":
        """Create a level from the raw API array."""
        values = list(level or [])[:4]
        values += [None] * (4 - len(values))
        return cls(bid=values[0], ask=values[1], bid_size=values[2], ask_size=values[3])


EMPTY_LEVEL = OrderBookLevel()


@dataclass(frozen=True)
class TopOfBook:
    """Best level on each side of a market's order book."""

    ticker: str
    yes: OrderBookLevel = EMPTY_LEVEL
    no: OrderBookLevel = EMPTY_LEVEL

    @property
    def has_liquidity(self) -> bool:
        """All four top-of-book prices are present."""
        return None not in (self.yes.bid, self.yes.ask, self.no.bid, self.no.ask)

    @classmethod
    def from_api_response(cls, ticker: str, data: Optional[dict]) -> "TopOfBook":
        """
        Create TopOfBook from an orderbook response.

        Accepts the side arrays either at the top level or nested under an
        "orderbook" key. Empty or missing arrays give an empty level.
        """
        data = data or {}
        book = data.get("orderbook") if isinstance(data.get("orderbook"), dict) else data

        levels = {}
        for side in ORDERBOOK_SIDES:
            side_levels = book.get(side) or []
            levels[side] = (
                OrderBookLevel.from_api_level(side_levels[0]) if side_levels else EMPTY_LEVEL
            )

        return cls(ticker=ticker, yes=levels["yes"], no=levels["no"])


def calculate_spread(bid: Optional[int], ask: Optional[int]) -> Optional[int]:
    """Bid-ask spread, or None when either quote is missing."""
    if bid is None or ask is None:
        return None
    return ask - bid
