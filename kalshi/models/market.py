"""Flattened market record: listing fields plus top of book."""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Optional

from .orderbook import TopOfBook, calculate_spread


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an API timestamp, returning None when absent or unparseable."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError, AttributeError):
        return None


@dataclass
class MarketRecord:
    """
    Analysis-ready view of one market.

    Order book fields are None when the book was empty on that side or
    could not be fetched. Raw payloads are only kept when requested.
    """

    # Basic market info
    ticker: str
    title: str = ""
    category: str = ""
    status: str = ""

    # Timing
    open_time: Optional[datetime] = None
    close_time: Optional[datetime] = None
    expiration_time: Optional[datetime] = None

    # Top of book, in cents
    yes_bid: Optional[int] = None
    yes_ask: Optional[int] = None
    yes_bid_size: Optional[int] = None
    yes_ask_size: Optional[int] = None
    no_bid: Optional[int] = None
    no_ask: Optional[int] = None
    no_bid_size: Optional[int] = None
    no_ask_size: Optional[int] = None

    # Market metadata
    volume: int = 0
    open_interest: int = 0
    last_price: Optional[int] = None

    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # Diagnostics
    raw_market: Optional[dict] = None
    raw_orderbook: Optional[dict] = None

    @property
    def spread_yes(self) -> Optional[int]:
        """Yes-side spread."""
        return calculate_spread(self.yes_bid, self.yes_ask)

    @property
    def spread_no(self) -> Optional[int]:
        """No-side spread."""
        return calculate_spread(self.no_bid, self.no_ask)

    @property
    def has_liquidity(self) -> bool:
        """All four top-of-book prices are present."""
        return None not in (self.yes_bid, self.yes_ask, self.no_bid, self.no_ask)

    @property
    def has_yes_quotes(self) -> bool:
        """Both yes bid and yes ask are present."""
        return self.yes_bid is not None and self.yes_ask is not None

    def to_dict(self) -> dict[str, Any]:
        """Plain dict including the derived spreads."""
        data = asdict(self)
        data["spread_yes"] = self.spread_yes
        data["spread_no"] = self.spread_no
        return data

    @classmethod
    def from_api_response(
        cls,
        market: dict,
        book: Optional[TopOfBook] = None,
        raw_orderbook: Optional[dict] = None,
        keep_raw: bool = False,
        fetched_at: Optional[datetime] = None,
    ) -> "MarketRecord":
        """
        Create a record from a listing entry and its top of book.

        Passing book=None produces a degraded record with every order book
        field left as None.
        """
        book = book or TopOfBook(ticker=market.get("ticker", ""))

        return cls(
            ticker=market["ticker"],
            title=market.get("subtitle") or market.get("title") or "",
            category=market.get("category") or "",
            status=market.get("status") or "",
            open_time=parse_timestamp(market.get("open_time")),
            close_time=parse_timestamp(market.get("close_time")),
            expiration_time=parse_timestamp(market.get("expiration_time")),
            yes_bid=book.yes.bid,
            yes_ask=book.yes.ask,
            yes_bid_size=book.yes.bid_size,
            yes_ask_size=book.yes.ask_size,
            no_bid=book.no.bid,
            no_ask=book.no.ask,
            no_bid_size=book.no.bid_size,
            no_ask_size=book.no.ask_size,
            volume=market.get("volume") or 0,
            open_interest=market.get("open_interest") or 0,
            last_price=market.get("last_price"),
            fetched_at=fetched_at or datetime.now(timezone.utc),
            raw_market=market if keep_raw else None,
            raw_orderbook=raw_orderbook if keep_raw else None,
        )
