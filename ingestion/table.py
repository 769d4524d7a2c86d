"""In-memory table of market records with filtering and statistics."""

import random
from collections import Counter
from dataclasses import dataclass, asdict, replace
from datetime import datetime, timezone
from typing import Any, Optional, Union

import pandas as pd

from kalshi.models import MarketRecord


@dataclass(frozen=True)
class MarketFilter:
    """Conjunctive filter criteria. Unset criteria match everything."""

    category: Optional[str] = None
    min_volume: Optional[int] = None
    max_spread_yes: Optional[int] = None
    has_liquidity: bool = False

    def matches(self, record: MarketRecord) -> bool:
        """True when the record satisfies every set criterion."""
        if self.category is not None and record.category != self.category:
            return False
        if self.min_volume is not None and record.volume < self.min_volume:
            return False
        if self.max_spread_yes is not None:
            if record.spread_yes is None or record.spread_yes > self.max_spread_yes:
                return False
        if self.has_liquidity and not record.has_liquidity:
            return False
        return True


@dataclass
class CategoryCount:
    category: str
    count: int


@dataclass
class MarketStats:
    """Aggregate view of the current table."""

    total_markets: int
    categories: list[CategoryCount]
    total_volume: int
    markets_with_liquidity: int
    liquidity_percentage: float
    last_updated: Optional[datetime]

    def to_dict(self) -> dict[str, Any]:
        """Plain dict, categories included."""
        return asdict(self)


@dataclass
class NoMarketData:
    """Returned instead of statistics when the table is empty."""

    error: str = "No market data available"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict with the error message."""
        return asdict(self)


class MarketTable:
    """
    Latest snapshot of market records.

    The record list is only ever swapped wholesale through replace(), so a
    reader sees either the previous snapshot or the new one.
    """

    def __init__(self, records: Optional[list[MarketRecord]] = None):
        self._records: tuple[MarketRecord, ...] = tuple(records or ())
        self.last_updated: Optional[datetime] = None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    @property
    def records(self) -> list[MarketRecord]:
        return list(self._records)

    def replace(self, records: list[MarketRecord], refreshed_at: Optional[datetime] = None) -> None:
        """Swap in a new snapshot."""
        self._records = tuple(records)
        self.last_updated = refreshed_at or datetime.now(timezone.utc)

    def get(self, ticker: str) -> Optional[MarketRecord]:
        """Look up a record by ticker."""
        for record in self._records:
            if record.ticker == ticker:
                return record
        return None

    def filter_markets(
        self,
        criteria: Optional[MarketFilter] = None,
        **kwargs,
    ) -> list[MarketRecord]:
        """
        Records matching every given criterion.

        Accepts a MarketFilter, the same fields as keyword arguments, or both;
        keyword arguments override the matching MarketFilter fields.
        """
        if criteria is None:
            criteria = MarketFilter(**kwargs)
        elif kwargs:
            criteria = replace(criteria, **kwargs)
        return [record for record in self._records if criteria.matches(record)]

    def get_market_stats(self) -> Union[MarketStats, NoMarketData]:
        """Counts, volume and quote coverage for the current snapshot."""
        if not self._records:
            return NoMarketData()

        total = len(self._records)
        by_category = Counter(record.category for record in self._records)
        with_quotes = sum(1 for record in self._records if record.has_yes_quotes)

        return MarketStats(
            total_markets=total,
            categories=[
                CategoryCount(category=category, count=count)
                for category, count in by_category.items()
            ],
            total_volume=sum(record.volume for record in self._records),
            markets_with_liquidity=with_quotes,
            liquidity_percentage=round(with_quotes / total * 100, 2),
            last_updated=self.last_updated,
        )

    def export(self) -> dict[str, Any]:
        """Full record set plus a statistics snapshot."""
        return {
            "data": [record.to_dict() for record in self._records],
            "metadata": self.get_market_stats().to_dict(),
            "exported_at": datetime.now(timezone.utc),
        }

    def get_random_tradeable_market(self, rng: Optional[random.Random] = None) -> Optional[MarketRecord]:
        """Uniform pick among records with all four prices, or None."""
        tradeable = self.filter_markets(has_liquidity=True)
        if not tradeable:
            return None
        return (rng or random).choice(tradeable)

    def to_dataframe(self, include_raw: bool = False) -> pd.DataFrame:
        """Records as a DataFrame, one row per market."""
        rows = [record.to_dict() for record in self._records]
        if not include_raw:
            for row in rows:
                row.pop("raw_market", None)
                row.pop("raw_orderbook", None)
        return pd.DataFrame(rows)
