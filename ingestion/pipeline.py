"""Paginated ingestion of open markets with top-of-book enrichment."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING

from kalshi.api.errors import PartialDataError
from kalshi.models import MarketRecord, TopOfBook
from .pacing import PacingPolicy
from .table import MarketTable

if TYPE_CHECKING:
    from kalshi.api import KalshiClient


logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for market ingestion."""

    page_limit: int = 1000
    status: str = "open"
    orderbook_depth: int = 1
    keep_raw: bool = False
    progress_every: int = 50


class MarketIngestionPipeline:
    """
    Fetches every open market, enriches each with its top of book, and
    replaces the market table with the result.

    Calls are strictly sequential. A failed listing call aborts the run and
    leaves the previous table untouched; a failed order book call only
    degrades that market's record.
    """

    def __init__(
        self,
        client: "KalshiClient",
        table: Optional[MarketTable] = None,
        pacing: Optional[PacingPolicy] = None,
        config: Optional[PipelineConfig] = None,
    ):
        self.client = client
        self.table = table if table is not None else MarketTable()
        self.pacing = pacing or PacingPolicy()
        self.config = config or PipelineConfig()
        self.errors: list[PartialDataError] = []
        self.pages_fetched = 0

    def fetch_all_open_markets(self) -> list[MarketRecord]:
        """Run a full ingestion pass and return the new records."""
        logger.info("Fetching all available markets from Kalshi...")
        self.errors = []

        try:
            markets = self.fetch_market_pages()
            logger.info(f"Fetched {len(markets)} markets total")
            records = self.build_records(markets)
        except Exception as e:
            logger.error(f"Failed to fetch markets: {e}")
            raise

        self.table.replace(records, refreshed_at=datetime.now(timezone.utc))
        logger.info(
            f"Market table rebuilt with {len(records)} records "
            f"({len(self.errors)} without order book data)"
        )
        return records

    def fetch_market_pages(self) -> list[dict]:
        """
        Page through the listing endpoint until the server stops returning
        a cursor or a page comes back empty.
        """
        all_markets: list[dict] = []
        cursor = None
        self.pages_fetched = 0

        while True:
            self.pages_fetched += 1
            logger.info(f"Fetching page {self.pages_fetched}...")
            response = self.client.get_markets(
                limit=self.config.page_limit,
                status=self.config.status,
                cursor=cursor,
            )

            markets = response.get("markets") or []
            if not markets:
                break
            all_markets.extend(markets)

            cursor = response.get("cursor") or None
            if not cursor:
                break

            self.pacing.after_page()

        return all_markets

    def build_records(self, markets: list[dict]) -> list[MarketRecord]:
        """Fetch the order book of each market and flatten it into a record."""
        logger.info("Transforming market data into records...")
        records = []
        total = len(markets)

        for i, market in enumerate(markets):
            records.append(self.build_record(market))

            if self.config.progress_every and (i + 1) % self.config.progress_every == 0:
                logger.info(f"Processed {i + 1}/{total} markets...")

            if i + 1 < total:
                self.pacing.after_item()

        return records

    def build_record(self, market: dict) -> MarketRecord:
        """Build one record, degrading to empty book fields on failure."""
        ticker = market["ticker"]
        try:
            raw_orderbook = self.client.get_orderbook(ticker, self.config.orderbook_depth)
            book = TopOfBook.from_api_response(ticker, raw_orderbook)
        except Exception as e:
            error = PartialDataError(ticker, e)
            logger.warning(str(error))
            self.errors.append(error)
            return MarketRecord.from_api_response(market, keep_raw=self.config.keep_raw)

        return MarketRecord.from_api_response(
            market,
            book=book,
            raw_orderbook=raw_orderbook,
            keep_raw=self.config.keep_raw,
        )
