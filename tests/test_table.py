"""Tests for the in-memory market table."""

import random

import pytest
from datetime import datetime, timezone

from ingestion import MarketFilter, MarketStats, MarketTable, NoMarketData
from kalshi.models import MarketRecord


def record(ticker, category="Economics", volume=0, yes=(None, None), no=(None, None)) -> MarketRecord:
    return MarketRecord(
        ticker=ticker,
        category=category,
        volume=volume,
        yes_bid=yes[0],
        yes_ask=yes[1],
        no_bid=no[0],
        no_ask=no[1],
    )


@pytest.fixture
def table() -> MarketTable:
    table = MarketTable()
    table.replace(
        [
            record("A", "Economics", 100, yes=(40, 42), no=(58, 60)),
            record("B", "Economics", 5, yes=(10, 20), no=(80, 90)),
            record("C", "Politics", 500, yes=(30, 31)),
            record("D", "Politics", 0),
            record("E", "Sports", 50, yes=(None, 70), no=(30, 35)),
        ],
        refreshed_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    return table


class TestFilter:
    """Tests for filter_markets."""

    def test_no_criteria_returns_everything(self, table):
        assert len(table.filter_markets()) == 5

    def test_category(self, table):
        assert [r.ticker for r in table.filter_markets(category="Politics")] == ["C", "D"]

    def test_min_volume(self, table):
        assert [r.ticker for r in table.filter_markets(min_volume=50)] == ["A", "C", "E"]

    def test_max_spread_yes_excludes_missing_spread(self, table):
        """Test records without a yes spread never pass a spread cap."""
        assert [r.ticker for r in table.filter_markets(max_spread_yes=2)] == ["A", "C"]

    def test_has_liquidity_requires_all_four_prices(self, table):
        assert [r.ticker for r in table.filter_markets(has_liquidity=True)] == ["A", "B"]

    def test_criteria_are_conjunctive(self, table):
        criteria = MarketFilter(category="Economics", min_volume=50, has_liquidity=True)
        assert [r.ticker for r in table.filter_markets(criteria)] == ["A"]

    def test_filtering_is_idempotent(self, table):
        """Test applying the same filter twice gives the same set as once."""
        criteria = MarketFilter(min_volume=10, max_spread_yes=5)
        once = [r for r in table if criteria.matches(r)]
        twice = [r for r in once if criteria.matches(r)]
        assert once == twice == table.filter_markets(criteria)


class TestStats:
    """Tests for get_market_stats."""

    def test_empty_table_reports_no_data(self):
        stats = MarketTable().get_market_stats()
        assert isinstance(stats, NoMarketData)
        assert stats.to_dict() == {"error": "No market data available"}

    def test_aggregates(self, table):
        stats = table.get_market_stats()

        assert isinstance(stats, MarketStats)
        assert stats.total_markets == 5
        assert stats.total_volume == 655
        assert stats.markets_with_liquidity == 3
        assert stats.liquidity_percentage == 60.0
        assert stats.last_updated == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert [(c.category, c.count) for c in stats.categories] == [
            ("Economics", 2),
            ("Politics", 2),
            ("Sports", 1),
        ]

    def test_percentage_rounded(self):
        table = MarketTable()
        table.replace([record("A", yes=(1, 2)), record("B"), record("C")])
        assert table.get_market_stats().liquidity_percentage == 33.33


class TestExport:
    """Tests for export and DataFrame conversion."""

    def test_export_shape(self, table):
        exported = table.export()

        assert len(exported["data"]) == 5
        assert exported["data"][0]["ticker"] == "A"
        assert exported["data"][0]["spread_yes"] == 2
        assert exported["metadata"]["total_markets"] == 5
        assert isinstance(exported["exported_at"], datetime)

    def test_export_empty_table(self):
        exported = MarketTable().export()
        assert exported["data"] == []
        assert exported["metadata"] == {"error": "No market data available"}

    def test_to_dataframe(self, table):
        df = table.to_dataframe()

        assert len(df) == 5
        assert "spread_yes" in df.columns
        assert "raw_market" not in df.columns
        assert df.loc[df["ticker"] == "C", "volume"].iloc[0] == 500


class TestRandomPick:
    """Tests for get_random_tradeable_market."""

    def test_picks_only_liquid_markets(self, table):
        rng = random.Random(7)
        picks = {table.get_random_tradeable_market(rng).ticker for _ in range(50)}
        assert picks <= {"A", "B"}

    def test_none_when_nothing_qualifies(self):
        table = MarketTable()
        table.replace([record("D")])
        assert table.get_random_tradeable_market() is None


class TestReplace:
    """Tests for snapshot replacement."""

    def test_replace_swaps_whole_snapshot(self, table):
        table.replace([record("Z")])
        assert [r.ticker for r in table] == ["Z"]
        assert table.get("A") is None
        assert table.get("Z").ticker == "Z"

    def test_records_returns_copy(self, table):
        records = table.records
        records.clear()
        assert len(table) == 5


class TestFilterMerging:
    """Tests for combining a MarketFilter with keyword criteria."""

    def test_keywords_narrow_filter_object(self, table):
        """Test keyword criteria are applied on top of a MarketFilter."""
        result = table.filter_markets(MarketFilter(min_volume=0), category="Politics")
        assert [r.ticker for r in result] == ["C", "D"]

    def test_keywords_override_matching_field(self, table):
        result = table.filter_markets(MarketFilter(category="Sports"), category="Economics", has_liquidity=True)
        assert [r.ticker for r in result] == ["A", "B"]
