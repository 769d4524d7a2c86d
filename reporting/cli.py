"""CLI terminal output for market table summaries."""

from typing import Optional

from ingestion.table import MarketStats, MarketTable, NoMarketData
from kalshi.models import MarketRecord


class SummaryReporter:
    """Terminal output for the market table."""

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors

    def print_summary(self, table: MarketTable) -> None:
        """Print totals, quote coverage and per-category counts."""
        stats = table.get_market_stats()

        if isinstance(stats, NoMarketData):
            print(f"\n{stats.error}.\n")
            return

        print(f"\n{'='*40}")
        print(self._colorize(" KALSHI MARKETS SUMMARY", "bold"))
        print(f"{'='*40}")
        print(f"  Total Markets: {stats.total_markets}")
        print(
            f"  Markets with Liquidity: {stats.markets_with_liquidity} "
            f"({stats.liquidity_percentage:.2f}%)"
        )
        print(f"  Total Volume: {stats.total_volume}")
        print(f"  Last Updated: {self._format_time(stats)}")
        print("\n  Categories:")
        for cat in stats.categories:
            print(f"    {cat.category or '(none)'}: {cat.count} markets")
        print()

    def print_markets(
        self,
        records: list[MarketRecord],
        max_display: int = 10,
        title: str = "Markets",
    ) -> None:
        """Print a compact line per market."""
        if not records:
            print("\nNo markets to display.\n")
            return

        shown = records[:max_display]
        print(f"\n{'='*70}")
        print(f" {title} - Top {len(shown)}")
        print(f"{'='*70}")
        for record in shown:
            print(
                f"  {record.ticker:<32} yes {self._quote(record.yes_bid)}/{self._quote(record.yes_ask)}"
                f"  no {self._quote(record.no_bid)}/{self._quote(record.no_ask)}"
                f"  vol {record.volume}"
            )
        if len(records) > max_display:
            print(f"  ... and {len(records) - max_display} more markets not shown.")
        print()

    @staticmethod
    def _quote(price: Optional[int]) -> str:
        return "--" if price is None else f"{price:>2}"

    @staticmethod
    def _format_time(stats: MarketStats) -> str:
        if stats.last_updated is None:
            return "never"
        return stats.last_updated.strftime("%Y-%m-%d %H:%M:%S %Z")

    def _colorize(self, text: str, color: str) -> str:
        """Apply ANSI color codes if enabled."""
        if not self.use_colors:
            return text

        colors = {
            "bold": "\033[1m",
            "green": "\033[92m",
            "yellow": "\033[93m",
            "reset": "\033[0m",
        }

        code = colors.get(color, "")
        reset = colors["reset"]
        return f"{code}{text}{reset}"
