"""
Manual checks against the live Kalshi API.

Usage:
    python run_checks.py                 # connection, sample markets, one order book
    python run_checks.py --full          # plus a full ingestion pass and summary
    python run_checks.py --trade         # plus a round-trip trade (dry run unless
                                         # KALSHI_TRADING_ENABLED=1)
"""

import argparse
import logging
import sys

from config import KalshiConfig
from execution import RoundTripTest
from ingestion import MarketIngestionPipeline
from kalshi.api import KalshiClient, KalshiError
from kalshi.models import TopOfBook
from reporting import JsonExporter, SummaryReporter


logger = logging.getLogger("run_checks")


def check_sample_markets(client: KalshiClient) -> None:
    """List a handful of markets and read the first one's book."""
    markets = client.get_markets(limit=10, status="open").get("markets") or []
    logger.info(f"Found {len(markets)} sample markets")
    if not markets:
        return

    sample = markets[0]
    logger.info(f"Sample market: {sample['ticker']} - {sample.get('subtitle') or sample.get('title')}")

    book = TopOfBook.from_api_response(sample["ticker"], client.get_orderbook(sample["ticker"]))
    logger.info(
        f"Orderbook: yes {book.yes.bid}/{book.yes.ask}, no {book.no.bid}/{book.no.ask}"
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--full", action="store_true", help="run a full ingestion pass")
    parser.add_argument("--export-dir", default=None, help="write the full ingestion to JSON here")
    parser.add_argument("--trade", action="store_true", help="run the round-trip trade check")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        config = KalshiConfig.from_env()
        client = KalshiClient(config)

        if not client.test_connection():
            logger.error("API connection failed, stopping")
            return 1

        check_sample_markets(client)

        if args.full:
            logger.info("Fetching market data (this may take a few minutes)...")
            pipeline = MarketIngestionPipeline(client)
            pipeline.fetch_all_open_markets()
            reporter = SummaryReporter()
            reporter.print_summary(pipeline.table)
            reporter.print_markets(
                pipeline.table.filter_markets(has_liquidity=True),
                title="Markets with Liquidity",
            )
            if args.export_dir:
                JsonExporter(args.export_dir).write(pipeline.table)

        if args.trade:
            dry_run = not config.trading_enabled
            if dry_run:
                logger.info("Trading is disabled, running the round trip as a dry run")
            else:
                logger.warning("This will place real orders with real money!")
            result = RoundTripTest(client, dry_run=dry_run).run()
            logger.info(f"Trading test completed: {result}")

    except KalshiError as e:
        logger.error(f"Checks failed: {e}")
        return 1

    logger.info("All checks completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
