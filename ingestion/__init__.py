"""Data ingestion components."""

from .pacing import PacingPolicy, NO_PACING
from .pipeline import MarketIngestionPipeline, PipelineConfig
from .table import MarketTable, MarketFilter, MarketStats, NoMarketData, CategoryCount

__all__ = [
    "PacingPolicy",
    "NO_PACING",
    "MarketIngestionPipeline",
    "PipelineConfig",
    "MarketTable",
    "MarketFilter",
    "MarketStats",
    "NoMarketData",
    "CategoryCount",
]
