"""Reporting components - CLI summaries and file export."""

from .cli import SummaryReporter
from .export import JsonExporter

__all__ = [
    "SummaryReporter",
    "JsonExporter",
]
