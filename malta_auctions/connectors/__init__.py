"""Ingestion connectors that turn external notices into AuctionAsset records."""

from .customs import parse_seizure_report
from .transport_malta import parse_warrant_notices, scrape_arrest_warrants

__all__ = [
    "parse_seizure_report",
    "parse_warrant_notices",
    "scrape_arrest_warrants",
]
