"""Market catalog: pair metadata to canonical markets."""

from src.tokens_connector.catalog.builder import (
    build_markets,
    market_ids,
    parse_market,
    parse_min_amount,
    smallest_increment,
)
from src.tokens_connector.catalog.catalog import CatalogSnapshot, MarketCatalog

__all__ = [
    "CatalogSnapshot",
    "MarketCatalog",
    "build_markets",
    "market_ids",
    "parse_market",
    "parse_min_amount",
    "smallest_increment",
]
