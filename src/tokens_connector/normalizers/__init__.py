"""Normalizers from exchange payloads to canonical models."""

from src.tokens_connector.normalizers.account import (
    ORDER_STATUSES,
    build_balance,
    parse_balance_entry,
    parse_order,
    parse_order_status,
    parse_orders,
)
from src.tokens_connector.normalizers.market_data import (
    filter_by_symbol_since_limit,
    parse_order_book,
    parse_ticker,
    parse_trade,
    parse_trades,
    sort_by_timestamp,
)
from src.tokens_connector.normalizers.ohlcv import build_ohlcv, parse_timeframe_to_minutes

__all__ = [
    "ORDER_STATUSES",
    "build_balance",
    "build_ohlcv",
    "filter_by_symbol_since_limit",
    "parse_balance_entry",
    "parse_order",
    "parse_order_book",
    "parse_order_status",
    "parse_orders",
    "parse_ticker",
    "parse_timeframe_to_minutes",
    "parse_trade",
    "parse_trades",
    "sort_by_timestamp",
]
