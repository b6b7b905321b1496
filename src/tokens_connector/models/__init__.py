"""Canonical models for tokens-connector."""

from src.tokens_connector.models.balance import Account, Balance
from src.tokens_connector.models.market import Limits, Market, MinMax, Precision
from src.tokens_connector.models.order import Fee, Order, OrderStatus
from src.tokens_connector.models.order_book import OrderBook
from src.tokens_connector.models.ticker import Ticker
from src.tokens_connector.models.trade import Trade

__all__ = [
    # Balance
    "Account",
    "Balance",
    # Market
    "Limits",
    "Market",
    "MinMax",
    "Precision",
    # Order
    "Fee",
    "Order",
    "OrderStatus",
    # Order book
    "OrderBook",
    # Ticker
    "Ticker",
    # Trade
    "Trade",
]
