"""Normalize private account data: orders and balances."""

from collections.abc import Iterable
from typing import Any

from ccxt.base.exchange import Exchange

from src.tokens_connector.catalog import MarketCatalog
from src.tokens_connector.models import Account, Balance, Fee, Order, OrderStatus
from src.tokens_connector.normalizers.market_data import (
    iso8601,
    parse_trade,
    seconds_to_milliseconds,
)

ORDER_STATUSES: dict[str, str] = {
    "open": OrderStatus.OPEN.value,
    "filled": OrderStatus.CLOSED.value,
    "canceled": OrderStatus.CANCELED.value,
    "expired": OrderStatus.CANCELED.value,
}


def parse_order_status(status: str | None) -> str | None:
    """Map a raw order state to open/closed/canceled.

    Unknown states are returned unchanged.
    """
    if status is None:
        return None
    return ORDER_STATUSES.get(status, status)


def parse_order(order: dict[str, Any], catalog: MarketCatalog) -> Order:
    """Convert an order payload into an Order.

    The market is resolved from the payload's ``currencyPair`` through the
    catalog. The exchange does not report fees on orders, so ``fee.cost``
    stays None and ``fee.currency`` is the market's quote currency.
    """
    market = catalog.market_by_id(order.get("currencyPair"))
    amount = Exchange.safe_float(order, "amount")
    price = Exchange.safe_float(order, "price")
    remaining = Exchange.safe_float(order, "remainingAmount")

    filled = None
    cost = None
    if amount is not None and remaining is not None:
        filled = amount - remaining
        if price is not None:
            cost = price * filled

    symbol = market.symbol if market is not None else None
    fee_currency = market.quote if market is not None else None
    trades = [parse_trade(trade, market) for trade in order.get("trades") or []]
    timestamp = seconds_to_milliseconds(order.get("created"))

    return Order(
        id=Exchange.safe_string(order, "id"),
        symbol=symbol,
        timestamp=timestamp,
        datetime=iso8601(timestamp),
        status=parse_order_status(Exchange.safe_string(order, "orderStatus")),
        type="limit",
        side=Exchange.safe_string(order, "type"),
        price=price,
        amount=amount,
        filled=filled,
        remaining=remaining,
        cost=cost,
        trades=trades,
        fee=Fee(cost=None, currency=fee_currency),
        info=order,
    )


def parse_orders(orders: Iterable[dict[str, Any]], catalog: MarketCatalog) -> list[Order]:
    return [parse_order(order, catalog) for order in orders]


def parse_balance_entry(entry: dict[str, Any]) -> Account:
    """Convert one ``private/balance/{currency}/`` payload into an Account."""
    return Account(
        free=Exchange.safe_float(entry, "available"),
        used=0.0,
        total=Exchange.safe_float(entry, "total"),
    )


def build_balance(entries: dict[str, dict[str, Any]]) -> Balance:
    """Aggregate per-currency payloads into one Balance.

    Accounts are ordered by currency code, whatever order the responses
    arrived in; ``info`` lists the raw payloads in the same order.
    """
    codes = sorted(entries)
    return Balance(
        accounts={code: parse_balance_entry(entries[code]) for code in codes},
        info=[entries[code] for code in codes],
    )
