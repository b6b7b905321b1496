"""Normalize public market data: order books, tickers and trades."""

from collections.abc import Iterable
from typing import Any

from ccxt.base.exchange import Exchange

from src.tokens_connector.models import Market, OrderBook, Ticker, Trade


def seconds_to_milliseconds(value: Any) -> int | None:
    """Exchange epoch seconds (int or numeric string) to milliseconds."""
    if value is None or value == "":
        return None
    return int(value) * 1000


def iso8601(timestamp: int | None) -> str | None:
    if timestamp is None:
        return None
    return Exchange.iso8601(timestamp)


def parse_levels(levels: Iterable[Any] | None, descending: bool) -> list[list[float]]:
    """Convert raw [price, amount] levels to floats, sorted by price."""
    parsed = [[float(level[0]), float(level[1])] for level in levels or []]
    return sorted(parsed, key=lambda level: level[0], reverse=descending)


def parse_order_book(
    orderbook: dict[str, Any],
    symbol: str | None = None,
    nonce: int | None = None,
    limit: int | None = None,
) -> OrderBook:
    """Convert an order-book payload into an OrderBook.

    Args:
        orderbook: Raw payload with ``bids``, ``asks`` and epoch-seconds ``timestamp``.
        symbol: Canonical symbol the book belongs to.
        nonce: Local snapshot counter to attach.
        limit: Maximum number of levels kept per side.

    Returns:
        OrderBook with bids descending and asks ascending.
    """
    timestamp = seconds_to_milliseconds(orderbook.get("timestamp"))
    bids = parse_levels(orderbook.get("bids"), descending=True)
    asks = parse_levels(orderbook.get("asks"), descending=False)
    if limit is not None:
        bids = bids[:limit]
        asks = asks[:limit]
    return OrderBook(
        symbol=symbol,
        bids=bids,
        asks=asks,
        timestamp=timestamp,
        datetime=iso8601(timestamp),
        nonce=nonce,
    )


def parse_ticker(ticker: dict[str, Any], symbol: str) -> Ticker:
    """Convert a ticker payload into a Ticker.

    Missing or non-numeric fields become None. ``quoteVolume`` is
    ``volume * vwap`` only when both are present.
    """
    timestamp = seconds_to_milliseconds(ticker.get("timestamp"))
    vwap = Exchange.safe_float(ticker, "vwap")
    base_volume = Exchange.safe_float(ticker, "volume")
    quote_volume = None
    if base_volume is not None and vwap is not None:
        quote_volume = base_volume * vwap
    last = Exchange.safe_float(ticker, "last")
    return Ticker(
        symbol=symbol,
        timestamp=timestamp,
        datetime=iso8601(timestamp),
        high=Exchange.safe_float(ticker, "high"),
        low=Exchange.safe_float(ticker, "low"),
        bid=Exchange.safe_float(ticker, "bid"),
        ask=Exchange.safe_float(ticker, "ask"),
        vwap=vwap,
        open=Exchange.safe_float(ticker, "open"),
        close=last,
        last=last,
        base_volume=base_volume,
        quote_volume=quote_volume,
        info=ticker,
    )


def parse_trade(trade: dict[str, Any], market: Market | None = None) -> Trade:
    """Convert one trade payload into a Trade.

    Price, amount and cost come from the generic fields unless the payload
    carries the pair-specific ones: the price under the market's
    ``symbol_id`` (``dpp_eth``), the amount under ``base_id`` (``dpp``)
    and the cost under ``quote_id`` (``eth``).
    """
    side = Exchange.safe_string(trade, "type")
    price = Exchange.safe_float(trade, "price")
    amount = Exchange.safe_float(trade, "amount")
    cost = Exchange.safe_float(trade, "cost")
    symbol = None
    if market is not None:
        price = Exchange.safe_float(trade, market.symbol_id, price)
        amount = Exchange.safe_float(trade, market.base_id, amount)
        cost = Exchange.safe_float(trade, market.quote_id, cost)
        symbol = market.symbol
    if cost is None and price is not None and amount is not None:
        cost = price * amount
    if cost is not None:
        cost = abs(cost)
    timestamp = seconds_to_milliseconds(trade.get("datetime"))
    return Trade(
        id=Exchange.safe_string_2(trade, "tid", "id"),
        symbol=symbol,
        timestamp=timestamp,
        datetime=iso8601(timestamp),
        side=side,
        price=price,
        amount=amount,
        cost=cost,
        info=trade,
    )


def filter_by_symbol_since_limit(
    trades: list[Trade],
    symbol: str | None = None,
    since: int | None = None,
    limit: int | None = None,
) -> list[Trade]:
    """Keep trades of ``symbol`` at or after ``since``, at most the first ``limit``.

    Order of the input is preserved.
    """
    result = [
        trade
        for trade in trades
        if (symbol is None or trade.symbol == symbol)
        and (since is None or (trade.timestamp is not None and trade.timestamp >= since))
    ]
    if limit is not None:
        result = result[:limit]
    return result


def sort_by_timestamp(trades: list[Trade]) -> list[Trade]:
    """Stable ascending sort; trades without timestamp go first."""
    return sorted(trades, key=lambda trade: (trade.timestamp is not None, trade.timestamp or 0))


def parse_trades(
    response: dict[str, Any],
    market: Market | None = None,
    since: int | None = None,
    limit: int | None = None,
) -> list[Trade]:
    """Convert a trades payload into chronological, filtered trades.

    Args:
        response: Raw payload with a ``trades`` list.
        market: Market of the request; filters by its symbol when given.
        since: Earliest timestamp to keep, in milliseconds.
        limit: Maximum number of trades to return.

    Returns:
        Trades sorted by timestamp. Empty when the payload has no trades.
    """
    raw_trades = response.get("trades") or []
    if len(raw_trades) == 0:
        return []
    if isinstance(raw_trades, dict):
        raw_trades = list(raw_trades.values())
    result = sort_by_timestamp([parse_trade(trade, market) for trade in raw_trades])
    symbol = market.symbol if market is not None else None
    return filter_by_symbol_since_limit(result, symbol, since, limit)
