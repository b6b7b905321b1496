"""Candles built from public trades, for an exchange without an OHLCV endpoint."""

import pandas as pd

from src.tokens_connector.models import Trade

OHLCV_COLUMNS = ["timestamp", "open", "high", "low", "close", "volume"]


def parse_timeframe_to_minutes(timeframe: str) -> int:
    """Convert timeframe string (e.g. '15m', '1h', '4h', '1d') to minutes."""
    unit = timeframe[-1]
    value = int(timeframe[:-1])

    if unit == "m":
        return value
    elif unit == "h":
        return value * 60
    elif unit == "d":
        return value * 24 * 60
    elif unit == "w":
        return value * 24 * 60 * 7
    else:
        raise ValueError(f"Unsupported timeframe unit: {unit}")


def build_ohlcv(
    trades: list[Trade],
    timeframe: str = "1m",
    since: int | None = None,
    limit: int | None = None,
) -> pd.DataFrame:
    """Bucket trades into OHLCV candles.

    Args:
        trades: Trades sorted by timestamp.
        timeframe: Candlestick timeframe (e.g., '1m', '1h', '1d').
        since: Drop candles opening before this timestamp (milliseconds).
        limit: Maximum number of candles to return.

    Returns:
        DataFrame with columns: timestamp, open, high, low, close, volume.
    """
    rows = [
        (trade.timestamp, trade.price, trade.amount)
        for trade in trades
        if trade.timestamp is not None and trade.price is not None and trade.amount is not None
    ]
    if not rows:
        return pd.DataFrame(columns=OHLCV_COLUMNS)

    df = pd.DataFrame(rows, columns=["timestamp", "price", "amount"])
    ms = parse_timeframe_to_minutes(timeframe) * 60 * 1000
    df["timestamp"] = (df["timestamp"] // ms) * ms

    candles = (
        df.groupby("timestamp", sort=True)
        .agg(
            open=("price", "first"),
            high=("price", "max"),
            low=("price", "min"),
            close=("price", "last"),
            volume=("amount", "sum"),
        )
        .reset_index()
    )

    if since is not None:
        candles = candles[candles["timestamp"] >= since]
    if limit is not None:
        candles = candles.head(limit)
    return candles[OHLCV_COLUMNS].reset_index(drop=True)
