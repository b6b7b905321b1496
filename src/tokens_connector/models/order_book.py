"""Order book snapshot model."""

from datetime import datetime

from pydantic import BaseModel, Field


class OrderBook(BaseModel):
    """Standardized order book snapshot.

    Based on CCXT unified order book structure.
    See: https://docs.ccxt.com/#/?id=order-book-structure

    Bids are sorted by price descending and asks ascending. Each level is
    a ``[price, amount]`` pair.
    """

    symbol: str | None = Field(None, description="Trading pair symbol")
    bids: list[list[float]] = Field(default_factory=list)
    asks: list[list[float]] = Field(default_factory=list)
    timestamp: int | None = Field(None, description="Unix timestamp in milliseconds")
    datetime_: datetime | str | None = Field(
        None, alias="datetime", description="ISO8601 datetime string"
    )
    nonce: int | None = Field(None, description="Local snapshot counter")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }
