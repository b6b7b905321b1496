"""Ticker model for exchange price snapshots."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class Ticker(BaseModel):
    """Standardized ticker data from exchange.

    Based on CCXT unified ticker structure.
    See: https://docs.ccxt.com/#/?id=ticker-structure

    Absent fields stay ``None``. A missing volume is never reported as zero.
    """

    symbol: str = Field(..., description="Trading pair symbol (e.g., 'DPP/ETH')")
    timestamp: int | None = Field(
        None, description="Unix timestamp in milliseconds"
    )
    datetime_: datetime | str | None = Field(
        None, alias="datetime", description="ISO8601 datetime string"
    )

    # Price data
    high: float | None = Field(None, description="Highest price in the window")
    low: float | None = Field(None, description="Lowest price in the window")
    open: float | None = Field(None, description="Opening price of the window")
    close: float | None = Field(None, description="Closing/current price")
    last: float | None = Field(None, description="Last traded price")
    previous_close: float | None = Field(
        None, alias="previousClose", description="Close of the previous window"
    )
    vwap: float | None = Field(None, description="Volume weighted average price")
    average: float | None = Field(None, description="Average of open and close")

    # Bid/Ask
    bid: float | None = Field(None, description="Best bid price")
    bid_volume: float | None = Field(
        None, alias="bidVolume", description="Best bid volume"
    )
    ask: float | None = Field(None, description="Best ask price")
    ask_volume: float | None = Field(
        None, alias="askVolume", description="Best ask volume"
    )

    # Volume
    base_volume: float | None = Field(
        None, alias="baseVolume", description="Window volume in base currency"
    )
    quote_volume: float | None = Field(
        None, alias="quoteVolume", description="Window volume in quote currency"
    )

    # Change, derived from open and last
    change: float | None = Field(None, description="last - open")
    percentage: float | None = Field(None, description="Change relative to open, in percent")

    # Raw data
    info: dict | None = Field(None, description="Raw exchange response")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def derive_change(self) -> "Ticker":
        """Fill change, percentage and average when open and last are known."""
        if self.open is None or self.last is None:
            return self
        if self.change is None:
            self.change = self.last - self.open
        if self.percentage is None and self.open != 0:
            self.percentage = self.change / self.open * 100
        if self.average is None:
            self.average = (self.open + self.last) / 2
        return self
