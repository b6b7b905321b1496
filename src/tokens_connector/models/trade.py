"""Trade model for executed public or order trades."""

from datetime import datetime

from pydantic import BaseModel, Field


class Trade(BaseModel):
    """Standardized trade data from exchange.

    Based on CCXT unified trade structure.
    See: https://docs.ccxt.com/#/?id=trade-structure
    """

    id: str | None = Field(None, description="Exchange trade id")
    symbol: str | None = Field(None, description="Trading pair symbol")
    timestamp: int | None = Field(None, description="Unix timestamp in milliseconds")
    datetime_: datetime | str | None = Field(
        None, alias="datetime", description="ISO8601 datetime string"
    )
    order: str | None = Field(None, description="Order id the trade belongs to")
    type: str | None = Field(None, description="Order type, if known")
    side: str | None = Field(None, description="'buy' or 'sell'")
    price: float | None = None
    amount: float | None = None
    cost: float | None = Field(None, ge=0, description="Absolute price * amount")

    # Raw data
    info: dict | None = Field(None, description="Raw exchange response")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }
