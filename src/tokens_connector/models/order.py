"""Order models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from src.tokens_connector.models.trade import Trade


class OrderStatus(str, Enum):
    """Canonical order states.

    Raw states without a mapping are kept verbatim on ``Order.status``,
    so callers must accept strings outside this enum.
    """

    OPEN = "open"
    CLOSED = "closed"
    CANCELED = "canceled"


class Fee(BaseModel):
    """Fee paid for an order or trade."""

    cost: float | None = None
    currency: str | None = None
    rate: float | None = None


class Order(BaseModel):
    """Standardized order data from exchange.

    Based on CCXT unified order structure.
    See: https://docs.ccxt.com/#/?id=order-structure
    """

    id: str | None = Field(None, description="Exchange order id")
    symbol: str | None = Field(None, description="Trading pair symbol")
    timestamp: int | None = Field(None, description="Creation time in milliseconds")
    datetime_: datetime | str | None = Field(
        None, alias="datetime", description="ISO8601 datetime string"
    )
    last_trade_timestamp: int | None = Field(None, alias="lastTradeTimestamp")
    status: str | None = Field(None, description="open, closed, canceled or raw state")
    type: str | None = Field(None, description="Order type")
    side: str | None = Field(None, description="'buy' or 'sell'")
    price: float | None = None
    amount: float | None = None
    filled: float | None = Field(None, description="amount - remaining")
    remaining: float | None = None
    cost: float | None = Field(None, description="price * filled")
    trades: list[Trade] = Field(default_factory=list)
    fee: Fee | None = None

    # Raw data
    info: dict | None = Field(None, description="Raw exchange response")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }
