"""Market model for tradable base/quote pairs."""

from pydantic import BaseModel, Field


class MinMax(BaseModel):
    """Lower and upper bound of an order field. ``None`` means unbounded."""

    min: float | None = None
    max: float | None = None

    model_config = {"frozen": True}


class Precision(BaseModel):
    """Decimal places accepted by the exchange for order fields."""

    amount: int = Field(..., ge=0, description="Decimal places of order amounts")
    price: int = Field(..., ge=0, description="Decimal places of order prices")

    model_config = {"frozen": True}


class Limits(BaseModel):
    """Order limits derived from the pair metadata."""

    amount: MinMax = Field(default_factory=MinMax)
    price: MinMax = Field(default_factory=MinMax)
    cost: MinMax = Field(default_factory=MinMax)

    model_config = {"frozen": True}


class Market(BaseModel):
    """Standardized market record.

    Based on CCXT unified market structure.
    See: https://docs.ccxt.com/#/?id=market-structure

    ``id`` and ``symbol_id`` are derived from ``symbol`` only: the lowercase
    base and quote codes, concatenated (``dppeth``) or joined by an
    underscore (``dpp_eth``). Markets are read-only once built.
    """

    id: str = Field(..., description="Exchange-native pair id (e.g., 'dppeth')")
    symbol: str = Field(..., description="Canonical symbol (e.g., 'DPP/ETH')")
    base: str = Field(..., description="Base currency code")
    quote: str = Field(..., description="Quote currency code")
    base_id: str = Field(..., alias="baseId", description="Exchange-native base id")
    quote_id: str = Field(..., alias="quoteId", description="Exchange-native quote id")
    symbol_id: str = Field(
        ..., alias="symbolId", description="Underscore-joined pair id (e.g., 'dpp_eth')"
    )
    active: bool = Field(..., description="Whether trading is enabled on the pair")
    precision: Precision
    limits: Limits
    taker: float | None = Field(None, description="Taker fee rate")
    maker: float | None = Field(None, description="Maker fee rate")

    # Raw data
    info: dict | None = Field(None, description="Raw exchange pair metadata")

    model_config = {
        "populate_by_name": True,
        "frozen": True,
    }
