"""Build canonical markets from the trading-pairs endpoint."""

import logging
from typing import Any

from src.tokens_connector.fees import MAKER_FEE, TAKER_FEE
from src.tokens_connector.models import Limits, Market, MinMax, Precision

logger = logging.getLogger(__name__)

SYMBOL_ID_SEPARATOR = "_"


def market_ids(symbol: str) -> tuple[str, str, str, str, str, str]:
    """Split 'BASE/QUOTE' into its codes and exchange-native ids.

    Returns:
        (base, quote, base_id, quote_id, id, symbol_id), for example
        ('DPP', 'ETH', 'dpp', 'eth', 'dppeth', 'dpp_eth').

    Raises:
        ValueError: If the symbol is not of the form 'BASE/QUOTE'.
    """
    parts = symbol.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid market symbol: {symbol!r}")
    base, quote = parts
    base_id = base.lower()
    quote_id = quote.lower()
    return (
        base,
        quote,
        base_id,
        quote_id,
        base_id + quote_id,
        base_id + SYMBOL_ID_SEPARATOR + quote_id,
    )


def smallest_increment(decimals: int) -> float:
    """10 ** -decimals: the smallest step a value with ``decimals`` places can move."""
    return 10.0**-decimals


def parse_min_amount(min_amount: str | None) -> float | None:
    """Numeric prefix of a minimum like '0.001 ETH'."""
    if not min_amount:
        return None
    return float(min_amount.split()[0])


def parse_market(raw: dict[str, Any]) -> Market:
    """Convert one trading-pair record into a Market.

    ``amountDecimals`` drives the amount precision and ``priceDecimals``
    the price precision.
    """
    symbol = raw["title"]
    base, quote, base_id, quote_id, market_id, symbol_id = market_ids(symbol)
    precision = Precision(
        amount=int(raw["amountDecimals"]),
        price=int(raw["priceDecimals"]),
    )
    return Market(
        id=market_id,
        symbol=symbol,
        base=base,
        quote=quote,
        base_id=base_id,
        quote_id=quote_id,
        symbol_id=symbol_id,
        active=raw.get("trading") == "Enabled",
        precision=precision,
        limits=Limits(
            amount=MinMax(min=smallest_increment(precision.amount)),
            price=MinMax(min=smallest_increment(precision.price)),
            cost=MinMax(min=parse_min_amount(raw.get("minAmount"))),
        ),
        taker=TAKER_FEE,
        maker=MAKER_FEE,
        info=raw,
    )


def build_markets(response: dict[str, Any] | list[dict[str, Any]]) -> list[Market]:
    """Convert the trading-pairs payload into markets.

    The payload is keyed by arbitrary exchange-internal keys; only the
    values are used. Non-record entries (``status``, ``timestamp``) are
    skipped.
    """
    records = response.values() if isinstance(response, dict) else response
    markets = [parse_market(record) for record in records if isinstance(record, dict)]
    logger.debug(f"Parsed {len(markets)} markets from trading pairs")
    return markets
