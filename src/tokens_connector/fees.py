"""Fee schedule of the Tokens exchange."""

from src.tokens_connector.models import Fee, Market

TAKER_FEE = 0.2 / 100
MAKER_FEE = 0.0 / 100

# Flat withdrawal fees, in units of the withdrawn currency
WITHDRAW_FEES: dict[str, float] = {
    "ADA": 15,
    "BAT": 2,
    "BCH": 0.0001,
    "BIT": 30,
    "BSV": 0.0001,
    "BTC": 0.0002,
    "DAI": 1,
    "DPP": 100,
    "DTR": 30,
    "ELI": 100,
    "ETH": 0.005,
    "EURS": 1.5,
    "GUSD": 1,
    "LANA": 5000,
    "LTC": 0.002,
    "MRP": 100,
    "PAX": 1,
    "TAJ": 300,
    "TUSD": 1,
    "USDC": 1,
    "USDT-ERC": 1,
    "USDT-OMNI": 3,
    "VTY": 300,
    "XAUR": 15,
    "XLM": 0.1,
    "XRM": 0.0001,
    "XRP": 0.05,
}


def calculate_fee(
    market: Market,
    side: str,
    amount: float,
    price: float,
    taker_or_maker: str = "taker",
) -> Fee:
    """Estimate the trading fee of an order, charged in the quote currency."""
    if taker_or_maker not in ("taker", "maker"):
        raise ValueError(f"Invalid taker_or_maker: {taker_or_maker}")
    rate = market.taker if taker_or_maker == "taker" else market.maker
    if rate is None:
        rate = TAKER_FEE if taker_or_maker == "taker" else MAKER_FEE
    return Fee(cost=amount * price * rate, currency=market.quote, rate=rate)
