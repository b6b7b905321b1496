"""Example usage of the Tokens connector."""

import asyncio
import logging

from src.tokens_connector.client import TokensExchange
from src.tokens_connector.config import TokensSettings

# Configuration
SYMBOL = "DPP/ETH"
CURRENCY = "ETH"

# MODE: 'public' or 'private'
MODE = "public"


async def main():
    """Main entry point for the application."""
    logging.basicConfig(level=logging.INFO)
    settings = TokensSettings()

    async with TokensExchange(settings) as exchange:
        markets = await exchange.load_markets()
        print(f"📊 {len(markets)} markets loaded")
        print(exchange.market(SYMBOL))

        book = await exchange.fetch_order_book(SYMBOL, limit=5)
        print(f"\n📖 Order book {SYMBOL}")
        print(f"   Bids: {book.bids}")
        print(f"   Asks: {book.asks}")

        ticker = await exchange.fetch_ticker(SYMBOL)
        print(f"\n📈 Ticker {SYMBOL}: last={ticker.last} vwap={ticker.vwap}")

        trades = await exchange.fetch_trades(SYMBOL, limit=10)
        print(f"\n🔁 {len(trades)} trades")
        for trade in trades:
            print(f"   {trade.datetime_} {trade.side} {trade.amount} @ {trade.price}")

        if MODE == "private":
            if not settings.has_credentials():
                print("\n⚠️  Set TOKENS_NET_API_KEY and TOKENS_NET_SECRET for private calls")
                return

            balance = await exchange.fetch_balance(CURRENCY)
            print(f"\n💰 {CURRENCY}: {balance[CURRENCY]}")

            # Emulated: one request per listed currency
            balance = await exchange.fetch_balance()
            print(f"\n💰 Total: {balance.total}")

            orders = await exchange.fetch_open_orders()
            print(f"\n📋 {len(orders)} open orders")


if __name__ == "__main__":
    asyncio.run(main())
