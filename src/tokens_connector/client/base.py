from abc import ABC, abstractmethod
from typing import Any

from src.tokens_connector.models import Balance, Market, Order, OrderBook, Ticker, Trade


class BaseExchange(ABC):
    """Abstract base class for single-exchange REST connectors.

    Every symbol-accepting operation loads the market catalog first.

    Attributes:
        exchange_id (str): The ID of the exchange (e.g., 'tokens').
    """

    def __init__(self, exchange_id: str):
        """Initialize the connector.

        Args:
            exchange_id: The unique identifier for the exchange.
        """
        self.exchange_id = exchange_id

    @abstractmethod
    async def load_markets(self, reload: bool = False) -> dict[str, Market]:
        """Load the market catalog once, or again when ``reload`` is set.

        Returns:
            dict[str, Market]: Markets keyed by canonical symbol.
        """
        pass

    @abstractmethod
    async def fetch_markets(self) -> list[Market]:
        """Fetch all markets listed on the exchange, without caching."""
        pass

    @abstractmethod
    async def fetch_order_book(self, symbol: str, limit: int | None = None) -> OrderBook:
        """Fetch the current order book of a symbol.

        Args:
            symbol: The trading pair symbol (e.g., 'DPP/ETH').
            limit: Maximum number of levels per side. If None, all levels.
        """
        pass

    @abstractmethod
    async def fetch_ticker(self, symbol: str) -> Ticker:
        """Fetch the ticker of a symbol."""
        pass

    @abstractmethod
    async def fetch_trades(
        self, symbol: str, since: int | None = None, limit: int | None = None
    ) -> list[Trade]:
        """Fetch recent public trades of a symbol.

        Args:
            symbol: The trading pair symbol.
            since: Earliest trade timestamp in milliseconds.
            limit: Maximum number of trades to return.

        Returns:
            list[Trade]: Trades in chronological order.
        """
        pass

    @abstractmethod
    async def fetch_balance(self, currency: str | None = None) -> Balance:
        """Fetch the balance of one currency, or of every listed currency."""
        pass

    @abstractmethod
    async def create_order(
        self,
        symbol: str,
        type: str,
        side: str,
        amount: float,
        price: float | None = None,
    ) -> Order:
        """Place an order.

        Args:
            symbol: The trading pair symbol.
            type: Order type (e.g., 'limit').
            side: 'buy' or 'sell'.
            amount: Order amount in base currency.
            price: Limit price in quote currency.
        """
        pass

    @abstractmethod
    async def cancel_order(self, id: str) -> Any:
        """Cancel an open order by id."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any resources held by the connector (e.g., HTTP sessions)."""
        pass

    async def __aenter__(self) -> "BaseExchange":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit."""
        await self.close()
