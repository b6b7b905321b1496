"""Connector for the Tokens (tokens.net) REST API."""

import asyncio
import logging
from typing import Any

import pandas as pd
from ccxt.base.decimal_to_precision import (
    DECIMAL_PLACES,
    ROUND,
    TRUNCATE,
    decimal_to_precision,
)
from ccxt.base.errors import NotSupported
from ccxt.base.exchange import Exchange

from src.tokens_connector.auth import NonceSource, Signer, shared_nonce_source
from src.tokens_connector.catalog import MarketCatalog, build_markets
from src.tokens_connector.client.base import BaseExchange
from src.tokens_connector.config import TokensSettings
from src.tokens_connector.errors import (
    ArgumentsMissing,
    GenericExchangeError,
    RateLimited,
    handle_errors,
)
from src.tokens_connector.fees import calculate_fee
from src.tokens_connector.models import (
    Balance,
    Fee,
    Market,
    Order,
    OrderBook,
    Ticker,
    Trade,
)
from src.tokens_connector.normalizers import (
    build_balance,
    build_ohlcv,
    parse_balance_entry,
    parse_order,
    parse_order_book,
    parse_order_status,
    parse_orders,
    parse_ticker,
    parse_trades,
)
from src.tokens_connector.normalizers.market_data import iso8601, seconds_to_milliseconds
from src.tokens_connector.transport import BaseTransport, HttpxTransport

logger = logging.getLogger(__name__)


class TokensExchange(BaseExchange):
    """Tokens implementation of the exchange connector.

    Public endpoints need no credentials. Private endpoints are signed
    with the account key and secret from ``TokensSettings``; missing
    credentials raise ``CredentialsRequired`` before any request is sent.
    Errors propagate to the caller, nothing is retried here.
    """

    api = {
        "public": {
            "get": [
                "public/ticker/{pair}/",
                "public/ticker/{time}/{pair}/",
                "public/trades/{time}/{pair}/",
                "public/trading-pairs/get/all/",
                "public/order-book/{pair}/",
            ],
        },
        "private": {
            "get": [
                "private/balance/{currency}/",
                "private/orders/get/all/",
                "private/orders/get/{id}/",
                "private/orders/get/{trading_pair}/",
            ],
            "post": [
                "private/orders/add/limit/",
                "private/orders/cancel/{id}/",
            ],
        },
    }
    # Order types the exchange accepts, keyed the ccxt way
    has = {
        "createLimitOrder": True,
        "createMarketOrder": False,
    }

    def __init__(
        self,
        settings: TokensSettings | None = None,
        transport: BaseTransport | None = None,
        nonce_source: NonceSource | None = None,
    ):
        """Initialize the Tokens connector.

        Args:
            settings: Connector settings and credentials. Read from the
                environment when omitted.
            transport: HTTP transport. An HttpxTransport when omitted.
            nonce_source: Nonce source shared by every signed request.
                Defaults to the process-wide source.
        """
        super().__init__("tokens")
        self.settings = settings or TokensSettings()
        self.transport = transport or HttpxTransport(timeout=self.settings.timeout)
        self.nonce_source = nonce_source or shared_nonce_source()
        self.signer = Signer(
            self.settings.api_key,
            self.settings.secret,
            nonce_source=self.nonce_source,
            hash_algorithm=self.settings.hash_algorithm,
        )
        self.catalog = MarketCatalog()

    # -------------- requests --------------

    def nonce(self) -> int:
        return self.nonce_source()

    def check_required_credentials(self) -> None:
        self.settings.require_credentials()

    def sign(
        self,
        path: str,
        api: str = "public",
        method: str = "GET",
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build url, body and headers of a request.

        Path placeholders are filled from ``params``; the remaining params
        become the query string of public requests or the urlencoded body
        of private ones.

        Raises:
            NotSupported: If the path is not a declared endpoint of ``api``.
            ArgumentsMissing: If a path placeholder has no value.
            CredentialsRequired: If a private request lacks credentials.
        """
        params = params or {}
        if path not in self.api.get(api, {}).get(method.lower(), []):
            raise NotSupported(f"tokens has no {api} {method} endpoint {path}")
        url = self.settings.api_url + Exchange.implode_params(path, params)
        if "{" in url:
            raise ArgumentsMissing(f"tokens {path} requires {Exchange.extract_params(path)}")
        query = Exchange.omit(params, Exchange.extract_params(path))
        body = None
        headers = None
        if api == "public":
            if query:
                url += "?" + Exchange.urlencode(query)
        else:
            headers = self.signer.sign()
            body = Exchange.urlencode(query)
        return {"url": url, "method": method, "body": body, "headers": headers}

    async def request(
        self,
        path: str,
        api: str = "public",
        method: str = "GET",
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Sign, send and classify one request.

        Returns:
            The parsed JSON response.

        Raises:
            TokensError: When the body carries an error code or status,
                or the HTTP status is an error.
        """
        request = self.sign(path, api, method, params)
        logger.debug(f"{method} {path} ({api})")
        response = await self.transport.request(**request)
        handle_errors(response.status, response.body, response.data)
        if response.status == 429:
            raise RateLimited(f"tokens {method} {request['url']} 429 {response.body}")
        if response.status >= 400:
            raise GenericExchangeError(
                f"tokens {method} {request['url']} {response.status} {response.body}"
            )
        return response.data

    # -------------- markets --------------

    async def fetch_markets(self) -> list[Market]:
        response = await self.request("public/trading-pairs/get/all/")
        return build_markets(response)

    async def load_markets(self, reload: bool = False) -> dict[str, Market]:
        """Load the catalog on first use, or again when ``reload`` is set."""
        await self.catalog.load(self.fetch_markets, reload=reload)
        return dict(self.catalog.markets)

    @property
    def markets(self) -> dict[str, Market]:
        return dict(self.catalog.markets)

    @property
    def symbols(self) -> list[str]:
        return self.catalog.symbols

    @property
    def currencies(self) -> tuple[str, ...]:
        return self.catalog.currencies

    def market(self, symbol: str) -> Market:
        return self.catalog.market(symbol)

    def market_id(self, symbol: str) -> str:
        return self.catalog.market_id(symbol)

    def amount_to_precision(self, symbol: str, amount: float) -> str:
        """Truncate an amount to the market's amount precision."""
        market = self.market(symbol)
        return decimal_to_precision(
            amount, TRUNCATE, market.precision.amount, DECIMAL_PLACES
        )

    def price_to_precision(self, symbol: str, price: float) -> str:
        """Round a price to the market's price precision."""
        market = self.market(symbol)
        return decimal_to_precision(price, ROUND, market.precision.price, DECIMAL_PLACES)

    def calculate_fee(
        self,
        symbol: str,
        side: str,
        amount: float,
        price: float,
        taker_or_maker: str = "taker",
    ) -> Fee:
        return calculate_fee(self.market(symbol), side, amount, price, taker_or_maker)

    # -------------- public data --------------

    async def fetch_order_book(
        self,
        symbol: str,
        limit: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> OrderBook:
        """Fetch the order book of a symbol.

        Args:
            symbol: Trading pair symbol (e.g., 'DPP/ETH').
            limit: Maximum number of levels per side.
            params: Extra request parameters.

        Returns:
            OrderBook with a local nonce attached.
        """
        await self.load_markets()
        market = self.market(symbol)
        response = await self.request(
            "public/order-book/{pair}/", params={"pair": market.id, **(params or {})}
        )
        return parse_order_book(response, symbol, nonce=self.nonce(), limit=limit)

    async def fetch_ticker(
        self,
        symbol: str,
        time: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> Ticker:
        """Fetch the ticker of a symbol.

        Args:
            symbol: Trading pair symbol.
            time: Ticker window ('minute', 'hour', 'day'). Defaults to
                ``settings.ticker_time``. 'day' selects the daily ticker
                endpoint, which takes no window.
            params: Extra request parameters.
        """
        await self.load_markets()
        request = {"pair": self.market_id(symbol), **(params or {})}
        time = time or self.settings.ticker_time
        if time is None or time == "day":
            response = await self.request("public/ticker/{pair}/", params=request)
        else:
            response = await self.request(
                "public/ticker/{time}/{pair}/", params={"time": time, **request}
            )
        return parse_ticker(response, symbol)

    async def fetch_trades(
        self,
        symbol: str,
        since: int | None = None,
        limit: int | None = None,
        time: str | None = None,
        params: dict[str, Any] | None = None,
    ) -> list[Trade]:
        """Fetch public trades of a symbol.

        Args:
            symbol: Trading pair symbol.
            since: Earliest trade timestamp in milliseconds.
            limit: Maximum number of trades.
            time: Trades window ('minute', 'hour', 'day'). Defaults to
                ``settings.trades_time``.
            params: Extra request parameters.

        Returns:
            Trades in chronological order.
        """
        await self.load_markets()
        market = self.market(symbol)
        response = await self.request(
            "public/trades/{time}/{pair}/",
            params={
                "time": time or self.settings.trades_time,
                "pair": market.id,
                **(params or {}),
            },
        )
        return parse_trades(response, market, since, limit)

    async def fetch_ohlcv(
        self,
        symbol: str,
        timeframe: str = "1m",
        since: int | None = None,
        limit: int | None = None,
    ) -> pd.DataFrame:
        """Build OHLCV candles from the last day of public trades.

        The exchange has no candle endpoint, so only the trades window of
        one day is covered.

        Returns:
            DataFrame with columns: timestamp, open, high, low, close, volume.
        """
        trades = await self.fetch_trades(symbol, time="day")
        return build_ohlcv(trades, timeframe, since, limit)

    # -------------- account --------------

    async def _fetch_balance_entry(self, currency: str) -> dict[str, Any]:
        return await self.request(
            "private/balance/{currency}/", "private", "GET", {"currency": currency}
        )

    async def fetch_balance(self, currency: str | None = None) -> Balance:
        """Fetch the balance of one currency, or of every listed currency.

        The exchange has no endpoint for the whole account: without
        ``currency`` one signed request is sent per currency of the
        catalog. Requests run one after the other unless
        ``settings.concurrent_balance_fetch`` is set; either way the result
        is keyed and ordered by currency code.

        Args:
            currency: Currency code (e.g., 'ETH'). None for all currencies.

        Returns:
            Balance with ``used`` always 0.
        """
        self.check_required_credentials()
        await self.load_markets()

        if currency is not None:
            response = await self._fetch_balance_entry(currency)
            code = response.get("currency") or currency
            return Balance(
                accounts={code: parse_balance_entry(response)},
                info=response,
            )

        codes = list(self.catalog.currencies)
        logger.warning(
            f"fetch_balance without currency sends {len(codes)} requests, "
            f"one per currency"
        )
        if self.settings.concurrent_balance_fetch:
            responses = await asyncio.gather(
                *(self._fetch_balance_entry(code) for code in codes)
            )
        else:
            responses = []
            for code in codes:
                responses.append(await self._fetch_balance_entry(code))
        return build_balance(dict(zip(codes, responses)))

    async def _check_order(self, symbol: str, type: str, price: float | None) -> Market:
        """Validate an order locally and return its market.

        Nothing is sent to the exchange except the catalog load.

        Raises:
            NotSupported: For an order type the exchange does not accept.
            ArgumentsMissing: If a limit order has no price.
            CredentialsRequired: If apiKey or secret is missing.
            BadSymbol: If the symbol is not listed.
        """
        if not self.has.get(f"create{type.capitalize()}Order"):
            raise NotSupported(f"tokens supports limit orders only, got {type}")
        if price is None:
            raise ArgumentsMissing("tokens create_order requires a price for limit orders")
        self.check_required_credentials()
        await self.load_markets()
        return self.market(symbol)

    async def create_order(
        self,
        symbol: str,
        type: str,
        side: str,
        amount: float,
        price: float | None = None,
        params: dict[str, Any] | None = None,
    ) -> Order:
        """Place a limit order.

        Amount is truncated and price rounded to the market precision.

        Raises:
            NotSupported: For any order type other than 'limit'.
            ArgumentsMissing: If no price is given.
        """
        market = await self._check_order(symbol, type, price)
        request = {
            "tradingPair": market.id,
            "amount": self.amount_to_precision(symbol, amount),
            "side": side,
            "price": self.price_to_precision(symbol, price),
        }
        response = await self.request(
            "private/orders/add/limit/", "private", "POST", {**request, **(params or {})}
        )
        timestamp = seconds_to_milliseconds(response.get("timestamp"))
        return Order(
            id=Exchange.safe_string(response, "orderId"),
            symbol=market.symbol,
            timestamp=timestamp,
            datetime=iso8601(timestamp),
            type=type,
            side=side,
            price=price,
            amount=amount,
            info=response,
        )

    async def cancel_order(self, id: str) -> dict[str, Any]:
        """Cancel an open order.

        Returns:
            The raw exchange response.
        """
        self.check_required_credentials()
        return await self.request(
            "private/orders/cancel/{id}/", "private", "POST", {"id": id}
        )

    async def edit_order(
        self,
        id: str,
        symbol: str,
        type: str,
        side: str,
        amount: float,
        price: float | None = None,
    ) -> Order:
        """Replace an order: cancel ``id``, then place the new one.

        The replacement is validated before the cancel is sent, so an
        invalid replacement leaves the original order untouched.
        """
        await self._check_order(symbol, type, price)
        await self.cancel_order(id)
        return await self.create_order(symbol, type, side, amount, price)

    async def fetch_order(self, id: str) -> Order:
        self.check_required_credentials()
        await self.load_markets()
        response = await self.request(
            "private/orders/get/{id}/", "private", "GET", {"id": id}
        )
        return parse_order(response, self.catalog)

    async def fetch_order_status(self, id: str) -> str | None:
        self.check_required_credentials()
        response = await self.request(
            "private/orders/get/{id}/", "private", "GET", {"id": id}
        )
        return parse_order_status(Exchange.safe_string(response, "orderStatus"))

    async def fetch_open_orders(self, symbol: str | None = None) -> list[Order]:
        """Fetch open orders of one symbol, or of the whole account."""
        self.check_required_credentials()
        await self.load_markets()
        if symbol is None:
            response = await self.request("private/orders/get/all/", "private", "GET")
        else:
            response = await self.request(
                "private/orders/get/{trading_pair}/",
                "private",
                "GET",
                {"trading_pair": self.market_id(symbol)},
            )
        return parse_orders(response.get("openOrders") or [], self.catalog)

    async def close(self) -> None:
        """Close the transport and release resources."""
        await self.transport.close()
