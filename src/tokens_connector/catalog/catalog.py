"""Market catalog with atomic refresh."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ccxt.base.errors import BadSymbol

from src.tokens_connector.models import Market

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """One complete, read-only generation of the catalog."""

    by_symbol: Mapping[str, Market] = field(default_factory=lambda: MappingProxyType({}))
    by_id: Mapping[str, Market] = field(default_factory=lambda: MappingProxyType({}))
    currencies: tuple[str, ...] = ()

    @classmethod
    def from_markets(cls, markets: Iterable[Market]) -> "CatalogSnapshot":
        by_symbol: dict[str, Market] = {}
        by_id: dict[str, Market] = {}
        codes: set[str] = set()
        for market in markets:
            by_symbol[market.symbol] = market
            by_id[market.id] = market
            codes.update((market.base, market.quote))
        return cls(
            by_symbol=MappingProxyType(by_symbol),
            by_id=MappingProxyType(by_id),
            currencies=tuple(sorted(codes)),
        )


class MarketCatalog:
    """Markets of the exchange, indexed by symbol and by exchange id.

    Each refresh builds a new snapshot and publishes it with one
    assignment, so readers see either the previous or the new catalog and
    never a mix. Pairs dropped upstream disappear on the next refresh.
    """

    def __init__(self) -> None:
        self._snapshot: CatalogSnapshot | None = None
        self._lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> CatalogSnapshot:
        if self._snapshot is None:
            raise RuntimeError("Markets not loaded. Call load_markets() first.")
        return self._snapshot

    def replace(self, markets: Iterable[Market]) -> CatalogSnapshot:
        """Swap in a catalog built from ``markets``."""
        snapshot = CatalogSnapshot.from_markets(markets)
        self._snapshot = snapshot
        logger.info(
            f"Market catalog refreshed: {len(snapshot.by_symbol)} markets, "
            f"{len(snapshot.currencies)} currencies"
        )
        return snapshot

    async def load(
        self,
        fetch_markets: Callable[[], Awaitable[list[Market]]],
        reload: bool = False,
    ) -> CatalogSnapshot:
        """Load the catalog once, or again when ``reload`` is set.

        Concurrent callers wait for the refresh already in flight instead
        of issuing their own request.
        """
        if self._snapshot is not None and not reload:
            return self._snapshot
        async with self._lock:
            if self._snapshot is not None and not reload:
                return self._snapshot
            markets = await fetch_markets()
            return self.replace(markets)

    @property
    def markets(self) -> Mapping[str, Market]:
        return self.snapshot.by_symbol

    @property
    def markets_by_id(self) -> Mapping[str, Market]:
        return self.snapshot.by_id

    @property
    def symbols(self) -> list[str]:
        return sorted(self.snapshot.by_symbol)

    @property
    def currencies(self) -> tuple[str, ...]:
        return self.snapshot.currencies

    def market(self, symbol: str) -> Market:
        """Market for a canonical symbol.

        Raises:
            BadSymbol: If the symbol is not listed.
        """
        market = self.snapshot.by_symbol.get(symbol)
        if market is None:
            raise BadSymbol(f"tokens does not have market symbol {symbol}")
        return market

    def market_id(self, symbol: str) -> str:
        return self.market(symbol).id

    def market_by_id(self, market_id: str | None) -> Market | None:
        """Reverse lookup by exchange-native pair id, None when unknown."""
        if market_id is None:
            return None
        return self.snapshot.by_id.get(market_id)
