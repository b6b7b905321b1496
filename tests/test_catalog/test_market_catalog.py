"""Tests for the market builder and the market catalog."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from ccxt.base.errors import BadSymbol

from src.tokens_connector.catalog import (
    MarketCatalog,
    build_markets,
    market_ids,
    parse_market,
    parse_min_amount,
    smallest_increment,
)


def pair(title: str, price_decimals: int = 4, amount_decimals: int = 8, **extra) -> dict:
    """Build a trading-pair record as returned by the exchange."""
    base, quote = title.split("/")
    record = {
        "title": title,
        "priceDecimals": price_decimals,
        "amountDecimals": amount_decimals,
        "minAmount": f"0.001 {base}",
        "trading": "Enabled",
        "baseCurrency": {"currency": base},
        "counterCurrency": {"currency": quote},
    }
    record.update(extra)
    return record


@pytest.fixture
def trading_pairs():
    """Trading-pairs payload keyed by exchange-internal keys."""
    return {
        "dppeth": pair("DPP/ETH", minAmount="0.001 ETH"),
        "btcusdt": pair("BTC/USDT", price_decimals=2, amount_decimals=6),
        "ethbtc": pair("ETH/BTC", trading="Disabled"),
    }


class TestMarketIds:
    """Tests for id derivation from symbols."""

    @pytest.mark.parametrize(
        "symbol,market_id,symbol_id",
        [
            ("DPP/ETH", "dppeth", "dpp_eth"),
            ("BTC/USDT", "btcusdt", "btc_usdt"),
            ("EURS/BTC", "eursbtc", "eurs_btc"),
            ("usdc/Eth", "usdceth", "usdc_eth"),
        ],
    )
    def test_ids_are_lowercase_base_and_quote(self, symbol, market_id, symbol_id):
        """Test id = base+quote and symbolId = base_quote, lowercased."""
        base, quote, base_id, quote_id, derived_id, derived_symbol_id = market_ids(symbol)

        assert f"{base}/{quote}" == symbol
        assert base_id == base.lower()
        assert quote_id == quote.lower()
        assert derived_id == market_id
        assert derived_symbol_id == symbol_id

    @pytest.mark.parametrize("symbol", ["DPPETH", "DPP/ETH/BTC", "/ETH", "DPP/"])
    def test_invalid_symbol_raises(self, symbol):
        """Test that malformed titles are rejected."""
        with pytest.raises(ValueError, match="Invalid market symbol"):
            market_ids(symbol)


class TestParseMarket:
    """Tests for single pair conversion."""

    def test_dpp_eth_scenario(self):
        """Test the reference DPP/ETH pair."""
        raw = {
            "title": "DPP/ETH",
            "priceDecimals": 4,
            "amountDecimals": 8,
            "minAmount": "0.001 ETH",
            "trading": "Enabled",
        }

        market = parse_market(raw)

        assert market.id == "dppeth"
        assert market.symbol_id == "dpp_eth"
        assert market.symbol == "DPP/ETH"
        assert market.base == "DPP"
        assert market.quote == "ETH"
        assert market.base_id == "dpp"
        assert market.quote_id == "eth"
        assert market.active is True
        assert market.limits.cost.min == 0.001
        assert market.info == raw

    def test_precision_follows_field_names(self):
        """Test amountDecimals drives amount precision and priceDecimals price precision."""
        market = parse_market(pair("DPP/ETH", price_decimals=4, amount_decimals=8))

        assert market.precision.amount == 8
        assert market.precision.price == 4
        assert market.limits.amount.min == 10**-8
        assert market.limits.price.min == 10**-4
        assert market.limits.amount.max is None

    @pytest.mark.parametrize("decimals", [0, 1, 2, 4, 8, 18])
    def test_smallest_increment(self, decimals):
        """Test limits are exactly 10 ** -precision."""
        assert smallest_increment(decimals) == 10**-decimals

    def test_inactive_pair(self):
        """Test that anything but 'Enabled' marks the market inactive."""
        assert parse_market(pair("DPP/ETH", trading="Disabled")).active is False
        assert parse_market(pair("DPP/ETH", trading="enabled")).active is False

    def test_alias_serialization(self):
        """Test camelCase aliases on dump."""
        dumped = parse_market(pair("DPP/ETH")).model_dump(by_alias=True)

        assert dumped["symbolId"] == "dpp_eth"
        assert dumped["baseId"] == "dpp"

    @pytest.mark.parametrize(
        "raw,expected",
        [("0.001 ETH", 0.001), ("25 DPP", 25.0), ("0.5", 0.5), ("", None), (None, None)],
    )
    def test_parse_min_amount(self, raw, expected):
        """Test the numeric prefix of minAmount."""
        assert parse_min_amount(raw) == expected


class TestBuildMarkets:
    """Tests for the trading-pairs payload conversion."""

    def test_builds_every_pair(self, trading_pairs):
        """Test that every record becomes a market."""
        markets = build_markets(trading_pairs)

        assert sorted(m.symbol for m in markets) == ["BTC/USDT", "DPP/ETH", "ETH/BTC"]

    def test_skips_non_record_entries(self, trading_pairs):
        """Test that status fields next to the pairs are ignored."""
        trading_pairs["status"] = "ok"
        trading_pairs["timestamp"] = 1700000000

        assert len(build_markets(trading_pairs)) == 3

    def test_accepts_list_payload(self, trading_pairs):
        """Test that a list of records is accepted too."""
        assert len(build_markets(list(trading_pairs.values()))) == 3


class TestMarketCatalog:
    """Tests for MarketCatalog."""

    def test_lookups(self, trading_pairs):
        """Test lookup by symbol, id and the derived currencies."""
        catalog = MarketCatalog()
        catalog.replace(build_markets(trading_pairs))

        assert catalog.market("DPP/ETH").id == "dppeth"
        assert catalog.market_id("BTC/USDT") == "btcusdt"
        assert catalog.market_by_id("ethbtc").symbol == "ETH/BTC"
        assert catalog.market_by_id("unknown") is None
        assert catalog.market_by_id(None) is None
        assert catalog.currencies == ("BTC", "DPP", "ETH", "USDT")
        assert catalog.symbols == ["BTC/USDT", "DPP/ETH", "ETH/BTC"]

    def test_unknown_symbol_raises(self, trading_pairs):
        """Test that unlisted symbols raise BadSymbol."""
        catalog = MarketCatalog()
        catalog.replace(build_markets(trading_pairs))

        with pytest.raises(BadSymbol):
            catalog.market("XRP/ETH")

    def test_not_loaded_raises(self):
        """Test that lookups before the first load fail loudly."""
        catalog = MarketCatalog()

        assert catalog.loaded is False
        with pytest.raises(RuntimeError, match="Markets not loaded"):
            catalog.market("DPP/ETH")

    def test_refresh_drops_removed_pairs(self, trading_pairs):
        """Test that a refresh replaces the whole catalog, both indexes included."""
        catalog = MarketCatalog()
        catalog.replace(build_markets(trading_pairs))
        old_snapshot = catalog.snapshot

        del trading_pairs["ethbtc"]
        catalog.replace(build_markets(trading_pairs))

        assert "ETH/BTC" not in catalog.markets
        assert catalog.market_by_id("ethbtc") is None
        # Readers holding the old snapshot keep a complete view
        assert "ETH/BTC" in old_snapshot.by_symbol
        assert old_snapshot.by_id["ethbtc"].symbol == "ETH/BTC"

    def test_snapshot_is_read_only(self, trading_pairs):
        """Test that published indexes cannot be mutated."""
        catalog = MarketCatalog()
        catalog.replace(build_markets(trading_pairs))

        with pytest.raises(TypeError):
            catalog.markets["NEW/ETH"] = catalog.market("DPP/ETH")

    @pytest.mark.asyncio
    async def test_load_fetches_once(self, trading_pairs):
        """Test that load caches the catalog until reload is requested."""
        catalog = MarketCatalog()
        fetch = AsyncMock(return_value=build_markets(trading_pairs))

        await catalog.load(fetch)
        await catalog.load(fetch)
        fetch.assert_called_once()

        await catalog.load(fetch, reload=True)
        assert fetch.call_count == 2

    @pytest.mark.asyncio
    async def test_concurrent_loads_share_one_request(self, trading_pairs):
        """Test that concurrent first loads wait on a single fetch."""
        catalog = MarketCatalog()
        calls = 0

        async def fetch():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return build_markets(trading_pairs)

        snapshots = await asyncio.gather(*(catalog.load(fetch) for _ in range(5)))

        assert calls == 1
        assert all(snapshot is snapshots[0] for snapshot in snapshots)

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_catalog(self, trading_pairs):
        """Test that an error during refresh leaves the published catalog intact."""
        catalog = MarketCatalog()
        await catalog.load(AsyncMock(return_value=build_markets(trading_pairs)))

        failing = AsyncMock(side_effect=ValueError("boom"))
        with pytest.raises(ValueError):
            await catalog.load(failing, reload=True)

        assert catalog.market("DPP/ETH").id == "dppeth"
