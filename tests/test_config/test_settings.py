"""Tests for connector settings and the fee schedule."""

import pytest

from src.tokens_connector.catalog import parse_market
from src.tokens_connector.config import TokensSettings
from src.tokens_connector.errors import CredentialsRequired
from src.tokens_connector.fees import MAKER_FEE, TAKER_FEE, WITHDRAW_FEES, calculate_fee


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove TOKENS_NET_* variables inherited from the shell."""
    for name in ("API_KEY", "SECRET", "API_URL", "TIMEOUT", "TICKER_TIME", "TRADES_TIME"):
        monkeypatch.delenv(f"TOKENS_NET_{name}", raising=False)


class TestTokensSettings:
    """Tests for TokensSettings."""

    def test_defaults(self):
        """Test the default configuration."""
        settings = TokensSettings(_env_file=None)

        assert settings.api_url == "https://api.tokens.net/"
        assert settings.timeout == 10.0
        assert settings.hash_algorithm == "sha256"
        assert settings.ticker_time == "hour"
        assert settings.trades_time == "hour"
        assert settings.concurrent_balance_fetch is False
        assert not settings.has_credentials()

    def test_environment_overrides(self, monkeypatch):
        """Test that TOKENS_NET_ variables are read."""
        monkeypatch.setenv("TOKENS_NET_API_KEY", "env-key")
        monkeypatch.setenv("TOKENS_NET_SECRET", "env-secret")
        monkeypatch.setenv("TOKENS_NET_TIMEOUT", "2.5")
        monkeypatch.setenv("TOKENS_NET_TRADES_TIME", "day")

        settings = TokensSettings(_env_file=None)

        assert settings.api_key == "env-key"
        assert settings.secret == "env-secret"
        assert settings.timeout == 2.5
        assert settings.trades_time == "day"
        assert settings.has_credentials()

    def test_env_file(self, tmp_path):
        """Test that a .env file is read."""
        env_file = tmp_path / ".env"
        env_file.write_text("TOKENS_NET_API_KEY=file-key\nTOKENS_NET_SECRET=file-secret\n")

        settings = TokensSettings(_env_file=env_file)

        assert settings.api_key == "file-key"
        assert settings.secret == "file-secret"

    def test_invalid_window(self):
        """Test that unknown trade windows are rejected."""
        with pytest.raises(ValueError):
            TokensSettings(trades_time="week", _env_file=None)

    def test_require_credentials(self):
        """Test that missing fields are named in the error."""
        with pytest.raises(CredentialsRequired, match="secret"):
            TokensSettings(api_key="k", _env_file=None).require_credentials()

        TokensSettings(api_key="k", secret="s", _env_file=None).require_credentials()


class TestFees:
    """Tests for the fee schedule."""

    @pytest.fixture
    def market(self):
        """BTC/USDT market."""
        return parse_market(
            {
                "title": "BTC/USDT",
                "priceDecimals": 2,
                "amountDecimals": 6,
                "minAmount": "0.0001 BTC",
                "trading": "Enabled",
            }
        )

    def test_market_carries_rates(self, market):
        """Test that built markets expose the fee schedule."""
        assert market.taker == TAKER_FEE
        assert market.maker == MAKER_FEE

    def test_taker_fee(self, market):
        """Test a taker fee charged in quote currency."""
        fee = calculate_fee(market, "sell", 0.5, 30000)

        assert fee.cost == pytest.approx(30.0)
        assert fee.currency == "USDT"

    def test_invalid_liquidity_side(self, market):
        """Test that only taker and maker are accepted."""
        with pytest.raises(ValueError, match="Invalid taker_or_maker"):
            calculate_fee(market, "buy", 1, 1, "both")

    def test_withdraw_fees(self):
        """Test a few withdrawal fees."""
        assert WITHDRAW_FEES["BTC"] == 0.0002
        assert WITHDRAW_FEES["ETH"] == 0.005
