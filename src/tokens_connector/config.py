"""Connector settings, read from the environment.

Priority:
    1. Environment variables (``TOKENS_NET_API_KEY``, ``TOKENS_NET_SECRET``, ...)
    2. ``.env`` file in the working directory
    3. Defaults below
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from src.tokens_connector.auth import require_credentials

TimeWindow = Literal["minute", "hour", "day"]


class TokensSettings(BaseSettings):
    """Settings and credential store of the Tokens connector.

    Environment overrides:
        TOKENS_NET_API_KEY: API key for private endpoints
        TOKENS_NET_SECRET: shared secret used to sign private requests
        TOKENS_NET_API_URL: REST base url (default: https://api.tokens.net/)
    """

    api_key: str | None = None
    secret: str | None = None

    api_url: str = "https://api.tokens.net/"
    timeout: float = 10.0
    hash_algorithm: str = "sha256"

    # Window of the public ticker and trades endpoints; no ticker window
    # selects the daily ticker
    ticker_time: TimeWindow | None = "hour"
    trades_time: TimeWindow = "hour"

    # Query every currency at once when fetching the full balance
    concurrent_balance_fetch: bool = False

    model_config = SettingsConfigDict(
        env_prefix="TOKENS_NET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def has_credentials(self) -> bool:
        return bool(self.api_key) and bool(self.secret)

    def require_credentials(self) -> None:
        """Raise CredentialsRequired unless both apiKey and secret are set."""
        require_credentials(self.api_key, self.secret)
