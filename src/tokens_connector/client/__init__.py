"""Exchange connectors."""

from src.tokens_connector.client.base import BaseExchange
from src.tokens_connector.client.tokens import TokensExchange

__all__ = [
    "BaseExchange",
    "TokensExchange",
]
