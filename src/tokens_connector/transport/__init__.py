"""HTTP transport for the connector."""

from src.tokens_connector.transport.base import BaseTransport, TransportResponse
from src.tokens_connector.transport.httpx_transport import HttpxTransport

__all__ = [
    "BaseTransport",
    "HttpxTransport",
    "TransportResponse",
]
