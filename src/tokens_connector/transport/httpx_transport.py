"""httpx-based transport implementation."""

import json
import logging

import httpx
from ccxt.base.errors import BadResponse

from src.tokens_connector.errors import looks_like_json
from src.tokens_connector.transport.base import BaseTransport, TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport(BaseTransport):
    """httpx implementation of the transport."""

    def __init__(
        self, timeout: float = 10.0, client: httpx.AsyncClient | None = None
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds.
            client: Optional preconfigured client. One is created when omitted.
        """
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def request(
        self,
        method: str,
        url: str,
        body: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> TransportResponse:
        """Send the request and parse a JSON body.

        Raises:
            BadResponse: If the body looks like JSON but does not parse.
        """
        logger.debug(f"{method} {url}")
        response = await self.client.request(
            method, url, content=body, headers=headers
        )
        text = response.text
        data = None
        if looks_like_json(text):
            try:
                data = json.loads(text)
            except ValueError as e:
                raise BadResponse(f"tokens {method} {url} malformed JSON: {text}") from e
        logger.debug(f"{method} {url} -> {response.status_code}")
        return TransportResponse(status=response.status_code, body=text, data=data)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
