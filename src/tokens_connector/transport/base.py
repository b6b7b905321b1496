from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TransportResponse:
    """Outcome of one HTTP call.

    Attributes:
        status: HTTP status code.
        body: Raw response text, used for error classification.
        data: Parsed JSON body, or None when the body is not JSON.
    """

    status: int
    body: str
    data: Any = None


class BaseTransport(ABC):
    """Abstract HTTP transport used by the connector.

    The connector never retries; timeouts, pooling and TLS belong to the
    implementation.
    """

    @abstractmethod
    async def request(
        self,
        method: str,
        url: str,
        body: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> TransportResponse:
        """Perform one HTTP call.

        Args:
            method: HTTP method ('GET' or 'POST').
            url: Absolute url, query string included.
            body: Encoded request body, if any.
            headers: Request headers.

        Returns:
            TransportResponse with status, raw body and parsed JSON.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any resources held by the transport (e.g., HTTP sessions)."""
        pass
