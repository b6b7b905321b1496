"""Request signer for private Tokens endpoints."""

import hashlib
import hmac

from src.tokens_connector.auth.nonce import NonceSource, shared_nonce_source
from src.tokens_connector.errors import CredentialsRequired

CONTENT_TYPE = "application/x-www-form-urlencoded"


def require_credentials(api_key: str | None, secret: str | None) -> None:
    """Raise CredentialsRequired naming whichever of apiKey and secret is missing."""
    missing = [
        name for name, value in (("apiKey", api_key), ("secret", secret)) if not value
    ]
    if missing:
        raise CredentialsRequired(
            f"tokens requires {', '.join(missing)} for private endpoints"
        )


class Signer:
    """Signs private requests with HMAC(secret, nonce + apiKey).

    Attributes:
        api_key: The account API key, sent as the ``key`` header.
        hash_algorithm: hashlib name of the HMAC digest (default: sha256).
    """

    def __init__(
        self,
        api_key: str | None,
        secret: str | None,
        nonce_source: NonceSource | None = None,
        hash_algorithm: str = "sha256",
    ) -> None:
        self.api_key = api_key
        self._secret = secret
        self.nonce_source = nonce_source or shared_nonce_source()
        self.hash_algorithm = hash_algorithm

    def check_credentials(self) -> None:
        require_credentials(self.api_key, self._secret)

    def signature(self, nonce: str) -> str:
        """Uppercase hex HMAC of ``nonce + api_key`` keyed by the secret."""
        auth = nonce + self.api_key
        digest = hmac.new(
            self._secret.encode(),
            auth.encode(),
            getattr(hashlib, self.hash_algorithm),
        ).hexdigest()
        return digest.upper()

    def sign(self) -> dict[str, str]:
        """Build the authentication headers of a private request.

        The urlencoded body travels unsigned; only the nonce and the key
        enter the signature.

        Returns:
            Headers ``key``, ``signature``, ``nonce`` and ``Content-Type``.

        Raises:
            CredentialsRequired: If apiKey or secret is missing.
        """
        self.check_credentials()
        nonce = str(self.nonce_source())
        return {
            "key": self.api_key,
            "signature": self.signature(nonce),
            "nonce": nonce,
            "Content-Type": CONTENT_TYPE,
        }
