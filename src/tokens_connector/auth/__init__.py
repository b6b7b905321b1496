"""Request signing for private endpoints."""

from src.tokens_connector.auth.nonce import NonceSource, milliseconds, shared_nonce_source
from src.tokens_connector.auth.signer import CONTENT_TYPE, Signer, require_credentials

__all__ = [
    "CONTENT_TYPE",
    "NonceSource",
    "Signer",
    "milliseconds",
    "require_credentials",
    "shared_nonce_source",
]
