"""Error taxonomy and response classification for the Tokens API.

Exchange error codes:

    100 API key is missing
    101 Nonce is missing
    102 Signature is missing
    110 Nonce has to be integer
    111 Provided nonce is less or equal to the last nonce
    120 Invalid API key
    121 Signature is invalid
    130 Invalid trading pair
    131 Invalid order id
    140 Only opened orders can be canceled
    150 Parameter {parameter} is invalid with error: {error}
    160 Invalid currency code
    429 API rate limit exceeded

Every exception derives from the matching ccxt error so code written
against the ccxt hierarchy can catch them without knowing this module.
"""

import json
from enum import Enum
from typing import Any

from ccxt.base import errors as ccxt_errors


class ErrorKind(str, Enum):
    """Closed set of error kinds raised by the connector."""

    ARGUMENTS_MISSING = "arguments_missing"
    INVALID_NONCE = "invalid_nonce"
    BAD_REQUEST = "bad_request"
    RATE_LIMITED = "rate_limited"
    GENERIC = "generic"
    CREDENTIALS_REQUIRED = "credentials_required"


ERROR_CODES: dict[str, ErrorKind] = {
    "100": ErrorKind.ARGUMENTS_MISSING,
    "101": ErrorKind.ARGUMENTS_MISSING,
    "102": ErrorKind.ARGUMENTS_MISSING,
    "110": ErrorKind.INVALID_NONCE,
    "111": ErrorKind.INVALID_NONCE,
    "120": ErrorKind.BAD_REQUEST,
    "121": ErrorKind.BAD_REQUEST,
    "130": ErrorKind.BAD_REQUEST,
    "131": ErrorKind.BAD_REQUEST,
    "140": ErrorKind.BAD_REQUEST,
    "150": ErrorKind.BAD_REQUEST,
    "160": ErrorKind.BAD_REQUEST,
    "429": ErrorKind.RATE_LIMITED,
}


class TokensError(Exception):
    """Mixin carrying the error kind and the raw exchange code."""

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, message: str | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class ArgumentsMissing(TokensError, ccxt_errors.ArgumentsRequired):
    kind = ErrorKind.ARGUMENTS_MISSING


class InvalidNonce(TokensError, ccxt_errors.InvalidNonce):
    kind = ErrorKind.INVALID_NONCE


class BadRequest(TokensError, ccxt_errors.BadRequest):
    kind = ErrorKind.BAD_REQUEST


class RateLimited(TokensError, ccxt_errors.RateLimitExceeded):
    kind = ErrorKind.RATE_LIMITED


class GenericExchangeError(TokensError, ccxt_errors.ExchangeError):
    kind = ErrorKind.GENERIC


class CredentialsRequired(TokensError, ccxt_errors.AuthenticationError):
    """Raised locally, before any request, when apiKey or secret is missing."""

    kind = ErrorKind.CREDENTIALS_REQUIRED


_EXCEPTIONS: dict[ErrorKind, type[TokensError]] = {
    ErrorKind.ARGUMENTS_MISSING: ArgumentsMissing,
    ErrorKind.INVALID_NONCE: InvalidNonce,
    ErrorKind.BAD_REQUEST: BadRequest,
    ErrorKind.RATE_LIMITED: RateLimited,
    ErrorKind.GENERIC: GenericExchangeError,
    ErrorKind.CREDENTIALS_REQUIRED: CredentialsRequired,
}


def error_kind_for_code(code: str | int | None) -> ErrorKind | None:
    """Map an exchange error code to its kind, or None if the code is unknown."""
    if code is None:
        return None
    return ERROR_CODES.get(str(code))


def exception_for(
    kind: ErrorKind, message: str | None = None, code: str | None = None
) -> TokensError:
    """Build the exception instance for an error kind."""
    return _EXCEPTIONS[kind](message, code=code)


def looks_like_json(body: Any) -> bool:
    """True if ``body`` is a string that starts like a JSON object or array."""
    if not isinstance(body, str) or len(body) < 2:
        return False
    return body[0] in "{["


def handle_errors(
    status_code: int | None, body: str | None, response: Any = None
) -> None:
    """Raise the classified error for an error response, else return None.

    Only bodies that look like JSON are inspected. A known ``errorCode``
    wins over ``status == "error"``; anything else is left to the caller's
    success path.

    Args:
        status_code: HTTP status of the response (unused by the body rules).
        body: Raw response body.
        response: Parsed JSON body. Parsed from ``body`` when omitted.

    Raises:
        TokensError: The subclass matching the error code or status.
    """
    if not looks_like_json(body):
        return
    if response is None:
        try:
            response = json.loads(body)
        except ValueError:
            return
    if not isinstance(response, dict):
        return

    reason = response.get("reason")
    code = response.get("errorCode")
    kind = error_kind_for_code(code)
    if kind is not None:
        raise exception_for(kind, reason, code=str(code))

    if response.get("status") == "error":
        raise GenericExchangeError(reason, code=str(code) if code is not None else None)
