"""
Provider error taxonomy.

Adapters translate transport and parsing failures into one of these
before they reach the session. Rate limiting is not an exception: the
cloud adapter absorbs it and answers with RATE_LIMIT_MESSAGE instead.
"""

from enum import Enum
from typing import Optional

from relay_chat.config import ProviderId


RATE_LIMIT_MESSAGE: str = (
    "⚠️ Rate limit exceeded for this model. Please try again in about an hour, "
    "or switch to a different model in the settings."
)

RATE_LIMIT_MARKER: str = "rate limit"


class ErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    TRANSPORT_UNAVAILABLE = "transport_unavailable"
    RESPONSE_SHAPE_INVALID = "response_shape_invalid"
    GENERIC = "generic"


class ProviderError(Exception):
    """Human-readable failure from a provider adapter."""

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, message: str, provider: ProviderId):
        super().__init__(message)
        self.provider = provider


class TransportUnavailableError(ProviderError):
    """Backend could not be reached (connection refused, DNS, etc.)."""
    kind = ErrorKind.TRANSPORT_UNAVAILABLE


class ResponseShapeError(ProviderError):
    """Backend answered, but a required field was missing."""
    kind = ErrorKind.RESPONSE_SHAPE_INVALID


class GenericProviderError(ProviderError):
    """Any other backend failure, message passed through."""
    kind = ErrorKind.GENERIC


def is_rate_limited(message: str, status_code: Optional[int] = None) -> bool:
    """Check whether a failure signals provider-side throttling."""
    if status_code == 429:
        return True
    return RATE_LIMIT_MARKER in (message or "").lower()
