"""Exception types shared by the provider, cache and pipeline layers.

A payload that parses but has the wrong shape is *not* an error: adapters
report it as ``ResultSet.valid == False`` instead.
"""

from typing import Optional


class SearchRelayError(Exception):
    """Base class for every error raised by this package."""


class ProviderError(SearchRelayError):
    """Raised when an upstream search provider cannot supply a payload."""

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class TransportError(ProviderError):
    """Provider unreachable, timed out, or answered with a non-2xx status."""


class ParseError(ProviderError):
    """Provider answered, but the body is not valid JSON."""


class CacheUnavailable(SearchRelayError):
    """Raised when the key-value store cannot be reached."""
