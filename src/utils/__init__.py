"""Utils module -- config, logging, errors."""

from src.utils.config import settings
from src.utils.errors import CacheUnavailable, ParseError, ProviderError, TransportError
from src.utils.logger import get_logger

__all__ = [
    "settings",
    "get_logger",
    "CacheUnavailable",
    "ParseError",
    "ProviderError",
    "TransportError",
]
