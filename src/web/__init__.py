"""Web module -- provider transport and adapters."""

from src.web.brave_search import BraveSearch
from src.web.brave_suggest import BraveSuggest
from src.web.google_search import GoogleSearch
from src.web.search_provider import ProviderAdapter

__all__ = ["BraveSearch", "BraveSuggest", "GoogleSearch", "ProviderAdapter"]
