"""Models module -- query options and the common result schema."""

from src.models.options import Provider, ProviderMode, QueryOptions, SafeMode
from src.models.results import AutoSuggestResultSet, ResultSet, SearchResult, Suggestion

__all__ = [
    "Provider",
    "ProviderMode",
    "QueryOptions",
    "SafeMode",
    "AutoSuggestResultSet",
    "ResultSet",
    "SearchResult",
    "Suggestion",
]
