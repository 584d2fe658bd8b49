"""Pipeline state schema -- the single TypedDict that flows through every node."""

from typing import Optional, TypedDict

from src.models.options import QueryOptions
from src.models.results import ResultSet
from src.utils.errors import ProviderError


class SearchState(TypedDict, total=False):
    """State carried across the search state machine.

    Every node receives the full state and returns a *partial* dict with only
    the keys it wants to update. The two fetch nodes may run in the same step,
    so they write disjoint keys.
    """

    # Input
    options: QueryOptions

    # Cache lookup
    cache_key: str

    # Provider fetches
    primary_result: Optional[ResultSet]
    primary_error: Optional[ProviderError]
    secondary_attempted: bool
    secondary_result: Optional[ResultSet]
    secondary_error: Optional[ProviderError]

    # Outcome
    result: Optional[ResultSet]
    merged: bool
    error: Optional[ProviderError]
    cache_written: bool

    # Routing / observability
    route_taken: str          # "cache_hit" | "cache_miss" | "failed"
    start_time: float
    end_time: Optional[float]
