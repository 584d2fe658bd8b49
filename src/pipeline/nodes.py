"""Node implementations for the search pipeline.

Each method receives the full ``SearchState`` and returns a *partial* dict
with only the keys it updates. Collaborators are passed in once, at graph
construction.
"""

import time
from typing import Any, Dict, List, Mapping, Optional

from src.cache.artifacts import ArtifactCache
from src.filters.exclusions import ExclusionSource, apply_exclusions
from src.filters.merge import merge
from src.models.options import Provider
from src.pipeline.state import SearchState
from src.utils.errors import ProviderError, TransportError
from src.utils.logger import get_logger, log_request
from src.web.search_provider import ProviderAdapter

log = get_logger(__name__)


class SearchNodes:
    """Bundle of pipeline nodes bound to one set of collaborators."""

    def __init__(
        self,
        cache: ArtifactCache,
        adapters: Mapping[Provider, ProviderAdapter],
        exclusions: Optional[ExclusionSource] = None,
    ):
        self.cache = cache
        self.adapters = dict(adapters)
        self.exclusions = exclusions

    # ---- Helpers -----------------------------------------------------------

    def _adapter(self, provider: Optional[Provider]) -> Optional[ProviderAdapter]:
        if provider is None:
            return None
        adapter = self.adapters.get(provider)
        if adapter is None or not adapter.is_available():
            return None
        return adapter

    # ---- Nodes -------------------------------------------------------------

    def check_cache_node(self, state: SearchState) -> Dict[str, Any]:
        """Derive the cache key and serve a fresh cached artifact if present."""
        key = state["options"].to_cache_key()
        cached = self.cache.get_results(key)
        if cached is not None:
            log.info("Cache hit: %s (%d results)", key, cached.count)
            return {"cache_key": key, "result": cached, "route_taken": "cache_hit"}
        log.info("Cache miss: %s", key)
        return {"cache_key": key, "route_taken": "cache_miss"}

    def route_after_cache(self, state: SearchState) -> List[str]:
        """Conditional edge: finish on a hit, else fan out to the providers."""
        if state.get("route_taken") == "cache_hit":
            return ["log_request"]
        targets = ["fetch_primary"]
        _, secondary = state["options"].provider_mode.plan()
        if secondary is not None:
            if self._adapter(secondary) is not None:
                targets.append("fetch_secondary")
            else:
                log.info("Secondary provider %s not configured, skipping", secondary.value)
        return targets

    def fetch_primary_node(self, state: SearchState) -> Dict[str, Any]:
        """Fetch from the primary provider; errors are recorded, not raised."""
        options = state["options"]
        primary, _ = options.provider_mode.plan()
        adapter = self._adapter(primary)
        if adapter is None:
            error = TransportError(f"{primary.value} is not configured", primary.value)
            log.error("Primary provider unavailable: %s", error)
            return {"primary_error": error}
        try:
            return {"primary_result": adapter.search(options)}
        except ProviderError as exc:
            log.error("Primary provider %s failed: %s", adapter.name, exc)
            return {"primary_error": exc}

    def fetch_secondary_node(self, state: SearchState) -> Dict[str, Any]:
        """Fetch from the enrichment provider; any failure only degrades results."""
        options = state["options"]
        _, secondary = options.provider_mode.plan()
        adapter = self._adapter(secondary)
        if adapter is None:
            return {"secondary_attempted": False}
        try:
            return {"secondary_attempted": True, "secondary_result": adapter.search(options)}
        except ProviderError as exc:
            log.warning("Secondary provider %s failed, continuing without it: %s", adapter.name, exc)
            return {"secondary_attempted": True, "secondary_error": exc}

    def combine_node(self, state: SearchState) -> Dict[str, Any]:
        """Fail on a primary error, else merge in secondary results if any."""
        error = state.get("primary_error")
        if error is not None:
            return {"error": error, "route_taken": "failed"}

        result = state["primary_result"]
        secondary = state.get("secondary_result")
        if secondary is None:
            return {"result": result, "merged": False}
        merged = merge(result, secondary)
        log.info(
            "Merged %d + %d results into %d", result.count, secondary.count, merged.count
        )
        return {"result": merged, "merged": True}

    def route_after_combine(self, state: SearchState) -> str:
        return "log_request" if state.get("route_taken") == "failed" else "apply_exclusions"

    def apply_exclusions_node(self, state: SearchState) -> Dict[str, Any]:
        patterns = self.exclusions.patterns() if self.exclusions is not None else []
        return {"result": apply_exclusions(state["result"], patterns)}

    def store_cache_node(self, state: SearchState) -> Dict[str, Any]:
        """Write-through for valid results; the outcome never blocks the reply."""
        written = self.cache.set_results(state["cache_key"], state["result"])
        if written:
            log.info("Cached %s", state["cache_key"])
        return {"cache_written": written}

    def log_request_node(self, state: SearchState) -> Dict[str, Any]:
        """Log the request and stamp end_time."""
        end = time.time()
        elapsed_ms = (end - state.get("start_time", end)) * 1000
        result = state.get("result")
        secondary = state.get("secondary_result")
        primary = state.get("primary_result")

        log_request(
            query=state["options"].query,
            cache_key=state.get("cache_key", ""),
            route=state.get("route_taken", "unknown"),
            result_count=result.count if result is not None else 0,
            response_time_ms=elapsed_ms,
            details={
                "primary_count": primary.count if primary is not None else None,
                "secondary_count": secondary.count if secondary is not None else None,
                "secondary_error": str(state["secondary_error"]) if state.get("secondary_error") else None,
                "merged": state.get("merged", False),
                "removed_count": result.removed_count if result is not None else 0,
                "cache_written": state.get("cache_written", False),
            },
        )
        log.info("Done -- route=%s, time=%.0fms", state.get("route_taken"), elapsed_ms)
        return {"end_time": end}
