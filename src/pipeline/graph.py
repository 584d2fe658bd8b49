"""LangGraph state machine wiring.

State flows:

  check_cache -> [route_after_cache]
                      |
          +-----------+------------------+
          |                              |
        (hit)                          (miss)
          |                 fetch_primary + fetch_secondary   (same step)
          |                              |
          |                           combine -> [route_after_combine]
          |                              |                 |
          |                            (ok)            (failed)
          |                      apply_exclusions          |
          |                              |                 |
          |                         store_cache            |
          |                              |                 |
          +---------------------> log_request <------------+
                                         |
                                        END
"""

import time
from typing import Mapping, Optional

from langgraph.graph import END, StateGraph

from src.cache.artifacts import ArtifactCache
from src.cache.redis_client import RedisClient
from src.filters.exclusions import ExclusionSource
from src.models.options import Provider, QueryOptions
from src.models.results import ResultSet
from src.pipeline.nodes import SearchNodes
from src.pipeline.state import SearchState
from src.web.brave_search import BraveSearch
from src.web.google_search import GoogleSearch
from src.web.search_provider import ProviderAdapter


def build_graph(
    cache: ArtifactCache,
    adapters: Mapping[Provider, ProviderAdapter],
    exclusions: Optional[ExclusionSource] = None,
):
    """Construct and compile the search graph.  Returns a runnable."""
    nodes = SearchNodes(cache, adapters, exclusions)
    g = StateGraph(SearchState)

    # -- add nodes ----------------------------------------------------------
    g.add_node("check_cache", nodes.check_cache_node)
    g.add_node("fetch_primary", nodes.fetch_primary_node)
    g.add_node("fetch_secondary", nodes.fetch_secondary_node)
    g.add_node("combine", nodes.combine_node)
    g.add_node("apply_exclusions", nodes.apply_exclusions_node)
    g.add_node("store_cache", nodes.store_cache_node)
    g.add_node("log_request", nodes.log_request_node)

    # -- edges --------------------------------------------------------------
    g.set_entry_point("check_cache")

    # Conditional: cache hit vs fan-out to providers
    g.add_conditional_edges(
        "check_cache",
        nodes.route_after_cache,
        ["log_request", "fetch_primary", "fetch_secondary"],
    )

    # Both fetches join at combine
    g.add_edge("fetch_primary", "combine")
    g.add_edge("fetch_secondary", "combine")

    g.add_conditional_edges(
        "combine",
        nodes.route_after_combine,
        {
            "apply_exclusions": "apply_exclusions",
            "log_request": "log_request",
        },
    )
    g.add_edge("apply_exclusions", "store_cache")
    g.add_edge("store_cache", "log_request")
    g.add_edge("log_request", END)

    return g.compile()


def build_default_graph():
    """Graph wired to redis, both providers and the configured pattern file."""
    cache = ArtifactCache(RedisClient())
    adapters = {
        Provider.BRAVE: BraveSearch(),
        Provider.GOOGLE: GoogleSearch(),
    }
    return build_graph(cache, adapters, ExclusionSource(cache))


def run_search(graph, options: QueryOptions) -> ResultSet:
    """Run one request through *graph*.

    Returns the served ``ResultSet`` (possibly ``valid=False``) or raises the
    primary provider's ``ProviderError``. A blank query is answered with an
    empty, invalid set without touching cache or providers.
    """
    if not options.query:
        return ResultSet.empty()
    final = graph.invoke({"options": options, "start_time": time.time()})
    error = final.get("error")
    if error is not None:
        raise error
    return final["result"]
