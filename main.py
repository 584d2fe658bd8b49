"""CLI entry point for the search relay."""

import argparse
import json
import sys
import time
from dataclasses import asdict

from src.cache.artifacts import ArtifactCache
from src.cache.redis_client import RedisClient
from src.filters.exclusions import ExclusionSource
from src.models.options import QueryOptions
from src.pipeline.graph import build_default_graph, run_search
from src.pipeline.suggest import get_suggestions
from src.utils.errors import ProviderError
from src.utils.logger import get_logger
from src.web.brave_suggest import BraveSuggest

log = get_logger(__name__)


def print_results(result_set, as_json: bool = False) -> None:
    """Print a result set either as JSON or as a numbered list."""
    if as_json:
        data = asdict(result_set)
        print(json.dumps(data, indent=2))
        return

    if not result_set.count:
        print("\nNo results.\n")
        return

    source = "cache" if result_set.cached else "providers"
    print(f"\n{result_set.count} results from {source} "
          f"(page {result_set.page}, {result_set.removed_count} excluded)\n")
    for i, r in enumerate(result_set.results, 1):
        print(f"  [{i}] {r.title}")
        print(f"      {r.uri}")
        print(f"      {r.provider} | weight {r.weight} | {r.published_date or '-'}")
    print()


def print_suggestions(result_set, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps(asdict(result_set), indent=2))
        return
    if not result_set.count:
        print("\nNo suggestions.\n")
        return
    print()
    for s in result_set.results:
        print(f"  {s.query}")
    print()


def main() -> None:
    parser = argparse.ArgumentParser(description="Aggregating, caching search relay")
    parser.add_argument("query", nargs="?", help="Search text")
    parser.add_argument("--safe", default=None, help="Safe search: off, moderate, strict")
    parser.add_argument("--country", "-c", default=None, help="Country code, e.g. US or UK")
    parser.add_argument("--lang", "-l", default=None, help="Language code, e.g. en")
    parser.add_argument("--page", "-p", default=None, help="1-based result page")
    parser.add_argument("--mode", "-m", default=None,
                        help="Provider mode: all, fulltext, core, brave, google")
    parser.add_argument("--suggest", "-s", action="store_true",
                        help="Return query suggestions instead of results")
    parser.add_argument("--exclusions", action="store_true",
                        help="List the active URL exclusion patterns")
    parser.add_argument("--json", action="store_true", help="Print raw JSON")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable DEBUG logging")
    args = parser.parse_args()

    if args.verbose:
        import logging
        logging.getLogger().setLevel(logging.DEBUG)

    if args.exclusions:
        cache = ArtifactCache(RedisClient())
        for p in ExclusionSource(cache).patterns():
            print(f"  {p.name or '-'}: {p.pattern}")
        return

    if not args.query:
        parser.print_help()
        sys.exit(1)

    options = QueryOptions.from_params(
        q=args.query, safe=args.safe, cc=args.country, lang=args.lang,
        page=args.page, mode=args.mode,
    )
    start = time.time()
    try:
        if args.suggest:
            cache = ArtifactCache(RedisClient())
            print_suggestions(get_suggestions(options, cache, BraveSuggest()), args.json)
        else:
            print_results(run_search(build_default_graph(), options), args.json)
    except ProviderError as exc:
        print(f"\nError: upstream unavailable ({exc})\n")
        sys.exit(2)
    log.debug("Finished in %.0fms", (time.time() - start) * 1000)


if __name__ == "__main__":
    main()
