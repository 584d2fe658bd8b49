"""Autosuggest flow: cache lookup, Brave suggest on a miss, write-through."""

from src.cache.artifacts import ArtifactCache
from src.models.options import QueryOptions
from src.models.results import AutoSuggestResultSet
from src.utils.errors import TransportError
from src.utils.logger import get_logger
from src.web.brave_suggest import BraveSuggest

log = get_logger(__name__)


def get_suggestions(
    options: QueryOptions,
    cache: ArtifactCache,
    suggester: BraveSuggest,
) -> AutoSuggestResultSet:
    """Return suggestions for ``options.query``; provider errors propagate."""
    if not options.query:
        return AutoSuggestResultSet.empty()

    key = options.to_suggest_key()
    cached = cache.get_suggestions(key)
    if cached is not None:
        log.info("Suggest cache hit: %s", key)
        return cached

    if not suggester.is_available():
        raise TransportError("brave-suggest is not configured", "brave-suggest")
    result = suggester.suggest(options)
    cache.set_suggestions(key, result)
    return result
