"""Typed, freshness-gated access to cached artifacts.

Every artifact carries its own ``retrieved_at`` timestamp. On read the age is
compared with a ceiling resolved at call time from configuration and clamped
to a hard limit per artifact kind. Stale entries are left in place; the next
successful fetch overwrites them.
"""

from typing import Callable, List, Optional, Sequence, Union

from src.models.patterns import ExclusionPattern, patterns_from_json, patterns_to_json
from src.models.results import AutoSuggestResultSet, ResultSet, get_timestamp
from src.utils.config import settings
from src.utils.errors import CacheUnavailable
from src.utils.logger import get_logger

log = get_logger(__name__)

DEFAULT_SEARCH_MAX_AGE = 60 * 60
SEARCH_MAX_AGE_LIMIT = 7 * 24 * 60 * 60
DEFAULT_SUGGEST_MAX_AGE = 7 * 24 * 60 * 60
SUGGEST_MAX_AGE_LIMIT = 13 * 7 * 24 * 60 * 60

EXCLUSIONS_KEY = "url_pattern_exclusion_list"


def resolve_max_age(configured: Union[str, int, None], default: int, limit: int) -> int:
    """Parse a configured ceiling in seconds and clamp it to *limit*.

    Blank values use *default*; unparsable or negative values fall back to
    *default* without clamping.
    """
    text = "" if configured is None else str(configured).strip()
    if not text:
        text = str(default)
    try:
        seconds = int(text)
    except ValueError:
        return default
    if seconds < 0:
        return default
    return min(seconds, limit)


def is_fresh(retrieved_at: int, max_age: int, now: Optional[int] = None) -> bool:
    age = (get_timestamp() if now is None else now) - retrieved_at
    return age < max_age


class ArtifactCache:
    """Read-through/write-through cache for result, suggestion and pattern artifacts.

    ``store`` is anything exposing ``get_artifact(key)`` and
    ``set_artifact(key, value)``; usually a ``RedisClient``. Store outages
    degrade to misses on read and are swallowed on write.
    """

    def __init__(
        self,
        store,
        max_search_secs: Union[str, int, None] = None,
        max_suggest_secs: Union[str, int, None] = None,
        clock: Callable[[], int] = get_timestamp,
    ):
        self.store = store
        self._max_search_secs = (
            settings.max_search_secs if max_search_secs is None else max_search_secs
        )
        self._max_suggest_secs = (
            settings.max_suggest_secs if max_suggest_secs is None else max_suggest_secs
        )
        self._clock = clock

    @property
    def search_max_age(self) -> int:
        return resolve_max_age(self._max_search_secs, DEFAULT_SEARCH_MAX_AGE, SEARCH_MAX_AGE_LIMIT)

    @property
    def suggest_max_age(self) -> int:
        return resolve_max_age(
            self._max_suggest_secs, DEFAULT_SUGGEST_MAX_AGE, SUGGEST_MAX_AGE_LIMIT
        )

    # -- Search results -----------------------------------------------------

    def get_results(self, key: str) -> Optional[ResultSet]:
        """Return a fresh cached result set flagged ``cached``, else None."""
        raw = self._read(key)
        if raw is None:
            return None
        data = ResultSet.from_json(raw)
        if not is_fresh(data.retrieved_at, self.search_max_age, now=self._clock()):
            log.debug("Stale cache entry for %s", key)
            return None
        return data.set_cached()

    def set_results(self, key: str, result: ResultSet) -> bool:
        """Persist *result* when it is valid. Returns True if written."""
        if not result.valid:
            log.debug("Not caching invalid result set for %s", key)
            return False
        return self._write(key, result.to_json())

    # -- Suggestions --------------------------------------------------------

    def get_suggestions(self, key: str) -> Optional[AutoSuggestResultSet]:
        raw = self._read(key)
        if raw is None:
            return None
        data = AutoSuggestResultSet.from_json(raw)
        if not is_fresh(data.retrieved_at, self.suggest_max_age, now=self._clock()):
            return None
        return data.set_cached()

    def set_suggestions(self, key: str, result: AutoSuggestResultSet) -> bool:
        if not result.valid:
            return False
        return self._write(key, result.to_json())

    # -- Exclusion patterns -------------------------------------------------

    def get_exclusions(self) -> List[ExclusionPattern]:
        raw = self._read(EXCLUSIONS_KEY)
        return patterns_from_json(raw) if raw else []

    def set_exclusions(self, patterns: Sequence[ExclusionPattern]) -> bool:
        return self._write(EXCLUSIONS_KEY, patterns_to_json(patterns))

    # -- Store access -------------------------------------------------------

    def _read(self, key: str) -> Optional[str]:
        try:
            return self.store.get_artifact(key)
        except CacheUnavailable as exc:
            log.warning("Cache read unavailable, treating as miss: %s", exc)
            return None

    def _write(self, key: str, value: str) -> bool:
        try:
            return self.store.set_artifact(key, value)
        except CacheUnavailable as exc:
            log.warning("Cache write skipped: %s", exc)
            return False
