"""URL exclusion filtering and the exclusion pattern source."""

import re
from dataclasses import replace
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Pattern, Sequence

from src.cache.artifacts import ArtifactCache
from src.models.patterns import ExclusionPattern, patterns_from_json
from src.models.results import ResultSet
from src.utils.config import settings
from src.utils.logger import get_logger

log = get_logger(__name__)


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> Optional[Pattern[str]]:
    """Compile case-insensitively; invalid regexes return None."""
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        log.warning("Skipping invalid exclusion pattern %r: %s", pattern, exc)
        return None


def is_excluded(uri: str, patterns: Sequence[ExclusionPattern]) -> bool:
    """True when any valid pattern is found anywhere in *uri*."""
    for item in patterns:
        compiled = compile_pattern(item.pattern)
        if compiled is not None and compiled.search(uri):
            return True
    return False


def apply_exclusions(result_set: ResultSet, patterns: Sequence[ExclusionPattern]) -> ResultSet:
    """Drop excluded results, keeping order; records how many were removed."""
    kept = [r for r in result_set.results if not is_excluded(r.uri, patterns)]
    filtered = replace(result_set, results=kept)
    filtered.removed_count = result_set.count - filtered.count
    if filtered.removed_count:
        log.info("Excluded %d results", filtered.removed_count)
    return filtered


def load_exclusion_patterns(path: str | Path) -> List[ExclusionPattern]:
    """Read a JSON list of ``{pattern, name}``; missing or bad files give []."""
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except OSError:
        log.debug("No exclusion pattern file at %s", path)
        return []
    return patterns_from_json(contents)


class ExclusionSource:
    """Supplies the active pattern list: cached copy first, then the file.

    Patterns loaded from the file are written back to the cache when any
    were found.
    """

    def __init__(self, cache: ArtifactCache | None = None, path: str | Path | None = None):
        self.cache = cache
        self.path = path or settings.exclusion_patterns_path

    def patterns(self) -> List[ExclusionPattern]:
        if self.cache is not None:
            cached = self.cache.get_exclusions()
            if cached:
                return cached
        rows = load_exclusion_patterns(self.path)
        if rows and self.cache is not None:
            self.cache.set_exclusions(rows)
        return rows
