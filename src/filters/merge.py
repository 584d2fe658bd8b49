"""Cross-provider merge: dedup by URI, co-occurrence boosts rank."""

from dataclasses import replace
from typing import Dict, List

from src.models.results import ResultSet, SearchResult, get_timestamp


def merge(primary: ResultSet, secondary: ResultSet) -> ResultSet:
    """Fold *secondary* into *primary* and return a new, re-ranked set.

    A secondary hit whose ``uri`` (exact string match) is already present
    lowers the existing entry's weight by its own weight, floored at zero;
    otherwise it is appended. The combined list is then stably sorted by
    ascending weight, so ties keep primary-then-secondary order.

    ``valid``, ``country``, ``language`` and ``page`` come from *primary*;
    ``retrieved_at`` is the merge time. Inputs are left untouched.
    """
    combined: List[SearchResult] = [replace(r) for r in primary.results]
    by_uri: Dict[str, SearchResult] = {}
    for result in combined:
        by_uri.setdefault(result.uri, result)

    for result in secondary.results:
        existing = by_uri.get(result.uri)
        if existing is not None:
            existing.subtract_weight(result.weight)
            continue
        appended = replace(result)
        combined.append(appended)
        by_uri[appended.uri] = appended

    return ResultSet(
        valid=primary.valid,
        results=sorted(combined, key=lambda r: r.weight),
        retrieved_at=get_timestamp(),
        country=primary.country,
        language=primary.language,
        page=primary.page,
    )
