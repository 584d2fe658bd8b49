"""URL exclusion pattern record."""

import json
from dataclasses import asdict, dataclass
from typing import Any, List, Sequence


@dataclass(frozen=True)
class ExclusionPattern:
    """A regex tested against result URIs; ``name`` is a label only."""

    pattern: str
    name: str = ""


def patterns_from_json(raw: str) -> List[ExclusionPattern]:
    """Decode a JSON list of ``{pattern, name}`` objects, skipping bad rows."""
    try:
        rows = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(rows, list):
        return []
    return [_row_to_pattern(row) for row in rows if _is_pattern_row(row)]


def patterns_to_json(patterns: Sequence[ExclusionPattern]) -> str:
    return json.dumps([asdict(p) for p in patterns])


def _is_pattern_row(row: Any) -> bool:
    return isinstance(row, dict) and isinstance(row.get("pattern"), str)


def _row_to_pattern(row: dict) -> ExclusionPattern:
    return ExclusionPattern(pattern=row["pattern"], name=str(row.get("name", "")))
