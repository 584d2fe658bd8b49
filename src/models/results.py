"""Common result schema shared by every provider, plus its cache encoding.

Artifacts are stored as JSON objects. ``cached`` is always written as False
and only flipped on read-through, so a round trip preserves every other field.
"""

import json
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from src.utils.logger import get_logger

log = get_logger(__name__)


def get_timestamp() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


@dataclass
class SearchResult:
    """A single ranked search hit. Lower ``weight`` ranks higher."""

    uri: str
    title: str = ""
    summary: str = ""
    published_date: str = ""
    provider: str = ""
    weight: int = 0

    def subtract_weight(self, amount: int) -> None:
        """Boost rank by lowering weight, never below zero."""
        self.weight = max(0, self.weight - amount)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResult":
        return cls(
            uri=str(data.get("uri", "")),
            title=str(data.get("title", "")),
            summary=str(data.get("summary", "")),
            published_date=str(data.get("published_date", "")),
            provider=str(data.get("provider", "")),
            weight=max(0, int(data.get("weight", 0))),
        )


@dataclass
class ResultSet:
    """Ranked results for one query, as served and as cached."""

    valid: bool
    results: List[SearchResult] = field(default_factory=list)
    retrieved_at: int = field(default_factory=get_timestamp)
    country: Optional[str] = None
    language: Optional[str] = None
    page: int = 1
    removed_count: int = 0
    cached: bool = False
    count: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.count = len(self.results)

    @classmethod
    def empty(cls) -> "ResultSet":
        return cls(valid=False, results=[], retrieved_at=0)

    def set_results(self, results: List[SearchResult]) -> None:
        self.results = results
        self.count = len(results)

    def retrieved_age(self, now: Optional[int] = None) -> int:
        return (get_timestamp() if now is None else now) - self.retrieved_at

    def set_cached(self) -> "ResultSet":
        self.cached = True
        return self

    @property
    def uris(self) -> List[str]:
        return [r.uri for r in self.results]

    # -- Encoding -------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["cached"] = False
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResultSet":
        return cls(
            valid=bool(data.get("valid", False)),
            results=[SearchResult.from_dict(r) for r in data.get("results") or []],
            retrieved_at=int(data.get("retrieved_at", 0)),
            country=data.get("country"),
            language=data.get("language"),
            page=int(data.get("page", 1)),
            removed_count=int(data.get("removed_count", 0)),
        )

    @classmethod
    def from_json(cls, raw: str) -> "ResultSet":
        """Decode a cached artifact; anything unreadable becomes ``empty()``."""
        try:
            data = json.loads(raw)
            if isinstance(data, dict):
                return cls.from_dict(data)
        except (TypeError, ValueError, AttributeError):
            pass
        log.warning("Discarding unreadable cached result set")
        return cls.empty()


@dataclass
class Suggestion:
    query: str
    title: str = ""
    description: str = ""
    is_entity: bool = False


@dataclass
class AutoSuggestResultSet:
    """Autocomplete suggestions for a query prefix."""

    valid: bool
    results: List[Suggestion] = field(default_factory=list)
    retrieved_at: int = field(default_factory=get_timestamp)
    country: Optional[str] = None
    language: Optional[str] = None
    cached: bool = False
    count: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.count = len(self.results)

    @classmethod
    def empty(cls) -> "AutoSuggestResultSet":
        return cls(valid=False, results=[], retrieved_at=0)

    def retrieved_age(self, now: Optional[int] = None) -> int:
        return (get_timestamp() if now is None else now) - self.retrieved_at

    def set_cached(self) -> "AutoSuggestResultSet":
        self.cached = True
        return self

    def to_json(self) -> str:
        data = asdict(self)
        data["cached"] = False
        return json.dumps(data)

    @classmethod
    def from_json(cls, raw: str) -> "AutoSuggestResultSet":
        try:
            data = json.loads(raw)
            if isinstance(data, dict):
                return cls(
                    valid=bool(data.get("valid", False)),
                    results=[
                        Suggestion(
                            query=str(s.get("query", "")),
                            title=str(s.get("title", "")),
                            description=str(s.get("description", "")),
                            is_entity=bool(s.get("is_entity", False)),
                        )
                        for s in data.get("results") or []
                    ],
                    retrieved_at=int(data.get("retrieved_at", 0)),
                    country=data.get("country"),
                    language=data.get("language"),
                )
        except (TypeError, ValueError, AttributeError):
            pass
        log.warning("Discarding unreadable cached suggestion set")
        return cls.empty()
