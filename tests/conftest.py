"""Shared fakes for the unit tests: an in-memory store and stub providers."""

from typing import Dict, List, Optional

import pytest

from src.cache.artifacts import ArtifactCache
from src.models.results import ResultSet, SearchResult
from src.utils.errors import CacheUnavailable


class FakeStore:
    """Dict-backed stand-in for ``RedisClient``."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = False):
        self.data: Dict[str, str] = {}
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.writes: List[str] = []

    def get_artifact(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise CacheUnavailable("store down")
        return self.data.get(key) or None

    def set_artifact(self, key: str, value: str) -> bool:
        if self.fail_writes:
            raise CacheUnavailable("store down")
        self.data[key] = value
        self.writes.append(key)
        return True


class StubAdapter:
    """Provider stand-in returning a canned result set or raising an error."""

    def __init__(self, name: str, result: Optional[ResultSet] = None, error: Exception | None = None,
                 available: bool = True):
        self.name = name
        self.result = result
        self.error = error
        self.available = available
        self.calls = 0

    def is_available(self) -> bool:
        return self.available

    def search(self, options) -> ResultSet:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


def make_result_set(uris, weights, provider: str = "brave", valid: bool = True) -> ResultSet:
    return ResultSet(
        valid=valid,
        results=[
            SearchResult(uri=u, title=u.upper(), provider=provider, weight=w)
            for u, w in zip(uris, weights)
        ],
    )


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def cache(store):
    return ArtifactCache(store, max_search_secs="3600", max_suggest_secs="3600")


@pytest.fixture
def result_set_factory():
    return make_result_set


@pytest.fixture
def stub_adapter_factory():
    return StubAdapter
