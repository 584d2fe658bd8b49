"""Unit tests for freshness ceilings and the artifact cache."""

import pytest

from src.cache.artifacts import (
    DEFAULT_SEARCH_MAX_AGE,
    EXCLUSIONS_KEY,
    SEARCH_MAX_AGE_LIMIT,
    SUGGEST_MAX_AGE_LIMIT,
    ArtifactCache,
    is_fresh,
    resolve_max_age,
)
from src.models.patterns import ExclusionPattern
from src.models.results import AutoSuggestResultSet, ResultSet, Suggestion

NOW = 1_700_000_000


class TestResolveMaxAge:
    def test_configured_value(self):
        assert resolve_max_age("120", DEFAULT_SEARCH_MAX_AGE, SEARCH_MAX_AGE_LIMIT) == 120

    def test_blank_uses_default(self):
        assert resolve_max_age("", 3600, SEARCH_MAX_AGE_LIMIT) == 3600
        assert resolve_max_age(None, 3600, SEARCH_MAX_AGE_LIMIT) == 3600

    def test_clamped_to_limit(self):
        assert resolve_max_age("99999999", 3600, SEARCH_MAX_AGE_LIMIT) == 7 * 24 * 60 * 60
        assert resolve_max_age(10 ** 9, 3600, SUGGEST_MAX_AGE_LIMIT) == 13 * 7 * 24 * 60 * 60

    def test_unparsable_uses_default(self):
        assert resolve_max_age("soon", 3600, SEARCH_MAX_AGE_LIMIT) == 3600
        assert resolve_max_age("-5", 3600, SEARCH_MAX_AGE_LIMIT) == 3600


class TestIsFresh:
    def test_younger_than_ceiling(self):
        assert is_fresh(NOW - 59, 60, now=NOW) is True

    def test_exactly_ceiling_is_stale(self):
        assert is_fresh(NOW - 60, 60, now=NOW) is False

    def test_older_is_stale(self):
        assert is_fresh(NOW - 61, 60, now=NOW) is False


def _cache(store, max_age="60"):
    return ArtifactCache(store, max_search_secs=max_age, max_suggest_secs=max_age, clock=lambda: NOW)


def _valid_set(retrieved_at=NOW, valid=True):
    rs = ResultSet(valid=valid, results=[], retrieved_at=retrieved_at)
    return rs


class TestSearchArtifacts:
    def test_fresh_hit_is_flagged_cached(self, store):
        cache = _cache(store)
        cache.set_results("k", _valid_set(retrieved_at=NOW - 10))
        hit = cache.get_results("k")
        assert hit is not None
        assert hit.cached is True

    def test_age_equal_to_ceiling_is_miss(self, store):
        cache = _cache(store)
        cache.set_results("k", _valid_set(retrieved_at=NOW - 60))
        assert cache.get_results("k") is None
        # stale entry stays in place
        assert "k" in store.data

    def test_absent_key_is_miss(self, store):
        assert _cache(store).get_results("missing") is None

    def test_invalid_results_not_written(self, store):
        cache = _cache(store)
        assert cache.set_results("k", _valid_set(valid=False)) is False
        assert store.writes == []

    def test_unparsable_entry_is_miss(self, store):
        store.data["k"] = "garbage"
        assert _cache(store).get_results("k") is None

    def test_read_outage_is_miss(self, store):
        cache = _cache(store)
        cache.set_results("k", _valid_set())
        store.fail_reads = True
        assert cache.get_results("k") is None

    def test_write_outage_swallowed(self, store):
        store.fail_writes = True
        assert _cache(store).set_results("k", _valid_set()) is False

    def test_ceiling_resolved_per_call(self, store):
        cache = _cache(store, max_age="999999999")
        assert cache.search_max_age == SEARCH_MAX_AGE_LIMIT
        assert cache.suggest_max_age == SUGGEST_MAX_AGE_LIMIT


class TestSuggestArtifacts:
    def test_roundtrip_through_cache(self, store):
        cache = _cache(store)
        rs = AutoSuggestResultSet(valid=True, results=[Suggestion("abc")], retrieved_at=NOW - 1)
        assert cache.set_suggestions("s", rs) is True
        hit = cache.get_suggestions("s")
        assert hit.cached is True
        assert hit.results[0].query == "abc"

    def test_stale_suggestions_miss(self, store):
        cache = _cache(store)
        cache.set_suggestions("s", AutoSuggestResultSet(valid=True, retrieved_at=NOW - 600))
        assert cache.get_suggestions("s") is None

    def test_invalid_suggestions_not_written(self, store):
        assert _cache(store).set_suggestions("s", AutoSuggestResultSet.empty()) is False


class TestExclusionArtifacts:
    def test_roundtrip(self, store):
        cache = _cache(store)
        patterns = [ExclusionPattern(r"evil\.com", "evil"), ExclusionPattern("spam", "")]
        cache.set_exclusions(patterns)
        assert EXCLUSIONS_KEY in store.data
        assert cache.get_exclusions() == patterns

    def test_empty_when_absent(self, store):
        assert _cache(store).get_exclusions() == []

    @pytest.mark.parametrize("raw", ["nope", '{"pattern": "x"}', '[{"name": "no pattern"}]'])
    def test_malformed_list_ignored(self, store, raw):
        store.data[EXCLUSIONS_KEY] = raw
        assert _cache(store).get_exclusions() == []
