"""Unit tests for URL exclusion filtering and the pattern source."""

import json
from unittest.mock import MagicMock

from src.cache.artifacts import EXCLUSIONS_KEY
from src.filters.exclusions import (
    ExclusionSource,
    apply_exclusions,
    is_excluded,
    load_exclusion_patterns,
)
from src.models.patterns import ExclusionPattern

EVIL = [ExclusionPattern(r"evil\.com", "evil")]


class TestApplyExclusions:
    def test_case_insensitive_search(self, result_set_factory):
        rs = result_set_factory(
            ["https://good.org/a", "https://EVIL.com/x", "http://sub.evil.COM/y", "https://good.org/b"],
            [1, 2, 3, 4],
        )
        filtered = apply_exclusions(rs, EVIL)
        assert filtered.uris == ["https://good.org/a", "https://good.org/b"]
        assert filtered.removed_count == 2
        assert filtered.count == 2

    def test_idempotent(self, result_set_factory):
        rs = result_set_factory(["https://evil.com", "https://ok.net"], [1, 2])
        once = apply_exclusions(rs, EVIL)
        twice = apply_exclusions(once, EVIL)
        assert twice.uris == once.uris
        assert twice.removed_count == 0

    def test_invalid_pattern_never_matches(self, result_set_factory):
        rs = result_set_factory(["https://a.net/(", "https://evil.com"], [1, 2])
        patterns = [ExclusionPattern("(", "broken")] + EVIL
        filtered = apply_exclusions(rs, patterns)
        assert filtered.uris == ["https://a.net/("]
        assert filtered.removed_count == 1

    def test_order_preserved_without_resort(self, result_set_factory):
        rs = result_set_factory(["c", "spam", "a", "b"], [30, 5, 10, 20])
        filtered = apply_exclusions(rs, [ExclusionPattern("spam")])
        assert filtered.uris == ["c", "a", "b"]

    def test_no_patterns(self, result_set_factory):
        rs = result_set_factory(["x"], [1])
        filtered = apply_exclusions(rs, [])
        assert filtered.uris == ["x"]
        assert filtered.removed_count == 0

    def test_validity_untouched(self, result_set_factory):
        rs = result_set_factory(["https://evil.com"], [1], valid=True)
        assert apply_exclusions(rs, EVIL).valid is True

    def test_is_excluded_union(self):
        patterns = [ExclusionPattern("foo"), ExclusionPattern("bar")]
        assert is_excluded("https://bar.io", patterns) is True
        assert is_excluded("https://baz.io", patterns) is False


class TestLoadPatterns:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "patterns.json"
        path.write_text(json.dumps([{"pattern": "spam", "name": "Spam"}, {"pattern": "ads"}]))
        assert load_exclusion_patterns(path) == [
            ExclusionPattern("spam", "Spam"),
            ExclusionPattern("ads", ""),
        ]

    def test_missing_file(self, tmp_path):
        assert load_exclusion_patterns(tmp_path / "nope.json") == []

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "patterns.json"
        path.write_text("{oops")
        assert load_exclusion_patterns(path) == []


class TestExclusionSource:
    def test_loads_file_and_caches(self, tmp_path, cache, store):
        path = tmp_path / "patterns.json"
        path.write_text(json.dumps([{"pattern": "spam", "name": "Spam"}]))
        source = ExclusionSource(cache, path)
        assert source.patterns() == [ExclusionPattern("spam", "Spam")]
        assert EXCLUSIONS_KEY in store.data

    def test_prefers_cached_list(self, tmp_path, cache):
        cache.set_exclusions([ExclusionPattern("cached", "c")])
        source = ExclusionSource(cache, tmp_path / "nope.json")
        assert source.patterns() == [ExclusionPattern("cached", "c")]

    def test_empty_file_not_cached(self, tmp_path):
        cache = MagicMock()
        cache.get_exclusions.return_value = []
        assert ExclusionSource(cache, tmp_path / "nope.json").patterns() == []
        cache.set_exclusions.assert_not_called()

    def test_without_cache(self, tmp_path):
        path = tmp_path / "patterns.json"
        path.write_text(json.dumps([{"pattern": "x"}]))
        assert ExclusionSource(None, path).patterns() == [ExclusionPattern("x")]
