"""Unit tests for cross-provider merging."""

from unittest.mock import patch

import pytest

from src.filters.merge import merge


@pytest.fixture
def primary(result_set_factory):
    return result_set_factory(["a", "b", "c"], [7, 14, 21], provider="brave")


@pytest.fixture
def secondary(result_set_factory):
    return result_set_factory(["b", "d"], [4, 8], provider="google")


class TestMerge:
    def test_co_occurrence_boosts_rank(self, primary, secondary):
        merged = merge(primary, secondary)
        assert [(r.uri, r.weight) for r in merged.results] == [
            ("a", 7), ("d", 8), ("b", 10), ("c", 21),
        ]
        assert merged.count == 4

    def test_existing_entry_is_kept(self, primary, secondary):
        merged = merge(primary, secondary)
        b = next(r for r in merged.results if r.uri == "b")
        assert b.provider == "brave"

    def test_inputs_not_mutated(self, primary, secondary):
        merge(primary, secondary)
        assert [r.weight for r in primary.results] == [7, 14, 21]
        assert primary.count == 3
        assert secondary.count == 2

    def test_weight_floors_at_zero(self, result_set_factory):
        merged = merge(
            result_set_factory(["x"], [5]),
            result_set_factory(["x"], [50]),
        )
        assert merged.results[0].weight == 0

    def test_self_merge_never_grows(self, primary):
        merged = merge(primary, primary)
        assert merged.count == primary.count
        before = {r.uri: r.weight for r in primary.results}
        for r in merged.results:
            assert r.weight < before[r.uri] or r.weight == 0

    def test_uri_identity_is_exact(self, result_set_factory):
        merged = merge(
            result_set_factory(["https://a.example/"], [5]),
            result_set_factory(["https://A.example", "https://a.example/"], [5, 5]),
        )
        assert merged.count == 2

    def test_stable_for_equal_weights(self, result_set_factory):
        merged = merge(
            result_set_factory(["p1", "p2"], [10, 10]),
            result_set_factory(["s1", "s2"], [10, 10]),
        )
        assert merged.uris == ["p1", "p2", "s1", "s2"]

    def test_metadata_from_primary_and_fresh_timestamp(self, primary, secondary):
        primary.country = "US"
        primary.language = "en"
        primary.page = 3
        primary.retrieved_at = 100
        with patch("src.filters.merge.get_timestamp", return_value=5000):
            merged = merge(primary, secondary)
        assert merged.retrieved_at == 5000
        assert (merged.country, merged.language, merged.page) == ("US", "en", 3)
        assert merged.valid is True
        assert merged.cached is False

    def test_validity_comes_from_primary(self, result_set_factory):
        merged = merge(
            result_set_factory([], [], valid=False),
            result_set_factory(["s"], [7]),
        )
        assert merged.valid is False
        assert merged.uris == ["s"]
