"""Unit tests for the autosuggest flow."""

from unittest.mock import MagicMock

import pytest

from src.models.options import QueryOptions
from src.models.results import AutoSuggestResultSet, Suggestion
from src.pipeline.suggest import get_suggestions
from src.utils.errors import TransportError

OPTS = QueryOptions(query="ru", country="US")


def _suggester(result=None, available=True):
    suggester = MagicMock()
    suggester.is_available.return_value = available
    suggester.suggest.return_value = result
    return suggester


def test_miss_fetches_and_stores(cache, store):
    fetched = AutoSuggestResultSet(valid=True, results=[Suggestion("rust")])
    suggester = _suggester(fetched)

    result = get_suggestions(OPTS, cache, suggester)
    assert result.results[0].query == "rust"
    assert store.writes == [OPTS.to_suggest_key()]

    again = get_suggestions(OPTS, cache, suggester)
    assert again.cached is True
    suggester.suggest.assert_called_once()


def test_invalid_not_stored(cache, store):
    get_suggestions(OPTS, cache, _suggester(AutoSuggestResultSet(valid=False)))
    assert store.writes == []


def test_unconfigured_raises(cache):
    with pytest.raises(TransportError):
        get_suggestions(OPTS, cache, _suggester(available=False))


def test_blank_query(cache):
    suggester = _suggester()
    assert get_suggestions(QueryOptions(query=""), cache, suggester).valid is False
    suggester.suggest.assert_not_called()
