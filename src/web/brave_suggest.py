"""Brave autosuggest client."""

from typing import Any, Dict, List

import httpx

from src.models.options import Provider, QueryOptions
from src.models.results import AutoSuggestResultSet, Suggestion
from src.utils.config import settings
from src.utils.logger import get_logger
from src.web.fetcher import decode_payload, fetch_payload
from src.web.search_provider import list_field, string_field

log = get_logger(__name__)

BRAVE_SUGGEST_BASE = "https://api.search.brave.com/res/v1/suggest/search"
MAX_SUGGESTIONS = 10


class BraveSuggest:
    """Query completions from the Brave suggest endpoint."""

    provider = Provider.BRAVE

    def __init__(
        self,
        api_key: str | None = None,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        self._api_key = api_key if api_key is not None else settings.brave_suggest_api_key
        self._client = client
        self._timeout = timeout

    def is_available(self) -> bool:
        return bool(self._api_key)

    def build_params(self, options: QueryOptions) -> Dict[str, str]:
        params = {"q": options.query, "count": str(MAX_SUGGESTIONS)}
        if options.country:
            params["country"] = options.country
        if options.language:
            params["lang"] = options.language
        return params

    def normalize(self, payload: Any, options: QueryOptions) -> AutoSuggestResultSet:
        data = decode_payload(payload, provider="brave-suggest")
        valid = isinstance(data, dict) and data.get("type") == "suggest"
        suggestions: List[Suggestion] = []
        if valid:
            for row in list_field(data, "results"):
                if not isinstance(row, dict) or not string_field(row, "query"):
                    continue
                suggestions.append(
                    Suggestion(
                        query=string_field(row, "query"),
                        title=string_field(row, "title"),
                        description=string_field(row, "description"),
                        is_entity=row.get("is_entity") is True,
                    )
                )
        return AutoSuggestResultSet(
            valid=valid,
            results=suggestions,
            country=options.country,
            language=options.language,
        )

    def suggest(self, options: QueryOptions) -> AutoSuggestResultSet:
        raw = fetch_payload(
            BRAVE_SUGGEST_BASE,
            params=self.build_params(options),
            headers={"Accept": "application/json", "X-Subscription-Token": self._api_key},
            timeout=self._timeout,
            client=self._client,
            provider="brave-suggest",
        )
        result_set = self.normalize(raw, options)
        log.info("brave-suggest returned %d suggestions", result_set.count)
        return result_set
