"""Brave Search implementation (primary provider)."""

from typing import Any, Dict, List, Optional

import httpx

from src.models.options import Provider, QueryOptions
from src.models.results import SearchResult
from src.utils.config import settings
from src.web.search_provider import ProviderAdapter, list_field, string_field

BRAVE_SEARCH_BASE = "https://api.search.brave.com/res/v1/web/search"


class BraveSearch(ProviderAdapter):
    """Web search via the Brave Search API.

    Brave nests hits per category; news hits are ranked ahead of web hits in
    the flattened list. CORE mode asks for web results only.
    """

    provider = Provider.BRAVE
    endpoint = BRAVE_SEARCH_BASE
    factor = 5
    page_size = 20

    def __init__(
        self,
        api_key: str | None = None,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        super().__init__(client=client, timeout=timeout)
        self._api_key = api_key if api_key is not None else settings.brave_api_key

    def is_available(self) -> bool:
        return bool(self._api_key)

    def headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "X-Subscription-Token": self._api_key,
        }

    def categories(self, options: QueryOptions) -> List[str]:
        return ["news", "web"] if options.provider_mode.include_news else ["web"]

    def build_params(self, options: QueryOptions) -> Dict[str, str]:
        params = {
            "q": options.query,
            "safesearch": options.safe_mode.value,
            "count": str(self.page_size),
            "result_filter": ",".join(self.categories(options)),
        }
        if options.country:
            params["country"] = options.country
        if options.language:
            params["search_lang"] = options.language
        if options.offset:
            params["offset"] = str(options.offset)
        if options.provider_mode.extra_snippets:
            params["extra_snippets"] = "true"
        return params

    def is_valid_payload(self, payload: Dict[str, Any]) -> bool:
        return "mixed" in payload

    def extract_hits(self, payload: Dict[str, Any], options: QueryOptions) -> List[Any]:
        hits: List[Any] = []
        for category in self.categories(options):
            section = payload.get(category)
            if isinstance(section, dict):
                hits.extend(list_field(section, "results"))
        return hits

    def to_result(self, hit: Dict[str, Any], options: QueryOptions) -> Optional[SearchResult]:
        uri = string_field(hit, "url")
        if not uri:
            return None
        summary = string_field(hit, "description")
        if options.provider_mode.extra_snippets:
            snippets = [s for s in list_field(hit, "extra_snippets") if isinstance(s, str)]
            summary = " ".join([summary] + snippets).strip()
        return SearchResult(
            uri=uri,
            title=string_field(hit, "title"),
            summary=summary,
            published_date=string_field(hit, "page_age") or string_field(hit, "age"),
        )
