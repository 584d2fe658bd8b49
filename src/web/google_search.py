"""Google Custom Search implementation (enrichment provider)."""

from typing import Any, Dict, List, Optional

import httpx

from src.models.options import Provider, QueryOptions, SafeMode
from src.models.results import SearchResult
from src.utils.config import settings
from src.web.search_provider import ProviderAdapter, list_field, string_field

GOOGLE_CSE_BASE = "https://www.googleapis.com/customsearch/v1"

# Metatags checked in order for a publication date.
DATE_METATAGS = ("article:published_time", "og:updated_time", "date")


class GoogleSearch(ProviderAdapter):
    """Web search via the Google Custom Search JSON API (flat ``items`` list)."""

    provider = Provider.GOOGLE
    endpoint = GOOGLE_CSE_BASE
    factor = 7
    page_size = 10  # CSE caps ``num`` at 10

    def __init__(
        self,
        api_key: str | None = None,
        cse_id: str | None = None,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        super().__init__(client=client, timeout=timeout)
        self._api_key = api_key if api_key is not None else settings.google_api_key
        self._cse_id = cse_id if cse_id is not None else settings.google_cse_id

    def is_available(self) -> bool:
        return bool(self._api_key and self._cse_id)

    def headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    def build_params(self, options: QueryOptions) -> Dict[str, str]:
        params = {
            "key": self._api_key,
            "cx": self._cse_id,
            "q": options.query,
            "safe": "off" if options.safe_mode is SafeMode.OFF else "active",
            "num": str(self.page_size),
        }
        if options.country:
            params["gl"] = options.country.lower()
        if options.language:
            params["lr"] = f"lang_{options.language}"
        if options.offset:
            params["start"] = str(self.start_position(options) + 1)
        return params

    def is_valid_payload(self, payload: Dict[str, Any]) -> bool:
        return payload.get("kind") == "customsearch#search" or isinstance(
            payload.get("searchInformation"), dict
        )

    def extract_hits(self, payload: Dict[str, Any], options: QueryOptions) -> List[Any]:
        # ``items`` is omitted entirely when there are no hits.
        return list_field(payload, "items")

    def to_result(self, hit: Dict[str, Any], options: QueryOptions) -> Optional[SearchResult]:
        uri = string_field(hit, "link")
        if not uri:
            return None
        return SearchResult(
            uri=uri,
            title=string_field(hit, "title"),
            summary=string_field(hit, "snippet"),
            published_date=_published_date(hit),
        )


def _published_date(hit: Dict[str, Any]) -> str:
    pagemap = hit.get("pagemap")
    if not isinstance(pagemap, dict):
        return ""
    metatags = list_field(pagemap, "metatags")
    if not metatags or not isinstance(metatags[0], dict):
        return ""
    for tag in DATE_METATAGS:
        value = string_field(metatags[0], tag)
        if value:
            return value
    return ""
