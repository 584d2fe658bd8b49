"""Abstract provider adapter -- one subclass per upstream search API."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from src.models.options import Provider, QueryOptions
from src.models.results import ResultSet, SearchResult
from src.utils.logger import get_logger
from src.web.fetcher import decode_payload, fetch_payload

log = get_logger(__name__)


class ProviderAdapter(ABC):
    """Turns a provider's native JSON into the common ``ResultSet`` schema.

    Subclasses supply the endpoint, outbound parameters, the structural check
    and the per-hit mapping; weighting and validity handling live here so every
    provider ranks the same way.
    """

    provider: Provider
    endpoint: str
    # Lower factor ranks a provider's hits ahead at equal position.
    factor: int
    page_size: int

    def __init__(self, client: httpx.Client | None = None, timeout: float | None = None):
        self._client = client
        self._timeout = timeout

    @property
    def name(self) -> str:
        return self.provider.value

    @abstractmethod
    def is_available(self) -> bool:
        """False when credentials are missing."""

    @abstractmethod
    def build_params(self, options: QueryOptions) -> Dict[str, str]:
        """Outbound query parameters for *options*."""

    @abstractmethod
    def headers(self) -> Dict[str, str]:
        ...

    @abstractmethod
    def is_valid_payload(self, payload: Dict[str, Any]) -> bool:
        """Structural check on the top-level object."""

    @abstractmethod
    def extract_hits(self, payload: Dict[str, Any], options: QueryOptions) -> List[Any]:
        """Ordered raw hits from their provider-specific location."""

    @abstractmethod
    def to_result(self, hit: Dict[str, Any], options: QueryOptions) -> Optional[SearchResult]:
        """Map one hit, or None if it has no usable URI."""

    # -- Shared behaviour ---------------------------------------------------

    def start_position(self, options: QueryOptions) -> int:
        return (options.offset or 0) * self.page_size

    def normalize(self, payload: Any, options: QueryOptions) -> ResultSet:
        """Build a ``ResultSet`` from a raw or parsed payload.

        Invalid JSON raises ``ParseError``; a parseable payload of the wrong
        shape gives ``valid=False`` and no results.
        """
        data = decode_payload(payload, provider=self.name)
        if not isinstance(data, dict) or not self.is_valid_payload(data):
            log.warning("%s returned an unexpected payload shape", self.name)
            return self._result_set(options, valid=False, results=[])

        start = self.start_position(options)
        results: List[SearchResult] = []
        for position, hit in enumerate(self.extract_hits(data, options), start=1):
            if not isinstance(hit, dict):
                continue
            result = self.to_result(hit, options)
            if result is None:
                continue
            result.provider = self.name
            result.weight = (start + position) * self.factor
            results.append(result)
        return self._result_set(options, valid=True, results=results)

    def search(self, options: QueryOptions) -> ResultSet:
        """Fetch and normalize. Raises ``TransportError`` or ``ParseError``."""
        raw = fetch_payload(
            self.endpoint,
            params=self.build_params(options),
            headers=self.headers(),
            timeout=self._timeout,
            client=self._client,
            provider=self.name,
        )
        result_set = self.normalize(raw, options)
        log.info("%s returned %d results (valid=%s)", self.name, result_set.count, result_set.valid)
        return result_set

    def _result_set(self, options: QueryOptions, valid: bool, results: List[SearchResult]) -> ResultSet:
        return ResultSet(
            valid=valid,
            results=results,
            country=options.country,
            language=options.language,
            page=options.page,
        )


def string_field(data: Dict[str, Any], key: str) -> str:
    """Return ``data[key]`` if it is a string, else an empty string."""
    value = data.get(key)
    return value if isinstance(value, str) else ""


def list_field(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    return value if isinstance(value, list) else []
