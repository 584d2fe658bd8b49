"""HTTP transport for provider calls."""

import json
from typing import Any, Dict, Optional

import httpx

from src.utils.config import settings
from src.utils.errors import ParseError, TransportError
from src.utils.logger import get_logger

log = get_logger(__name__)


def fetch_payload(
    url: str,
    params: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
    provider: Optional[str] = None,
) -> bytes:
    """GET *url* and return the raw body. Any failure raises ``TransportError``."""
    timeout = timeout if timeout is not None else settings.request_timeout
    try:
        if client is not None:
            resp = client.get(url, params=params, headers=headers, timeout=timeout)
            resp.raise_for_status()
            return resp.content
        with httpx.Client(timeout=timeout, follow_redirects=True) as owned:
            resp = owned.get(url, params=params, headers=headers)
            resp.raise_for_status()
            return resp.content
    except httpx.HTTPError as exc:
        log.warning("Request to %s failed: %s", provider or url, exc)
        raise TransportError(f"{provider or url} request failed: {exc}", provider) from exc


def decode_payload(payload: Any, provider: Optional[str] = None) -> Any:
    """Return parsed JSON. Bytes or text that is not JSON raises ``ParseError``."""
    if isinstance(payload, (bytes, bytearray, str)):
        try:
            return json.loads(payload)
        except (ValueError, RecursionError) as exc:
            raise ParseError(f"{provider or 'provider'} returned invalid JSON: {exc}", provider) from exc
    return payload
