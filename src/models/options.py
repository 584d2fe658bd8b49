"""Normalized search request options and cache-key derivation."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from src.models.countries import match_country_code

MAX_OFFSET = 65535

_SLUG_PATTERN = re.compile(r"[\W_]+")
_LANGUAGE_PATTERN = re.compile(r"^[a-z]{1,3}$")


class Provider(str, Enum):
    """Upstream search backends."""

    BRAVE = "brave"
    GOOGLE = "google"


class SafeMode(str, Enum):
    OFF = "off"
    MODERATE = "moderate"
    STRICT = "strict"

    @classmethod
    def from_key(cls, key: Optional[str]) -> "SafeMode":
        """Map loose request values (``on``, ``1``, ``mild`` ...) to a level."""
        lc_key = (key or "off").strip().lower()
        if lc_key in ("on", "2", "strict"):
            return cls.STRICT
        if lc_key in ("m", "mild", "partial", "1", "moderate"):
            return cls.MODERATE
        return cls.OFF

    @property
    def short_code(self) -> str:
        return _SAFE_CODES[self]


_SAFE_CODES = {SafeMode.OFF: "n", SafeMode.MODERATE: "m", SafeMode.STRICT: "y"}


class ProviderMode(str, Enum):
    """Which providers a request draws on.

    ALL and FULL_TEXT use Brave as primary with Google as enrichment;
    FULL_TEXT also asks Brave for extra snippets. CORE is Brave web results
    only, BRAVE is Brave alone (news and web), GOOGLE is Google alone.
    """

    ALL = "all"
    FULL_TEXT = "fulltext"
    CORE = "core"
    BRAVE = "brave"
    GOOGLE = "google"

    @classmethod
    def from_key(cls, key: Optional[str]) -> "ProviderMode":
        lc_key = (key or "").strip().lower().replace("_", "").replace("-", "")
        return _MODE_KEYS.get(lc_key, cls.ALL)

    @property
    def short_code(self) -> str:
        return _MODE_CODES[self]

    def plan(self) -> Tuple[Provider, Optional[Provider]]:
        """Return ``(primary, secondary)`` providers for this mode."""
        return _MODE_PLANS[self]

    @property
    def include_news(self) -> bool:
        return self is not ProviderMode.CORE

    @property
    def extra_snippets(self) -> bool:
        return self is ProviderMode.FULL_TEXT


_MODE_KEYS = {
    "all": ProviderMode.ALL,
    "a": ProviderMode.ALL,
    "fulltext": ProviderMode.FULL_TEXT,
    "full": ProviderMode.FULL_TEXT,
    "f": ProviderMode.FULL_TEXT,
    "core": ProviderMode.CORE,
    "c": ProviderMode.CORE,
    "brave": ProviderMode.BRAVE,
    "b": ProviderMode.BRAVE,
    "google": ProviderMode.GOOGLE,
    "cse": ProviderMode.GOOGLE,
    "g": ProviderMode.GOOGLE,
}

_MODE_CODES = {
    ProviderMode.ALL: "a",
    ProviderMode.FULL_TEXT: "f",
    ProviderMode.CORE: "c",
    ProviderMode.BRAVE: "b",
    ProviderMode.GOOGLE: "g",
}

_MODE_PLANS = {
    ProviderMode.ALL: (Provider.BRAVE, Provider.GOOGLE),
    ProviderMode.FULL_TEXT: (Provider.BRAVE, Provider.GOOGLE),
    ProviderMode.CORE: (Provider.BRAVE, None),
    ProviderMode.BRAVE: (Provider.BRAVE, None),
    ProviderMode.GOOGLE: (Provider.GOOGLE, None),
}


def slugify(value: Optional[str]) -> str:
    """Case-fold *value* and collapse runs of non-word characters to ``-``.

    Letters and digits of any script are kept so non-Latin queries stay distinct.
    """
    text = (value or "").strip().casefold()
    return _SLUG_PATTERN.sub("-", text).strip("-")


def normalize_language(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    lang = value.strip().lower()
    return lang if _LANGUAGE_PATTERN.match(lang) else None


def page_to_offset(page) -> Optional[int]:
    """Convert a 1-based page parameter to a zero-based offset.

    ``page <= 0`` or anything that is not an integer yields None.
    """
    if page is None:
        return None
    try:
        page_num = int(str(page).strip())
    except ValueError:
        return None
    if page_num <= 0:
        return None
    return min(page_num - 1, MAX_OFFSET)


@dataclass(frozen=True)
class QueryOptions:
    """Canonical, hashable representation of one search request."""

    query: str
    safe_mode: SafeMode = SafeMode.OFF
    country: Optional[str] = None
    language: Optional[str] = None
    offset: Optional[int] = None
    provider_mode: ProviderMode = ProviderMode.ALL

    @classmethod
    def from_params(
        cls,
        q: Optional[str] = None,
        safe: Optional[str] = None,
        cc: Optional[str] = None,
        lang: Optional[str] = None,
        page=None,
        mode: Optional[str] = None,
    ) -> "QueryOptions":
        """Build options from raw request parameters."""
        return cls(
            query=(q or "").strip(),
            safe_mode=SafeMode.from_key(safe),
            country=match_country_code(cc),
            language=normalize_language(lang),
            offset=page_to_offset(page),
            provider_mode=ProviderMode.from_key(mode),
        )

    @property
    def page(self) -> int:
        return (self.offset or 0) + 1

    @property
    def namespace(self) -> str:
        primary, secondary = self.provider_mode.plan()
        if primary is Provider.BRAVE and secondary is None:
            return "brave"
        return "cs"

    def to_cache_key(self) -> str:
        parts = [
            self.namespace,
            slugify(self.query),
            self.safe_mode.short_code + self.provider_mode.short_code,
            (self.country or "all").lower(),
            self.language or "_",
            "_" if self.offset is None else str(self.offset),
        ]
        return "_".join(parts)

    def to_suggest_key(self) -> str:
        parts = [
            "br_sugg",
            slugify(self.query),
            (self.country or "all").lower(),
            self.language or "_",
        ]
        return "_".join(parts)
