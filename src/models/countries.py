"""Country codes accepted by the upstream providers."""

from typing import Optional

COUNTRY_CODES = (
    "AR", "AU", "AT", "BE", "BR",
    "CA", "CL", "DK", "FI", "FR",
    "DE", "HK", "IN", "ID", "IT",
    "JP", "KR", "MY", "MX", "NL",
    "NZ", "NO", "CN", "PL", "PT",
    "PH", "RU", "SA", "ZA", "ES",
    "SE", "CH", "TW", "TR", "GB",
    "US",
)

ALIASES = {"UK": "GB"}


def match_country_code(key: Optional[str]) -> Optional[str]:
    """Return the canonical upper-case code for *key*, or None if unsupported."""
    if not key:
        return None
    cc = key.strip().upper()
    cc = ALIASES.get(cc, cc)
    return cc if cc in COUNTRY_CODES else None
