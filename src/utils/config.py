"""Configuration management -- reads from environment with sensible defaults."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Centralised settings read once from env vars."""

    # --- Brave -------------------------------------------------------------
    brave_api_key: str = field(default_factory=lambda: os.getenv("BRAVE_SEARCH", ""))
    brave_suggest_api_key: str = field(
        default_factory=lambda: os.getenv("BRAVE_SUGGEST", os.getenv("BRAVE_SEARCH", ""))
    )

    # --- Google Custom Search ----------------------------------------------
    google_api_key: str = field(default_factory=lambda: os.getenv("GOOGLE_API_KEY", ""))
    google_cse_id: str = field(default_factory=lambda: os.getenv("GOOGLE_CSE_ID", ""))

    # --- Redis -------------------------------------------------------------
    redis_host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    redis_port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    redis_password: str = field(default_factory=lambda: os.getenv("REDIS_PASSWORD", ""))
    redis_db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))

    # --- Cache freshness ---------------------------------------------------
    # Kept as raw strings; ceilings are parsed and clamped at lookup time.
    max_search_secs: str = field(default_factory=lambda: os.getenv("MAX_SEARCH_SECS", ""))
    max_suggest_secs: str = field(default_factory=lambda: os.getenv("MAX_SUGGEST_SECS", ""))

    # --- Search behaviour --------------------------------------------------
    exclusion_patterns_path: str = field(
        default_factory=lambda: os.getenv("PATH_TO_EXCLUDE_PATTERNS", "exclusion_patterns.json")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "10"))
    )

    # --- Logging -----------------------------------------------------------
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", "logs/search.log"))
    analytics_file: str = field(
        default_factory=lambda: os.getenv("ANALYTICS_FILE", "logs/requests.jsonl")
    )


# Module-level singleton -- import this everywhere.
settings = Settings()
