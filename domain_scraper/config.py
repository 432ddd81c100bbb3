from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from dotenv import load_dotenv


def _getenv_int(name: str, default: int) -> int:
    v = os.getenv(name, str(default)).strip()
    try:
        return int(v)
    except ValueError as err:
        raise ValueError(f"Environment variable {name} must be an integer; got {v!r}") from err


def _getenv_float(name: str, default: float) -> float:
    v = os.getenv(name, str(default)).strip()
    try:
        return float(v)
    except ValueError as err:
        raise ValueError(f"Environment variable {name} must be a number; got {v!r}") from err


def _getenv_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip()


def _getenv_list_str(name: str, default_csv: str) -> list[str]:
    raw = os.getenv(name, default_csv).strip()
    out: list[str] = []
    for tok in (t.strip() for t in raw.split(",")):
        if tok:
            out.append(tok)
    return out


def _getenv_bool(name: str, default: bool) -> bool:
    """
    Read a loosely-typed boolean from the environment.

    Treats "1", "true", "yes", "on" (case-insensitive) as True;
    "0", "false", "no", "off", "" as False. If unset, returns default.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off", ""}:
        return False
    # Fallback: any other non-empty value -> True
    return True


# Load .env from project root if present
ROOT = Path(__file__).resolve().parents[1]
load_dotenv(ROOT / ".env", override=False)

# -------------------------------
# Fetch (page fetcher collaborator)
# -------------------------------
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
SCRAPER_USER_AGENT: str = _getenv_str("SCRAPER_USER_AGENT", DEFAULT_USER_AGENT)
SCRAPER_TIMEOUT_MS: int = _getenv_int("SCRAPER_TIMEOUT_MS", 25_000)
FETCH_MAX_READ_BYTES: int = _getenv_int("FETCH_MAX_READ_BYTES", 2_000_000)  # 2 MB cap

# -------------------------------
# Crawl controller
# -------------------------------
DEFAULT_PAGE_PATHS = (
    "/,/contact,/about,/contact-us,/contacto,/acerca-de,/ubicacion,/direccion,"
    "/location,/offices,/head-office,/company,/corporate,/info,/privacy,"
    "/privacy-policy,/unsubscribe,/newsletter,/marketing,/careers,/jobs"
)
SCRAPER_PAGE_PATHS: list[str] = _getenv_list_str("SCRAPER_PAGE_PATHS", DEFAULT_PAGE_PATHS)
SCRAPER_MAX_PAGES: int = _getenv_int("SCRAPER_MAX_PAGES", 6)
SCRAPER_PAGE_DELAY_MS: int = _getenv_int("SCRAPER_PAGE_DELAY_MS", 300)
SCRAPER_INCLUDE_PHONE: bool = _getenv_bool("SCRAPER_INCLUDE_PHONE", True)
SCRAPER_INCLUDE_EMAIL: bool = _getenv_bool("SCRAPER_INCLUDE_EMAIL", True)

# Early stop: 1 address >= 70 relevance OR 2 addresses >= 70 confidence
SCRAPER_EARLY_STOP_RELEVANCE: int = _getenv_int("SCRAPER_EARLY_STOP_RELEVANCE", 70)
SCRAPER_EARLY_STOP_RELEVANT_COUNT: int = _getenv_int("SCRAPER_EARLY_STOP_RELEVANT_COUNT", 1)
SCRAPER_EARLY_STOP_CONFIDENCE: int = _getenv_int("SCRAPER_EARLY_STOP_CONFIDENCE", 70)
SCRAPER_EARLY_STOP_CONFIDENT_COUNT: int = _getenv_int("SCRAPER_EARLY_STOP_CONFIDENT_COUNT", 2)

# -------------------------------
# Dedup / selection
# -------------------------------
SCRAPER_ADDRESS_SIMILARITY: float = _getenv_float("SCRAPER_ADDRESS_SIMILARITY", 0.8)
SCRAPER_COMPONENT_SIMILARITY: float = _getenv_float("SCRAPER_COMPONENT_SIMILARITY", 0.7)
SCRAPER_PHONE_SIMILARITY: float = _getenv_float("SCRAPER_PHONE_SIMILARITY", 0.8)
SCRAPER_EMAIL_MIN_RELEVANCE: int = _getenv_int("SCRAPER_EMAIL_MIN_RELEVANCE", 50)
SCRAPER_MAX_EMAILS: int = _getenv_int("SCRAPER_MAX_EMAILS", 3)

# -------------------------------
# Geocode validator (optional; enabled by presence of an API key)
# -------------------------------
LOCATIONIQ_API_KEY: str = _getenv_str("LOCATIONIQ_API_KEY", "")
LOCATIONIQ_URL: str = _getenv_str("LOCATIONIQ_URL", "https://eu1.locationiq.com/v1/search.php")
GEOCODE_TIMEOUT_S: float = _getenv_float("GEOCODE_TIMEOUT_S", 5.0)


@dataclass(frozen=True)
class ScrapeConfig:
    """
    Everything one extraction call needs. Defaults mirror the env constants
    above; build variants with `with_overrides` rather than mutating.
    """

    timeout_ms: int = SCRAPER_TIMEOUT_MS
    max_pages: int = SCRAPER_MAX_PAGES
    page_paths: tuple[str, ...] = field(default_factory=lambda: tuple(SCRAPER_PAGE_PATHS))
    include_phone: bool = SCRAPER_INCLUDE_PHONE
    include_email: bool = SCRAPER_INCLUDE_EMAIL
    page_delay_ms: int = SCRAPER_PAGE_DELAY_MS
    user_agent: str = SCRAPER_USER_AGENT

    early_stop_relevance: int = SCRAPER_EARLY_STOP_RELEVANCE
    early_stop_relevant_count: int = SCRAPER_EARLY_STOP_RELEVANT_COUNT
    early_stop_confidence: int = SCRAPER_EARLY_STOP_CONFIDENCE
    early_stop_confident_count: int = SCRAPER_EARLY_STOP_CONFIDENT_COUNT

    address_similarity: float = SCRAPER_ADDRESS_SIMILARITY
    component_similarity: float = SCRAPER_COMPONENT_SIMILARITY
    phone_similarity: float = SCRAPER_PHONE_SIMILARITY
    email_min_relevance: int = SCRAPER_EMAIL_MIN_RELEVANCE
    max_emails: int = SCRAPER_MAX_EMAILS

    geocode_api_key: str = LOCATIONIQ_API_KEY
    geocode_url: str = LOCATIONIQ_URL
    geocode_timeout_s: float = GEOCODE_TIMEOUT_S

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0

    @property
    def page_delay_s(self) -> float:
        return self.page_delay_ms / 1000.0

    @property
    def geocode_enabled(self) -> bool:
        key = (self.geocode_api_key or "").strip()
        # "demo" was the placeholder key of the old deployment; treat it as unset
        return bool(key) and key != "demo"

    def with_overrides(self, **changes) -> ScrapeConfig:
        if "page_paths" in changes and changes["page_paths"] is not None:
            changes["page_paths"] = tuple(changes["page_paths"])
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_scrape_config() -> ScrapeConfig:
    """Build a ScrapeConfig from the current environment (re-reads env vars)."""
    return ScrapeConfig(
        timeout_ms=_getenv_int("SCRAPER_TIMEOUT_MS", 25_000),
        max_pages=_getenv_int("SCRAPER_MAX_PAGES", 6),
        page_paths=tuple(_getenv_list_str("SCRAPER_PAGE_PATHS", DEFAULT_PAGE_PATHS)),
        include_phone=_getenv_bool("SCRAPER_INCLUDE_PHONE", True),
        include_email=_getenv_bool("SCRAPER_INCLUDE_EMAIL", True),
        page_delay_ms=_getenv_int("SCRAPER_PAGE_DELAY_MS", 300),
        user_agent=_getenv_str("SCRAPER_USER_AGENT", DEFAULT_USER_AGENT),
        early_stop_relevance=_getenv_int("SCRAPER_EARLY_STOP_RELEVANCE", 70),
        early_stop_relevant_count=_getenv_int("SCRAPER_EARLY_STOP_RELEVANT_COUNT", 1),
        early_stop_confidence=_getenv_int("SCRAPER_EARLY_STOP_CONFIDENCE", 70),
        early_stop_confident_count=_getenv_int("SCRAPER_EARLY_STOP_CONFIDENT_COUNT", 2),
        address_similarity=_getenv_float("SCRAPER_ADDRESS_SIMILARITY", 0.8),
        component_similarity=_getenv_float("SCRAPER_COMPONENT_SIMILARITY", 0.7),
        phone_similarity=_getenv_float("SCRAPER_PHONE_SIMILARITY", 0.8),
        email_min_relevance=_getenv_int("SCRAPER_EMAIL_MIN_RELEVANCE", 50),
        max_emails=_getenv_int("SCRAPER_MAX_EMAILS", 3),
        geocode_api_key=_getenv_str("LOCATIONIQ_API_KEY", ""),
        geocode_url=_getenv_str("LOCATIONIQ_URL", "https://eu1.locationiq.com/v1/search.php"),
        geocode_timeout_s=_getenv_float("GEOCODE_TIMEOUT_S", 5.0),
    )


__all__ = [
    "ScrapeConfig",
    "load_scrape_config",
    "DEFAULT_USER_AGENT",
    "DEFAULT_PAGE_PATHS",
    "SCRAPER_USER_AGENT",
    "SCRAPER_TIMEOUT_MS",
    "FETCH_MAX_READ_BYTES",
    "SCRAPER_PAGE_PATHS",
    "SCRAPER_MAX_PAGES",
    "SCRAPER_PAGE_DELAY_MS",
    "SCRAPER_INCLUDE_PHONE",
    "SCRAPER_INCLUDE_EMAIL",
    "SCRAPER_EARLY_STOP_RELEVANCE",
    "SCRAPER_EARLY_STOP_RELEVANT_COUNT",
    "SCRAPER_EARLY_STOP_CONFIDENCE",
    "SCRAPER_EARLY_STOP_CONFIDENT_COUNT",
    "SCRAPER_ADDRESS_SIMILARITY",
    "SCRAPER_COMPONENT_SIMILARITY",
    "SCRAPER_PHONE_SIMILARITY",
    "SCRAPER_EMAIL_MIN_RELEVANCE",
    "SCRAPER_MAX_EMAILS",
    "LOCATIONIQ_API_KEY",
    "LOCATIONIQ_URL",
    "GEOCODE_TIMEOUT_S",
]
