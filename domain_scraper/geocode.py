"""
Optional geocode validation of the top-ranked address.

Public API:

    validate_address(address: CandidateAddress, config: ScrapeConfig | None = None)
        -> CandidateAddress

Behavior:
  - No API key configured (or the "demo" placeholder): returns the address
    unchanged and performs no network I/O.
  - Otherwise one GET against the LocationIQ search endpoint. On a hit the
    returned copy has confidence +20 (capped at 100), `api_validated=True`,
    `api_confidence` (provider importance scaled to 0-100) and
    `coordinates` as (lat, lon).

Failures (network errors, non-2xx, bad JSON, empty result) never raise:
they are logged as warnings and the original address is returned.
"""

# domain_scraper/geocode.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

import httpx

from .config import ScrapeConfig
from .models import CandidateAddress

log = logging.getLogger(__name__)

GEOCODE_CONFIDENCE_BONUS = 20


def _first_hit(data: Any) -> dict[str, Any] | None:
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0]
    return None


def validate_address(
    address: CandidateAddress,
    config: ScrapeConfig | None = None,
) -> CandidateAddress:
    cfg = config or ScrapeConfig()
    if not cfg.geocode_enabled or not address.full:
        return address

    params = {"key": cfg.geocode_api_key, "q": address.full, "format": "json", "limit": 1}
    try:
        with httpx.Client(timeout=cfg.geocode_timeout_s) as client:
            resp = client.get(cfg.geocode_url, params=params)
        resp.raise_for_status()
        hit = _first_hit(resp.json())
        if hit is None:
            log.warning("geocode returned no result", extra={"address": address.full})
            return address

        coordinates = (float(hit["lat"]), float(hit["lon"]))
        importance = float(hit.get("importance") or 0.0)
    except Exception as exc:
        log.warning(
            "geocode validation failed: %s: %s",
            type(exc).__name__,
            exc,
            extra={"address": address.full},
        )
        return address

    return replace(
        address,
        confidence=min(100, address.confidence + GEOCODE_CONFIDENCE_BONUS),
        api_validated=True,
        api_confidence=round(importance * 100, 2),
        coordinates=coordinates,
    )


__all__ = ["GEOCODE_CONFIDENCE_BONUS", "validate_address"]
