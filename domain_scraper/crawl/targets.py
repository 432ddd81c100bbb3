# domain_scraper/crawl/targets.py
from __future__ import annotations

import re

from ..exceptions import DomainValidationError

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def normalize_domain(domain: object) -> str:
    """
    Scheme-qualified domain with no trailing slash.

    >>> normalize_domain("lemeurice.com/")
    'https://lemeurice.com'
    >>> normalize_domain("http://example.org")
    'http://example.org'
    """
    if not isinstance(domain, str) or not domain.strip():
        raise DomainValidationError("Domain is required and must be a string")
    d = domain.strip()
    if not _SCHEME_RE.match(d):
        d = f"https://{d}"
    return d.rstrip("/")


def page_urls(domain: str, paths: list[str] | tuple[str, ...]) -> list[tuple[str, str]]:
    """(path, url) pairs in the given order; `domain` must already be normalized."""
    out: list[tuple[str, str]] = []
    for p in paths:
        path = p if p.startswith("/") else f"/{p}"
        out.append((path, f"{domain}{path}"))
    return out


__all__ = ["normalize_domain", "page_urls"]
