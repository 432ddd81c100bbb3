# domain_scraper/dedupe.py
"""
Near-duplicate removal for extracted candidates.

`dedupe` sorts by score (stable, descending) and then greedily keeps each
item unless it is too similar to one already kept. Running it on its own
output returns the same list, and of two near-duplicates the higher-scored
one is the survivor (earlier wins ties).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from .config import ScrapeConfig
from .models import CandidateAddress, CandidateEmail, CandidatePhone, Provenance, SocialHandle
from .scoring.similarity import similarity

T = TypeVar("T")


def dedupe(
    items: Iterable[T],
    *,
    text: Callable[[T], str],
    score: Callable[[T], float],
    threshold: float,
) -> list[T]:
    ranked = sorted(items, key=score, reverse=True)
    kept: list[T] = []
    for item in ranked:
        s = text(item)
        if any(similarity(s, text(k)) > threshold for k in kept):
            continue
        kept.append(item)
    return kept


def dedupe_addresses(
    addresses: Iterable[CandidateAddress],
    config: ScrapeConfig | None = None,
) -> list[CandidateAddress]:
    """
    Addresses collapse at 0.8 similarity, or 0.7 when either side was
    composed from scattered components.
    """
    cfg = config or ScrapeConfig()
    ranked = sorted(addresses, key=lambda a: a.final_score, reverse=True)
    kept: list[CandidateAddress] = []
    for addr in ranked:
        duplicate = False
        for k in kept:
            components = Provenance.COMPONENTS in (addr.provenance, k.provenance)
            threshold = cfg.component_similarity if components else cfg.address_similarity
            if similarity(addr.full, k.full) > threshold:
                duplicate = True
                break
        if not duplicate:
            kept.append(addr)
    return kept


def dedupe_phones(
    phones: Iterable[CandidatePhone],
    config: ScrapeConfig | None = None,
) -> list[CandidatePhone]:
    cfg = config or ScrapeConfig()
    return dedupe(
        phones,
        text=lambda p: p.phone,
        score=lambda p: p.relevance_score,
        threshold=cfg.phone_similarity,
    )


def dedupe_emails(emails: Iterable[CandidateEmail]) -> list[CandidateEmail]:
    ranked = sorted(emails, key=lambda e: e.relevance_score, reverse=True)
    seen: set[str] = set()
    out: list[CandidateEmail] = []
    for e in ranked:
        if e.email in seen:
            continue
        seen.add(e.email)
        out.append(e)
    return out


def dedupe_social(handles: Sequence[SocialHandle]) -> list[SocialHandle]:
    """First sighting of each (platform, username) wins; order is kept."""
    seen: set[tuple[str, str]] = set()
    out: list[SocialHandle] = []
    for h in handles:
        if h.key in seen:
            continue
        seen.add(h.key)
        out.append(h)
    return out


__all__ = [
    "dedupe",
    "dedupe_addresses",
    "dedupe_phones",
    "dedupe_emails",
    "dedupe_social",
]
