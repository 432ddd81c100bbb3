"""
Data model for one extraction call.

Everything here is created fresh per call and thrown away once the response
is built; nothing is persisted.
"""

# domain_scraper/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, NamedTuple

Platform = Literal["instagram", "facebook", "twitter", "linkedin", "youtube", "tiktok"]

PLATFORMS: tuple[str, ...] = ("instagram", "facebook", "twitter", "linkedin", "youtube", "tiktok")


def clamp_score(value: float) -> int:
    """Round and clamp any score into [0, 100]."""
    return int(max(0, min(100, round(value))))


class Provenance(str, Enum):
    TEXT = "text"
    STRUCTURED = "structured_element"
    COMPONENTS = "intelligent_component_matching"


class ParsedAddress(NamedTuple):
    street: str | None
    city: str | None
    postal_code: str | None
    country: str | None


@dataclass
class ScoreResult:
    """Result of a scoring operation: clamped score plus the rule tags that fired."""

    score: int
    reasons: list[str] = field(default_factory=list)


@dataclass
class CandidateAddress:
    full: str
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    confidence: int = 0
    relevance_score: int = 0
    provenance: Provenance = Provenance.TEXT
    context: str | None = None
    api_validated: bool = False
    api_confidence: float | None = None
    coordinates: tuple[float, float] | None = None

    def __post_init__(self) -> None:
        self.confidence = clamp_score(self.confidence)
        self.relevance_score = clamp_score(self.relevance_score)

    @property
    def final_score(self) -> float:
        # 60% relevance, 40% confidence
        return self.confidence * 0.4 + self.relevance_score * 0.6

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "full": self.full,
            "street": self.street,
            "city": self.city,
            "postalCode": self.postal_code,
            "country": self.country,
        }
        if self.coordinates is not None:
            out["coordinates"] = {"lat": self.coordinates[0], "lon": self.coordinates[1]}
        return out


@dataclass
class CandidatePhone:
    phone: str
    relevance_score: int = 0
    context: str | None = None

    def __post_init__(self) -> None:
        self.relevance_score = clamp_score(self.relevance_score)


@dataclass
class CandidateEmail:
    email: str
    relevance_score: int = 0
    context: str | None = None

    def __post_init__(self) -> None:
        self.relevance_score = clamp_score(self.relevance_score)


@dataclass(frozen=True)
class SocialHandle:
    platform: str
    username: str
    url: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.platform, self.username)

    def to_dict(self) -> dict[str, str]:
        return {"platform": self.platform, "username": self.username, "url": self.url}


@dataclass(frozen=True)
class PageError:
    page: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"page": self.page, "error": self.error}


@dataclass
class PageExtractionResult:
    url: str
    addresses: list[CandidateAddress] = field(default_factory=list)
    phones: list[CandidatePhone] = field(default_factory=list)
    emails: list[CandidateEmail] = field(default_factory=list)
    social_medias: list[SocialHandle] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CrawlResult:
    """
    Cumulative, cross-page bundle. Frozen: each page is folded in by
    `aggregate.merge_page_result`, which returns a new instance.
    """

    domain: str
    addresses: tuple[CandidateAddress, ...] = ()
    phones: tuple[CandidatePhone, ...] = ()
    emails: tuple[CandidateEmail, ...] = ()
    social_medias: tuple[SocialHandle, ...] = ()
    pages_analyzed: int = 0
    errors: tuple[PageError, ...] = ()
    stopped_early: bool = False


__all__ = [
    "Platform",
    "PLATFORMS",
    "clamp_score",
    "Provenance",
    "ParsedAddress",
    "ScoreResult",
    "CandidateAddress",
    "CandidatePhone",
    "CandidateEmail",
    "SocialHandle",
    "PageError",
    "PageExtractionResult",
    "CrawlResult",
]
