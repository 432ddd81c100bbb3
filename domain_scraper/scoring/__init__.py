# domain_scraper/scoring/__init__.py
from __future__ import annotations

from .confidence import address_confidence
from .relevance import (
    address_relevance,
    domain_base_name,
    domain_name_variants,
    email_relevance,
    phone_relevance,
)
from .similarity import edit_distance, similarity

__all__ = [
    "address_confidence",
    "address_relevance",
    "domain_base_name",
    "domain_name_variants",
    "email_relevance",
    "phone_relevance",
    "edit_distance",
    "similarity",
]
