"""
Extraction slice: regex rule tables, cleaning, blacklist validators and the
address parser.

The page-level entry point is `domain_scraper.extract.page.extract_page`;
import it from there.
"""

# domain_scraper/extract/__init__.py
from __future__ import annotations

from .address_parser import detect_country, parse_address
from .cleaning import clean_address, clean_email, clean_phone

__all__ = [
    "clean_address",
    "clean_email",
    "clean_phone",
    "detect_country",
    "parse_address",
]
