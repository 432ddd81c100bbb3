# domain_scraper/extract/cleaning.py
from __future__ import annotations

import re
from html import unescape

_UNICODE_ESCAPE_RE = re.compile(r"\\u([0-9a-fA-F]{4})")
_TAG_RE = re.compile(r"<[^>]*>")
_LITERAL_ESCAPES_RE = re.compile(r"\\[nrt]")
_OUTER_QUOTES_RE = re.compile(r"^[\"'`\\]+|[\"'`\\]+$")
_LEADING_JUNK_RE = re.compile(r"^[>:\s\"'`\\]+")
_TRUNCATED_TAG_RE = re.compile(r"\s*<[^>]*$")
_TRUNCATED_ESCAPE_RE = re.compile(r"\s*\\u[0-9a-fA-F]*$")
_WS_RE = re.compile(r"\s+")

_PHONE_JUNK_RE = re.compile(r"[^\d+\-()\s]")


def _decode_unicode_escapes(s: str) -> str:
    """
    Decode literal \\uXXXX sequences left behind by inline JSON/JavaScript.

    Examples:
        "Calle Mayor 5\\u002C 28013 Madrid" -> "Calle Mayor 5, 28013 Madrid"
    """
    return _UNICODE_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), s)


def collapse_whitespace(s: str) -> str:
    return _WS_RE.sub(" ", s or "").strip()


def clean_address(raw: str) -> str:
    """
    Normalize a raw address match into plain single-line text.

    Steps: unicode escapes, HTML entities, tags, literal \\n/\\r/\\t,
    outer quotes, leading '>' or ':' debris, truncated tags/escapes at the end,
    whitespace.
    """
    if not raw:
        return ""

    s = _decode_unicode_escapes(raw)
    s = unescape(s).replace("\xa0", " ")
    s = _TAG_RE.sub("", s)
    s = _LITERAL_ESCAPES_RE.sub(" ", s)
    s = s.replace("\\\\", "\\")
    s = _OUTER_QUOTES_RE.sub("", s)
    s = _LEADING_JUNK_RE.sub("", s)
    s = _TRUNCATED_TAG_RE.sub("", s)
    s = _TRUNCATED_ESCAPE_RE.sub("", s)
    return collapse_whitespace(s)


def clean_phone(raw: str) -> str:
    """Keep digits, '+', '-', parentheses and single spaces."""
    if not raw:
        return ""
    return collapse_whitespace(_PHONE_JUNK_RE.sub("", raw))


def clean_email(raw: str) -> str:
    s = unescape(raw or "").strip()
    # strip obvious wrapping punctuation
    s = s.strip(" \t\r\n\"'<>[](){},;:.")
    return s.lower()


def phone_digits(phone: str) -> str:
    return re.sub(r"\D", "", phone or "")


__all__ = [
    "clean_address",
    "clean_phone",
    "clean_email",
    "collapse_whitespace",
    "phone_digits",
]
