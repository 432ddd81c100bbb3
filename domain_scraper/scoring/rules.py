"""
Scoring rule tables.

Every bonus / penalty keyword list used by the relevance scorer lives here as
a named `KeywordRule`, so the tables can be unit-tested (and tuned) without
running the extraction pipeline.

A KeywordRule adds `weight` once for *each* keyword found (substring match,
case-insensitive) in the text selected by `scope`:

  - "candidate": the candidate value itself (address text, email local part, ...)
  - "context":   the text window captured around the match
  - "either":    candidate OR context (counted once per keyword)
  - "domain":    the email's domain part
"""

# domain_scraper/scoring/rules.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Scope = Literal["candidate", "context", "either", "domain"]


@dataclass(frozen=True)
class KeywordRule:
    tag: str
    keywords: tuple[str, ...]
    weight: int
    scope: Scope = "candidate"


def apply_keyword_rules(
    rules: tuple[KeywordRule, ...],
    *,
    candidate: str = "",
    context: str = "",
    domain: str = "",
) -> tuple[int, list[str]]:
    """Return (total delta, reasons) for every keyword hit across `rules`."""
    cand = (candidate or "").lower()
    ctx = (context or "").lower()
    dom = (domain or "").lower()

    total = 0
    reasons: list[str] = []
    for rule in rules:
        for kw in rule.keywords:
            if rule.scope == "candidate":
                hit = kw in cand
            elif rule.scope == "context":
                hit = kw in ctx
            elif rule.scope == "domain":
                hit = kw in dom
            else:
                hit = kw in cand or kw in ctx
            if hit:
                total += rule.weight
                sign = "+" if rule.weight >= 0 else ""
                reasons.append(f"{rule.tag}:{kw}{sign}{rule.weight}")
    return total, reasons


# ---------------------------------------------------------------------------
# Address relevance
# ---------------------------------------------------------------------------

ADDRESS_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "establishment",
        ("hotel", "restaurant", "office", "store", "shop", "center", "building"),
        10,
        "either",
    ),
    KeywordRule(
        "generic_address",
        ("headquarters", "corporate", "billing", "shipping", "returns", "support"),
        -15,
        "candidate",
    ),
    KeywordRule(
        "primary_location",
        ("main", "principal", "sede", "central", "flagship"),
        15,
        "either",
    ),
    KeywordRule("code_like", ("module", "props", "json"), -25, "candidate"),
)

# Street-type words that make an address look structurally complete
ADDRESS_STREET_WORDS: tuple[str, ...] = ("rue", "street", "avenue")

# Postal-code prefixes of cities the scorer knows about. A hit here combined
# with a domain-name match earns the locale bonus.
POSTAL_PREFIX_CITIES: dict[str, tuple[str, ...]] = {
    "75": ("paris",),
    "69": ("lyon",),
    "13": ("marseille",),
    "28": ("madrid",),
    "08": ("barcelona",),
    "46": ("valencia",),
    "41": ("sevilla", "seville"),
}

# ---------------------------------------------------------------------------
# Phone relevance
# ---------------------------------------------------------------------------

PHONE_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "contact",
        ("contact", "contacto", "phone", "telefono", "teléfono", "call", "llamar"),
        20,
        "context",
    ),
    KeywordRule(
        "reception",
        ("reception", "recepción", "reservas", "booking", "information", "información"),
        15,
        "context",
    ),
    KeywordRule(
        "generic_phone",
        ("support", "soporte", "help", "ayuda", "technical", "billing", "facturación"),
        -15,
        "context",
    ),
)

# ---------------------------------------------------------------------------
# Email relevance
# ---------------------------------------------------------------------------

EMAIL_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "main_contact",
        ("info", "contact", "contacto", "hello", "hola", "reception", "recepcion"),
        25,
        "candidate",
    ),
    KeywordRule(
        "department",
        ("crm", "marketing", "sales", "press", "pr", "hr", "careers", "jobs"),
        20,
        "candidate",
    ),
    KeywordRule(
        "contact_context",
        ("contact", "contacto", "email", "mail", "correo", "write", "escribir"),
        15,
        "context",
    ),
    KeywordRule(
        "generic_email",
        (
            "support",
            "soporte",
            "help",
            "ayuda",
            "noreply",
            "no-reply",
            "newsletter",
            "marketing",
            "sales",
        ),
        -20,
        "candidate",
    ),
    KeywordRule("business_domain", ("hotel", "restaurant", "store"), 10, "domain"),
)

FREE_EMAIL_DOMAINS: frozenset[str] = frozenset(
    {"gmail.com", "yahoo.com", "hotmail.com", "outlook.com", "live.com"}
)
FREE_EMAIL_PENALTY = -30


__all__ = [
    "KeywordRule",
    "apply_keyword_rules",
    "ADDRESS_RULES",
    "ADDRESS_STREET_WORDS",
    "POSTAL_PREFIX_CITIES",
    "PHONE_RULES",
    "EMAIL_RULES",
    "FREE_EMAIL_DOMAINS",
    "FREE_EMAIL_PENALTY",
]
