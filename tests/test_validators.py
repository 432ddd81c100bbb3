# tests/test_validators.py
from __future__ import annotations

import pytest

from domain_scraper.extract.cleaning import clean_address, clean_email, clean_phone
from domain_scraper.extract.validators import (
    is_valid_address,
    is_valid_address_content,
    is_valid_email,
    is_valid_phone,
    is_valid_postal_code,
    is_valid_social_handle,
)
from domain_scraper.models import ParsedAddress

# -----------------------------
# Cleaning
# -----------------------------


def test_clean_address_decodes_escapes_entities_and_tags():
    raw = "&quot;Calle Mayor 5\\u002C <b>28013</b> Madrid&quot;"
    assert clean_address(raw) == "Calle Mayor 5, 28013 Madrid"


def test_clean_address_strips_leading_debris_and_truncated_tag():
    assert clean_address('"> 228 rue de Rivoli, 75001 Paris <span cla') == (
        "228 rue de Rivoli, 75001 Paris"
    )


def test_clean_phone_and_email():
    assert clean_phone("Tel. +33 (1) 44 58\n10 10") == "+33 (1) 44 58 10 10"
    assert clean_email(" <INFO@LeMeurice.com>. ") == "info@lemeurice.com"


# -----------------------------
# Gates
# -----------------------------


@pytest.mark.parametrize(
    "text",
    [
        "font-family: Arial; src: url('x.woff2')",
        "function() { return window.location; }",
        "/assets/img/logo.png",
        "a3f9c0d2e4b6a8c0d2e4f6a8",
        "Lorem ipsum dolor sit amet 12345",
    ],
)
def test_address_content_blacklist_rejects_noise(text):
    assert is_valid_address_content(text) is False


def test_address_content_accepts_real_street():
    assert is_valid_address_content("228 rue de Rivoli") is True


def test_postal_code_gate():
    assert is_valid_postal_code("75001") is True
    assert is_valid_postal_code("00000") is False
    assert is_valid_postal_code("28000") is False


def test_is_valid_address_requires_street_and_locality():
    assert is_valid_address(ParsedAddress("228 rue de Rivoli", "Paris", "75001", "France"))
    assert is_valid_address(ParsedAddress("228 rue de Rivoli", None, "75001", None))
    assert not is_valid_address(ParsedAddress(None, "Paris", "75001", None))
    assert not is_valid_address(ParsedAddress("228 rue de Rivoli", None, None, None))


@pytest.mark.parametrize(
    "phone,ok",
    [
        ("+33 1 44 58 10 10", True),
        ("+34 912 345 678", True),
        ("123", False),
        ("1234567890", False),
        ("0000000000", False),
        ("1111111", False),
        ("1700000000", False),
    ],
)
def test_phone_gate(phone, ok):
    assert is_valid_phone(phone) is ok


@pytest.mark.parametrize(
    "email,ok",
    [
        ("info@lemeurice.com", True),
        ("random12345678@x.io", True),
        ("test@example.com", False),
        ("logo@2x.png", False),
        ("deadbeefcafe@acme.com", False),
        ("not-an-email", False),
        ("dev@acme.local", False),
    ],
)
def test_email_gate(email, ok):
    assert is_valid_email(email) is ok


@pytest.mark.parametrize(
    "handle,ok",
    [
        ("acme_hotel", True),
        ("LeMeurice", True),
        ("home", False),
        ("login", False),
        ("assets", False),
        ("ab", False),
        ("12345", False),
        ("_acme", False),
        ("logo.png", False),
    ],
)
def test_social_handle_gate(handle, ok):
    assert is_valid_social_handle(handle, "instagram") is ok
