# tests/test_page_extraction.py
from __future__ import annotations

import time

from bs4 import BeautifulSoup

from domain_scraper.config import ScrapeConfig
from domain_scraper.dedupe import dedupe_addresses
from domain_scraper.extract.components import collect_components, extract_component_addresses
from domain_scraper.extract.page import (
    extract_emails,
    extract_page,
    extract_structured_addresses,
    extract_text_addresses,
)
from domain_scraper.extract.patterns import ADDRESS_RULES, find_matches, page_text
from domain_scraper.models import Provenance


def test_full_page_extraction(meurice_html, cfg):
    page = extract_page(meurice_html, "https://lemeurice.com", cfg, url="https://lemeurice.com/")

    assert page.url == "https://lemeurice.com/"
    assert len(page.addresses) == 1
    addr = page.addresses[0]
    assert addr.full == "228 rue de Rivoli, 75001 Paris"
    assert (addr.street, addr.city, addr.postal_code, addr.country) == (
        "228 rue de Rivoli",
        "Paris",
        "75001",
        "France",
    )
    assert addr.confidence == 100
    assert addr.relevance_score >= 70

    assert [p.phone for p in page.phones] == ["+33 1 44 58 10 10"]
    assert [e.email for e in page.emails] == ["info@lemeurice.com"]
    assert [(s.platform, s.username) for s in page.social_medias] == [
        ("instagram", "lemeurice"),
        ("facebook", "LeMeurice"),
    ]
    assert page.errors == []


def test_include_flags_skip_phones_and_emails(meurice_html):
    cfg = ScrapeConfig(include_phone=False, include_email=False, geocode_api_key="")
    page = extract_page(meurice_html, "https://lemeurice.com", cfg)

    assert page.phones == []
    assert page.emails == []
    assert page.addresses


def test_page_text_drops_script_and_style(meurice_html):
    text = page_text(BeautifulSoup(meurice_html, "html.parser"))
    assert "font-family" not in text
    assert "theme" not in text
    assert "Hotel Le Meurice" in text


def test_blacklisted_and_free_emails_are_ranked_below_own_domain():
    html = """
    <html><body>
      <p>Reservations: info@lemeurice.com</p>
      <p>Sample: test@example.com</p>
      <div>Lorem text. Contact random12345678@x.io for nothing in particular.</div>
    </body></html>
    """
    page = extract_page(html, "https://lemeurice.com", ScrapeConfig(geocode_api_key=""))
    emails = [e.email for e in page.emails]

    assert "test@example.com" not in emails
    assert emails[0] == "info@lemeurice.com"


def test_mailto_links_are_collected():
    html = '<p><a href="mailto:Reservations@Acme-Hotel.com?subject=Hi">Write to us</a></p>'
    soup = BeautifulSoup(html, "html.parser")
    found = extract_emails(page_text(soup), soup, "acme-hotel")
    assert [e.email for e in found] == ["reservations@acme-hotel.com"]


def test_text_addresses_capture_context_window(meurice_html):
    text = page_text(BeautifulSoup(meurice_html, "html.parser"))
    found = extract_text_addresses(text, "lemeurice")

    assert found
    assert all(a.provenance is Provenance.TEXT for a in found)
    assert "Hotel Le Meurice" in found[0].context


def test_structured_address_records_selector():
    html = "<html><body><address>Calle Mayor 5, 28013 Madrid</address></body></html>"
    found = extract_structured_addresses(BeautifulSoup(html, "html.parser"), "acme")

    assert len(found) == 1
    addr = found[0]
    assert addr.provenance is Provenance.STRUCTURED
    assert addr.context == "Structured element: address"
    assert (addr.city, addr.postal_code, addr.country) == ("Madrid", "28013", "Spain")


def test_components_compose_uk_address():
    html = """
    <div class="contact-info">
      <p>10 Conway Street</p>
      <p>W1T 6BN</p>
    </div>
    """
    soup = BeautifulSoup(html, "html.parser")
    comps = collect_components(soup)
    assert comps.postcodes == ["W1T 6BN"]
    assert comps.cities == []

    found = extract_component_addresses(soup, "acme")
    assert found
    first = found[0]
    assert first.full == "10 Conway Street, W1T 6BN London"
    assert first.street == "10 Conway Street"
    assert first.city == "London"
    assert first.postal_code == "W1T 6BN"
    assert first.country == "United Kingdom"
    assert first.provenance is Provenance.COMPONENTS
    assert first.confidence > 30
    assert first.context == "Intelligent extraction: 10 Conway Street"

    # the bare "Conway Street" composition is a near-duplicate
    assert len(dedupe_addresses(found, ScrapeConfig())) == 1


def _uk_rule(tag):
    return next(r for r in ADDRESS_RULES if r.tag == tag)


def test_uk_numbered_street_needs_a_postcode():
    text = "Visit 10 Downing Street, London SW1A 2AA or 12 Park Lane anytime"
    found = [m.value for m in find_matches(_uk_rule("uk_numbered_street"), text)]
    assert found == ["10 Downing Street, London SW1A 2AA"]


def test_long_single_line_footer_extracts_quickly(cfg):
    # minified pages put the whole footer on one line
    filler = "12 Park Lane and 34 High Street next to 56 Oak Road near the park, " * 500
    html = (
        "<html><body><footer class='footer'><div class='contact-info'>"
        f"{filler}</div></footer></body></html>"
    )

    started = time.perf_counter()
    page = extract_page(html, "https://acme-hotel.com", cfg, url="https://acme-hotel.com/")
    elapsed = time.perf_counter() - started

    assert elapsed < 5.0
    assert page.errors == []
