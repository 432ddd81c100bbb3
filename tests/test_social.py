# tests/test_social.py
from __future__ import annotations

from bs4 import BeautifulSoup

from domain_scraper.extract.social import build_social_url, extract_social, handles_in


def _social(html: str):
    return extract_social(BeautifulSoup(html, "html.parser"), html)


def test_reserved_paths_are_not_handles():
    content = (
        "instagram.com/home instagram.com/login instagram.com/assets "
        "instagram.com/acme_hotel"
    )
    found = handles_in(content)
    assert [(h.platform, h.username) for h in found] == [("instagram", "acme_hotel")]
    assert found[0].url == "https://instagram.com/acme_hotel"


def test_canonical_urls_per_platform():
    assert build_social_url("tiktok", "acme") == "https://tiktok.com/@acme"
    assert build_social_url("linkedin", "acme-hotels") == "https://linkedin.com/company/acme-hotels"


def test_links_in_social_region_are_found_in_order(meurice_html):
    found = _social(meurice_html)
    pairs = [(h.platform, h.username) for h in found]
    assert pairs == [("instagram", "lemeurice"), ("facebook", "LeMeurice")]


def test_css_at_rules_and_emails_are_not_instagram_handles():
    html = """
    <html><head><style>@media screen { a { color: red } } @font-face { }</style></head>
    <body><p>Write to hello@acmehotel.com</p></body></html>
    """
    assert _social(html) == []


def test_anchor_outside_social_region():
    html = '<div><a href="https://twitter.com/AcmeHotels">Follow</a></div>'
    found = _social(html)
    assert [(h.platform, h.username, h.url) for h in found] == [
        ("twitter", "AcmeHotels", "https://twitter.com/AcmeHotels")
    ]


def test_duplicate_sightings_collapse():
    html = """
    <footer>
      <a href="https://facebook.com/acmehotel">fb</a>
      <a href="https://www.facebook.com/acmehotel/">Facebook</a>
    </footer>
    """
    found = _social(html)
    assert [(h.platform, h.username) for h in found] == [("facebook", "acmehotel")]
