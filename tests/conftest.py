# ruff: noqa: E402
# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from domain_scraper.config import ScrapeConfig

MEURICE_HTML = """
<html>
<head>
  <title>Le Meurice</title>
  <style>@font-face { font-family: "Didot"; }</style>
  <script>var settings = {"theme": "dark"};</script>
</head>
<body>
  <main>
    <h1>Hotel Le Meurice</h1>
    <p>Welcome to the Dorchester Collection.</p>
  </main>
  <footer class="footer">
    <div class="contact-info">
      <p>Hotel Le Meurice, 228 rue de Rivoli, 75001 Paris</p>
      <p>Tel: +33 1 44 58 10 10</p>
      <p>Email: <a href="mailto:info@lemeurice.com">info@lemeurice.com</a></p>
    </div>
    <div class="social-links">
      <a href="https://www.instagram.com/lemeurice/">Instagram</a>
      <a href="https://www.facebook.com/LeMeurice">Facebook</a>
    </div>
  </footer>
</body>
</html>
"""

EMPTY_HTML = "<html><body><p>Nothing to see here.</p></body></html>"


@pytest.fixture
def meurice_html() -> str:
    return MEURICE_HTML


@pytest.fixture
def empty_html() -> str:
    return EMPTY_HTML


@pytest.fixture
def cfg() -> ScrapeConfig:
    """Deterministic config: no delay, no geocoding, a short path list."""
    return ScrapeConfig(
        max_pages=3,
        page_paths=("/", "/contact", "/about"),
        page_delay_ms=0,
        include_phone=True,
        include_email=True,
        geocode_api_key="",
    )


class StubFetcher:
    """Page fetcher double: URL -> HTML, or raise when the value is an exception."""

    def __init__(self, pages: dict[str, object], default: str = EMPTY_HTML) -> None:
        self.pages = pages
        self.default = default
        self.calls: list[str] = []

    def __call__(self, url: str) -> str:
        self.calls.append(url)
        value = self.pages.get(url, self.default)
        if isinstance(value, BaseException):
            raise value
        return str(value)


@pytest.fixture
def stub_fetcher():
    return StubFetcher
