# tests/test_config.py
from __future__ import annotations

import pytest

from domain_scraper.config import ScrapeConfig, _getenv_bool, _getenv_int, load_scrape_config


def test_env_overrides_are_read_at_load_time(monkeypatch):
    monkeypatch.setenv("SCRAPER_MAX_PAGES", "3")
    monkeypatch.setenv("SCRAPER_PAGE_PATHS", "/, /kontakt ,,/impressum")
    monkeypatch.setenv("SCRAPER_INCLUDE_PHONE", "off")
    monkeypatch.setenv("SCRAPER_TIMEOUT_MS", "5000")

    cfg = load_scrape_config()

    assert cfg.max_pages == 3
    assert cfg.page_paths == ("/", "/kontakt", "/impressum")
    assert cfg.include_phone is False
    assert cfg.timeout_s == 5.0


def test_bad_integer_env_raises(monkeypatch):
    monkeypatch.setenv("SCRAPER_MAX_PAGES", "lots")
    with pytest.raises(ValueError, match="SCRAPER_MAX_PAGES"):
        _getenv_int("SCRAPER_MAX_PAGES", 6)


@pytest.mark.parametrize(
    "raw,expected",
    [("1", True), ("YES", True), ("off", False), ("", False), ("maybe", True)],
)
def test_getenv_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("SCRAPER_INCLUDE_EMAIL", raw)
    assert _getenv_bool("SCRAPER_INCLUDE_EMAIL", False) is expected


def test_with_overrides_ignores_none_and_returns_new_instance():
    base = ScrapeConfig(max_pages=6, page_delay_ms=300)
    changed = base.with_overrides(max_pages=2, page_delay_ms=None, page_paths=["/a"])

    assert changed is not base
    assert (changed.max_pages, changed.page_delay_ms, changed.page_paths) == (2, 300, ("/a",))
    assert base.max_pages == 6
    assert changed.page_delay_s == 0.3


@pytest.mark.parametrize("key,enabled", [("", False), ("demo", False), ("pk.abc123", True)])
def test_geocode_enabled_by_key(key, enabled):
    assert ScrapeConfig(geocode_api_key=key).geocode_enabled is enabled
