# tests/test_service.py
from __future__ import annotations

from dataclasses import replace

import pytest

import domain_scraper.service as service
from domain_scraper.service import run_extraction, scrape_domain


@pytest.mark.parametrize("bad", [None, "", "   ", 123])
def test_invalid_domain_yields_validation_error(bad):
    out = scrape_domain(bad)

    assert out["success"] is False
    assert out["errorType"] == "validation_error"
    assert out["error"] == "Domain is required and must be a string"
    assert out["timestamp"].endswith("Z")


def test_success_envelope(cfg, stub_fetcher, meurice_html):
    fetcher = stub_fetcher({"https://lemeurice.com/": meurice_html})

    out = scrape_domain("lemeurice.com", cfg, fetcher=fetcher)

    assert out["success"] is True
    assert out["domain"] == "https://lemeurice.com"
    assert isinstance(out["responseTimeMs"], int)
    assert out["timestamp"].endswith("Z")

    data = out["extractedData"]
    assert data["pagesAnalyzed"] == 1
    assert [a["postalCode"] for a in data["addresses"]] == ["75001"]
    assert data["phones"] == ["+33 1 44 58 10 10"]
    assert data["emails"] == ["info@lemeurice.com"]
    assert {s["platform"] for s in data["socialMedias"]} == {"instagram", "facebook"}

    analysis = out["analysis"]
    assert analysis["status"] == "success_with_relevance"
    assert analysis["statistics"]["pagesAnalyzed"] == 1


def test_nothing_found_is_still_a_success(cfg, stub_fetcher):
    out = scrape_domain("https://acme-hotel.com", cfg, fetcher=stub_fetcher({}))

    assert out["success"] is True
    assert out["extractedData"]["addresses"] == []
    assert out["extractedData"]["pagesAnalyzed"] == 3
    assert out["analysis"]["status"] == "no_data"


def test_unexpected_failure_becomes_scraping_error(monkeypatch, cfg):
    def _boom(*a, **k):
        raise RuntimeError("crawler down")

    monkeypatch.setattr(service, "crawl_domain", _boom, raising=False)

    out = scrape_domain("lemeurice.com", cfg)

    assert out == {
        "success": False,
        "error": "crawler down",
        "errorType": "scraping_error",
        "timestamp": out["timestamp"],
    }


def test_top_address_is_geocoded_when_enabled(monkeypatch, cfg, stub_fetcher, meurice_html):
    seen = []

    def _fake_validate(address, config):
        seen.append(address.full)
        return replace(address, api_validated=True, coordinates=(48.86, 2.33))

    monkeypatch.setattr(service, "validate_address", _fake_validate, raising=False)
    fetcher = stub_fetcher({"https://lemeurice.com/": meurice_html})

    crawl = run_extraction("lemeurice.com", cfg.with_overrides(geocode_api_key="k"), fetcher=fetcher)

    assert seen == ["228 rue de Rivoli, 75001 Paris"]
    assert crawl.addresses[0].api_validated is True


def test_geocode_skipped_without_key(monkeypatch, cfg, stub_fetcher, meurice_html):
    def _fail(*a, **k):  # pragma: no cover
        raise AssertionError("geocoder must not run without a key")

    monkeypatch.setattr(service, "validate_address", _fail, raising=False)
    fetcher = stub_fetcher({"https://lemeurice.com/": meurice_html})

    crawl = run_extraction("lemeurice.com", cfg, fetcher=fetcher)

    assert crawl.addresses[0].api_validated is False
