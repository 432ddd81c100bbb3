# tests/test_aggregate.py
from __future__ import annotations

from domain_scraper.aggregate import (
    build_response,
    interpret_results,
    merge_page_result,
    rank_addresses,
    select_emails,
    select_phones,
    should_stop,
)
from domain_scraper.config import ScrapeConfig
from domain_scraper.models import (
    CandidateAddress,
    CandidateEmail,
    CandidatePhone,
    CrawlResult,
    PageExtractionResult,
    SocialHandle,
)

DOMAIN = "https://acme-hotel.com"


def _addr(full: str, confidence: int, relevance: int) -> CandidateAddress:
    return CandidateAddress(full=full, confidence=confidence, relevance_score=relevance)


def test_rank_addresses_weights_relevance_over_confidence():
    confident = _addr("1 Main Street, 12345 Springfield", 100, 40)  # 64
    relevant = _addr("2 High Street, 54321 Shelbyville", 50, 80)  # 68

    assert rank_addresses([confident, relevant]) == [relevant, confident]


def test_select_emails_caps_relevant_ones():
    emails = [
        CandidateEmail("info@acme-hotel.com"),
        CandidateEmail("press@acme-hotel.com"),
        CandidateEmail("jobs@acme-hotel.com"),
        CandidateEmail("sales@acme-hotel.com"),
        CandidateEmail("someone@gmail.com"),
    ]
    out = select_emails(emails, "acme-hotel", ScrapeConfig(max_emails=3, email_min_relevance=50))

    assert len(out) == 3
    assert all(e.relevance_score >= 50 for e in out)
    assert "someone@gmail.com" not in [e.email for e in out]


def test_select_emails_falls_back_to_single_best():
    emails = [CandidateEmail("someone@gmail.com"), CandidateEmail("bookings@other.org")]
    out = select_emails(emails, "acme", ScrapeConfig(email_min_relevance=50))

    assert [e.email for e in out] == ["bookings@other.org"]


def test_select_phones_keeps_single_best():
    phones = [
        CandidatePhone("+34 912 345 679", context=""),
        CandidatePhone("+34 912 345 678", context="Contact Acme reception"),
        CandidatePhone("91 111 22 33", context=""),
    ]
    out = select_phones(phones, "acme", ScrapeConfig())

    assert [p.phone for p in out] == ["+34 912 345 678"]


def test_merge_is_a_pure_fold():
    cfg = ScrapeConfig()
    start = CrawlResult(domain=DOMAIN)
    ig = SocialHandle("instagram", "acmehotel", "https://instagram.com/acmehotel")

    page1 = PageExtractionResult(
        url=f"{DOMAIN}/",
        addresses=[_addr("1 Main Street, 12345 Springfield", 80, 40)],
        social_medias=[ig],
    )
    page2 = PageExtractionResult(
        url=f"{DOMAIN}/contact",
        addresses=[_addr("1 Main Street, 12345 Springfield.", 90, 60)],
        social_medias=[ig],
        errors=["partial markup"],
    )

    after1 = merge_page_result(start, page1, cfg)
    after2 = merge_page_result(after1, page2, cfg)

    assert start.pages_analyzed == 0 and start.addresses == ()
    assert after1.pages_analyzed == 1
    assert after2.pages_analyzed == 2
    assert [a.full for a in after2.addresses] == ["1 Main Street, 12345 Springfield."]
    assert after2.social_medias == (ig,)
    assert [(e.page, e.error) for e in after2.errors] == [("/contact", "partial markup")]


def test_should_stop_thresholds():
    cfg = ScrapeConfig(
        early_stop_relevance=70,
        early_stop_relevant_count=1,
        early_stop_confidence=70,
        early_stop_confident_count=2,
    )
    one_confident = CrawlResult(domain=DOMAIN, addresses=(_addr("a", 90, 10),))
    two_confident = CrawlResult(domain=DOMAIN, addresses=(_addr("a", 90, 10), _addr("b", 75, 5)))
    one_relevant = CrawlResult(domain=DOMAIN, addresses=(_addr("a", 10, 70),))

    assert should_stop(one_confident, cfg) is False
    assert should_stop(two_confident, cfg) is True
    assert should_stop(one_relevant, cfg) is True


def test_build_response_returns_only_top_address():
    crawl = CrawlResult(
        domain=DOMAIN,
        addresses=(
            _addr("1 Main Street, 12345 Springfield", 60, 20),
            _addr("2 High Street, 54321 Shelbyville", 90, 90),
        ),
        phones=(CandidatePhone("+34 912 345 678", 90),),
        emails=(CandidateEmail("info@acme-hotel.com", 100),),
        social_medias=(SocialHandle("facebook", "acmehotel", "https://facebook.com/acmehotel"),),
        pages_analyzed=2,
    )
    out = build_response(crawl)

    assert out["domain"] == DOMAIN
    assert [a["full"] for a in out["addresses"]] == ["2 High Street, 54321 Shelbyville"]
    assert set(out["addresses"][0]) == {"full", "street", "city", "postalCode", "country"}
    assert out["phones"] == ["+34 912 345 678"]
    assert out["emails"] == ["info@acme-hotel.com"]
    assert out["socialMedias"] == [
        {"platform": "facebook", "username": "acmehotel", "url": "https://facebook.com/acmehotel"}
    ]
    assert out["pagesAnalyzed"] == 2


def test_interpret_results_statuses():
    empty = interpret_results(CrawlResult(domain=DOMAIN), "acme-hotel")
    assert empty["status"] == "no_data"
    assert empty["statistics"]["totalAddresses"] == 0
    assert any("acme-hotel" in r for r in empty["recommendations"])

    relevant = CrawlResult(domain=DOMAIN, addresses=(_addr("a", 50, 90),), pages_analyzed=1)
    assert interpret_results(relevant, "acme-hotel")["status"] == "success_with_relevance"

    confident = CrawlResult(domain=DOMAIN, addresses=(_addr("a", 90, 10),))
    assert interpret_results(confident)["status"] == "success"

    weak = CrawlResult(domain=DOMAIN, addresses=(_addr("a", 40, 10),))
    stats = interpret_results(weak)
    assert stats["status"] == "partial_success"
    assert stats["statistics"]["highConfidenceAddresses"] == 0
