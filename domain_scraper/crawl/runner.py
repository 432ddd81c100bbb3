# domain_scraper/crawl/runner.py
from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import replace

from ..aggregate import merge_page_result, should_stop
from ..config import ScrapeConfig
from ..extract.page import extract_page
from ..fetch.client import FetcherClient
from ..models import CrawlResult, PageError
from .targets import page_urls

log = logging.getLogger(__name__)

PageFetcher = Callable[[str], str]

# Module-level so tests can replace it
_sleep = time.sleep


def _crawl(domain: str, cfg: ScrapeConfig, fetcher: PageFetcher) -> CrawlResult:
    targets = page_urls(domain, cfg.page_paths[: cfg.max_pages])
    crawl = CrawlResult(domain=domain)

    for i, (path, url) in enumerate(targets):
        try:
            log.info("analysing page %s", url, extra={"domain": domain, "path": path})
            html = fetcher(url)
            page = extract_page(html, domain, cfg, url=url)
            crawl = merge_page_result(crawl, page, cfg)
        except Exception as exc:
            # One bad page never aborts the crawl
            log.warning("page failed %s: %s", path, exc, extra={"domain": domain, "path": path})
            crawl = replace(crawl, errors=crawl.errors + (PageError(page=path, error=str(exc)),))
            continue

        log.info(
            "page analysed %s: %d addresses",
            url,
            len(page.addresses),
            extra={"domain": domain, "path": path},
        )

        if should_stop(crawl, cfg):
            log.info(
                "relevant addresses found, stopping after %d pages",
                crawl.pages_analyzed,
                extra={"domain": domain},
            )
            return replace(crawl, stopped_early=True)

        if i < len(targets) - 1 and cfg.page_delay_s > 0:
            _sleep(cfg.page_delay_s)

    return crawl


def crawl_domain(
    domain: str,
    config: ScrapeConfig | None = None,
    *,
    fetcher: PageFetcher | None = None,
) -> CrawlResult:
    """
    Fetch up to `max_pages` candidate paths of `domain`, in order and one at a
    time, folding each page's extraction into a CrawlResult.

    `domain` must already be normalized (scheme, no trailing slash). `fetcher`
    maps a URL to HTML text and raises on failure; by default an httpx-backed
    FetcherClient is opened for the duration of the crawl.
    """
    cfg = config or ScrapeConfig()
    log.info("crawl start", extra={"domain": domain, "max_pages": cfg.max_pages})

    if fetcher is not None:
        result = _crawl(domain, cfg, fetcher)
    else:
        with FetcherClient(user_agent=cfg.user_agent, timeout_s=cfg.timeout_s) as client:
            result = _crawl(domain, cfg, client.fetch_text)

    log.info(
        "crawl finished",
        extra={
            "domain": domain,
            "pages_analyzed": result.pages_analyzed,
            "errors": len(result.errors),
            "stopped_early": result.stopped_early,
        },
    )
    return result


__all__ = ["PageFetcher", "crawl_domain"]
