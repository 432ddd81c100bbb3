# domain_scraper/fetch/client.py
from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from ..config import FETCH_MAX_READ_BYTES, SCRAPER_TIMEOUT_MS, SCRAPER_USER_AGENT
from ..exceptions import PageFetchError

log = logging.getLogger(__name__)

FETCH_ACCEPT = "text/html,application/xhtml+xml,*/*;q=0.8"
MAX_REDIRECTS = 5

# --------------------------------------------------------------------------------------------------
# Results
# --------------------------------------------------------------------------------------------------


@dataclass
class FetchResult:
    status: int
    url: str
    effective_url: str
    content_type: str | None
    text: str


def _cap_body(body: bytes) -> bytes:
    if len(body) > FETCH_MAX_READ_BYTES:
        return body[:FETCH_MAX_READ_BYTES]
    return body


def _decode(resp: httpx.Response, body: bytes) -> str:
    encoding = resp.encoding or "utf-8"
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


# --------------------------------------------------------------------------------------------------
# Client
# --------------------------------------------------------------------------------------------------


class FetcherClient:
    """
    Thin httpx wrapper used by the crawl controller.

    One GET per page with a desktop-browser User-Agent and a bounded timeout.
    Timeouts, connection/DNS failures and non-2xx responses all surface as
    `PageFetchError`; the caller decides whether that aborts anything.
    """

    def __init__(
        self,
        *,
        user_agent: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.user_agent = user_agent or SCRAPER_USER_AGENT
        self.timeout_s = timeout_s if timeout_s is not None else SCRAPER_TIMEOUT_MS / 1000.0
        self._client = httpx.Client(
            headers={"User-Agent": self.user_agent, "Accept": FETCH_ACCEPT},
            timeout=httpx.Timeout(self.timeout_s),
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
            transport=transport,
        )

    # ---- core fetch ------------------------------------------------------------------

    def fetch(self, url: str) -> FetchResult:
        try:
            resp = self._client.get(url)
        except httpx.TimeoutException as exc:
            raise PageFetchError(f"Timeout fetching {url}", url=url) from exc
        except httpx.RequestError as exc:
            raise PageFetchError(f"{type(exc).__name__}: {exc}", url=url) from exc

        status = int(resp.status_code)
        if not 200 <= status < 300:
            raise PageFetchError(
                f"HTTP {status} for {url}",
                url=url,
                status=status,
            )

        body = _cap_body(resp.content or b"")
        return FetchResult(
            status=status,
            url=url,
            effective_url=str(resp.url),
            content_type=resp.headers.get("Content-Type"),
            text=_decode(resp, body),
        )

    def fetch_text(self, url: str) -> str:
        """Page fetcher callable used by the crawl controller: URL -> HTML."""
        return self.fetch(url).text

    __call__ = fetch_text

    # ----------------------------------------------------------------------------------
    # Context manager
    # ----------------------------------------------------------------------------------

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> FetcherClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    "FETCH_ACCEPT",
    "FetchResult",
    "FetcherClient",
]
