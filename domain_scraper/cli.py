# domain_scraper/cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from .config import load_scrape_config
from .service import scrape_domain

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def _json_default(obj: Any) -> Any:
    return str(obj)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domain-scraper",
        description="Extract the address, phone, emails and social handles of a website.",
    )
    parser.add_argument("domain", help="Domain or URL to analyse (e.g. lemeurice.com)")
    parser.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Maximum number of candidate pages to fetch (default: SCRAPER_MAX_PAGES).",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="Per-page fetch timeout in milliseconds (default: SCRAPER_TIMEOUT_MS).",
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=None,
        help="Delay between pages in milliseconds (default: SCRAPER_PAGE_DELAY_MS).",
    )
    parser.add_argument("--no-phone", action="store_true", help="Skip phone extraction.")
    parser.add_argument("--no-email", action="store_true", help="Skip email extraction.")
    parser.add_argument(
        "--analysis",
        action="store_true",
        help="Include the status/recommendations block in the output.",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    """
    Entry point for the domain-scraper CLI.

        domain-scraper lemeurice.com
        domain-scraper https://example.com --max-pages 3 --no-phone --analysis

    Exit codes: 0 success, 1 scraping failure, 2 invalid domain.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    out = out or sys.stdout

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    config = load_scrape_config().with_overrides(
        max_pages=args.max_pages,
        timeout_ms=args.timeout_ms,
        page_delay_ms=args.delay_ms,
        include_phone=False if args.no_phone else None,
        include_email=False if args.no_email else None,
    )

    envelope = scrape_domain(args.domain, config)
    if envelope.get("success") and not args.analysis:
        envelope = {k: v for k, v in envelope.items() if k != "analysis"}

    out.write(json.dumps(envelope, indent=args.indent, ensure_ascii=False, default=_json_default))
    out.write("\n")

    if envelope.get("success"):
        return EXIT_OK
    if envelope.get("errorType") == "validation_error":
        return EXIT_INVALID
    return EXIT_FAILED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
