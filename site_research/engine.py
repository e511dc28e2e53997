# File: site_research/engine.py
"""site_research.engine: request validation and the single entry point used by the CLI and HTTP route."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from pydantic import ValidationError

from site_research.config import CrawlSettings
from site_research.crawler.crawler import WebsiteCrawler
from site_research.crawler.models import CrawlOutcome
from site_research.crawler.page_session import BrowserLike
from site_research.exceptions import InvalidURL
from site_research.logger import logger

__all__ = ["Engine", "validate_url", "scrape_website"]


def validate_url(raw: Any) -> str:
    """Return an absolute http(s) URL, prefixing ``https://`` when the scheme is missing.

    Raises :class:`InvalidURL` otherwise.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidURL(str(raw or ""), "URL is required")
    url = raw.strip()
    if not url.startswith("http"):
        url = "https://" + url
    try:
        parsed = urlparse(url)
        parsed.port
    except ValueError as exc:
        raise InvalidURL(raw) from exc
    if parsed.scheme not in ("http", "https") or not parsed.hostname or " " in parsed.netloc:
        raise InvalidURL(raw)
    return url


class Engine:
    """Facade for the CLI, the HTTP route and tests: request in, :class:`CrawlOutcome` out."""

    def __init__(self, settings: Optional[CrawlSettings] = None, browser: Optional[BrowserLike] = None) -> None:
        self.settings = settings or CrawlSettings()
        self.browser = browser

    async def scrape(
        self,
        url: str,
        *,
        scrape_type: Optional[str] = None,
        max_depth: Optional[int] = None,
        max_pages: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
        time_budget: Optional[float] = None,
    ) -> CrawlOutcome:
        """Validate the request and run one crawl. Never raises for bad input."""
        try:
            seed = validate_url(url)
            config = self.settings.for_url(
                seed, scrape_type=scrape_type, max_depth=max_depth, max_pages=max_pages
            )
        except InvalidURL as exc:
            logger.warning("Rejected URL %r: %s", url, exc.reason)
            return CrawlOutcome.failed(str(url or ""), exc.reason)
        except ValidationError as exc:
            logger.warning("Rejected request for %s: %s", url, exc)
            return CrawlOutcome.failed(str(url), f"Invalid request: {exc.errors()[0]['msg']}")

        logger.info("Processing scrape request for: %s", config.seed_url)
        crawler = WebsiteCrawler(config, browser=self.browser, cancel_event=cancel_event, time_budget=time_budget)
        return await crawler.run()

    async def scrape_request(self, body: Mapping[str, Any]) -> CrawlOutcome:
        """Run a crawl from a ``{url, scrapeType?, maxDepth?}`` request body."""
        return await self.scrape(
            body.get("url", ""),
            scrape_type=body.get("scrapeType") or None,
            max_depth=body.get("maxDepth"),
        )


async def scrape_website(
    url: str, scrape_type: str = "comprehensive", max_depth: int = 2
) -> dict[str, Any]:
    """One-shot helper returning the JSON-ready ``{success, url, data|error}`` mapping."""
    outcome = await Engine().scrape(url, scrape_type=scrape_type, max_depth=max_depth)
    return outcome.to_dict()
