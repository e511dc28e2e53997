# === FILE: site_research/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional

from site_research.aggregator import merge
from site_research.config import CrawlConfig
from site_research.crawler.frontier import Frontier
from site_research.crawler.link_extractor import collect_links, normalize_link
from site_research.crawler.models import (
    AggregatedResult,
    CrawlOutcome,
    CrawlState,
    ExtractedPageData,
    FrontierItem,
)
from site_research.crawler.page_session import BrowserLike, BrowserSession
from site_research.exceptions import ExtractionFailure, NavigationFailure
from site_research.parser.content_extractor import extract_page
from site_research.parser.dom import PageHandle

__all__ = ("WebsiteCrawler",)


class WebsiteCrawler:
    """Sequential, budgeted crawl of one site with a headless browser.

    Pages are fetched one at a time in priority-then-discovery order. Any
    error raised while a page is open skips that page; only a browser launch
    failure or an error in the loop itself fails the whole crawl.
    """

    def __init__(
        self,
        config: CrawlConfig,
        *,
        browser: Optional[BrowserLike] = None,
        cancel_event: Optional[asyncio.Event] = None,
        time_budget: Optional[float] = None,
    ) -> None:
        self.config = config
        self.browser: BrowserLike = browser or BrowserSession.from_config(config)
        self.cancel_event = cancel_event
        self.time_budget = time_budget
        self.state = CrawlState.IDLE
        self.frontier = Frontier(config.priority_path_patterns)
        self.pages_processed = 0
        self.failed_pages: List[str] = []
        self.logger = logging.getLogger("SiteResearch")

    async def __aenter__(self) -> WebsiteCrawler:
        try:
            await self.browser.launch()
        except BaseException:
            await self.browser.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.browser.close()
        self.logger.debug("Browser closed")

    async def run(self) -> CrawlOutcome:
        """Launch the browser, crawl, release the browser and report the outcome."""
        url = self.config.seed_url
        try:
            async with self:
                data = await self.crawl()
        except Exception as exc:
            self.state = CrawlState.FAILED
            self.logger.error("Error scraping %s: %s", url, exc)
            return CrawlOutcome.failed(url, str(exc) or "Unknown error occurred during scraping")
        return CrawlOutcome.ok(url, data)

    async def crawl(self) -> AggregatedResult:
        cfg = self.config
        self.state = CrawlState.RUNNING
        self.logger.info(
            "Starting website scraping for %s with mode: %s, maxDepth: %d",
            cfg.seed_url,
            cfg.scrape_type,
            cfg.max_depth,
        )
        start = time.monotonic()
        deadline = start + self.time_budget if self.time_budget is not None else None
        seed = normalize_link(cfg.seed_url, cfg.seed_url, cfg.seed_host) or cfg.seed_url
        self.frontier.enqueue(FrontierItem(seed, 0))
        result = AggregatedResult()

        try:
            while True:
                if self._should_stop(deadline):
                    break
                if self.pages_processed >= cfg.max_pages:
                    break
                item = self.frontier.dequeue()
                if item is None:
                    break
                if self.pages_processed or self.failed_pages:
                    await asyncio.sleep(cfg.politeness_delay)
                result = await self._process(item, result)
        except Exception:
            self.state = CrawlState.FAILED
            raise

        self.state = CrawlState.COMPLETED
        self.logger.info(
            "Completed scraping %d pages on %s in %.2f s (%d skipped)",
            self.pages_processed,
            cfg.seed_host,
            time.monotonic() - start,
            len(self.failed_pages),
        )
        return result

    async def _process(self, item: FrontierItem, result: AggregatedResult) -> AggregatedResult:
        cfg = self.config
        self.logger.info(
            "Scraping page %d/%d: %s (depth: %d)",
            self.pages_processed + 1,
            cfg.max_pages,
            item.url,
            item.depth,
        )
        links: List[str] = []
        try:
            async with self.browser.open(item.url) as page:
                data = self._extract(page, item.url)
                if item.depth < cfg.max_depth:
                    # the requested URL is on the seed host even when the tab was redirected
                    links = collect_links(page, item.url, cfg.seed_host)
        except NavigationFailure as exc:
            self.failed_pages.append(item.url)
            self.logger.warning("Skipping %s: %s", item.url, exc.reason)
            return result
        except Exception as exc:
            self.failed_pages.append(item.url)
            self.logger.warning("Error scraping page %s: %s", item.url, exc)
            return result

        result = merge(result, data, item.url)
        self.pages_processed += 1
        if links:
            added = self.frontier.extend(links, item.depth + 1)
            self.frontier.reprioritize()
            self.logger.debug("%s: %d links, %d new", item.url, len(links), added)
        return result

    def _extract(self, page: PageHandle, url: str) -> ExtractedPageData:
        try:
            return extract_page(
                page,
                url,
                scrape_type=self.config.scrape_type,
                full_text_limit=self.config.full_text_limit,
            )
        except ExtractionFailure as exc:
            self.logger.warning("Error extracting data from page: %s", exc)
            return ExtractedPageData()

    def _should_stop(self, deadline: Optional[float]) -> bool:
        if self.cancel_event is not None and self.cancel_event.is_set():
            self.logger.info("Crawl of %s cancelled", self.config.seed_url)
            return True
        if deadline is not None and time.monotonic() >= deadline:
            self.logger.info("Time budget for %s exhausted", self.config.seed_url)
            return True
        return False
