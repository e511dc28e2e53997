# site_research/crawler/page_session.py
"""
Browser side of the crawler: one Chromium process per crawl, one tab per page.

:class:`BrowserSession` owns the Playwright runtime and the browser.
:meth:`BrowserSession.open` is an async context manager that navigates a
fresh tab, snapshots the rendered DOM into a :class:`SoupPage` and closes
the tab on every exit path.
"""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Optional, Protocol

from bs4 import ParserRejectedMarkup
from playwright.async_api import Browser, BrowserContext, Error as PlaywrightError, Playwright
from playwright.async_api import TimeoutError as PlaywrightTimeout
from playwright.async_api import async_playwright

from site_research.config import DEFAULT_USER_AGENT
from site_research.exceptions import BrowserLaunchFailure, ExtractionFailure, NavigationFailure
from site_research.parser.dom import PageHandle, SoupPage

__all__ = ("BrowserLike", "BrowserSession")

_LAUNCH_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
)
_VIEWPORT = {"width": 1920, "height": 1080}


class BrowserLike(Protocol):
    """What the crawler needs from a browser; tests provide an in-memory one."""

    async def launch(self) -> None: ...

    def open(self, url: str) -> AsyncContextManager[PageHandle]: ...

    async def close(self) -> None: ...


class BrowserSession:
    """Headless Chromium driven through the Playwright async API."""

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        navigation_timeout: float = 30.0,
        body_timeout: float = 5.0,
        headless: bool = True,
    ) -> None:
        self.user_agent = user_agent
        self.navigation_timeout = navigation_timeout
        self.body_timeout = body_timeout
        self.headless = headless
        self.logger = logging.getLogger("SiteResearch")
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    @classmethod
    def from_config(cls, config) -> BrowserSession:
        return cls(
            user_agent=config.user_agent,
            navigation_timeout=config.navigation_timeout,
            body_timeout=config.body_timeout,
            headless=config.headless,
        )

    async def __aenter__(self) -> BrowserSession:
        await self.launch()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def launch(self) -> None:
        if self._browser is not None:
            return
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless, args=list(_LAUNCH_ARGS)
            )
            self._context = await self._browser.new_context(
                user_agent=self.user_agent,
                viewport=_VIEWPORT,
                ignore_https_errors=True,
            )
        except Exception as exc:
            await self.close()
            raise BrowserLaunchFailure(f"Browser launch failed: {exc}") from exc
        self.logger.debug("Chromium started (headless=%s)", self.headless)

    async def close(self) -> None:
        """Release context, browser and runtime; safe to call more than once."""
        context, browser, runtime = self._context, self._browser, self._playwright
        self._context = self._browser = self._playwright = None
        for name, closer in (
            ("context", context.close if context else None),
            ("browser", browser.close if browser else None),
            ("playwright", runtime.stop if runtime else None),
        ):
            if closer is None:
                continue
            try:
                await closer()
            except PlaywrightError as exc:
                self.logger.warning("Error closing %s: %s", name, exc)

    @asynccontextmanager
    async def open(self, url: str) -> AsyncIterator[PageHandle]:
        """Load *url* in a new tab and yield a snapshot of its rendered DOM.

        Raises :class:`NavigationFailure` on timeout, network errors, a
        missing response or HTTP status >= 400, and :class:`ExtractionFailure`
        when the markup cannot be parsed.
        """
        if self._context is None:
            raise RuntimeError("Browser not launched")
        start = time.monotonic()
        tab = await self._context.new_page()
        try:
            tab.set_default_navigation_timeout(self.navigation_timeout * 1000)
            try:
                # networkidle is only reached after domcontentloaded
                response = await tab.goto(
                    url, wait_until="networkidle", timeout=self.navigation_timeout * 1000
                )
            except PlaywrightTimeout as exc:
                raise NavigationFailure(url, f"timeout after {self.navigation_timeout:.0f}s") from exc
            except PlaywrightError as exc:
                raise NavigationFailure(url, exc.message) from exc

            if response is None:
                raise NavigationFailure(url, "no response")
            if response.status >= 400:
                raise NavigationFailure(url, f"HTTP {response.status}", status=response.status)

            try:
                await tab.wait_for_selector("body", timeout=self.body_timeout * 1000)
                html = await tab.content()
            except PlaywrightError as exc:
                raise NavigationFailure(url, exc.message) from exc

            self.logger.debug(
                "Loaded %s (HTTP %s) in %.0f ms", url, response.status, (time.monotonic() - start) * 1000
            )
            try:
                snapshot = SoupPage(html, url=tab.url or url)
            except ParserRejectedMarkup as exc:
                raise ExtractionFailure(url, f"markup rejected by parser: {exc}") from exc
            yield snapshot
        finally:
            try:
                await tab.close()
            except PlaywrightError as exc:
                self.logger.debug("Error closing tab for %s: %s", url, exc)
