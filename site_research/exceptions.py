"""site_research.exceptions: error taxonomy shared by the crawler, engine and HTTP route.

Only :class:`BrowserLaunchFailure` and unexpected orchestration errors are
crawl-fatal. :class:`NavigationFailure` and :class:`ExtractionFailure` are
recovered at the page boundary by the crawler.
"""
from __future__ import annotations

from typing import Optional

__all__ = [
    "ScrapeError",
    "InvalidURL",
    "NavigationFailure",
    "ExtractionFailure",
    "BrowserLaunchFailure",
]


class ScrapeError(Exception):
    """Base class for every error raised by SiteResearch."""


class InvalidURL(ScrapeError, ValueError):
    """The seed URL cannot be parsed into an absolute http(s) URL."""

    def __init__(self, url: str, reason: str = "Invalid URL format") -> None:
        super().__init__(reason)
        self.url = url
        self.reason = reason


class NavigationFailure(ScrapeError):
    """A single page could not be loaded (timeout, DNS, HTTP status >= 400)."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class ExtractionFailure(ScrapeError):
    """DOM evaluation of a loaded page failed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class BrowserLaunchFailure(ScrapeError):
    """The headless browser process could not be started."""
