import asyncio
from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Union

import logging

import pytest

from site_research.config import CrawlConfig, CrawlSettings
from site_research.exceptions import NavigationFailure
from site_research.logger import LOGGER_NAME
from site_research.parser.dom import SoupPage

SEED = "https://site.com/"


def html_page(body: str, title: str = "") -> str:
    """Wrap *body* markup into a minimal HTML document."""
    head = f"<title>{title}</title>" if title else ""
    return f"<html><head>{head}</head><body>{body}</body></html>"


def links(*hrefs: str) -> str:
    return "".join(f'<a href="{h}">{h}</a>' for h in hrefs)


class FakeBrowser:
    """
    In-memory stand-in for BrowserSession.
    ``pages`` maps URL -> HTML string or an exception raised on navigation;
    unknown URLs behave like an HTTP 404.
    """

    def __init__(
        self,
        pages: Dict[str, Union[str, BaseException]],
        launch_error: Optional[BaseException] = None,
    ) -> None:
        self.pages = pages
        self.launch_error = launch_error
        self.opened: List[str] = []
        self.open_tabs = 0
        self.launched = False
        self.closed = False
        #: when set, navigation blocks on this event
        self.stall: Optional[asyncio.Event] = None
        #: requested URL -> final URL reported by the tab
        self.redirects: Dict[str, str] = {}

    async def launch(self) -> None:
        if self.launch_error is not None:
            raise self.launch_error
        self.launched = True

    async def close(self) -> None:
        self.closed = True

    @asynccontextmanager
    async def open(self, url: str):
        self.opened.append(url)
        self.open_tabs += 1
        try:
            if self.stall is not None:
                await self.stall.wait()
            entry = self.pages.get(url)
            if entry is None:
                raise NavigationFailure(url, "HTTP 404", status=404)
            if isinstance(entry, BaseException):
                raise entry
            yield SoupPage(entry, url=self.redirects.get(url, url))
        finally:
            self.open_tabs -= 1


@pytest.fixture(autouse=True)
def detach_log_handlers():
    """Drop handlers a test attached to the project logger (the CLI adds some)."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.setLevel(logging.NOTSET)
    lg.propagate = True


@pytest.fixture()
def settings() -> CrawlSettings:
    """Default settings without the politeness pause."""
    return CrawlSettings(politeness_delay=0)


@pytest.fixture()
def make_config(settings):
    def _make(url: str = SEED, **overrides) -> CrawlConfig:
        return settings.for_url(url, **overrides)

    return _make
