"""site_research.crawler: frontier, link filter, browser session and the crawl loop."""

from site_research.crawler.crawler import WebsiteCrawler
from site_research.crawler.frontier import Frontier
from site_research.crawler.link_extractor import collect_links, normalize_link
from site_research.crawler.page_session import BrowserSession

__all__ = ["WebsiteCrawler", "Frontier", "BrowserSession", "collect_links", "normalize_link"]
