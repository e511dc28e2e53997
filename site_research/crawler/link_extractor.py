# site_research/crawler/link_extractor.py
"""
Link filtering for SiteResearch: raw ``href`` + base URL -> crawlable
same-origin URL or ``None``.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import urljoin, urlparse, urlunparse

from site_research.parser.dom import PageHandle
from site_research.utils import host_of

_SKIPPED_PREFIXES = ("#", "javascript:", "mailto:", "tel:")


def normalize_link(href: str, base_url: str, seed_host: Optional[str] = None) -> Optional[str]:
    """
    Resolve *href* against *base_url* and keep it only if it stays on the seed host.

    The fragment is stripped and the query string left untouched, so two links
    that differ only by ``#hash`` collapse to one URL. Never raises.
    """
    if not href:
        return None
    raw = href.strip()
    if not raw or raw.lower().startswith(_SKIPPED_PREFIXES):
        return None
    try:
        resolved = urljoin(base_url, raw)
        parsed = urlparse(resolved)
        # accessing .port validates it and raises ValueError when out of range
        parsed.port
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return None
    host = host_of(resolved)
    if host != (seed_host or host_of(base_url)).lower():
        return None
    # userinfo and a default port are dropped so equivalent URLs dedupe
    return urlunparse(
        (parsed.scheme, host, parsed.path or "/", parsed.params, parsed.query, "")
    )


def collect_links(page: PageHandle, base_url: str, seed_host: Optional[str] = None) -> List[str]:
    """
    Apply :func:`normalize_link` to every ``a[href]`` of *page*.

    Document order is kept; repeats within the page are dropped.
    """
    seen: set[str] = set()
    links: List[str] = []
    for anchor in page.query_all("a[href]"):
        link = normalize_link(page.attr(anchor, "href") or "", base_url, seed_host)
        if link and link not in seen:
            seen.add(link)
            links.append(link)
    return links


__all__ = ["normalize_link", "collect_links"]
