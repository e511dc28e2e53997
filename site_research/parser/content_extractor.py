# === FILE: site_research/parser/content_extractor.py ===
"""Heuristic extraction of business research material from one loaded page.

:func:`extract` pulls the generic parts first (title, meta description,
headings, paragraphs, full text). In ``comprehensive`` mode it then looks
for the specialised sections:

* about: widened to whole-page paragraphs when the page *is* an about page
* pricing: only on pricing pages, and only text carrying a currency amount
* product: product/service containers, else headings mentioning them
* contact: phones and emails in the body text, social profile links

Page classification (about / pricing) is a keyword match against URL, title
and top-level headings. It never gates headings or paragraphs.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, List

from site_research.config import ScrapeType
from site_research.crawler.models import ContactInfo, ExtractedPageData
from site_research.exceptions import ExtractionFailure
from site_research.parser.dom import Element, PageHandle
from site_research.parser.noise import (
    MIN_PARAGRAPH_LENGTH,
    NoisePredicate,
    clean_text,
    is_noise,
)

__all__ = ["extract", "extract_page", "is_about_page", "is_pricing_page", "FULL_TEXT_LIMIT"]

log = logging.getLogger("SiteResearch")

FULL_TEXT_LIMIT = 50_000
ABOUT_PAGE_LIMIT = 1_500

HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"
PARAGRAPH_SELECTOR = 'p, li, .content, article, section, [role="main"] div'
TOP_HEADING_SELECTOR = "h1, h2, h3"

ABOUT_URL_KEYWORDS = ("/about",)
ABOUT_TITLE_KEYWORDS = ("about",)
ABOUT_HEADING_KEYWORDS = ("about us", "our story")
PRICING_URL_KEYWORDS = ("/pricing", "/plans")
PRICING_TITLE_KEYWORDS = ("pricing", "plans")
PRICING_HEADING_KEYWORDS = ("pricing", "plans", "subscription")

ABOUT_CONTENT_SELECTOR = (
    "article p, main p, .content p, section p, [role=\"main\"] p, .about-content p, #about-content p"
)
ABOUT_CONTAINER_SELECTOR = "section, div, article"
PRODUCT_CONTAINER_SELECTOR = (
    'section[id*="product"], div[id*="product"], article[id*="product"], '
    'section[class*="product"], div[class*="product"], '
    'section[id*="service"], div[id*="service"]'
)
PRODUCT_HEADING_KEYWORDS = ("product", "service", "feature")
PRICING_CONTAINER_SELECTOR = '.pricing, #pricing, .plans, #plans, [id*="price"], [class*="price"]'
SOCIAL_LINK_SELECTOR = (
    'a[href*="facebook"], a[href*="twitter"], a[href*="linkedin"], '
    'a[href*="instagram"], a[href*="youtube"]'
)

PHONE_RE = re.compile(r"(?:\+\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}")
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PRICE_RE = re.compile(r"(?:\$|€|£|USD|EUR|GBP)\s?[0-9]+(?:[.,][0-9]{2})?")


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(k in lowered for k in keywords)


def _heading_texts(page: PageHandle) -> List[str]:
    return [page.text(h) for h in page.query_all(TOP_HEADING_SELECTOR)]


def is_about_page(page: PageHandle, url: str) -> bool:
    return (
        _contains_any(url, ABOUT_URL_KEYWORDS)
        or _contains_any(page.title, ABOUT_TITLE_KEYWORDS)
        or any(_contains_any(h, ABOUT_HEADING_KEYWORDS) for h in _heading_texts(page))
    )


def is_pricing_page(page: PageHandle, url: str) -> bool:
    return (
        _contains_any(url, PRICING_URL_KEYWORDS)
        or _contains_any(page.title, PRICING_TITLE_KEYWORDS)
        or any(_contains_any(h, PRICING_HEADING_KEYWORDS) for h in _heading_texts(page))
    )


def _clean_all(page: PageHandle, elements: Iterable[Element], noise: NoisePredicate, min_len: int = 0) -> List[str]:
    texts = (clean_text(page.text(el), noise) for el in elements)
    return [t for t in texts if t and len(t) >= min_len]


def _full_text(page: PageHandle, noise: NoisePredicate, limit: int) -> str:
    # filtered per text block so one stray code line does not wipe the page
    lines = (clean_text(line, noise) for line in page.body_text().splitlines())
    return " ".join(line for line in lines if line)[:limit]


def _about_content(page: PageHandle, url: str, noise: NoisePredicate) -> str:
    if is_about_page(page, url):
        blocks = page.query_all(ABOUT_CONTENT_SELECTOR)
        if blocks:
            return " ".join(_clean_all(page, blocks, noise, MIN_PARAGRAPH_LENGTH))
        text = " ".join(_clean_all(page, page.query_all("p"), noise, MIN_PARAGRAPH_LENGTH))
        return text[:ABOUT_PAGE_LIMIT]

    sections = [
        el
        for el in page.query_all(ABOUT_CONTAINER_SELECTOR)
        if "about" in (page.attr(el, "id") or "").lower()
        or "about" in (page.attr(el, "class") or "").lower()
    ]
    return " ".join(_clean_all(page, sections, noise, MIN_PARAGRAPH_LENGTH))


def _product_info(page: PageHandle, noise: NoisePredicate) -> str:
    containers = page.query_all(PRODUCT_CONTAINER_SELECTOR)
    if containers:
        return "\n\n".join(_clean_all(page, containers, noise, MIN_PARAGRAPH_LENGTH))

    chunks: List[str] = []
    for heading in page.query_all("h2, h3"):
        if not _contains_any(page.text(heading), PRODUCT_HEADING_KEYWORDS):
            continue
        title = clean_text(page.text(heading), noise)
        sibling = page.next_sibling(heading)
        parent = page.parent(heading)
        body = clean_text(page.text(sibling), noise) if sibling is not None else ""
        if not body and parent is not None:
            body = clean_text(page.text(parent), noise)
        chunk = f"{title}\n{body}"
        if len(chunk) > MIN_PARAGRAPH_LENGTH:
            chunks.append(chunk)
    return "\n\n".join(chunks)


def _pricing_info(page: PageHandle, url: str, noise: NoisePredicate) -> str:
    if not is_pricing_page(page, url):
        return ""

    sections = page.query_all(PRICING_CONTAINER_SELECTOR)
    if sections:
        texts = _clean_all(page, sections, noise)
        return "\n\n".join(t for t in texts if PRICE_RE.search(t))

    found: List[str] = []
    for el in page.query_all("body *"):
        text = clean_text(page.text(el), noise)
        if PRICE_RE.search(text) and 10 < len(text) < 500 and text not in found:
            found.append(text)
    return "\n\n".join(found)


def _contact_info(page: PageHandle) -> ContactInfo:
    body = page.body_text()
    socials = [page.attr(a, "href") for a in page.query_all(SOCIAL_LINK_SELECTOR)]
    return ContactInfo(
        emails=EMAIL_RE.findall(body),
        phones=[m.group(0) for m in PHONE_RE.finditer(body)],
        social_links=[href for href in socials if href],
    )


def extract_page(
    page: PageHandle,
    url: str,
    *,
    scrape_type: ScrapeType = "comprehensive",
    full_text_limit: int = FULL_TEXT_LIMIT,
    noise: NoisePredicate = is_noise,
) -> ExtractedPageData:
    """Run every heuristic against *page*.

    Raises :class:`ExtractionFailure` if DOM access blows up.
    """
    try:
        meta = page.query_all('meta[name="description"]')
        data = ExtractedPageData(
            title=page.title,
            meta_description=(page.attr(meta[0], "content") or "").strip() if meta else "",
            headings=_clean_all(page, page.query_all(HEADING_SELECTOR), noise),
            paragraphs=_clean_all(page, page.query_all(PARAGRAPH_SELECTOR), noise, MIN_PARAGRAPH_LENGTH),
            full_text=_full_text(page, noise, full_text_limit),
        )
        if scrape_type == "comprehensive":
            data.about_content = _about_content(page, url, noise)
            data.product_info = _product_info(page, noise)
            data.pricing_info = _pricing_info(page, url, noise)
            data.contact_info = _contact_info(page)
        return data
    except Exception as exc:
        raise ExtractionFailure(url, str(exc) or type(exc).__name__) from exc


def extract(
    page: PageHandle,
    url: str,
    *,
    scrape_type: ScrapeType = "comprehensive",
    full_text_limit: int = FULL_TEXT_LIMIT,
    noise: NoisePredicate = is_noise,
) -> ExtractedPageData:
    """Like :func:`extract_page` but never raises: failures yield an empty record."""
    try:
        return extract_page(page, url, scrape_type=scrape_type, full_text_limit=full_text_limit, noise=noise)
    except ExtractionFailure as exc:
        log.warning("%s", exc)
        return ExtractedPageData()
