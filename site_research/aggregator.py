# File: site_research/aggregator.py
"""site_research.aggregator: folding per-page extractions into one crawl result."""

from __future__ import annotations

from typing import List

from site_research.crawler.models import AggregatedResult, ContactInfo, ExtractedPageData

__all__ = ["merge", "merge_text"]

TEXT_SEPARATOR = "\n\n"


def merge_text(base: str, addition: str) -> str:
    """Join two long-text fields with a blank line when both are present."""
    if base and addition:
        return f"{base}{TEXT_SEPARATOR}{addition}"
    return base or addition


def _concat(base: List[str], addition: List[str]) -> List[str]:
    return [*base, *addition]


def merge(base: AggregatedResult, page: ExtractedPageData, url: str) -> AggregatedResult:
    """Return a new result with *page* (scraped from *url*) folded into *base*.

    * ``title`` / ``meta_description``: the first non-empty value wins.
    * headings, paragraphs and contact arrays: concatenated, no de-duplication.
    * about / product / pricing text: joined with a blank line.
    * ``full_text``: the first non-empty value wins, like the other scalars.
    """
    return AggregatedResult(
        title=base.title or page.title,
        meta_description=base.meta_description or page.meta_description,
        headings=_concat(base.headings, page.headings),
        paragraphs=_concat(base.paragraphs, page.paragraphs),
        full_text=base.full_text or page.full_text,
        about_content=merge_text(base.about_content, page.about_content),
        product_info=merge_text(base.product_info, page.product_info),
        pricing_info=merge_text(base.pricing_info, page.pricing_info),
        contact_info=ContactInfo(
            emails=_concat(base.contact_info.emails, page.contact_info.emails),
            phones=_concat(base.contact_info.phones, page.contact_info.phones),
            social_links=_concat(base.contact_info.social_links, page.contact_info.social_links),
        ),
        subpages_scraped=[*base.subpages_scraped, url],
    )
