# site_research/crawler/models.py
"""
Data models for the SiteResearch crawler.

Python attributes are snake_case; :meth:`to_dict` emits the camelCase keys of
the public JSON contract (``metaDescription``, ``subpagesScraped`` ...).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class FrontierItem:
    """A discovered URL waiting to be processed, with its link depth."""

    url: str
    depth: int


@dataclass(slots=True)
class ContactInfo:
    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    social_links: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.emails or self.phones or self.social_links)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "emails": list(self.emails),
            "phones": list(self.phones),
            "socialLinks": list(self.social_links),
        }


@dataclass(slots=True)
class ExtractedPageData:
    """What the content extractor found on one page. Empty means "not found"."""

    title: str = ""
    meta_description: str = ""
    headings: List[str] = field(default_factory=list)
    paragraphs: List[str] = field(default_factory=list)
    full_text: str = ""
    about_content: str = ""
    product_info: str = ""
    pricing_info: str = ""
    contact_info: ContactInfo = field(default_factory=ContactInfo)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "metaDescription": self.meta_description,
            "headings": list(self.headings),
            "paragraphs": list(self.paragraphs),
            "fullText": self.full_text,
            "aboutContent": self.about_content,
            "productInfo": self.product_info,
            "pricingInfo": self.pricing_info,
            "contactInfo": self.contact_info.to_dict(),
        }


@dataclass(slots=True)
class AggregatedResult(ExtractedPageData):
    """Combined extraction of every successfully processed page."""

    subpages_scraped: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = ExtractedPageData.to_dict(self)
        data["subpagesScraped"] = list(self.subpages_scraped)
        return data


class CrawlState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class CrawlOutcome:
    """Final answer of one crawl: either ``data`` or ``error`` is set."""

    success: bool
    url: str
    data: Optional[AggregatedResult] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, url: str, data: AggregatedResult) -> CrawlOutcome:
        return cls(success=True, url=url, data=data)

    @classmethod
    def failed(cls, url: str, error: str) -> CrawlOutcome:
        return cls(success=False, url=url, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "url": self.url, "data": self.data.to_dict() if self.data else {}}
        return {"success": False, "url": self.url, "error": self.error or "Unknown error"}


__all__ = [
    "FrontierItem",
    "ContactInfo",
    "ExtractedPageData",
    "AggregatedResult",
    "CrawlState",
    "CrawlOutcome",
]
