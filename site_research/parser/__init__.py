"""site_research.parser: DOM capability, noise filter and content extractor."""

from site_research.parser.content_extractor import extract, extract_page
from site_research.parser.dom import PageHandle, SoupPage
from site_research.parser.noise import clean_text, is_noise

__all__ = ["extract", "extract_page", "PageHandle", "SoupPage", "clean_text", "is_noise"]
