"""
SiteResearch package initializer.
Defines the package version and exposes the scraping entry points.
"""
__version__ = "0.1.0"

from site_research.engine import Engine, scrape_website  # noqa: E402

__all__ = ["__version__", "Engine", "scrape_website"]
