"""site_research.report: JSON and HTML reports of a crawl outcome, used by the CLI."""

from __future__ import annotations

from site_research.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from site_research.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
