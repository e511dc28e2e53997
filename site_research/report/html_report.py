# File: site_research/report/html_report.py
"""site_research.report.html_report: HTML rendering of a crawl outcome with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_research.crawler.models import CrawlOutcome

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    outcome: CrawlOutcome,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Render ``report.html.j2`` from *template_dir* and save it to *output_path*.

    Args:
        outcome: result of one crawl.
        template_dir: directory with Jinja2 templates; ``None`` uses the bundled one.
        output_path: target HTML file.

    Returns:
        Path of the written file.
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    payload = outcome.to_dict()
    context: dict[str, Any] = {
        "success": payload["success"],
        "url": payload["url"],
        "error": payload.get("error"),
        "data": payload.get("data", {}),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
