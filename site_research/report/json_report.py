# site_research/report/json_report.py

"""
JSON report for SiteResearch.

Serializes a :class:`CrawlOutcome` in the same shape the HTTP route returns.
"""
import json
from pathlib import Path

from site_research.crawler.models import CrawlOutcome


def render_json(outcome: CrawlOutcome, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *outcome* as JSON at *output_path* and return the path.

    Example:
    ```python
    from site_research.report.json_report import render_json
    report_path = render_json(outcome, 'reports/acme.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(outcome.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
