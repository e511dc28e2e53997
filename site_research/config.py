# === FILE: site_research/config.py ===
"""
Loading and validation of crawl settings for SiteResearch.

Pydantic describes the schema. :class:`CrawlSettings` holds the tunables that
may come from a YAML/JSON file; :class:`CrawlConfig` binds them to one seed URL
and is immutable for the lifetime of a single crawl.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Tuple, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_research.utils import host_of

ScrapeType = Literal["basic", "comprehensive"]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

PRIORITY_PATHS: Tuple[str, ...] = (
    "/about",
    "/about-us",
    "/company",
    "/who-we-are",
    "/pricing",
    "/plans",
    "/plans-and-pricing",
    "/products",
    "/services",
    "/contact",
    "/contact-us",
)


class CrawlSettings(BaseModel):
    """Crawl tunables shared by every request of a process."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    scrape_type: ScrapeType = Field("comprehensive", description="basic or comprehensive extraction.")
    max_depth: int = Field(2, ge=0, description="Maximum link depth from the seed page.")
    max_pages: int = Field(10, ge=1, description="Hard limit on successfully processed pages.")
    priority_path_patterns: Tuple[str, ...] = Field(
        PRIORITY_PATHS, description="URL substrings crawled ahead of other links."
    )
    navigation_timeout: float = Field(30.0, gt=0, description="Page navigation timeout (seconds).")
    body_timeout: float = Field(5.0, gt=0, description="Wait for <body> after navigation (seconds).")
    politeness_delay: float = Field(0.5, ge=0, description="Pause between page fetches (seconds).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    headless: bool = Field(True, description="Run Chromium without a window.")
    full_text_limit: int = Field(50_000, ge=1, description="Cap for the full text of one page.")

    @field_validator("priority_path_patterns", mode="before")
    def _strip_empty_patterns(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return tuple(p.strip() for p in v if isinstance(p, str) and p.strip())
        return v

    def for_url(self, seed_url: str, **overrides: Any) -> CrawlConfig:
        """Bind these settings to *seed_url*; ``None`` overrides are ignored."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return CrawlConfig(seed_url=seed_url, **data)


class CrawlConfig(CrawlSettings):
    """Configuration of a single crawl."""

    seed_url: str = Field(..., description="Absolute http(s) URL the crawl starts from.")

    @field_validator("seed_url")
    def _check_seed_url(cls, v: str) -> str:
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(f"seed_url must be an absolute http(s) URL, got {v!r}")
        return v

    @property
    def seed_host(self) -> str:
        return host_of(self.seed_url)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlSettings:
    """
    Read YAML or JSON and return validated :class:`CrawlSettings`.

    With ``path=None`` the file ``configs/default.yaml`` is used when present,
    otherwise built-in defaults are returned. An explicit path that does not
    exist raises FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlSettings()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlSettings(**data)


__all__ = [
    "CrawlConfig",
    "CrawlSettings",
    "ScrapeType",
    "PRIORITY_PATHS",
    "DEFAULT_USER_AGENT",
    "load_config",
]
