# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_research.config import PRIORITY_PATHS, CrawlConfig, CrawlSettings, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("max_depth: 1\nmax_pages: 3", ".yaml", None),
        (json.dumps({"max_depth": 1, "max_pages": 3}), ".json", None),
        ("max_depth: -1", ".yaml", ValidationError),
        ("unknown_key: 1", ".yaml", ValidationError),
        ("- a\n- b", ".yaml", TypeError),
        ("key: [unclosed", ".yaml", ValueError),
        ("{not json", ".json", ValueError),
        ("max_depth = 1", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlSettings)
        assert cfg.max_depth == 1
        assert cfg.max_pages == 3
        assert cfg.scrape_type == "comprehensive"


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == CrawlSettings()


def test_load_config_default_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_pages: 4\n", encoding="utf-8")
    assert load_config(None).max_pages == 4


def test_explicit_path_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_defaults():
    s = CrawlSettings()
    assert s.scrape_type == "comprehensive"
    assert s.max_depth == 2
    assert s.max_pages == 10
    assert s.priority_path_patterns == PRIORITY_PATHS
    assert s.politeness_delay == 0.5


def test_empty_priority_patterns_dropped():
    s = CrawlSettings(priority_path_patterns=["/about", " ", ""])
    assert s.priority_path_patterns == ("/about",)


def test_for_url_ignores_none_overrides():
    cfg = CrawlSettings(max_pages=5).for_url("https://Site.com/x", max_depth=None, scrape_type="basic")
    assert isinstance(cfg, CrawlConfig)
    assert cfg.max_pages == 5
    assert cfg.max_depth == 2
    assert cfg.scrape_type == "basic"
    assert cfg.seed_host == "site.com"


@pytest.mark.parametrize("url", ["ftp://site.com", "site.com", "https://"])
def test_seed_url_must_be_absolute(url):
    with pytest.raises(ValidationError):
        CrawlSettings().for_url(url)


def test_config_is_frozen():
    cfg = CrawlSettings().for_url("https://site.com")
    with pytest.raises(ValidationError):
        cfg.max_pages = 1


def test_seed_host_ignores_default_port_and_userinfo():
    assert CrawlSettings().for_url("https://user@Site.com:443/").seed_host == "site.com"
    assert CrawlSettings().for_url("http://site.com:8080/").seed_host == "site.com:8080"
