import pytest

from conftest import SEED, FakeBrowser, html_page, links
from site_research.engine import Engine, validate_url
from site_research.exceptions import InvalidURL


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://site.com", "https://site.com"),
        ("http://site.com/about", "http://site.com/about"),
        ("site.com", "https://site.com"),
        ("  site.com/pricing ", "https://site.com/pricing"),
    ],
)
def test_validate_url(raw, expected):
    assert validate_url(raw) == expected


@pytest.mark.parametrize("raw", ["", None, "   ", "https://", "http://[::1", "not a url", 42])
def test_validate_url_rejects(raw):
    with pytest.raises(InvalidURL):
        validate_url(raw)


def test_invalid_url_is_a_value_error():
    with pytest.raises(ValueError):
        validate_url("https://")


@pytest.mark.asyncio()
async def test_invalid_url_never_starts_crawl(settings):
    browser = FakeBrowser({})
    outcome = await Engine(settings, browser=browser).scrape("https://")
    assert not outcome.success
    assert outcome.error == "Invalid URL format"
    assert not browser.launched


@pytest.mark.asyncio()
async def test_missing_url(settings):
    outcome = await Engine(settings, browser=FakeBrowser({})).scrape("")
    assert outcome.to_dict() == {"success": False, "url": "", "error": "URL is required"}


@pytest.mark.asyncio()
async def test_bad_scrape_type_rejected(settings):
    outcome = await Engine(settings, browser=FakeBrowser({})).scrape(SEED, scrape_type="deep")
    assert not outcome.success
    assert outcome.error.startswith("Invalid request")


@pytest.mark.asyncio()
async def test_scrape_request_defaults(settings):
    pages = {
        SEED: html_page("<h1>Home</h1>" + links("/a")),
        "https://site.com/a": html_page("<h1>A</h1>" + links("/b")),
        "https://site.com/b": html_page("<h1>B</h1>" + links("/c")),
        "https://site.com/c": html_page("<h1>C</h1>"),
    }
    browser = FakeBrowser(pages)
    outcome = await Engine(settings, browser=browser).scrape_request({"url": "site.com"})

    body = outcome.to_dict()
    assert body["success"] is True
    assert body["url"] == "https://site.com"
    # maxDepth defaults to 2
    assert body["data"]["subpagesScraped"] == [SEED, "https://site.com/a", "https://site.com/b"]
    assert body["data"]["headings"] == ["Home", "A", "B"]


@pytest.mark.asyncio()
async def test_scrape_request_overrides(settings):
    browser = FakeBrowser({SEED: html_page("<h1>Home</h1>" + links("/a")), "https://site.com/a": html_page("")})
    outcome = await Engine(settings, browser=browser).scrape_request(
        {"url": SEED, "scrapeType": "basic", "maxDepth": 0}
    )
    assert outcome.data.subpages_scraped == [SEED]
