from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from conftest import SEED, FakeBrowser, html_page
from site_research.engine import Engine
from site_research.exceptions import BrowserLaunchFailure
from site_research.server import create_app


def make_client(browser, settings):
    return TestClient(TestServer(create_app(Engine(settings, browser=browser))))


@pytest_asyncio.fixture
async def client(settings) -> AsyncIterator[TestClient]:
    browser = FakeBrowser({SEED: html_page("<h1>Home</h1><p>We build tools for teams.</p>", title="Acme")})
    async with make_client(browser, settings) as c:
        yield c


@pytest.mark.asyncio()
async def test_scrape_success(client):
    resp = await client.post("/api/scrape-website", json={"url": "site.com", "maxDepth": 1})
    assert resp.status == 200
    body = await resp.json()
    assert body["success"] is True
    assert body["url"] == "https://site.com"
    assert body["data"]["title"] == "Acme"
    assert body["data"]["paragraphs"] == ["We build tools for teams."]
    assert body["data"]["subpagesScraped"] == [SEED]


@pytest.mark.asyncio()
@pytest.mark.parametrize(
    "payload,error",
    [
        ({}, "URL is required"),
        ({"url": ""}, "URL is required"),
        ({"url": "https://"}, "Invalid URL format"),
        ({"url": "site.com", "scrapeType": "deep"}, "scrapeType must be one of basic, comprehensive"),
        ({"url": "site.com", "maxDepth": -1}, "maxDepth must be a non-negative integer"),
        ({"url": "site.com", "maxDepth": "2"}, "maxDepth must be a non-negative integer"),
        ([1, 2], "Request body must be a JSON object"),
    ],
)
async def test_bad_requests(client, payload, error):
    resp = await client.post("/api/scrape-website", json=payload)
    assert resp.status == 400
    assert await resp.json() == {"success": False, "error": error}


@pytest.mark.asyncio()
async def test_non_json_body(client):
    resp = await client.post("/api/scrape-website", data="url=site.com")
    assert resp.status == 400
    assert (await resp.json())["error"] == "Request body must be JSON"


@pytest.mark.asyncio()
async def test_crawl_failure_returns_500(settings):
    browser = FakeBrowser({}, launch_error=BrowserLaunchFailure("Browser launch failed: boom"))
    async with make_client(browser, settings) as c:
        resp = await c.post("/api/scrape-website", json={"url": SEED})
        assert resp.status == 500
        assert await resp.json() == {
            "success": False,
            "url": SEED,
            "error": "Browser launch failed: boom",
        }


@pytest.mark.asyncio()
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status == 200
    assert await resp.json() == {"status": "ok"}
