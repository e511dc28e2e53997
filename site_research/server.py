# File: site_research/server.py
"""site_research.server: aiohttp application exposing ``POST /api/scrape-website``.

The route only validates the body and serializes the :class:`CrawlOutcome`;
all crawl logic lives in :mod:`site_research.engine`.
"""

from __future__ import annotations

import json
from typing import Any

from aiohttp import web

from site_research.config import CrawlSettings
from site_research.engine import Engine, validate_url
from site_research.exceptions import InvalidURL
from site_research.logger import logger

__all__ = ["create_app", "run_server", "ENGINE_KEY"]

ENGINE_KEY = web.AppKey("engine", Engine)

_SCRAPE_TYPES = ("basic", "comprehensive")


def _error(message: str, status: int = 400) -> web.Response:
    return web.json_response({"success": False, "error": message}, status=status)


async def scrape_website(request: web.Request) -> web.Response:
    try:
        body: Any = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error("Request body must be JSON")
    if not isinstance(body, dict):
        return _error("Request body must be a JSON object")

    if not body.get("url"):
        return _error("URL is required")
    try:
        url = validate_url(body["url"])
    except InvalidURL:
        return _error("Invalid URL format")

    scrape_type = body.get("scrapeType") or "comprehensive"
    if scrape_type not in _SCRAPE_TYPES:
        return _error(f"scrapeType must be one of {', '.join(_SCRAPE_TYPES)}")
    max_depth = body.get("maxDepth")
    if max_depth is not None and (isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0):
        return _error("maxDepth must be a non-negative integer")

    engine = request.app[ENGINE_KEY]
    outcome = await engine.scrape(url, scrape_type=scrape_type, max_depth=max_depth)
    return web.json_response(outcome.to_dict(), status=200 if outcome.success else 500)


async def health(_: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


def create_app(engine: Engine | None = None, settings: CrawlSettings | None = None) -> web.Application:
    app = web.Application()
    app[ENGINE_KEY] = engine or Engine(settings)
    app.router.add_post("/api/scrape-website", scrape_website)
    app.router.add_get("/health", health)
    return app


def run_server(host: str = "127.0.0.1", port: int = 8080, settings: CrawlSettings | None = None) -> None:
    logger.info("Serving on http://%s:%d", host, port)
    web.run_app(create_app(settings=settings), host=host, port=port, print=None)
