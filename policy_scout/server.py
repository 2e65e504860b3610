# File: policy_scout/server.py
"""policy_scout.server: HTTP ingress (aiohttp.web).

``POST /analyze`` with ``{"url": "https://example.com"}``:

* 400 – body is not JSON or the URL does not start with ``http``;
* 404 – no policy URL could be located for the site;
* 500 – the analysis itself failed;
* 200 – ``{"summary", "source", "policy_url"}``; ``source`` is ``cached`` or
  ``new``, or ``empty`` when the located policy had no extractable text.
"""
from __future__ import annotations

import json
from typing import Optional

from aiohttp import web

from policy_scout.aggregator import SOURCE_NOT_FOUND
from policy_scout.config import ScoutConfig
from policy_scout.engine import Engine
from policy_scout.logger import get_logger
from policy_scout.utils import validate_site_url

__all__ = ("create_app", "run_server", "ENGINE_KEY")

logger = get_logger("server")

ENGINE_KEY = web.AppKey("engine", Engine)


async def _analyze(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None
    url = body.get("url") if isinstance(body, dict) else None
    try:
        site_url = validate_site_url(url if isinstance(url, str) else "")
    except ValueError:
        return web.json_response(
            {"error": "Please provide a valid URL (e.g., https://example.com)"}, status=400
        )

    engine = request.app[ENGINE_KEY]
    try:
        report = await engine.analyze(site_url)
    except Exception:
        logger.exception("Error during analysis of %s", site_url)
        return web.json_response({"error": "Internal server error during analysis."}, status=500)

    if report.source == SOURCE_NOT_FOUND:
        return web.json_response(
            {"error": "No privacy policy URL found for the given site."}, status=404
        )
    return web.json_response(
        {"summary": report.summary, "source": report.source, "policy_url": report.policy_url}
    )


def create_app(config: ScoutConfig, engine: Optional[Engine] = None) -> web.Application:
    """Build the application; without *engine* one is created and started with the app."""
    app = web.Application()
    app.router.add_post("/analyze", _analyze)

    if engine is not None:
        app[ENGINE_KEY] = engine
        return app

    async def _engine_ctx(app: web.Application):
        async with Engine(config) as started:
            app[ENGINE_KEY] = started
            yield

    app.cleanup_ctx.append(_engine_ctx)
    return app


def run_server(config: ScoutConfig, host: Optional[str] = None, port: Optional[int] = None) -> None:
    host = host or config.server_host
    port = port or config.server_port
    logger.info("Privacy policy API server is running on http://%s:%d", host, port)
    web.run_app(create_app(config), host=host, port=port, print=None)
