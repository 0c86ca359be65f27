"""HTTP trigger surface — serves the request handler over ``aiohttp``.

Exposes:
- ``POST /api/elements`` → raw JSON body in, handler response out
- ``GET /health``        → liveness probe
"""

from __future__ import annotations

import structlog
from aiohttp import web

from src.api.errors import parse_error
from src.api.handler import PARSE_FAILED_MESSAGE, RequestHandler
from src.core.types import ApiTriggerInput, ApiTriggerOutput, StatusCode

logger = structlog.get_logger(__name__)

DEFAULT_PATH = "/api/elements"

_HANDLER_KEY = web.AppKey("handler", RequestHandler)


async def _handle_elements(request: web.Request) -> web.Response:
    handler = request.app[_HANDLER_KEY]
    raw = await request.read()
    output: ApiTriggerOutput
    try:
        raw_body = raw.decode(request.charset or "utf-8")
    except (UnicodeDecodeError, LookupError):
        logger.info("request_body_undecodable", charset=request.charset, size=len(raw))
        output = parse_error(PARSE_FAILED_MESSAGE).to_output()
    else:
        output = handler.on_api_trigger(ApiTriggerInput(raw_body=raw_body))
    content_type = "application/json" if output.response_code == StatusCode.OK else "text/plain"
    return web.Response(
        status=output.response_code,
        text=output.response_body,
        content_type=content_type,
    )


async def _handle_health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


def create_app(handler: RequestHandler, path: str = DEFAULT_PATH) -> web.Application:
    """Create the aiohttp web application."""
    app = web.Application()
    app[_HANDLER_KEY] = handler
    app.router.add_post(path, _handle_elements)
    app.router.add_get("/health", _handle_health)
    return app


async def start_server(
    handler: RequestHandler,
    host: str = "0.0.0.0",
    port: int = 8080,
    path: str = DEFAULT_PATH,
) -> web.AppRunner:
    """Start the HTTP server. Returns the runner for cleanup."""
    app = create_app(handler, path=path)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info("server_started", host=host, port=port, path=path)
    return runner
