#!/usr/bin/env python3
"""HTTP entrypoint — loads the element inventory and serves the elements API.

Usage::

    # Run with default config
    python -m scripts.serve

    # Custom config file
    python -m scripts.serve --config config/settings.yaml

    # Override inventory file and log level
    python -m scripts.serve --inventory config/elements.yaml --log-level DEBUG
"""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys

import structlog

from src.api.handler import RequestHandler
from src.api.server import start_server
from src.core.config import load_settings
from src.core.logging import setup_logging
from src.elements.exceptions import InventoryLoadError
from src.elements.inventory import load_inventory

logger = structlog.get_logger(__name__)


async def run(args: argparse.Namespace) -> int:
    """Start the server and run until interrupted."""
    settings = load_settings(args.config)
    setup_logging(level=args.log_level)

    inventory_path = args.inventory or settings.inventory.path
    try:
        inventory = load_inventory(inventory_path)
    except InventoryLoadError as exc:
        logger.error("inventory_load_failed", path=inventory_path, error=str(exc))
        print(f"Could not load inventory: {exc}", file=sys.stderr)
        return 1

    handler = RequestHandler(inventory)
    runner = await start_server(
        handler,
        host=args.host or settings.server.host,
        port=args.port or settings.server.port,
        path=settings.server.path,
    )

    # ── Wait for shutdown signal ─────────────────────────────────
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("shutdown_signal_received")
        stop_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            # Windows: signal handlers not supported on ProactorEventLoop
            pass

    try:
        await stop_event.wait()
    except KeyboardInterrupt:
        logger.info("keyboard_interrupt")

    await runner.cleanup()
    logger.info("server_stopped")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Serve the elements-by-alarm-level API over HTTP.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--inventory",
        default=None,
        help="Path to the element inventory YAML (overrides inventory.path)",
    )
    parser.add_argument("--host", default=None, help="Bind address override")
    parser.add_argument("--port", type=int, default=None, help="Port override")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override: DEBUG, INFO, WARNING, ERROR",
    )
    args = parser.parse_args()

    code = asyncio.run(run(args))
    sys.exit(code)


if __name__ == "__main__":
    main()
