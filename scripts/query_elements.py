#!/usr/bin/env python3
"""One-shot CLI — run a single request body through the elements handler.

Usage:
    python -m scripts.query_elements '{"alarmLevel": "Critical", "limit": 5}'
    python -m scripts.query_elements --alarm-level Major --limit 10
    echo '{"alarmLevel": "Minor", "limit": 3}' | python -m scripts.query_elements -

Prints the response body to stdout and the status code to stderr. The exit
code is 0 for a 200 response and 1 otherwise.
"""

from __future__ import annotations

import argparse
import json
import sys

from src.api.handler import RequestHandler
from src.core.config import load_settings
from src.core.logging import setup_logging
from src.core.types import ApiTriggerOutput, StatusCode
from src.elements.exceptions import InventoryLoadError
from src.elements.inventory import load_inventory


def build_body(args: argparse.Namespace) -> str:
    """Resolve the request body from the positional argument or flags."""
    if args.body == "-":
        return sys.stdin.read()
    if args.body is not None:
        return args.body
    return json.dumps({"alarmLevel": args.alarm_level, "limit": args.limit})


def run(args: argparse.Namespace) -> ApiTriggerOutput | None:
    settings = load_settings(args.config)
    setup_logging(level=args.log_level, fmt="console")

    try:
        inventory = load_inventory(args.inventory or settings.inventory.path)
    except InventoryLoadError as exc:
        print(f"Could not load inventory: {exc}", file=sys.stderr)
        return None

    return RequestHandler(inventory).handle(build_body(args))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="List elements in a given alarm state.",
    )
    parser.add_argument(
        "body",
        nargs="?",
        default=None,
        help="Raw JSON request body, or '-' to read it from stdin",
    )
    parser.add_argument("--alarm-level", default="Critical", help="Alarm level when no body is given")
    parser.add_argument("--limit", type=int, default=10, help="Max elements when no body is given")
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
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level override: DEBUG, INFO, WARNING, ERROR",
    )
    args = parser.parse_args()

    output = run(args)
    if output is None:
        sys.exit(2)

    print(output.response_body)
    print(f"status: {output.response_code}", file=sys.stderr)
    sys.exit(0 if output.response_code == StatusCode.OK else 1)


if __name__ == "__main__":
    main()
