"""Tests for src/api/server.py — HTTP surface over the request handler."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

from aiohttp import test_utils

from src.api.handler import PARSE_FAILED_MESSAGE, QUERY_FAILED_MESSAGE, RequestHandler
from src.api.server import create_app
from src.core.types import AlarmLevel, ElementRecord
from src.elements.inventory import ElementSource, StaticElementInventory


def _handler() -> RequestHandler:
    return RequestHandler(StaticElementInventory([
        ElementRecord(
            data_miner_id=346,
            element_id=i,
            element_name=f"Element {i}",
            protocol_name="Generic SNMP",
            protocol_version="1.0.0.1",
            alarm_level=AlarmLevel.MAJOR,
        )
        for i in range(1, 4)
    ]))


def _client(handler: RequestHandler, path: str = "/api/elements") -> test_utils.TestClient:
    return test_utils.TestClient(test_utils.TestServer(create_app(handler, path=path)))


class TestElementsEndpoint:
    async def test_success(self) -> None:
        async with _client(_handler()) as client:
            resp = await client.post("/api/elements", data='{"alarmLevel": "Major", "limit": 2}')
            assert resp.status == 200
            assert resp.content_type == "application/json"
            payload = json.loads(await resp.text())
            assert [e["elementId"] for e in payload] == [1, 2]

    async def test_empty_body(self) -> None:
        async with _client(_handler()) as client:
            resp = await client.post("/api/elements", data="")
            assert resp.status == 400
            assert resp.content_type == "text/plain"
            assert await resp.text() == "Request body cannot be empty"

    async def test_invalid_level(self) -> None:
        async with _client(_handler()) as client:
            resp = await client.post("/api/elements", data='{"alarmLevel": "major", "limit": 2}')
            assert resp.status == 400
            assert "Critical" in await resp.text()

    async def test_malformed_json(self) -> None:
        async with _client(_handler()) as client:
            resp = await client.post("/api/elements", data="{not json")
            assert resp.status == 500

    async def test_query_failure(self) -> None:
        source = MagicMock(spec=ElementSource)
        source.find_elements.side_effect = RuntimeError("boom")
        async with _client(RequestHandler(source)) as client:
            resp = await client.post("/api/elements", data='{"alarmLevel": "Major", "limit": 2}')
            assert resp.status == 500
            assert await resp.text() == QUERY_FAILED_MESSAGE

    async def test_invalid_utf8_body(self) -> None:
        async with _client(_handler()) as client:
            resp = await client.post(
                "/api/elements",
                data=b'{"alarmLevel": "Major\xff", "limit": 1}',
                headers={"Content-Type": "application/json"},
            )
            assert resp.status == 500
            assert resp.content_type == "text/plain"
            assert await resp.text() == PARSE_FAILED_MESSAGE

    async def test_unknown_charset(self) -> None:
        async with _client(_handler()) as client:
            resp = await client.post(
                "/api/elements",
                data=b'{"alarmLevel": "Major", "limit": 1}',
                headers={"Content-Type": "application/json; charset=bogus"},
            )
            assert resp.status == 500
            assert await resp.text() == PARSE_FAILED_MESSAGE

    async def test_declared_charset_is_used(self) -> None:
        async with _client(_handler()) as client:
            resp = await client.post(
                "/api/elements",
                data='{"alarmLevel": "Major", "limit": 1}'.encode("utf-16"),
                headers={"Content-Type": "application/json; charset=utf-16"},
            )
            assert resp.status == 200
            assert len(json.loads(await resp.text())) == 1

    async def test_custom_path(self) -> None:
        async with _client(_handler(), path="/elements") as client:
            resp = await client.post("/elements", data='{"alarmLevel": "Major", "limit": 1}')
            assert resp.status == 200

    async def test_get_not_allowed(self) -> None:
        async with _client(_handler()) as client:
            resp = await client.get("/api/elements")
            assert resp.status == 405


class TestHealthEndpoint:
    async def test_health(self) -> None:
        async with _client(_handler()) as client:
            resp = await client.get("/health")
            assert resp.status == 200
            assert await resp.json() == {"status": "ok"}
