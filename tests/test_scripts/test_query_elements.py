"""Tests for scripts/query_elements.py — body resolution and one-shot runs."""

from __future__ import annotations

import argparse
import io
import json
from pathlib import Path

import pytest
import yaml

from scripts.query_elements import build_body, run
from src.core.config import reset_settings


@pytest.fixture(autouse=True)
def _clean_settings() -> None:
    reset_settings()


def _args(**kw: object) -> argparse.Namespace:
    defaults: dict[str, object] = {
        "body": None,
        "alarm_level": "Critical",
        "limit": 10,
        "config": None,
        "inventory": None,
        "log_level": "WARNING",
    }
    defaults.update(kw)
    return argparse.Namespace(**defaults)


def _inventory_file(tmp_path: Path) -> Path:
    path = tmp_path / "elements.yaml"
    path.write_text(yaml.dump({
        "elements": [
            {
                "data_miner_id": 1,
                "element_id": i,
                "element_name": f"E{i}",
                "protocol_name": "P",
                "protocol_version": "1",
                "alarm_level": "Critical",
            }
            for i in range(1, 4)
        ],
    }))
    return path


class TestBuildBody:
    def test_positional_body(self) -> None:
        assert build_body(_args(body='{"alarmLevel": "Minor"}')) == '{"alarmLevel": "Minor"}'

    def test_flags(self) -> None:
        body = json.loads(build_body(_args(alarm_level="Major", limit=3)))
        assert body == {"alarmLevel": "Major", "limit": 3}

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO('{"alarmLevel": "Warning", "limit": 1}'))
        assert build_body(_args(body="-")) == '{"alarmLevel": "Warning", "limit": 1}'


class TestRun:
    def test_runs_against_inventory(self, tmp_path: Path) -> None:
        out = run(_args(
            inventory=str(_inventory_file(tmp_path)),
            limit=2,
            config=str(tmp_path / "none.yaml"),
        ))
        assert out is not None
        assert out.response_code == 200
        assert [e["elementId"] for e in json.loads(out.response_body)] == [1, 2]

    def test_bad_inventory_returns_none(self, tmp_path: Path) -> None:
        bad = tmp_path / "elements.yaml"
        bad.write_text("elements: [unclosed")
        assert run(_args(inventory=str(bad), config=str(tmp_path / "none.yaml"))) is None
