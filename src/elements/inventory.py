"""Element inventory — the source the API queries for monitored elements.

``ElementSource`` is the seam the request handler depends on.
``StaticElementInventory`` keeps records in memory and is populated either
directly or from a YAML file via ``load_inventory``.
"""

from __future__ import annotations

import abc
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from src.core.types import ElementRecord, ElementSeverityFilter
from src.elements.exceptions import InventoryLoadError

logger = structlog.get_logger(__name__)


class ElementSource(abc.ABC):
    """Anything that can list elements matching a severity filter."""

    @abc.abstractmethod
    def find_elements(self, severity_filter: ElementSeverityFilter) -> list[ElementRecord]:
        """Return the elements currently matching ``severity_filter``."""


class StaticElementInventory(ElementSource):
    """In-memory element inventory.

    Usage::

        inventory = StaticElementInventory()
        inventory.set_elements([ElementRecord(...), ...])

        # Used by RequestHandler as its element source:
        records = inventory.find_elements(ElementSeverityFilter.for_level(level))
    """

    def __init__(self, records: list[ElementRecord] | None = None) -> None:
        self._records: list[ElementRecord] = list(records or [])

    # ── State management ────────────────────────────────────────

    def set_elements(self, records: list[ElementRecord]) -> None:
        """Replace the whole inventory."""
        self._records = list(records)

    def add_element(self, record: ElementRecord) -> None:
        self._records.append(record)

    @property
    def elements(self) -> list[ElementRecord]:
        """All records, in insertion order."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    # ── Queries ─────────────────────────────────────────────────

    def find_elements(self, severity_filter: ElementSeverityFilter) -> list[ElementRecord]:
        return [r for r in self._records if severity_filter.matches(r)]


def _parse_records(raw: Any, source: Path) -> list[ElementRecord]:
    if raw is None:
        return []
    if isinstance(raw, dict):
        raw = raw.get("elements") or []
    if not isinstance(raw, list):
        raise InventoryLoadError(f"{source}: expected a list of elements")

    records: list[ElementRecord] = []
    for index, item in enumerate(raw):
        try:
            records.append(ElementRecord.model_validate(item))
        except ValidationError as exc:
            raise InventoryLoadError(f"{source}: invalid element at index {index}: {exc}") from exc
    return records


def load_inventory(path: str | Path) -> StaticElementInventory:
    """Load an inventory from YAML.

    The file holds either a list of element mappings or a mapping with an
    ``elements`` list. A missing file yields an empty inventory.

    Raises:
        InventoryLoadError: The file is not valid YAML or a record is invalid.
    """
    inventory_path = Path(path)
    if not inventory_path.exists():
        logger.warning("inventory_file_missing", path=str(inventory_path))
        return StaticElementInventory()

    try:
        with open(inventory_path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise InventoryLoadError(f"{inventory_path}: {exc}") from exc

    records = _parse_records(raw, inventory_path)
    logger.info("inventory_loaded", path=str(inventory_path), elements=len(records))
    return StaticElementInventory(records)
