"""Exception hierarchy for element sources."""

from __future__ import annotations


class InventoryError(Exception):
    """Base exception for all element inventory errors."""


class InventoryLoadError(InventoryError):
    """The inventory file could not be read or contains invalid records."""
