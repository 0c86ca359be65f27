"""Element sources — the monitored-element inventory queried by the API."""

from src.elements.exceptions import InventoryError, InventoryLoadError
from src.elements.inventory import ElementSource, StaticElementInventory, load_inventory

__all__ = [
    "ElementSource",
    "InventoryError",
    "InventoryLoadError",
    "StaticElementInventory",
    "load_inventory",
]
