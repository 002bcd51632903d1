"""FISPACT-II inventory data."""

from .inventory import (
    Inventory,
    Interval,
    InventoryNuclide,
    inventory_from_dict,
    read_json,
)
