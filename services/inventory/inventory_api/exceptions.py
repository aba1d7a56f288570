"""
Exceptions raised by the Inventory service layer.

Storage failures are not wrapped: SQLAlchemy's own exceptions propagate
unchanged so callers see the original error.
"""
from typing import Dict


class InventoryError(Exception):
    """Base class for expected, caller-correctable inventory errors."""


class ValidationError(InventoryError):
    """
    One or more fields of an inventory payload are invalid.

    Attributes:
        errors: Mapping of wire field name (e.g. ``itemName``) to message,
            one entry per violated field.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("Validation failed: " + ", ".join(sorted(self.errors)))


class ItemNotFoundError(InventoryError):
    """No inventory item exists with the requested ID."""

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Inventory item {item_id} not found")
