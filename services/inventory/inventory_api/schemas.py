"""
Pydantic schemas for request/response validation in the Inventory service.

These schemas define the structure of data for API requests and responses.
Fields use snake_case in Python and camelCase on the wire (``itemName``,
``reorderLevel``, ...); either spelling is accepted on input.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, field_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema that speaks camelCase JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class InventoryItemCreate(CamelModel):
    """
    Schema for creating a new inventory item.

    Required fields are typed Optional so that missing values reach the
    business validator, which reports every violation at once.
    """
    item_name: Optional[str] = None
    quantity: int = 0
    reorder_level: int = 10
    unit_price: Optional[Decimal] = None
    supplier_name: Optional[str] = None


class InventoryItemUpdate(CamelModel):
    """Schema for updating an existing inventory item. All fields are optional."""
    item_name: Optional[str] = None
    quantity: Optional[int] = None
    reorder_level: Optional[int] = None
    unit_price: Optional[Decimal] = None
    supplier_name: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """
        Return the fields the caller actually wants to change.

        A field counts as supplied only when it was sent with a non-null
        value; blank strings are treated as not supplied.

        Returns:
            Dict of model attribute name -> new value
        """
        supplied = self.model_dump(exclude_unset=True, exclude_none=True)
        return {
            field: value
            for field, value in supplied.items()
            if not (isinstance(value, str) and not value.strip())
        }


class InventoryItem(CamelModel):
    """
    Schema for inventory item responses, includes all database fields.

    Attributes:
        id (int): Inventory item's unique identifier
        item_name (str): Item display name
        quantity (int): Units in stock
        reorder_level (int): Reorder threshold
        unit_price (Decimal): Price per unit
        supplier_name (str): Supplier name
        created_date (datetime): When the item was created (UTC)
        updated_date (datetime): When the item was last changed (UTC)
        is_low_stock (bool): quantity < reorder_level, computed on every read
    """
    id: int
    item_name: str
    quantity: int
    reorder_level: int
    unit_price: Decimal
    supplier_name: str
    created_date: datetime
    updated_date: datetime
    is_low_stock: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    @field_serializer("unit_price", when_used="json")
    def serialize_price(self, value: Decimal) -> float:
        return float(value)

    @field_serializer("created_date", "updated_date")
    def serialize_timestamp(self, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; every stored timestamp is UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class InventorySummary(CamelModel):
    """
    Aggregate figures over the whole inventory, computed from one snapshot.

    Attributes:
        total_items (int): Number of inventory items
        total_quantity (int): Sum of quantity over all items
        low_stock_count (int): Number of items below their reorder level
        total_inventory_value (Decimal): Sum of unit_price * quantity
    """
    total_items: int
    total_quantity: int
    low_stock_count: int
    total_inventory_value: Decimal

    @field_serializer("total_inventory_value", when_used="json")
    def serialize_value(self, value: Decimal) -> float:
        return float(value)
