"""
SQLAlchemy ORM models for the Inventory service.

Defines the database schema for inventory-related tables.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, Numeric, String

from .database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InventoryItem(Base):
    """
    Inventory item model representing a stocked product.
    
    Attributes:
        id (int): Primary key, auto-incremented inventory item ID
        item_name (str): Display name of the item (3-200 characters)
        quantity (int): Units currently in stock
        reorder_level (int): Stock level below which the item needs reordering
        unit_price (Decimal): Price per unit, two fractional digits
        supplier_name (str): Name of the supplier
        created_date (datetime): UTC timestamp when the item was created
        updated_date (datetime): UTC timestamp of the last mutation
    """
    __tablename__ = "inventory_items"
    # IDs are never reused, SQLite included
    __table_args__ = {"sqlite_autoincrement": True}

    id            = Column(Integer, primary_key=True, index=True)
    item_name     = Column(String(200), nullable=False, index=True)
    quantity      = Column(Integer, nullable=False, default=0, index=True)
    reorder_level = Column(Integer, nullable=False, default=10)
    unit_price    = Column(Numeric(18, 2), nullable=False)
    supplier_name = Column(String, nullable=False)
    created_date  = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_date  = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def is_low_stock(self) -> bool:
        """True when stock has dropped strictly below the reorder level."""
        return self.quantity < self.reorder_level

    def __repr__(self) -> str:
        return f"<InventoryItem id={self.id} item_name={self.item_name!r} quantity={self.quantity}>"
