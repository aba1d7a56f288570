"""
CRUD (Create, Read, Update, Delete) operations for the Inventory service.

This module contains all database operations for inventory management and is
the only code that touches the ``inventory_items`` table. Listings are always
ordered by item name, with ties broken by ID so results are deterministic.
"""
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models
from .exceptions import ItemNotFoundError

Item = models.InventoryItem

LISTING_ORDER = (Item.item_name, Item.id)


def _commit(db: Session) -> None:
    """Commit the session, rolling back before re-raising on failure."""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def get_item(db: Session, item_id: int) -> Optional[models.InventoryItem]:
    """
    Retrieve a single inventory item by ID.

    Args:
        db: Database session
        item_id: ID of the inventory item to retrieve

    Returns:
        InventoryItem object or None if not found
    """
    return db.query(Item).filter(Item.id == item_id).first()


def get_items(db: Session) -> List[models.InventoryItem]:
    """
    Retrieve every inventory item, ordered by name.

    Args:
        db: Database session

    Returns:
        List of InventoryItem objects
    """
    return db.query(Item).order_by(*LISTING_ORDER).all()


def search_items(db: Session, term: str) -> List[models.InventoryItem]:
    """
    Retrieve items whose name contains ``term``, ignoring case.

    ``%`` and ``_`` in the term match literally.

    Args:
        db: Database session
        term: Substring to look for in item names

    Returns:
        List of matching InventoryItem objects, ordered by name
    """
    return (
        db.query(Item)
        .filter(Item.item_name.icontains(term, autoescape=True))
        .order_by(*LISTING_ORDER)
        .all()
    )


def get_low_stock_items(db: Session) -> List[models.InventoryItem]:
    """Retrieve items whose quantity is below their reorder level, ordered by name."""
    return (
        db.query(Item)
        .filter(Item.quantity < Item.reorder_level)
        .order_by(*LISTING_ORDER)
        .all()
    )


def get_summary_row(db: Session) -> Tuple[int, int, int, Any]:
    """
    Compute the inventory aggregates in a single statement.

    All four figures come from the same SELECT, so they always describe the
    same set of rows.

    Returns:
        Tuple of (total_items, total_quantity, low_stock_count, total_value)
    """
    low_stock = case((Item.quantity < Item.reorder_level, 1), else_=0)
    return db.query(
        func.count(Item.id),
        func.coalesce(func.sum(Item.quantity), 0),
        func.coalesce(func.sum(low_stock), 0),
        func.coalesce(func.sum(Item.unit_price * Item.quantity), 0),
    ).one()


def insert_item(db: Session, values: Dict[str, Any]) -> models.InventoryItem:
    """
    Create a new inventory item in the database.

    Args:
        db: Database session
        values: Column values keyed by attribute name (no ``id``)

    Returns:
        Created InventoryItem object with its assigned ID
    """
    db_item = Item(**values)
    db.add(db_item)
    _commit(db)
    db.refresh(db_item)
    return db_item


def update_item(db: Session, item_id: int, values: Dict[str, Any]) -> models.InventoryItem:
    """
    Overwrite columns of an existing inventory item.

    Args:
        db: Database session
        item_id: ID of the inventory item to update
        values: Column values to write, keyed by attribute name

    Returns:
        Updated InventoryItem object

    Raises:
        ItemNotFoundError: if no item has this ID
    """
    db_item = get_item(db, item_id)
    if db_item is None:
        raise ItemNotFoundError(item_id)

    for key, value in values.items():
        setattr(db_item, key, value)

    _commit(db)
    db.refresh(db_item)
    return db_item


def delete_item(db: Session, item_id: int) -> bool:
    """
    Delete an inventory item from the database.

    Args:
        db: Database session
        item_id: ID of the inventory item to delete

    Returns:
        True if item was deleted, False if not found
    """
    db_item = get_item(db, item_id)
    if db_item is None:
        return False

    db.delete(db_item)
    _commit(db)
    return True
