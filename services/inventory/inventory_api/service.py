"""
Inventory business operations.

``InventoryService`` wraps one explicitly passed database session and offers
the read side (listing, search, low-stock filter, summary) and the write side
(create, partial update, delete) of the inventory. Storage errors are logged
with context and re-raised unchanged. Concurrent updates to the same item are
not coordinated: the last write wins.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud, models, schemas
from .exceptions import ValidationError
from .models import utcnow
from .validators import normalize_price, validate_item_fields

logger = logging.getLogger(__name__)


class InventoryService:
    """Inventory operations bound to a single database session."""

    def __init__(self, db: Session):
        self.db = db

    # Queries

    def list_all(self) -> List[models.InventoryItem]:
        """
        Retrieve every inventory item.

        Returns:
            List of InventoryItem objects ordered by name, then ID
        """
        try:
            return crud.get_items(self.db)
        except SQLAlchemyError:
            logger.exception("Error retrieving inventory items")
            raise

    def get_by_id(self, item_id: int) -> Optional[models.InventoryItem]:
        """Return the item, or None when no item has this ID."""
        try:
            return crud.get_item(self.db, item_id)
        except SQLAlchemyError:
            logger.exception(f"Error retrieving item with id {item_id}")
            raise

    def search(self, term: str) -> List[models.InventoryItem]:
        """
        Case-insensitive substring search on item names.

        A blank term returns the full listing.
        """
        if not term or not term.strip():
            return self.list_all()
        try:
            return crud.search_items(self.db, term)
        except SQLAlchemyError:
            logger.exception(f"Error searching items with term: {term}")
            raise

    def low_stock(self) -> List[models.InventoryItem]:
        """
        Retrieve items whose quantity is below their reorder level.

        Returns:
            List of InventoryItem objects, ordered as in list_all
        """
        try:
            return crud.get_low_stock_items(self.db)
        except SQLAlchemyError:
            logger.exception("Error retrieving low stock items")
            raise

    def summary(self) -> schemas.InventorySummary:
        """
        Compute inventory totals from a single snapshot of the table.

        Returns:
            InventorySummary with item count, total quantity, low-stock
            count and total value (zeros for an empty inventory)
        """
        try:
            total_items, total_quantity, low_stock_count, total_value = crud.get_summary_row(self.db)
        except SQLAlchemyError:
            logger.exception("Error retrieving inventory summary")
            raise

        return schemas.InventorySummary(
            total_items=total_items,
            total_quantity=total_quantity,
            low_stock_count=low_stock_count,
            # SQLite sums NUMERIC columns as floats
            total_inventory_value=normalize_price(Decimal(str(total_value))),
        )

    # Mutations

    def create(self, item: schemas.InventoryItemCreate) -> models.InventoryItem:
        """
        Validate and store a new inventory item.

        Raises:
            ValidationError: listing every invalid field
        """
        values = item.model_dump()
        errors = validate_item_fields(values)
        if errors:
            raise ValidationError(errors)

        now = utcnow()
        values["unit_price"] = normalize_price(values["unit_price"])
        values["created_date"] = now
        values["updated_date"] = now

        try:
            db_item = crud.insert_item(self.db, values)
        except SQLAlchemyError:
            logger.exception("Error creating inventory item")
            raise

        logger.info(f"Created inventory item: {db_item.item_name}")
        return db_item

    def update(self, item_id: int, patch: schemas.InventoryItemUpdate) -> models.InventoryItem:
        """
        Apply a partial update; fields the caller did not supply keep their value.

        The updated timestamp moves forward even when nothing else changed.

        Raises:
            ValidationError: listing every invalid supplied field
            ItemNotFoundError: if no item has this ID
        """
        changes = patch.changes()
        errors = validate_item_fields(changes, partial=True)
        if errors:
            raise ValidationError(errors)

        if "unit_price" in changes:
            changes["unit_price"] = normalize_price(changes["unit_price"])
        changes["updated_date"] = utcnow()

        try:
            db_item = crud.update_item(self.db, item_id, changes)
        except SQLAlchemyError:
            logger.exception(f"Error updating item with id {item_id}")
            raise

        logger.info(f"Updated inventory item: {db_item.item_name}")
        return db_item

    def delete(self, item_id: int) -> bool:
        """Delete an item. Returns False, without raising, when it does not exist."""
        try:
            deleted = crud.delete_item(self.db, item_id)
        except SQLAlchemyError:
            logger.exception(f"Error deleting item with id {item_id}")
            raise

        if deleted:
            logger.info(f"Deleted inventory item {item_id}")
        return deleted
