"""InventoryService tests against an in-memory SQLite store."""
from decimal import Decimal

import pytest

from conftest import make_item
from inventory_api import schemas
from inventory_api.exceptions import ItemNotFoundError, ValidationError
from inventory_api.schemas import InventoryItemUpdate
from inventory_api.service import InventoryService


def _names(items):
    return [item.item_name for item in items]


def _seed(service):
    """Three items; 'Washer' and 'Spring Pin' are below their reorder level."""
    service.create(make_item(item_name="Washer", quantity=3, reorder_level=20, unit_price=Decimal("0.10")))
    service.create(make_item(item_name="Hex Bolt", quantity=40, reorder_level=10, unit_price=Decimal("0.50")))
    service.create(make_item(item_name="Spring Pin", quantity=0, reorder_level=5, unit_price=Decimal("1.25")))


class TestCreate:

    def test_assigns_id_and_timestamps(self, service):
        item = service.create(make_item())
        assert item.id is not None
        assert item.created_date is not None
        assert item.created_date == item.updated_date

    def test_defaults_quantity_and_reorder_level(self, service):
        payload = schemas.InventoryItemCreate(item_name="Grease Gun", unit_price=Decimal("19.99"), supplier_name="Acme")
        item = service.create(payload)
        assert item.quantity == 0
        assert item.reorder_level == 10

    @pytest.mark.parametrize("quantity, reorder_level, expected", [(5, 10, True), (10, 10, False), (11, 10, False), (0, 0, False)])
    def test_low_stock_flag_matches_quantity_and_reorder_level(self, service, quantity, reorder_level, expected):
        item = service.create(make_item(quantity=quantity, reorder_level=reorder_level))
        assert item.is_low_stock is expected

    def test_unit_price_rounded_to_cents(self, service):
        item = service.create(make_item(unit_price=Decimal("2.345")))
        assert item.unit_price == Decimal("2.35")

    def test_short_item_name_rejected(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service.create(make_item(item_name="ab"))
        assert set(exc_info.value.errors) == {"itemName"}

    def test_negative_quantity_rejected(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service.create(make_item(quantity=-1))
        assert set(exc_info.value.errors) == {"quantity"}

    def test_all_violations_reported_together(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service.create(make_item(item_name="ab", quantity=-1, unit_price=Decimal("-0.01"), supplier_name=""))
        assert set(exc_info.value.errors) == {"itemName", "quantity", "unitPrice", "supplierName"}

    def test_missing_required_fields_rejected(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service.create(schemas.InventoryItemCreate())
        assert set(exc_info.value.errors) == {"itemName", "unitPrice", "supplierName"}

    def test_invalid_create_stores_nothing(self, service):
        with pytest.raises(ValidationError):
            service.create(make_item(reorder_level=-5))
        assert service.list_all() == []

    def test_round_trip_through_new_session(self, service, session_factory):
        created = schemas.InventoryItem.model_validate(service.create(make_item()))

        other = session_factory()
        try:
            fetched = InventoryService(other).get_by_id(created.id)
            assert schemas.InventoryItem.model_validate(fetched) == created
        finally:
            other.close()


class TestQueries:

    def test_list_all_ordered_by_name(self, service):
        _seed(service)
        assert _names(service.list_all()) == ["Hex Bolt", "Spring Pin", "Washer"]

    def test_list_all_breaks_name_ties_by_id(self, service):
        first = service.create(make_item(item_name="Gasket", supplier_name="A"))
        second = service.create(make_item(item_name="Gasket", supplier_name="B"))
        assert [item.id for item in service.list_all()] == [first.id, second.id]

    def test_get_by_id_missing_returns_none(self, service):
        assert service.get_by_id(999) is None

    def test_search_is_case_insensitive_substring(self, service):
        _seed(service)
        assert _names(service.search("BOLT")) == ["Hex Bolt"]
        assert _names(service.search("in")) == ["Spring Pin"]

    def test_search_treats_wildcards_literally(self, service):
        service.create(make_item(item_name="100% Cotton Rag"))
        service.create(make_item(item_name="Cotton Rag"))
        assert _names(service.search("100%")) == ["100% Cotton Rag"]
        assert service.search("_") == []

    @pytest.mark.parametrize("term", ["", "   "])
    def test_blank_search_returns_full_listing(self, service, term):
        _seed(service)
        assert service.search(term) == service.list_all()

    def test_low_stock_is_ordered_subset_of_listing(self, service):
        _seed(service)
        everything = service.list_all()
        expected = [item for item in everything if item.quantity < item.reorder_level]

        low = service.low_stock()
        assert low == expected
        assert _names(low) == ["Spring Pin", "Washer"]
        assert len({item.id for item in low}) == len(low)


class TestSummary:

    def test_empty_inventory(self, service):
        summary = service.summary()
        assert summary.total_items == 0
        assert summary.total_quantity == 0
        assert summary.low_stock_count == 0
        assert summary.total_inventory_value == Decimal("0.00")

    def test_figures_match_listing(self, service):
        _seed(service)
        items = service.list_all()
        summary = service.summary()

        assert summary.total_items == len(items) == 3
        assert summary.total_quantity == sum(item.quantity for item in items) == 43
        assert summary.low_stock_count == 2
        # 3 * 0.10 + 40 * 0.50 + 0 * 1.25
        assert summary.total_inventory_value == Decimal("20.30")
        assert summary.total_inventory_value == sum(item.unit_price * item.quantity for item in items)


class TestUpdate:

    def test_only_supplied_fields_change(self, service):
        item = service.create(make_item(quantity=5))
        before = schemas.InventoryItem.model_validate(item)

        updated = service.update(item.id, InventoryItemUpdate(quantity=12))

        assert updated.quantity == 12
        assert updated.item_name == before.item_name
        assert updated.reorder_level == before.reorder_level
        assert updated.unit_price == before.unit_price
        assert updated.supplier_name == before.supplier_name
        assert updated.created_date == before.created_date
        assert updated.updated_date >= before.updated_date

    def test_empty_patch_still_advances_timestamp(self, service):
        item = service.create(make_item())
        before = item.updated_date
        updated = service.update(item.id, InventoryItemUpdate())
        assert updated.updated_date >= before

    def test_null_and_blank_values_leave_fields_unchanged(self, service):
        item = service.create(make_item(item_name="Drill Bit", supplier_name="Bosch"))
        patch = InventoryItemUpdate.model_validate({"itemName": "", "supplierName": "  ", "quantity": None})
        updated = service.update(item.id, patch)
        assert updated.item_name == "Drill Bit"
        assert updated.supplier_name == "Bosch"
        assert updated.quantity == 50

    def test_update_recomputes_low_stock(self, service):
        item = service.create(make_item(quantity=50, reorder_level=10))
        assert service.update(item.id, InventoryItemUpdate(quantity=2)).is_low_stock is True

    def test_missing_item_raises_not_found(self, service):
        with pytest.raises(ItemNotFoundError):
            service.update(12345, InventoryItemUpdate(quantity=1))

    def test_invalid_values_rejected_and_not_applied(self, service):
        item = service.create(make_item(quantity=5))
        with pytest.raises(ValidationError) as exc_info:
            service.update(item.id, InventoryItemUpdate(quantity=-3, item_name="x"))
        assert set(exc_info.value.errors) == {"quantity", "itemName"}
        assert service.get_by_id(item.id).quantity == 5


class TestDelete:

    def test_delete_existing_item(self, service):
        item = service.create(make_item())
        assert service.delete(item.id) is True
        assert service.get_by_id(item.id) is None

    def test_delete_missing_item_returns_false(self, service):
        assert service.delete(4242) is False

    def test_ids_are_not_reused(self, service):
        first = service.create(make_item(item_name="Alpha"))
        service.delete(first.id)
        second = service.create(make_item(item_name="Beta"))
        assert second.id != first.id
