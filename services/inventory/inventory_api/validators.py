"""
Business validation for inventory item payloads.

Every rule is checked and every violation is reported, so a caller can fix
all fields in one round trip.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict

ITEM_NAME_MIN_LENGTH = 3
ITEM_NAME_MAX_LENGTH = 200

# Largest values the integer and NUMERIC(18, 2) columns can hold
MAX_COUNT      = 2**31 - 1
MAX_UNIT_PRICE = Decimal("9999999999999999.99")

# Model attribute -> field name as seen by API clients
WIRE_NAMES = {
    "item_name": "itemName",
    "quantity": "quantity",
    "reorder_level": "reorderLevel",
    "unit_price": "unitPrice",
    "supplier_name": "supplierName",
}

REQUIRED_MESSAGES = {
    "item_name": "Item name is required",
    "quantity": "Quantity is required",
    "reorder_level": "Reorder level is required",
    "unit_price": "Unit price is required",
    "supplier_name": "Supplier name is required",
}


def _check_item_name(value: str):
    if not value.strip():
        return REQUIRED_MESSAGES["item_name"]
    if not ITEM_NAME_MIN_LENGTH <= len(value) <= ITEM_NAME_MAX_LENGTH:
        return f"Item name must be between {ITEM_NAME_MIN_LENGTH} and {ITEM_NAME_MAX_LENGTH} characters"
    return None


def _check_bounded(label: str, maximum):
    def check(value):
        if isinstance(value, Decimal) and not value.is_finite():
            return f"{label} must be a finite number"
        if value < 0:
            return f"{label} must be non-negative"
        if value > maximum:
            return f"{label} must be between 0 and {maximum}"
        return None
    return check


def _check_supplier_name(value: str):
    if not value.strip():
        return REQUIRED_MESSAGES["supplier_name"]
    return None


RULES = {
    "item_name": _check_item_name,
    "quantity": _check_bounded("Quantity", MAX_COUNT),
    "reorder_level": _check_bounded("Reorder level", MAX_COUNT),
    "unit_price": _check_bounded("Unit price", MAX_UNIT_PRICE),
    "supplier_name": _check_supplier_name,
}


def validate_item_fields(values: Dict[str, Any], partial: bool = False) -> Dict[str, str]:
    """
    Validate inventory item fields against the business rules.
    
    Args:
        values: Field values keyed by model attribute name
        partial: When True only the supplied fields are checked (updates);
            otherwise a missing or None field is reported as required
    
    Returns:
        Dict of wire field name -> error message, empty when everything is valid
    """
    errors = {}
    for field, rule in RULES.items():
        value = values.get(field)
        if value is None:
            if not partial:
                errors[WIRE_NAMES[field]] = REQUIRED_MESSAGES[field]
            continue
        message = rule(value)
        if message:
            errors[WIRE_NAMES[field]] = message
    return errors


def normalize_price(value: Decimal) -> Decimal:
    """Round a unit price to the two fractional digits the store keeps."""
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
