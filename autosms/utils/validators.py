"""
Validation utilities for AutoSMS payment operations.
"""

from decimal import Decimal
from typing import Any, Dict

from ..constants import REQUIRED_ORDER_FIELDS
from ..exceptions import ValidationError
from .formatters import clean_phone_number, parse_amount


def validate_phone_number(phone: str) -> str:
    """
    Validate a phone number and return it without formatting characters.

    Args:
        phone: Phone number to validate

    Returns:
        Cleaned phone number

    Raises:
        ValidationError: If phone number is empty or has no digits
    """
    if not phone:
        raise ValidationError("Phone number is required")

    cleaned = clean_phone_number(phone)
    if not cleaned.lstrip('+'):
        raise ValidationError(f"Phone number must contain digits. Got: {phone}")

    return cleaned


def validate_order_id(order_id: Any) -> str:
    """
    Validate order identifier.

    Raises:
        ValidationError: If the identifier is empty
    """
    if order_id is None or not str(order_id).strip():
        raise ValidationError("Order ID is required")
    return str(order_id).strip()


def validate_order_data(order_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate order payload before it is sent to the API.

    Args:
        order_data: Order fields (customer_name, customer_phone, items, total_amount, ...)

    Returns:
        The order data, unchanged

    Raises:
        ValidationError: If required fields are missing or inconsistent
    """
    if not isinstance(order_data, dict):
        raise ValidationError("Order data must be a mapping")

    missing = [name for name in REQUIRED_ORDER_FIELDS if not order_data.get(name)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    items = order_data['items']
    if not isinstance(items, (list, tuple)) or len(items) == 0:
        raise ValidationError("Order must have at least one item")

    if parse_amount(order_data['total_amount']) <= Decimal('0'):
        raise ValidationError("Total amount must be greater than 0")

    return order_data
