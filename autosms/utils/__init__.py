"""
Utility modules for AutoSMS payment operations.
"""

from .signing import sign, verify, verify_webhook_signature
from .validators import (
    validate_phone_number,
    validate_order_id,
    validate_order_data
)
from .formatters import (
    clean_phone_number,
    parse_amount,
    format_amount,
    format_currency,
    calculate_total
)

__all__ = [
    'sign',
    'verify',
    'verify_webhook_signature',
    'validate_phone_number',
    'validate_order_id',
    'validate_order_data',
    'clean_phone_number',
    'parse_amount',
    'format_amount',
    'format_currency',
    'calculate_total',
]
