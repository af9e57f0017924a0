"""
Data formatting utilities for AutoSMS payment operations.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Union

from ..constants import DEFAULT_CURRENCY


def clean_phone_number(phone: str) -> str:
    """
    Strip formatting characters from a phone number.

    Keeps digits and a leading plus sign (e.g. "010 1521-8548" -> "01015218548").
    """
    if phone is None:
        return ''
    phone = re.sub(r'[^0-9+]', '', str(phone))
    if '+' in phone[1:]:
        phone = phone[0] + phone[1:].replace('+', '')
    return phone


def parse_amount(amount: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Parse an amount from an API response.

    Args:
        amount: Amount as returned by the API (number or string)

    Returns:
        Decimal amount, ``Decimal('0')`` when it cannot be parsed
    """
    try:
        return Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal('0')


def format_amount(amount: Union[int, float, Decimal, str]) -> str:
    """
    Format amount for display, dropping a zero fractional part.

    Args:
        amount: Amount to format

    Returns:
        Formatted amount string (e.g., "100" or "99.50")
    """
    amount = parse_amount(amount)
    if amount == amount.to_integral_value():
        return f"{amount:.0f}"
    return f"{amount:.2f}"


def format_currency(amount: Union[int, float, Decimal, str], currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format amount followed by its currency code.

    Returns:
        Formatted string (e.g., "100 EGP")
    """
    return f"{format_amount(amount)} {currency}"


def calculate_total(cart: Iterable[Dict[str, Any]]) -> Decimal:
    """
    Sum price times quantity over the cart items.

    Args:
        cart: Iterable of dicts with ``price`` and ``quantity`` keys

    Returns:
        Cart total as Decimal
    """
    total = Decimal('0')
    for item in cart:
        total += parse_amount(item.get('price', 0)) * int(item.get('quantity', 1))
    return total
