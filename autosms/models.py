"""
Data records exchanged with the AutoSMS Payment Hub.

These are plain in-memory records; the SDK does not persist anything.
"""

import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .exceptions import MalformedResponseError
from .utils.formatters import parse_amount


def _parse_quantity(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 1


@dataclass
class RequestResult:
    """Raw outcome of a single API request."""
    body: bytes
    headers: Dict[str, str]
    status_code: int

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    def json(self) -> Any:
        """Parse the body as JSON, raising MalformedResponseError when it is not."""
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise MalformedResponseError(
                f"Invalid JSON response: {str(e)}",
                error_code=self.status_code,
                response_data=self.text
            )


@dataclass
class Transaction:
    """A payment SMS matched by the remote service."""
    transaction_id: Optional[str] = None
    phone_number: Optional[str] = None
    amount: Decimal = Decimal('0')
    currency: Optional[str] = None
    sender_name: Optional[str] = None
    transaction_date: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        transaction_id = data.get('transaction_id', data.get('id'))
        return cls(
            transaction_id=str(transaction_id) if transaction_id is not None else None,
            phone_number=data.get('phone_number'),
            amount=parse_amount(data.get('amount', 0)),
            currency=data.get('currency'),
            sender_name=data.get('sender_name'),
            transaction_date=data.get('transaction_date'),
            raw=data
        )


@dataclass
class TransactionLookup:
    """Response wrapper of the verify-transaction endpoint."""
    success: bool
    transaction: Optional[Transaction] = None
    message: Optional[str] = None
    raw: Any = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, data: Any) -> 'TransactionLookup':
        if not isinstance(data, dict):
            return cls(success=False, raw=data)

        transaction = data.get('transaction')
        return cls(
            success=bool(data.get('success')),
            transaction=Transaction.from_dict(transaction) if isinstance(transaction, dict) else None,
            message=data.get('message'),
            raw=data
        )

    @property
    def found(self) -> bool:
        return self.success and self.transaction is not None


@dataclass
class OrderItem:
    name: str
    quantity: int = 1
    price: Decimal = Decimal('0')
    sku: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrderItem':
        return cls(
            name=data.get('name', ''),
            quantity=_parse_quantity(data.get('quantity')),
            price=parse_amount(data.get('price', 0)),
            sku=data.get('sku')
        )

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class Order:
    """An order registered with the remote service."""
    id: Any
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    total_amount: Decimal = Decimal('0')
    currency: Optional[str] = None
    status: Optional[str] = None
    items: List[OrderItem] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Order':
        return cls(
            id=data.get('id'),
            customer_name=data.get('customer_name'),
            customer_phone=data.get('customer_phone'),
            total_amount=parse_amount(data.get('total_amount', 0)),
            currency=data.get('currency'),
            status=data.get('status'),
            items=[OrderItem.from_dict(item) for item in data.get('items') or [] if isinstance(item, dict)],
            raw=data
        )


@dataclass
class OrderResult:
    """Outcome of an order creation request."""
    success: bool
    order: Optional[Order] = None
    payment_instructions: Optional[str] = None
    error: Optional[str] = None


@dataclass
class PaymentVerification:
    """Outcome of an order payment verification request."""
    success: bool
    order: Optional[Order] = None
    transaction: Optional[Transaction] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @property
    def payment_found(self) -> bool:
        return self.success and self.transaction is not None
