"""
Service modules for AutoSMS payment operations.
"""

from .transaction_service import TransactionService
from .order_service import OrderService

__all__ = [
    'TransactionService',
    'OrderService',
]
