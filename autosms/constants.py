"""
Constants and enums for AutoSMS Payment Hub operations.
"""

from enum import Enum


class PollStatus(str, Enum):
    """Payment poll states."""
    ACTIVE = "ACTIVE"
    SUCCEEDED = "SUCCEEDED"
    TIMED_OUT = "TIMED_OUT"
    STOPPED = "STOPPED"


class CheckoutStage(str, Enum):
    """Checkout widget stages."""
    FORM = "FORM"
    WAITING = "WAITING"
    SUCCESS = "SUCCESS"
    TIMEOUT = "TIMEOUT"


# API Endpoints
class APIEndpoints:
    """AutoSMS API endpoints."""
    VERIFY_TRANSACTION = "/api/auto-sms/verify-transaction"

    # Order endpoints
    CREATE_ORDER = "/api/auto-sms/orders/create"
    VERIFY_ORDER_PAYMENT = "/api/auto-sms/orders/verify-payment"
    ORDER_STATUS = "/api/auto-sms/orders/{order_id}"
    CANCEL_ORDER = "/api/auto-sms/orders/{order_id}/cancel"


# Signature headers (lowercased, as stored in RequestResult.headers)
RESPONSE_SIGNATURE_HEADER = "x-autosms-signature"
WEBHOOK_SIGNATURE_HEADER = "X-Webhook-Signature"

# Order validation
REQUIRED_ORDER_FIELDS = ('customer_name', 'customer_phone', 'items', 'total_amount')

# Default settings
DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_POLL_INTERVAL = 5.0  # seconds
DEFAULT_MAX_POLL_ATTEMPTS = 60
DEFAULT_CURRENCY = "EGP"
