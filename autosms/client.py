"""
High-level AutoSMS client combining transaction, order and polling operations.
"""

import logging
from typing import Any, Callable, Dict, Optional

from .config import ClientConfig
from .managers.payment_poller import PaymentPoller
from .models import Order, OrderResult, PaymentVerification, TransactionLookup
from .services.order_service import OrderService
from .services.transaction_service import TransactionService
from .utils.http_client import HTTPClient
from .utils.signing import verify_webhook_signature
from .webhooks import handle_autosms_webhook

logger = logging.getLogger(__name__)


class AutoSMSClient:
    """
    Client for the AutoSMS Payment Hub.

    Failed calls return None / an unsuccessful result and leave the reason
    in ``get_last_error()``. An instance is meant for one caller at a time;
    use separate instances for concurrent operations.

    Example:
        client = AutoSMSClient('https://yourdomain.com', 'api-token', 'verification-secret')
        lookup = client.verify_transaction('01015218548')
        if lookup is None:
            print(client.get_last_error())
    """

    verify_webhook_signature = staticmethod(verify_webhook_signature)
    handle_webhook = staticmethod(handle_autosms_webhook)

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_token: Optional[str] = None,
        verification_secret: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        scheduler=None
    ):
        """
        Initialize AutoSMS client.

        Args:
            api_url: Your AutoSMS API URL (e.g., https://yourdomain.com)
            api_token: Your API token for authentication
            verification_secret: Secret for response HMAC validation
            config: Complete configuration; takes precedence over the other arguments
            scheduler: Scheduler used by the payment poller
        """
        self.config = config or ClientConfig(api_url, api_token, verification_secret)
        self.http_client = HTTPClient(
            self.config.base_url,
            self.config.api_token,
            timeout=self.config.timeout,
            csrf_token=self.config.csrf_token,
            ca_bundle=self.config.ca_bundle,
            strict_status=self.config.strict_status
        )
        self.transactions = TransactionService(self.config, self.http_client)
        self.orders = OrderService(self.config, self.http_client)
        self.poller = PaymentPoller(
            self.orders.verify_order_payment,
            interval=self.config.poll_interval,
            max_attempts=self.config.max_poll_attempts,
            scheduler=scheduler
        )
        self._last_service = None
        logger.info(f"AutoSMS client initialized for {self.config.base_url}")

    @classmethod
    def from_settings(cls, scheduler=None, **overrides) -> 'AutoSMSClient':
        """Create a client configured from Django settings."""
        return cls(config=ClientConfig.from_settings(**overrides), scheduler=scheduler)

    def verify_transaction(self, phone_number: str, verify_signature: bool = True) -> Optional[TransactionLookup]:
        """Verify a transaction by phone number. Returns None on failure."""
        self._last_service = self.transactions
        return self.transactions.verify_transaction(phone_number, verify_signature)

    def create_order(self, order_data: Dict[str, Any]) -> OrderResult:
        self._last_service = self.orders
        return self.orders.create_order(order_data)

    def verify_order_payment(self, order_id: Any, phone_number: str) -> PaymentVerification:
        self._last_service = self.orders
        return self.orders.verify_order_payment(order_id, phone_number)

    def get_order_status(self, order_id: Any) -> Optional[Order]:
        self._last_service = self.orders
        return self.orders.get_order_status(order_id)

    def cancel_order(self, order_id: Any) -> Dict[str, Any]:
        self._last_service = self.orders
        return self.orders.cancel_order(order_id)

    def start_payment_polling(
        self,
        order_id: Any,
        phone_number: str,
        interval: Optional[float] = None,
        max_attempts: Optional[int] = None,
        on_success: Optional[Callable] = None,
        on_timeout: Optional[Callable] = None,
        on_error: Optional[Callable] = None
    ) -> str:
        """Start polling for payment on an order. Returns the poll id."""
        return self.poller.start(
            order_id,
            phone_number,
            interval=interval,
            max_attempts=max_attempts,
            on_success=on_success,
            on_timeout=on_timeout,
            on_error=on_error
        )

    def stop_payment_polling(self, poll_id: str) -> None:
        self.poller.stop(poll_id)

    def stop_all_polls(self) -> None:
        self.poller.stop_all()

    def get_last_error(self) -> Optional[str]:
        """Get the error message of the most recent call, if it failed."""
        if self._last_service is None:
            return None
        return self._last_service.last_error

    @property
    def last_exception(self):
        if self._last_service is None:
            return None
        return self._last_service.last_exception

    def set_timeout(self, seconds: int) -> None:
        """Set request timeout in seconds."""
        self.config.timeout = seconds
        self.http_client.timeout = self.config.timeout

    def close(self) -> None:
        """Stop polling and close the HTTP session."""
        self.poller.stop_all()
        self.http_client.close()
