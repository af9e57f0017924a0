"""
Order service for the AutoSMS Payment Hub.
Handles order creation, payment verification, status queries and cancellation.
"""

import logging
from typing import Dict, Any, Optional

from ..constants import APIEndpoints
from ..exceptions import AutoSMSException, MalformedResponseError
from ..models import Order, OrderResult, PaymentVerification, Transaction
from ..signals import order_created, payment_verified
from ..utils.validators import validate_order_data, validate_order_id, validate_phone_number
from .base import BaseService

logger = logging.getLogger(__name__)


def _parse_record(model, data: Any, name: str):
    """Build ``model`` from a response field, raising MalformedResponseError on bad data."""
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Malformed {name} in response", response_data=data)
    try:
        return model.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise MalformedResponseError(f"Malformed {name} in response: {str(e)}", response_data=data)


class OrderService(BaseService):
    """
    Service for order operations.
    Errors are recorded in ``last_error`` and reported through the return value.
    """

    def create_order(self, order_data: Dict[str, Any]) -> OrderResult:
        """
        Create a new order.

        Args:
            order_data: Order fields; customer_name, customer_phone, items
                and total_amount are required

        Returns:
            OrderResult with the created order and payment instructions
        """
        self._reset_error()
        customer = order_data.get('customer_name') if isinstance(order_data, dict) else None
        logger.info(f"Creating order for customer: {customer}")

        try:
            validate_order_data(order_data)
            response = self.http_client.post(APIEndpoints.CREATE_ORDER, order_data).json()

            if not isinstance(response, dict) or not (response.get('success') and response.get('order')):
                message = response.get('message') if isinstance(response, dict) else None
                raise AutoSMSException(message or 'Failed to create order', response_data=response)

            order = _parse_record(Order, response['order'], 'order')
        except AutoSMSException as e:
            self._record_error(e, "Order creation failed")
            return OrderResult(success=False, error=e.message)

        instructions = response.get('payment_instructions')
        logger.info(f"Order created successfully. Order ID: {order.id}")

        order_created.send(
            sender=self.__class__,
            order=order,
            payment_instructions=instructions
        )
        return OrderResult(success=True, order=order, payment_instructions=instructions)

    def verify_order_payment(self, order_id: Any, phone_number: str) -> PaymentVerification:
        """
        Verify payment for an order.

        Args:
            order_id: Order identifier
            phone_number: Phone number the payment is expected from

        Returns:
            PaymentVerification; ``payment_found`` is True once the payment arrived
        """
        self._reset_error()
        logger.info(f"Verifying payment for order: {order_id}, phone: {phone_number}")

        try:
            validate_order_id(order_id)
            phone = validate_phone_number(phone_number)
            response = self.http_client.post(
                APIEndpoints.VERIFY_ORDER_PAYMENT,
                {'order_id': order_id, 'phone_number': phone}
            ).json()

            if not isinstance(response, dict):
                return PaymentVerification(success=False, message='Payment not found')

            if not (response.get('success') and response.get('payment_verified')):
                return PaymentVerification(
                    success=False,
                    message=response.get('message') or 'Payment not found'
                )

            order = response.get('order')
            if order is not None:
                order = _parse_record(Order, order, 'order')
            transaction = response.get('transaction')
            if transaction is not None:
                transaction = _parse_record(Transaction, transaction, 'transaction')
        except AutoSMSException as e:
            self._record_error(e, "Payment verification failed")
            return PaymentVerification(success=False, error=e.message)

        logger.info(f"Payment verified for order: {order_id}")

        payment_verified.send(sender=self.__class__, order=order, transaction=transaction)
        return PaymentVerification(
            success=True,
            order=order,
            transaction=transaction,
            message=response.get('message')
        )

    def get_order_status(self, order_id: Any) -> Optional[Order]:
        """
        Get order status.

        Returns:
            Order, or None if the order could not be retrieved
        """
        self._reset_error()

        try:
            validated_id = validate_order_id(order_id)
            endpoint = APIEndpoints.ORDER_STATUS.format(order_id=validated_id)
            response = self.http_client.get(endpoint).json()

            if not (isinstance(response, dict) and response.get('success')):
                return None
            order = _parse_record(Order, response.get('order'), 'order')
        except AutoSMSException as e:
            self._record_error(e, "Failed to get order status")
            return None

        logger.info(f"Order status retrieved. Order: {order.id}, Status: {order.status}")
        return order

    def cancel_order(self, order_id: Any) -> Dict[str, Any]:
        """
        Cancel an order.

        Returns:
            The API response, or ``{'success': False, 'error': ...}`` on failure
        """
        self._reset_error()
        logger.info(f"Cancelling order: {order_id}")

        try:
            validated_id = validate_order_id(order_id)
            endpoint = APIEndpoints.CANCEL_ORDER.format(order_id=validated_id)
            response = self.http_client.post(endpoint).json()
        except AutoSMSException as e:
            self._record_error(e, "Failed to cancel order")
            return {'success': False, 'error': e.message}

        if not isinstance(response, dict):
            return {'success': False, 'error': 'Unexpected response', 'response': response}
        return response
