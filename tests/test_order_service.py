"""
Tests for order creation, payment verification, status and cancellation.
"""

from unittest.mock import Mock

import pytest

from autosms.exceptions import HttpStatusError, MalformedResponseError, ValidationError
from autosms.services.order_service import OrderService
from autosms.signals import order_created, payment_verified
from helpers import make_response


@pytest.fixture
def order_data():
    return {
        "customer_name": "Mona Adel",
        "customer_phone": "01015218548",
        "items": [{"name": "Notebook", "quantity": 2, "price": 50}],
        "total_amount": 100,
        "currency": "EGP",
    }


@pytest.fixture
def service(config):
    service = OrderService(config)
    service.http_client.session.request = Mock()
    return service


def respond(service, status=200, body=None):
    service.http_client.session.request.return_value = make_response(status, body if body is not None else {})


class TestCreateOrder:

    def test_create_order_success(self, service, order_data):
        respond(service, body={
            "success": True,
            "order": {"id": 42, "customer_phone": "01015218548", "total_amount": "100.00", "currency": "EGP"},
            "payment_instructions": "Send 100 EGP to 0100000000",
        })
        received = []

        def listener(sender, order, payment_instructions, **kwargs):
            received.append((order.id, payment_instructions))

        order_created.connect(listener)
        try:
            result = service.create_order(order_data)
        finally:
            order_created.disconnect(listener)

        assert result.success is True
        assert result.order.id == 42
        assert result.order.total_amount == 100
        assert result.payment_instructions == "Send 100 EGP to 0100000000"
        assert received == [(42, "Send 100 EGP to 0100000000")]

        args, kwargs = service.http_client.session.request.call_args
        assert args[1].endswith("/api/auto-sms/orders/create")
        assert kwargs["json"] == order_data

    @pytest.mark.parametrize("missing", ["customer_name", "customer_phone", "items", "total_amount"])
    def test_missing_required_field(self, service, order_data, missing):
        del order_data[missing]

        result = service.create_order(order_data)

        assert result.success is False
        assert missing in result.error
        assert isinstance(service.last_exception, ValidationError)
        service.http_client.session.request.assert_not_called()

    def test_empty_items(self, service, order_data):
        order_data["items"] = "not a list"

        result = service.create_order(order_data)

        assert result.error == "Order must have at least one item"

    def test_non_positive_total(self, service, order_data):
        order_data["total_amount"] = -5

        result = service.create_order(order_data)

        assert result.error == "Total amount must be greater than 0"

    def test_api_rejects_order(self, service, order_data):
        respond(service, body={"success": False, "message": "Phone not allowed"})

        result = service.create_order(order_data)

        assert result.success is False
        assert result.error == "Phone not allowed"
        assert service.last_error == "Phone not allowed"

    def test_http_error(self, service, order_data):
        respond(service, 422, {"message": "invalid"})

        result = service.create_order(order_data)

        assert result.success is False
        assert isinstance(service.last_exception, HttpStatusError)

    @pytest.mark.parametrize("quantity", [None, "two", []])
    def test_odd_item_quantity_defaults(self, service, order_data, quantity):
        respond(service, body={
            "success": True,
            "order": {"id": 1, "items": [{"name": "Notebook", "quantity": quantity, "price": 50}]},
        })

        result = service.create_order(order_data)

        assert result.success is True
        assert result.order.items[0].quantity == 1
        assert service.last_error is None

    @pytest.mark.parametrize("order", [7, "42", ["id", 1], {"id": 1, "items": 5}])
    def test_malformed_order_in_response(self, service, order_data, order):
        respond(service, body={"success": True, "order": order})
        received = []

        def listener(sender, **kwargs):
            received.append(kwargs)

        order_created.connect(listener)
        try:
            result = service.create_order(order_data)
        finally:
            order_created.disconnect(listener)

        assert result.success is False
        assert result.error.startswith("Malformed order in response")
        assert service.last_error == result.error
        assert isinstance(service.last_exception, MalformedResponseError)
        assert received == []


class TestVerifyOrderPayment:

    def test_payment_verified(self, service):
        respond(service, body={
            "success": True,
            "payment_verified": True,
            "order": {"id": 42, "status": "paid"},
            "transaction": {"transaction_id": "T-1", "amount": 100, "currency": "EGP"},
        })
        received = []

        def listener(sender, order, transaction, **kwargs):
            received.append((order.id, transaction.transaction_id))

        payment_verified.connect(listener)
        try:
            result = service.verify_order_payment(42, "01015218548")
        finally:
            payment_verified.disconnect(listener)

        assert result.success is True
        assert result.payment_found is True
        assert result.order.status == "paid"
        assert result.transaction.amount == 100
        assert received == [(42, "T-1")]
        assert service.http_client.session.request.call_args.kwargs["json"] == {
            "order_id": 42,
            "phone_number": "01015218548",
        }

    def test_payment_not_found_yet(self, service):
        respond(service, body={"success": True, "payment_verified": False})

        result = service.verify_order_payment(42, "01015218548")

        assert result.success is False
        assert result.payment_found is False
        assert result.message == "Payment not found"
        assert result.error is None

    def test_transport_failure_sets_error(self, service):
        respond(service, 503, b"maintenance")

        result = service.verify_order_payment(42, "01015218548")

        assert result.success is False
        assert result.error == "HTTP error 503: maintenance"
        assert service.last_error == result.error

    def test_null_item_quantity_still_verifies(self, service):
        respond(service, body={
            "success": True,
            "payment_verified": True,
            "order": {"id": 42, "items": [{"name": "Notebook", "quantity": None}]},
            "transaction": {"transaction_id": "T-1", "amount": 100},
        })

        result = service.verify_order_payment(42, "01015218548")

        assert result.payment_found is True
        assert result.order.items[0].quantity == 1

    @pytest.mark.parametrize("field, value", [
        ("order", 42),
        ("order", {"id": 42, "items": 5}),
        ("transaction", "T-1"),
        ("transaction", [100]),
    ])
    def test_malformed_verified_payment(self, service, field, value):
        body = {
            "success": True,
            "payment_verified": True,
            "order": {"id": 42},
            "transaction": {"transaction_id": "T-1", "amount": 100},
        }
        body[field] = value
        respond(service, body=body)
        received = []

        def listener(sender, **kwargs):
            received.append(kwargs)

        payment_verified.connect(listener)
        try:
            result = service.verify_order_payment(42, "01015218548")
        finally:
            payment_verified.disconnect(listener)

        assert result.success is False
        assert result.payment_found is False
        assert result.error.startswith(f"Malformed {field} in response")
        assert service.last_error == result.error
        assert received == []


class TestOrderStatusAndCancel:

    def test_get_order_status(self, service):
        respond(service, body={"success": True, "order": {"id": 7, "status": "pending"}})

        order = service.get_order_status(7)

        assert order.id == 7
        assert order.status == "pending"
        args = service.http_client.session.request.call_args.args
        assert args == ("GET", "https://autosms.example.com/api/auto-sms/orders/7")

    def test_get_order_status_unsuccessful(self, service):
        respond(service, body={"success": False})

        assert service.get_order_status(7) is None
        assert service.last_error is None

    def test_get_order_status_error(self, service):
        respond(service, 404, b"missing")

        assert service.get_order_status(7) is None
        assert service.last_error == "HTTP error 404: missing"

    @pytest.mark.parametrize("order", [None, 7, {"id": 7, "items": 5}])
    def test_get_order_status_malformed_order(self, service, order):
        respond(service, body={"success": True, "order": order})

        assert service.get_order_status(7) is None
        assert service.last_error.startswith("Malformed order in response")
        assert isinstance(service.last_exception, MalformedResponseError)

    def test_cancel_order(self, service):
        respond(service, body={"success": True, "message": "Cancelled"})

        assert service.cancel_order(7) == {"success": True, "message": "Cancelled"}
        args = service.http_client.session.request.call_args.args
        assert args == ("POST", "https://autosms.example.com/api/auto-sms/orders/7/cancel")

    def test_cancel_order_failure(self, service):
        respond(service, 500, b"boom")

        assert service.cancel_order(7) == {"success": False, "error": "HTTP error 500: boom"}

    def test_cancel_requires_order_id(self, service):
        result = service.cancel_order("")

        assert result["success"] is False
        assert result["error"] == "Order ID is required"
