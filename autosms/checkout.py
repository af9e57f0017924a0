"""
Checkout widget: renders the AutoSMS checkout markup and drives the
create order -> payment instructions -> polling -> confirmation flow.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from django.utils.dateparse import parse_datetime
from django.utils.html import format_html, format_html_join

from .constants import CheckoutStage, DEFAULT_CURRENCY
from .models import Order, OrderResult, Transaction
from .signals import checkout_payment_success
from .utils.formatters import calculate_total, format_amount, parse_amount

logger = logging.getLogger(__name__)


class CheckoutWidget:
    """
    Complete checkout flow with order creation and payment verification.

    The widget keeps track of the current stage so a view can re-render
    whatever the customer should see next.
    """

    def __init__(
        self,
        client,
        container: str = 'autosms-checkout',
        theme: str = 'light',
        currency: str = DEFAULT_CURRENCY,
        locale: str = 'en',
        show_order_summary: bool = True,
        auto_start_polling: bool = True
    ):
        self.client = client
        self.container = container
        self.theme = theme
        self.currency = currency
        self.locale = locale
        self.show_order_summary = show_order_summary
        self.auto_start_polling = auto_start_polling

        self.stage = CheckoutStage.FORM
        self.current_order: Optional[Order] = None
        self.current_poll_id: Optional[str] = None
        self.payment_instructions: Optional[str] = None
        self.transaction: Optional[Transaction] = None
        self.error: Optional[str] = None

    def calculate_total(self, cart: Iterable[Dict[str, Any]]):
        return calculate_total(cart)

    def render(self, cart: List[Dict[str, Any]]):
        """Render the checkout form for a cart."""
        total = self.calculate_total(cart)
        summary = self.order_summary_html(cart, total) if self.show_order_summary else ''

        return format_html(
            '<div id="{}" class="autosms-checkout {}" lang="{}">{}'
            '<div class="autosms-checkout-form">'
            '<h3>Customer Information</h3>'
            '<div class="autosms-form-group">'
            '<label for="autosms-customer-name">Full Name *</label>'
            '<input type="text" id="autosms-customer-name" name="customer_name" '
            'class="autosms-input" required placeholder="Enter your full name">'
            '</div>'
            '<div class="autosms-form-group">'
            '<label for="autosms-customer-phone">Phone Number *</label>'
            '<input type="tel" id="autosms-customer-phone" name="customer_phone" '
            'class="autosms-input" required placeholder="01015218548">'
            '<small class="autosms-help-text">This phone number will be used to verify your payment</small>'
            '</div>'
            '<div class="autosms-form-group">'
            '<label for="autosms-customer-email">Email (Optional)</label>'
            '<input type="email" id="autosms-customer-email" name="customer_email" '
            'class="autosms-input" placeholder="your@email.com">'
            '</div>'
            '<div class="autosms-form-group">'
            '<label for="autosms-customer-address">Address (Optional)</label>'
            '<textarea id="autosms-customer-address" name="customer_address" '
            'class="autosms-input" rows="2" placeholder="Delivery address"></textarea>'
            '</div>'
            '<button type="submit" id="autosms-create-order-btn" class="autosms-btn autosms-btn-primary">'
            'Create Order ({} {})</button>'
            '</div></div>',
            self.container,
            self.theme,
            self.locale,
            summary,
            format_amount(total),
            self.currency
        )

    def order_summary_html(self, cart: List[Dict[str, Any]], total):
        items = format_html_join(
            '',
            '<div class="autosms-cart-item">'
            '<span class="item-name">{} × {}</span>'
            '<span class="item-price">{} {}</span>'
            '</div>',
            (
                (
                    item.get('name', ''),
                    item.get('quantity', 1),
                    format_amount(parse_amount(item.get('price', 0)) * int(item.get('quantity', 1))),
                    self.currency
                )
                for item in cart
            )
        )
        return format_html(
            '<div class="autosms-order-summary">'
            '<h3>Order Summary</h3>'
            '<div class="autosms-cart-items">{}</div>'
            '<div class="autosms-cart-total"><span>Total</span>'
            '<span class="total-amount">{} {}</span></div>'
            '</div>',
            items,
            format_amount(total),
            self.currency
        )

    def build_order_data(self, cart: List[Dict[str, Any]], form_data: Dict[str, Any]) -> Dict[str, Any]:
        """Collect the order payload from submitted form fields and the cart."""
        def field(name):
            return str(form_data.get(name) or '').strip()

        return {
            'customer_name': field('customer_name'),
            'customer_phone': field('customer_phone'),
            'customer_email': field('customer_email'),
            'customer_address': field('customer_address'),
            'items': [
                {
                    'name': item.get('name'),
                    'quantity': item.get('quantity', 1),
                    'price': float(parse_amount(item.get('price', 0))),
                    'sku': item.get('sku'),
                }
                for item in cart
            ],
            # JSON cannot carry Decimal
            'total_amount': float(self.calculate_total(cart)),
            'currency': self.currency,
        }

    def create_order(self, cart: List[Dict[str, Any]], form_data: Dict[str, Any]) -> OrderResult:
        """
        Create the order from submitted form data.

        On success the widget moves to the waiting stage and, with
        ``auto_start_polling``, starts polling for the payment.
        """
        order_data = self.build_order_data(cart, form_data)
        result = self.client.create_order(order_data)

        if not result.success:
            self.error = result.error or 'Failed to create order'
            logger.warning(f"Checkout order creation failed: {self.error}")
            return result

        self.error = None
        self.current_order = result.order
        if not self.current_order.customer_phone:
            self.current_order.customer_phone = order_data['customer_phone']
        self.payment_instructions = result.payment_instructions
        self.stage = CheckoutStage.WAITING

        if self.auto_start_polling:
            self.start_payment_polling(result.order)
        return result

    def start_payment_polling(self, order: Order) -> str:
        self.current_poll_id = self.client.start_payment_polling(
            order.id,
            order.customer_phone,
            on_success=self._handle_payment_success,
            on_timeout=self._handle_payment_timeout
        )
        return self.current_poll_id

    def poll_counter_text(self) -> str:
        """Progress text such as "Checking... (3/60)"."""
        attempts = 0
        max_attempts = self.client.config.max_poll_attempts
        if self.current_poll_id:
            state = self.client.poller.get_state(self.current_poll_id)
            if state is not None:
                attempts, max_attempts = state.attempts, state.max_attempts
        return f"Checking... ({attempts}/{max_attempts})"

    def payment_instructions_html(self):
        order = self.current_order
        if order is None:
            return ''

        instructions = ''
        if self.payment_instructions:
            instructions = format_html('<div class="autosms-instructions">{}</div>', self.payment_instructions)

        return format_html(
            '<div class="autosms-payment-waiting">'
            '<div class="autosms-payment-instructions">'
            '<h3>Payment Instructions</h3>'
            '<div id="autosms-payment-details"><div class="autosms-payment-info">'
            '<p><strong>Order ID:</strong> #{}</p>'
            '<p><strong>Amount to Pay:</strong> {} {}</p>'
            '<p><strong>Payment Phone:</strong> {}</p>'
            '{}'
            '</div></div>'
            '<div class="autosms-polling-status">'
            '<div class="autosms-spinner"></div>'
            '<p>Waiting for payment confirmation...</p>'
            '<small id="autosms-poll-counter">{}</small>'
            '</div></div></div>',
            order.id,
            format_amount(order.total_amount),
            order.currency or self.currency,
            order.customer_phone or '',
            instructions,
            self.poll_counter_text()
        )

    def payment_success_html(self):
        order = self.current_order
        transaction = self.transaction
        if order is None or transaction is None:
            return ''

        parsed = parse_datetime(transaction.transaction_date) if transaction.transaction_date else None
        transaction_date = parsed.strftime('%Y-%m-%d %H:%M') if parsed else (transaction.transaction_date or '')

        return format_html(
            '<div class="autosms-payment-success">'
            '<div class="autosms-success-icon">✓</div>'
            '<h3>Payment Confirmed!</h3>'
            '<div id="autosms-success-message">'
            '<p>Order #{} has been confirmed!</p>'
            '<p>Payment: {} {}</p>'
            '<p>Transaction Date: {}</p>'
            '</div></div>',
            order.id,
            format_amount(transaction.amount),
            transaction.currency or '',
            transaction_date
        )

    def payment_timeout_html(self):
        order_id = self.current_order.id if self.current_order else ''
        return format_html(
            '<div class="autosms-polling-status">'
            '<p class="autosms-warning">⚠️ Payment not detected yet</p>'
            '<p>Please contact support with your Order ID: #{}</p>'
            '</div>',
            order_id
        )

    def render_stage(self, cart: Optional[List[Dict[str, Any]]] = None):
        """Render whatever matches the current stage."""
        if self.stage == CheckoutStage.WAITING:
            return self.payment_instructions_html()
        if self.stage == CheckoutStage.SUCCESS:
            return self.payment_success_html()
        if self.stage == CheckoutStage.TIMEOUT:
            return self.payment_timeout_html()
        return self.render(cart or [])

    def _handle_payment_success(self, order: Optional[Order], transaction: Transaction):
        if order is not None:
            self.current_order = order
        self.transaction = transaction
        self.stage = CheckoutStage.SUCCESS
        self.current_poll_id = None
        logger.info(f"Checkout payment confirmed for order: {self.current_order.id}")

        checkout_payment_success.send(
            sender=self.__class__,
            widget=self,
            order=self.current_order,
            transaction=transaction
        )

    def _handle_payment_timeout(self):
        self.stage = CheckoutStage.TIMEOUT
        self.current_poll_id = None

    def destroy(self):
        """Stop polling and reset the widget to the form stage."""
        if self.current_poll_id:
            self.client.stop_payment_polling(self.current_poll_id)
        self.current_poll_id = None
        self.current_order = None
        self.payment_instructions = None
        self.transaction = None
        self.stage = CheckoutStage.FORM

