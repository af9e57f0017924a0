"""
Signals for AutoSMS payment events.
"""
from django.dispatch import Signal

# Sent when the API accepts a new order
# Provides arguments:
# - order: The Order record
# - payment_instructions: Instruction text returned by the API (may be None)
order_created = Signal()

# Sent when an order payment is confirmed
# Provides arguments: order, transaction
payment_verified = Signal()

# Sent by the default webhook view for every verified webhook
# Provides arguments: payload (parsed JSON body)
webhook_received = Signal()

# Sent by the checkout widget when polling confirms the payment
# Provides arguments: widget, order, transaction
checkout_payment_success = Signal()
