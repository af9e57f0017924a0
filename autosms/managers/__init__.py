"""
Manager modules for high-level payment orchestration.
"""

from .payment_poller import PaymentPoller, PollState, ThreadingScheduler

__all__ = [
    'PaymentPoller',
    'PollState',
    'ThreadingScheduler',
]
