"""
Payment poller: repeatedly asks the API whether an order has been paid.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from ..constants import PollStatus, DEFAULT_POLL_INTERVAL, DEFAULT_MAX_POLL_ATTEMPTS
from ..models import PaymentVerification

logger = logging.getLogger(__name__)


class ThreadingScheduler:
    """Runs callbacks after a delay on daemon timer threads."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


@dataclass
class PollState:
    """Bookkeeping for one (order, phone) poll."""
    poll_id: str
    order_id: Any
    phone_number: str
    interval: float
    max_attempts: int
    on_success: Optional[Callable] = None
    on_timeout: Optional[Callable] = None
    on_error: Optional[Callable] = None
    attempts: int = 0
    status: PollStatus = PollStatus.ACTIVE
    handle: Any = field(default=None, repr=False)


def make_poll_id(order_id: Any, phone_number: str) -> str:
    return f"{order_id}-{phone_number}"


class PaymentPoller:
    """
    Polls a payment verification operation until the payment is found
    or the attempt budget runs out.

    Each poll is keyed by order and phone number; starting a poll for a
    key that is already polling replaces the old poll. A tick always
    finishes its verification call before the next tick for that key is
    scheduled. Stopping a poll only prevents further ticks, and a tick
    that completes after its poll was stopped or replaced fires no
    callbacks.
    """

    def __init__(
        self,
        verify: Callable[[Any, str], PaymentVerification],
        interval: float = DEFAULT_POLL_INTERVAL,
        max_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS,
        scheduler=None
    ):
        """
        Args:
            verify: Callable taking (order_id, phone_number) and returning
                a PaymentVerification
            interval: Default seconds between ticks
            max_attempts: Default number of ticks before giving up
            scheduler: Object with ``schedule(delay, callback)`` returning a
                handle with ``cancel()``; defaults to ThreadingScheduler
        """
        self._verify = verify
        self.interval = interval
        self.max_attempts = max_attempts
        self._scheduler = scheduler or ThreadingScheduler()
        self._polls: Dict[str, PollState] = {}
        self._lock = threading.Lock()

    def start(
        self,
        order_id: Any,
        phone_number: str,
        interval: Optional[float] = None,
        max_attempts: Optional[int] = None,
        on_success: Optional[Callable] = None,
        on_timeout: Optional[Callable] = None,
        on_error: Optional[Callable] = None
    ) -> str:
        """
        Start polling for payment on an order.

        Args:
            order_id: Order identifier
            phone_number: Phone number the payment is expected from
            interval: Seconds between ticks (defaults to the poller's)
            max_attempts: Ticks before timing out (defaults to the poller's)
            on_success: Called with (order, transaction) once the payment is found
            on_timeout: Called without arguments when attempts run out
            on_error: Called with the error message of a failed attempt

        Returns:
            Poll identifier, usable with ``stop``
        """
        poll_id = make_poll_id(order_id, phone_number)
        state = PollState(
            poll_id=poll_id,
            order_id=order_id,
            phone_number=phone_number,
            interval=interval or self.interval,
            max_attempts=max_attempts or self.max_attempts,
            on_success=on_success,
            on_timeout=on_timeout,
            on_error=on_error
        )

        with self._lock:
            self._stop_locked(poll_id)
            self._polls[poll_id] = state
            state.handle = self._scheduler.schedule(state.interval, lambda: self._tick(state))

        logger.info(
            f"Starting payment polling: {poll_id} "
            f"(every {state.interval}s, max {state.max_attempts} attempts)"
        )
        return poll_id

    def stop(self, poll_id: str) -> None:
        """Stop payment polling. Unknown or finished polls are ignored."""
        with self._lock:
            stopped = self._stop_locked(poll_id)
        if stopped:
            logger.info(f"Stopped payment polling: {poll_id}")

    def stop_all(self) -> None:
        """Stop all active polls."""
        with self._lock:
            for poll_id in list(self._polls):
                self._stop_locked(poll_id)
        logger.info("Stopped all polls")

    def is_active(self, poll_id: str) -> bool:
        with self._lock:
            return poll_id in self._polls

    def get_state(self, poll_id: str) -> Optional[PollState]:
        with self._lock:
            return self._polls.get(poll_id)

    @property
    def active_polls(self):
        with self._lock:
            return list(self._polls)

    def _stop_locked(self, poll_id: str) -> bool:
        state = self._polls.pop(poll_id, None)
        if state is None:
            return False
        state.status = PollStatus.STOPPED
        if state.handle is not None:
            state.handle.cancel()
        return True

    def _is_current(self, state: PollState) -> bool:
        return self._polls.get(state.poll_id) is state and state.status == PollStatus.ACTIVE

    def _tick(self, state: PollState) -> None:
        with self._lock:
            if not self._is_current(state):
                return
            state.attempts += 1
            attempt = state.attempts

        logger.debug(f"Polling attempt {attempt}/{state.max_attempts} for {state.poll_id}")

        try:
            result = self._verify(state.order_id, state.phone_number)
        except Exception as e:
            logger.exception(f"Payment verification raised during polling of {state.poll_id}")
            result = PaymentVerification(success=False, error=str(e))

        with self._lock:
            if not self._is_current(state):
                logger.debug(f"Discarding result for stopped poll {state.poll_id}")
                return

            if result is not None and result.payment_found:
                state.status = PollStatus.SUCCEEDED
                del self._polls[state.poll_id]
            elif state.attempts >= state.max_attempts:
                state.status = PollStatus.TIMED_OUT
                del self._polls[state.poll_id]
            else:
                state.handle = self._scheduler.schedule(state.interval, lambda: self._tick(state))
            outcome = state.status

        if result is not None and result.error and state.on_error:
            state.on_error(result.error)

        if outcome == PollStatus.SUCCEEDED:
            logger.info(f"Payment found for {state.poll_id} after {attempt} attempts")
            if state.on_success:
                state.on_success(result.order, result.transaction)
        elif outcome == PollStatus.TIMED_OUT:
            logger.warning(f"Payment polling timed out for {state.poll_id} after {attempt} attempts")
            if state.on_timeout:
                state.on_timeout()
