"""
Cancellation support for delegation invocations.

The core sets no timeout of its own. The invoking harness hands in a
CancellationToken, optionally with a deadline, and every provider call is
bounded by the time that remains.
"""

import logging
import threading
import time
from typing import Callable, List, Optional

from ..exceptions import OperationCancelled

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    Cancellation signal shared by one invocation and its harness.

    Cancelling runs the registered callbacks, which close provider
    sessions. Closing a session does not abort a request already in
    flight: that request still runs until it completes or its timeout
    expires, and the next provider call raises OperationCancelled. A
    deadline bounds in-flight requests because every request timeout is
    capped by remaining().
    """

    def __init__(self, deadline: Optional[float] = None):
        """
        Args:
            deadline: Absolute time.monotonic() value after which the
                token reports itself as cancelled. None means no deadline.
        """
        self._deadline = deadline
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        return cls(deadline=time.monotonic() + seconds)

    @classmethod
    def from_lambda_context(cls, context, safety_margin: float = 5.0) -> "CancellationToken":
        """Derive a deadline from a Lambda context, keeping time to respond."""
        if context is None or not hasattr(context, "get_remaining_time_in_millis"):
            return cls()

        remaining = context.get_remaining_time_in_millis() / 1000.0
        budget = max(remaining - safety_margin, 0.0)
        logger.debug(f"Invocation budget: {budget:.1f}s of {remaining:.1f}s remaining")
        return cls.with_timeout(budget)

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self.cancel()
            return True
        return False

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when unbounded."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Register a callable run once when the token is cancelled."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def cancel(self) -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []

        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                logger.warning(f"Cancellation callback failed: {e}")

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelled()
