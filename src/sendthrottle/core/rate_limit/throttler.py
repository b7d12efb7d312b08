# src/sendthrottle/core/rate_limit/throttler.py
"""Send throttler with a two-tier deferred delivery queue.

Sends go through a SlidingWindow. Admitted sends are delivered at once via the
delivery callback. Throttled sends are parked:

- messages of the high-priority category go to their own FIFO queue
- every other message is wrapped in a QueuedMessage and goes to a general FIFO

send_queued() always exhausts the high-priority queue before touching the
general one, so high-priority messages that arrive between drains still jump
ahead of older general messages.

The throttler never sleeps. Both operations return how long the caller should
wait before calling send_queued() again (0.0 means nothing is waiting on the
window).
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, runtime_checkable

from sendthrottle.contracts import PriorityTier
from sendthrottle.core.rate_limit.window import Clock, SlidingWindow

if TYPE_CHECKING:
    from sendthrottle.core.config import ThrottleSettings

logger = logging.getLogger(__name__)

H = TypeVar("H")


@runtime_checkable
class DeliveryCallback(Protocol):
    """Performs the actual send.

    Implementations usually dispatch on the message type, for example with
    functools.singledispatchmethod, one handler per message category.
    """

    def on_send(self, message: Any) -> None:
        """Deliver one message."""
        ...


class QueueFullError(Exception):
    """Raised when a throttled message would exceed max_pending.

    Attributes:
        max_pending: Configured queue limit
        message: The message that was not queued
    """

    def __init__(self, max_pending: int, message: Any) -> None:
        self.max_pending = max_pending
        self.message = message
        super().__init__(
            f"Throttle queue is full ({max_pending} pending), "
            f"dropping {type(message).__name__}"
        )


@dataclass(frozen=True)
class QueuedMessage:
    """A general-tier message bound to the callback that will deliver it."""

    message: Any
    on_send: DeliveryCallback

    def send(self) -> None:
        self.on_send.on_send(self.message)


class Throttler(Generic[H]):
    """Rate-limited sender with priority buffering.

    Not thread-safe. Confine each instance to a single worker loop.

    Usage:
        throttler = Throttler(3, 1.0, callback, high_priority=CancelOrder)

        delay = throttler.try_send(order)
        while delay:
            wait(delay)
            delay = throttler.send_queued()
    """

    def __init__(
        self,
        capacity: int,
        interval: float,
        on_send: DeliveryCallback,
        high_priority: type[H],
        *,
        max_pending: int | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        """Initialize throttler.

        Args:
            capacity: Maximum sends within any interval (>= 1)
            interval: Sliding window width in seconds (> 0)
            on_send: Delivery callback shared by every send
            high_priority: Message type drained ahead of all others
            max_pending: Optional cap on queued messages (None = unbounded)
            clock: Monotonic time source returning seconds

        Raises:
            ValueError: If capacity, interval or max_pending is invalid
        """
        if max_pending is not None and max_pending < 1:
            raise ValueError(f"max_pending must be >= 1, got {max_pending}")
        self._window = SlidingWindow(capacity, interval, clock=clock)
        self._on_send = on_send
        self._high_priority = high_priority
        self._max_pending = max_pending
        self._high_priority_queue: deque[H] = deque()
        self._general_queue: deque[QueuedMessage] = deque()

    @classmethod
    def from_settings(
        cls,
        settings: ThrottleSettings,
        on_send: DeliveryCallback,
        high_priority: type[H],
        *,
        clock: Clock = time.monotonic,
    ) -> Throttler[H]:
        """Build a throttler from validated settings."""
        return cls(
            settings.capacity,
            settings.interval_seconds,
            on_send,
            high_priority,
            max_pending=settings.max_pending,
            clock=clock,
        )

    @property
    def window(self) -> SlidingWindow:
        return self._window

    @property
    def on_send(self) -> DeliveryCallback:
        return self._on_send

    @property
    def high_priority_pending(self) -> int:
        return len(self._high_priority_queue)

    @property
    def general_pending(self) -> int:
        return len(self._general_queue)

    @property
    def pending(self) -> int:
        """Total number of queued messages across both tiers."""
        return len(self._high_priority_queue) + len(self._general_queue)

    def is_drained(self) -> bool:
        return self.pending == 0

    def tier_for(self, message: Any) -> PriorityTier:
        """Return the queue tier a throttled message would be parked in."""
        if isinstance(message, self._high_priority):
            return PriorityTier.HIGH_PRIORITY
        return PriorityTier.GENERAL

    def try_send(self, message: Any) -> float:
        """Send a message now or queue it for later.

        Args:
            message: Message of any category the callback accepts

        Returns:
            0.0 if the message was delivered, otherwise the minimum number of
            seconds to wait before calling send_queued()

        Raises:
            QueueFullError: If throttled and max_pending messages are already queued
        """
        delay = self._window.request()
        if delay == 0:
            self._on_send.on_send(message)
            return 0.0

        if self._max_pending is not None and self.pending >= self._max_pending:
            raise QueueFullError(self._max_pending, message)

        tier = self.tier_for(message)
        if tier is PriorityTier.HIGH_PRIORITY:
            self._high_priority_queue.append(message)
        else:
            self._general_queue.append(QueuedMessage(message, self._on_send))

        logger.debug(
            "Throttled %s into %s queue, retry in %.6fs (%d pending)",
            type(message).__name__,
            tier.value,
            delay,
            self.pending,
        )
        return delay

    def send_queued(self) -> float:
        """Deliver queued messages while the window admits them.

        The high-priority queue is always emptied before the general queue is
        attempted.

        Returns:
            0.0 once both queues are empty, otherwise the number of seconds to
            wait before calling again
        """
        delay = self._drain_high_priority()
        if delay == 0:
            delay = self._drain_general()
        return delay

    def _drain_high_priority(self) -> float:
        queue = self._high_priority_queue
        while queue:
            delay = self._window.request()
            if delay != 0:
                logger.debug(
                    "High priority drain throttled, %d left, retry in %.6fs",
                    len(queue),
                    delay,
                )
                return delay
            self._on_send.on_send(queue[0])
            queue.popleft()
        return 0.0

    def _drain_general(self) -> float:
        queue = self._general_queue
        while queue:
            delay = self._window.request()
            if delay != 0:
                logger.debug(
                    "General drain throttled, %d left, retry in %.6fs",
                    len(queue),
                    delay,
                )
                return delay
            queue[0].send()
            queue.popleft()
        return 0.0
