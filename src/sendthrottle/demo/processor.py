"""Order processor worker loop.

The processor is the only thread touching its Throttler. Clients hand orders
over through a thread-safe inbound queue; the processor pushes each one through
try_send() and, whenever something got throttled, schedules a send_queued()
call for now + delay.
"""

from __future__ import annotations

import queue
import threading
import time
from collections import Counter
from collections.abc import Callable
from functools import singledispatchmethod
from typing import Any

import typer

from sendthrottle.core.logging import get_logger
from sendthrottle.core.rate_limit import QueueFullError, Throttler
from sendthrottle.core.rate_limit.window import Clock
from sendthrottle.demo.orders import AmendOrder, CancelOrder, NewOrder, OrderMessage

logger = get_logger(__name__)


class PrintingCallback:
    """Delivers orders by writing them out.

    Counts deliveries per order type so callers can check what went out.
    """

    def __init__(self, writer: Callable[[str], Any] = typer.echo) -> None:
        self._writer = writer
        self.sent: Counter[str] = Counter()

    @singledispatchmethod
    def on_send(self, message: Any) -> None:
        raise TypeError(f"Cannot send {type(message).__name__}")

    @on_send.register
    def _(self, message: NewOrder) -> None:
        self._deliver("new", message.desc)

    @on_send.register
    def _(self, message: AmendOrder) -> None:
        self._deliver("amend", message.desc)

    @on_send.register
    def _(self, message: CancelOrder) -> None:
        self._deliver("cancel", message.desc)

    @property
    def total(self) -> int:
        return sum(self.sent.values())

    def _deliver(self, kind: str, desc: str) -> None:
        self.sent[kind] += 1
        self._writer(f"Sending message: {desc}")


class OrderProcessor:
    """Feeds inbound orders through a throttler and drains it on schedule.

    Usage:
        processor = OrderProcessor(inbound, throttler)
        processor.start()
        ...
        processor.stop()
        processor.join()
    """

    def __init__(
        self,
        inbound: queue.Queue[OrderMessage],
        throttler: Throttler[CancelOrder],
        *,
        poll_timeout: float = 0.05,
        clock: Clock = time.monotonic,
    ) -> None:
        """Initialize processor.

        Args:
            inbound: Queue the clients push orders into
            throttler: Throttler owned by this processor from now on
            poll_timeout: Longest wait on an empty inbound queue, in seconds
            clock: Time source, must match the throttler's clock
        """
        self._inbound = inbound
        self._throttler = throttler
        self._poll_timeout = poll_timeout
        self._clock = clock
        self._scheduled: float | None = None
        self._stop = threading.Event()
        self._worker: threading.Thread | None = None
        self.dropped: list[OrderMessage] = []

    @property
    def scheduled(self) -> float | None:
        """Clock reading at which the next drain is due (None if nothing due)."""
        return self._scheduled

    def is_idle(self) -> bool:
        return self._inbound.empty() and self._throttler.is_drained()

    def process_inbound(self) -> int:
        """Push every order currently waiting in the inbound queue.

        Returns:
            Number of orders taken from the queue
        """
        count = 0
        while True:
            try:
                order = self._inbound.get_nowait()
            except queue.Empty:
                return count
            self._handle(order)
            count += 1

    def send_scheduled(self) -> bool:
        """Drain the throttler if a scheduled drain is due.

        Returns:
            True if send_queued() was called
        """
        if self._scheduled is None or self._clock() < self._scheduled:
            return False
        self._reschedule(self._throttler.send_queued())
        return True

    def run(self) -> None:
        """Loop until stop() was called and everything has been sent."""
        logger.info("Order processor started")
        while True:
            self.process_inbound()
            self.send_scheduled()

            if self._stop.is_set() and self.is_idle():
                break

            try:
                order = self._inbound.get(timeout=self._wait_timeout())
            except queue.Empty:
                continue
            self._handle(order)

        logger.info("Order processor stopped", dropped=len(self.dropped))

    def start(self) -> None:
        self._worker = threading.Thread(
            target=self.run, name="order-processor", daemon=True
        )
        self._worker.start()

    def stop(self) -> None:
        """Ask the loop to exit once the inbound queue and throttler are empty."""
        self._stop.set()

    def join(self, timeout: float | None = None) -> None:
        if self._worker is not None:
            self._worker.join(timeout)

    def _handle(self, order: OrderMessage) -> None:
        try:
            delay = self._throttler.try_send(order)
        except QueueFullError as e:
            self.dropped.append(order)
            logger.warning(
                "Order dropped, throttle queue full",
                order=order.desc,
                max_pending=e.max_pending,
            )
            return
        self._reschedule(delay)

    def _reschedule(self, delay: float) -> None:
        if delay != 0:
            self._scheduled = self._clock() + delay
        elif self._throttler.is_drained():
            self._scheduled = None
        else:
            # Admitted while older orders still wait: drain on the next pass
            self._scheduled = self._clock()

    def _wait_timeout(self) -> float:
        if self._scheduled is None:
            return self._poll_timeout
        remaining = self._scheduled - self._clock()
        return max(0.0, min(self._poll_timeout, remaining))
