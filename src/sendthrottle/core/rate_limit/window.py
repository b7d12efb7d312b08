# src/sendthrottle/core/rate_limit/window.py
"""Exact sliding-window admission control.

The window records the timestamps of the last ``capacity`` admitted sends.
A new send is admitted unless all of those happened within ``interval``
seconds of now; in that case the caller is told how long until the oldest
one leaves the window.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from sendthrottle.core.rate_limit.ring_buffer import RingBuffer

Clock = Callable[[], float]


class SlidingWindow:
    """Admit at most ``capacity`` sends in any ``interval`` seconds.

    Not thread-safe. A single owner must serialize calls to request().

    Usage:
        window = SlidingWindow(capacity=3, interval=1.0)

        delay = window.request()
        if delay == 0:
            send_now()
        else:
            retry_after(delay)
    """

    def __init__(
        self,
        capacity: int,
        interval: float,
        clock: Clock = time.monotonic,
    ) -> None:
        """Initialize the window.

        Args:
            capacity: Maximum sends counted within the window (>= 1)
            interval: Window width in seconds (> 0)
            clock: Monotonic time source returning seconds

        Raises:
            ValueError: If capacity < 1 or interval <= 0
        """
        if interval <= 0:
            raise ValueError(f"SlidingWindow interval must be > 0, got {interval}")
        self._interval = float(interval)
        self._clock = clock
        self._ring: RingBuffer[float] = RingBuffer(capacity)

    @property
    def capacity(self) -> int:
        return self._ring.capacity

    @property
    def interval(self) -> float:
        return self._interval

    def request(self) -> float:
        """Request permission to send now.

        Returns:
            0.0 if the send was admitted (and recorded), otherwise the number
            of seconds until capacity frees up. A throttled request does not
            change the window.
        """
        now = self._clock()

        # Only a full ring holds a real oldest timestamp
        if self._ring.is_full():
            oldest = self._ring.oldest()
            assert oldest is not None
            age = now - oldest
            if age < self._interval:
                return self._interval - age

        self._ring.insert(now)
        return 0.0
