"""Sliding-window rate limiting for outbound sends.

Pure in-process state, no sleeping and no locking.
"""

from sendthrottle.core.rate_limit.ring_buffer import RingBuffer
from sendthrottle.core.rate_limit.throttler import (
    DeliveryCallback,
    QueuedMessage,
    QueueFullError,
    Throttler,
)
from sendthrottle.core.rate_limit.window import SlidingWindow

__all__ = [
    "DeliveryCallback",
    "QueueFullError",
    "QueuedMessage",
    "RingBuffer",
    "SlidingWindow",
    "Throttler",
]
