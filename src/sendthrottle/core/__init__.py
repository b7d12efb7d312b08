# src/sendthrottle/core/__init__.py
"""Core infrastructure: Rate limiting, Configuration, Logging."""

from sendthrottle.core.config import (
    DemoSettings,
    SendThrottleSettings,
    ThrottleSettings,
    load_settings,
    resolve_config,
)
from sendthrottle.core.logging import (
    configure_logging,
    get_logger,
)
from sendthrottle.core.rate_limit import (
    QueueFullError,
    RingBuffer,
    SlidingWindow,
    Throttler,
)

__all__ = [
    "DemoSettings",
    "QueueFullError",
    "RingBuffer",
    "SendThrottleSettings",
    "SlidingWindow",
    "ThrottleSettings",
    "Throttler",
    "configure_logging",
    "get_logger",
    "load_settings",
    "resolve_config",
]
