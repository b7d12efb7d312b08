"""Status codes and kinds shared between the throttler and its callers."""

from enum import Enum


class PriorityTier(str, Enum):
    """Queue tier a throttled message is parked in.

    Uses (str, Enum) so the value can go straight into log events.
    """

    HIGH_PRIORITY = "high_priority"
    GENERAL = "general"
