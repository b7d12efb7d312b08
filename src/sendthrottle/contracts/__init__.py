"""Shared contracts for cross-boundary types.

Import pattern:
    from sendthrottle.contracts import PriorityTier
"""

from sendthrottle.contracts.enums import PriorityTier

__all__ = ["PriorityTier"]
