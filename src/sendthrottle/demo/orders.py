"""Order messages sent through the throttler.

CancelOrder is the high-priority category.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NewOrder:
    desc: str


@dataclass(frozen=True)
class AmendOrder:
    desc: str


@dataclass(frozen=True)
class CancelOrder:
    desc: str


OrderMessage = NewOrder | AmendOrder | CancelOrder
