# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/
"""

import os
from dataclasses import dataclass, field
from functools import singledispatchmethod
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Throttler helpers
# =============================================================================


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass(frozen=True)
class HighPrioMsg:
    label: str = ""


@dataclass(frozen=True)
class LowPrioMsg:
    label: str = ""


@dataclass(frozen=True)
class OtherMsg:
    label: str = ""


@dataclass
class RecordingCallback:
    """Delivery callback counting per category and recording order."""

    high_prior_counter: int = 0
    low_prior_counter: int = 0
    other_counter: int = 0
    delivered: list[Any] = field(default_factory=list)

    @singledispatchmethod
    def on_send(self, message: Any) -> None:
        raise TypeError(f"Unexpected message {message!r}")

    @on_send.register
    def _(self, message: HighPrioMsg) -> None:
        self.high_prior_counter += 1
        self.delivered.append(message)

    @on_send.register
    def _(self, message: LowPrioMsg) -> None:
        self.low_prior_counter += 1
        self.delivered.append(message)

    @on_send.register
    def _(self, message: OtherMsg) -> None:
        self.other_counter += 1
        self.delivered.append(message)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def callback() -> RecordingCallback:
    return RecordingCallback()
