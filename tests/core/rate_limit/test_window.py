"""Tests for sliding window admission control."""

import pytest
from conftest import FakeClock
from hypothesis import given
from hypothesis import strategies as st

from sendthrottle.core.rate_limit import SlidingWindow


class TestSlidingWindowAdmission:
    """Exactly capacity sends are admitted per interval."""

    def test_admits_capacity_requests_at_same_instant(self, clock: FakeClock) -> None:
        window = SlidingWindow(5, 1.0, clock=clock)

        assert [window.request() for _ in range(5)] == [0.0] * 5

    def test_throttles_request_over_capacity(self, clock: FakeClock) -> None:
        window = SlidingWindow(5, 1.0, clock=clock)
        for _ in range(5):
            window.request()

        delay = window.request()

        assert 0 < delay <= 1.0

    def test_throttle_delay_is_time_until_oldest_leaves(self, clock: FakeClock) -> None:
        window = SlidingWindow(2, 1.0, clock=clock)
        window.request()
        clock.advance(0.25)
        window.request()
        clock.advance(0.25)

        assert window.request() == pytest.approx(0.5)

    def test_readmits_after_interval(self, clock: FakeClock) -> None:
        window = SlidingWindow(3, 1.0, clock=clock)
        for _ in range(3):
            window.request()

        clock.advance(1.0)

        assert window.request() == 0.0

    def test_throttled_request_does_not_consume_capacity(self, clock: FakeClock) -> None:
        window = SlidingWindow(1, 1.0, clock=clock)
        window.request()

        for _ in range(10):
            clock.advance(0.05)
            assert window.request() > 0

        clock.advance(0.6)
        assert window.request() == 0.0

    def test_request_and_check(self, clock: FakeClock) -> None:
        """100 per second: 90 sends, 600ms later 10 more, then throttled."""
        window = SlidingWindow(100, 1.0, clock=clock)

        clock.advance(0.5)
        for _ in range(90):
            assert window.request() == 0.0

        clock.advance(0.6)
        for _ in range(10):
            assert window.request() == 0.0

        # The 90 early sends stay in the window for another 400ms
        for _ in range(10):
            delay = window.request()
            assert delay > 0
            assert delay == pytest.approx(0.4)

    def test_works_with_monotonic_clock(self) -> None:
        window = SlidingWindow(2, 60.0)

        assert window.request() == 0.0
        assert window.request() == 0.0
        assert 0 < window.request() <= 60.0


class TestSlidingWindowConfig:
    """Constructor validation."""

    def test_exposes_configuration(self) -> None:
        window = SlidingWindow(7, 2.5)

        assert window.capacity == 7
        assert window.interval == 2.5

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValueError, match="capacity"):
            SlidingWindow(0, 1.0)

    @pytest.mark.parametrize("interval", [0.0, -1.0])
    def test_rejects_non_positive_interval(self, interval: float) -> None:
        with pytest.raises(ValueError, match="interval"):
            SlidingWindow(1, interval)


class TestSlidingWindowProperties:
    """Delays stay within (0, interval] and never exceed capacity per window."""

    @given(
        capacity=st.integers(min_value=1, max_value=10),
        steps=st.lists(
            st.floats(min_value=0.0, max_value=0.5, allow_nan=False), max_size=60
        ),
    )
    def test_delay_bounds_and_admission_count(
        self, capacity: int, steps: list[float]
    ) -> None:
        interval = 1.0
        clock = FakeClock()
        window = SlidingWindow(capacity, interval, clock=clock)
        admitted: list[float] = []

        for step in steps:
            clock.advance(step)
            delay = window.request()
            assert 0.0 <= delay <= interval
            if delay == 0:
                admitted.append(clock.now)

        # No more than capacity admissions inside any half-open interval
        for i, start in enumerate(admitted):
            in_window = [t for t in admitted[i:] if t - start < interval]
            assert len(in_window) <= capacity
