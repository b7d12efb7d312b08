# src/sendthrottle/core/rate_limit/ring_buffer.py
"""Fixed-capacity ring buffer of send timestamps."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class RingBuffer(Generic[T]):
    """Stores the last ``capacity`` items inserted.

    Inserting into a full buffer overwrites the oldest item. Once ``capacity``
    insertions have happened the buffer stays full forever.

    Usage:
        ring = RingBuffer[float](3)
        ring.insert(1.0)
        ring.oldest()   # 1.0
        ring.is_full()  # False
    """

    def __init__(self, capacity: int) -> None:
        """Initialize an empty buffer.

        Args:
            capacity: Number of slots (must be >= 1)

        Raises:
            ValueError: If capacity is less than 1
        """
        if capacity < 1:
            raise ValueError(f"RingBuffer capacity must be >= 1, got {capacity}")
        self._slots: list[T | None] = [None] * capacity
        self._head = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return min(self._head, len(self._slots))

    def insert(self, item: T) -> None:
        """Write item at the cursor and advance it."""
        self._slots[self._head % len(self._slots)] = item
        self._head += 1

    def oldest(self) -> T | None:
        """Return the oldest item.

        Before the buffer is full this is always slot 0, which is None until
        the first insert. Once full it is the slot the next insert overwrites.
        """
        if self._head < len(self._slots):
            return self._slots[0]
        return self._slots[self._head % len(self._slots)]

    def is_full(self) -> bool:
        return self._head >= len(self._slots)
