"""
Fixed-capacity, append-only buffer backed by a numpy array.

Used as the storage of each spatial tile. The buffer supports two append
paths with the same overflow semantics:

  - append_unsynchronized: single caller, plain length increment.
  - append_concurrent: many threads at once. A slot is reserved with a
    fetch-and-add on the length counter, the value is written outside the
    counter's critical section, and a reservation past the capacity is
    rolled back.

Both return the slot index on success and -1 on overflow, logging a warning.
The buffer never grows on its own: reserve() replaces the storage and
discards previous contents, which is how tiles are reset before each run.
"""

from __future__ import annotations

import threading
from typing import Iterator

import numpy as np

from clue.common.utils import log_warn

OVERFLOW = -1


class GrowableBuffer:
    """Contiguous append-only array with explicit capacity and length."""

    def __init__(self, capacity: int = 0, dtype=np.int64):
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self._dtype = np.dtype(dtype)
        self._data = np.empty(capacity, dtype=self._dtype)
        self._size = 0
        self._counter_lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._data.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    def __len__(self) -> int:
        # Failed concurrent reservations may briefly push the counter past capacity
        return min(self._size, self.capacity)

    def __getitem__(self, index):
        return self._data[index]

    def __iter__(self) -> Iterator:
        return iter(self.view())

    def __repr__(self) -> str:
        return f"GrowableBuffer(length={len(self)}, capacity={self.capacity}, dtype={self._dtype})"

    def view(self) -> np.ndarray:
        """Return a read-only view of the filled part of the buffer."""
        filled = self._data[: len(self)]
        filled.flags.writeable = False
        return filled

    def _fetch_add(self, delta: int) -> int:
        """Atomically add delta to the length counter and return the previous value."""
        with self._counter_lock:
            previous = self._size
            self._size = previous + delta
        return previous

    def _report_overflow(self, value) -> None:
        log_warn(
            f"GrowableBuffer overflow: dropped value {value!r} "
            f"(capacity {self.capacity} exhausted)"
        )

    def append_unsynchronized(self, value) -> int:
        """
        Append a value from a single caller.

        Returns:
            Index of the written slot, or -1 if the buffer is full.
        """
        slot = self._size
        if slot >= self.capacity:
            self._report_overflow(value)
            return OVERFLOW
        self._data[slot] = value
        self._size = slot + 1
        return slot

    def append_concurrent(self, value) -> int:
        """
        Append a value; safe to call from many threads at once.

        Returns:
            Index of the written slot, or -1 if the buffer is full.
        """
        slot = self._fetch_add(1)
        if slot >= self.capacity:
            self._fetch_add(-1)
            self._report_overflow(value)
            return OVERFLOW
        self._data[slot] = value
        return slot

    def reset(self) -> None:
        """Set the length to zero, keeping the storage."""
        with self._counter_lock:
            self._size = 0

    def reserve(self, new_capacity: int) -> None:
        """
        Replace the storage with a new buffer of the given capacity.

        Previous contents are discarded and the length goes back to zero.
        Call once per run, before population.
        """
        if new_capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {new_capacity}")
        with self._counter_lock:
            self._data = np.empty(new_capacity, dtype=self._dtype)
            self._size = 0


__all__ = ["GrowableBuffer", "OVERFLOW"]
