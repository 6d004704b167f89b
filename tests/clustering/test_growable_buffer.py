"""
Tests for growable_buffer module.
"""
import io
from concurrent.futures import ThreadPoolExecutor
from contextlib import redirect_stdout

import numpy as np
import pytest

from clue.clustering.core.growable_buffer import OVERFLOW, GrowableBuffer


def test_growable_buffer_init():
    """Test GrowableBuffer initialization."""
    buffer = GrowableBuffer(8)

    assert buffer.capacity == 8
    assert len(buffer) == 0
    assert list(buffer) == []


def test_growable_buffer_negative_capacity():
    """Test GrowableBuffer rejects a negative capacity."""
    with pytest.raises(ValueError, match="capacity must be non-negative"):
        GrowableBuffer(-1)


def test_append_unsynchronized_returns_slots_in_order():
    """Test sequential appends fill consecutive slots."""
    buffer = GrowableBuffer(3)

    assert buffer.append_unsynchronized(10) == 0
    assert buffer.append_unsynchronized(20) == 1
    assert buffer.append_unsynchronized(30) == 2

    assert len(buffer) == 3
    assert list(buffer) == [10, 20, 30]
    assert buffer[1] == 20


def test_append_unsynchronized_overflow():
    """Test append on a full buffer leaves it unchanged and returns -1."""
    buffer = GrowableBuffer(1)
    buffer.append_unsynchronized(5)

    out = io.StringIO()
    with redirect_stdout(out):
        slot = buffer.append_unsynchronized(6)

    assert slot == OVERFLOW == -1
    assert len(buffer) == 1
    assert list(buffer) == [5]
    assert "overflow" in out.getvalue()


def test_append_concurrent_overflow_matches_unsynchronized():
    """Test both append paths share the same overflow behaviour."""
    buffer = GrowableBuffer(1)
    buffer.append_concurrent(1)

    out = io.StringIO()
    with redirect_stdout(out):
        slot = buffer.append_concurrent(2)

    assert slot == -1
    assert len(buffer) == 1
    assert list(buffer) == [1]
    assert "overflow" in out.getvalue()


def test_append_concurrent_many_threads_unique_slots():
    """Test concurrent appends each get a unique slot and keep every value."""
    capacity = 2000
    buffer = GrowableBuffer(capacity)

    with ThreadPoolExecutor(max_workers=8) as executor:
        slots = list(executor.map(buffer.append_concurrent, range(capacity)))

    assert len(buffer) == capacity
    assert sorted(slots) == list(range(capacity))
    assert sorted(buffer.view().tolist()) == list(range(capacity))
    # every value sits at the slot that was returned for it
    for value, slot in enumerate(slots):
        assert buffer[slot] == value


def test_append_concurrent_overflow_under_load():
    """Test exactly `capacity` concurrent appends succeed when oversubscribed."""
    capacity = 50
    buffer = GrowableBuffer(capacity)

    with redirect_stdout(io.StringIO()):
        with ThreadPoolExecutor(max_workers=8) as executor:
            slots = list(executor.map(buffer.append_concurrent, range(200)))

    successful = [slot for slot in slots if slot != -1]
    assert len(successful) == capacity
    assert sorted(successful) == list(range(capacity))
    assert len(buffer) == capacity
    assert len(set(buffer.view().tolist())) == capacity


def test_reset_keeps_storage():
    """Test reset empties the buffer without changing its capacity."""
    buffer = GrowableBuffer(4)
    buffer.append_unsynchronized(1)
    buffer.append_unsynchronized(2)

    buffer.reset()

    assert len(buffer) == 0
    assert buffer.capacity == 4
    assert buffer.append_unsynchronized(3) == 0


def test_reserve_discards_contents():
    """Test reserve replaces the storage and resets the length."""
    buffer = GrowableBuffer(2)
    buffer.append_unsynchronized(1)
    buffer.append_unsynchronized(2)

    buffer.reserve(5)

    assert buffer.capacity == 5
    assert len(buffer) == 0
    assert list(buffer) == []


def test_view_is_read_only():
    """Test the view exposes only the filled part and cannot be written."""
    buffer = GrowableBuffer(4)
    buffer.append_unsynchronized(7)

    view = buffer.view()

    assert view.shape == (1,)
    with pytest.raises(ValueError):
        view[0] = 8


def test_float_dtype():
    """Test the buffer honours the requested dtype."""
    buffer = GrowableBuffer(2, dtype=np.float32)
    buffer.append_unsynchronized(1.5)

    assert buffer.dtype == np.float32
    assert buffer[0] == pytest.approx(1.5)
