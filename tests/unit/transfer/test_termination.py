"""Tests for the two-consecutive-empty-polls termination policy."""

from __future__ import annotations

import pytest

from qtransfer.models.results import WorkerStatus
from qtransfer.transfer.termination import WorkerState


def _stop_index(sizes: list[int]) -> int | None:
    """Feed batch sizes in order; return the index at which the worker stopped."""
    state = WorkerState()
    for i, size in enumerate(sizes):
        if state.observe(size) is WorkerStatus.STOPPED:
            return i
    return None


def test_starts_active_assuming_nonempty():
    state = WorkerState()
    assert state.previous_count == 1
    assert state.status is WorkerStatus.ACTIVE


def test_single_empty_poll_does_not_stop():
    state = WorkerState()
    assert state.observe(0) is WorkerStatus.ACTIVE
    assert state.previous_count == 0


def test_two_empty_polls_stop():
    assert _stop_index([0, 0]) == 1


@pytest.mark.parametrize("sizes,expected", [
    ([10, 10, 3, 0, 0], 4),
    ([0, 5, 0, 0], 3),
    ([0, 1, 0, 1, 0, 1], None),
    ([10, 0, 10, 0, 10], None),
    ([2, 0, 0, 7], 2),
])
def test_stops_iff_two_consecutive_empty_batches(sizes, expected):
    assert _stop_index(sizes) == expected


def test_nonzero_batch_resets_empty_streak():
    state = WorkerState()
    state.observe(0)
    state.observe(4)
    assert state.previous_count == 4
    assert state.observe(0) is WorkerStatus.ACTIVE


def test_stopped_is_terminal():
    state = WorkerState()
    state.observe(0)
    state.observe(0)
    assert state.stopped
    assert state.observe(5) is WorkerStatus.STOPPED
