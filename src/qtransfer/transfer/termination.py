"""Worker termination policy: stop after two consecutive empty polls.

A single empty receive does not prove the source is drained, since SQS may
under-report messages that are in flight or not yet propagated. Two in a row
is a best-effort heuristic, not a guarantee that the queue is empty.
"""

from __future__ import annotations

from pydantic import BaseModel

from qtransfer.models.results import WorkerStatus


class WorkerState(BaseModel):
    """Per-worker termination state. Never shared between workers."""

    previous_count: int = 1  # assume non-empty before the first poll
    status: WorkerStatus = WorkerStatus.ACTIVE

    def observe(self, batch_size: int) -> WorkerStatus:
        """Feed the size of a freshly polled batch and return the new status."""
        if self.status is not WorkerStatus.ACTIVE:
            return self.status
        if self.previous_count == 0 and batch_size == 0:
            self.status = WorkerStatus.STOPPED
        else:
            self.previous_count = batch_size
        return self.status

    @property
    def stopped(self) -> bool:
        return self.status is WorkerStatus.STOPPED
