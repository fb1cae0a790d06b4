"""Transfer outcome and worker state models."""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from qtransfer.core.exceptions import ReceiveError
from qtransfer.models.message import Message


class WorkerStatus(StrEnum):
    ACTIVE = "active"
    STOPPED = "stopped"
    FAILED = "failed"


class MessageStatus(StrEnum):
    DELIVERED = "delivered"
    SEND_FAILED = "send_failed"
    DELETE_FAILED = "delete_failed"
    REJECTED = "rejected"
    FAILED = "failed"


class PollResult(BaseModel):
    """Outcome of a single receive call: a batch or the error that prevented it."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    batch: list[Message] = Field(default_factory=list)
    error: Optional[ReceiveError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MessageOutcome(BaseModel):
    """What happened to one message of a batch."""

    message_id: str
    status: MessageStatus
    error: str = ""

    @property
    def delivered(self) -> bool:
        return self.status is MessageStatus.DELIVERED


class BatchResult(BaseModel):
    """Outcomes of every message in one batch."""

    outcomes: list[MessageOutcome] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.outcomes)

    @property
    def delivered(self) -> int:
        return sum(1 for o in self.outcomes if o.delivered)

    @property
    def failed(self) -> int:
        return self.size - self.delivered


class WorkerResult(BaseModel):
    """Final state of one transfer worker."""

    worker_id: int
    status: WorkerStatus = WorkerStatus.ACTIVE
    batches: int = 0
    received: int = 0
    delivered: int = 0
    failed: int = 0
    error: str = ""

    def record(self, batch: BatchResult) -> None:
        self.batches += 1
        self.received += batch.size
        self.delivered += batch.delivered
        self.failed += batch.failed
