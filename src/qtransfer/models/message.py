"""Queue references and message models."""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from qtransfer.core.types import MessageAttributes, ReceiptHandle, SystemAttributes

MAX_BATCH_SIZE = 10  # SQS ReceiveMessage upper bound

GROUP_ID_ATTRIBUTE = "MessageGroupId"
DEDUPLICATION_ID_ATTRIBUTE = "MessageDeduplicationId"


class QueueMode(StrEnum):
    STANDARD = "standard"
    FIFO = "fifo"


class QueueRef(BaseModel):
    """Endpoint identifier plus queue mode. Immutable."""

    model_config = {"frozen": True}

    url: str
    mode: QueueMode = QueueMode.STANDARD

    @property
    def is_fifo(self) -> bool:
        return self.mode is QueueMode.FIFO


class Message(BaseModel):
    """A message as received from the source queue."""

    message_id: str = ""
    body: str
    receipt_handle: ReceiptHandle  # valid for this delivery only
    attributes: MessageAttributes = Field(default_factory=dict)
    system_attributes: SystemAttributes = Field(default_factory=dict)

    @property
    def group_id(self) -> Optional[str]:
        return self.system_attributes.get(GROUP_ID_ATTRIBUTE) or None

    @property
    def deduplication_id(self) -> Optional[str]:
        return self.system_attributes.get(DEDUPLICATION_ID_ATTRIBUTE) or None


class OutboundMessage(BaseModel):
    """A message ready to be sent to the destination queue."""

    queue_url: str
    body: str
    attributes: MessageAttributes = Field(default_factory=dict)
    group_id: Optional[str] = None
    deduplication_id: Optional[str] = None


TransferBatch = list[Message]


def check_batch(batch: TransferBatch) -> TransferBatch:
    """Return the batch unchanged, or raise ValueError if it exceeds the bound."""
    if len(batch) > MAX_BATCH_SIZE:
        raise ValueError(f"Batch of {len(batch)} exceeds {MAX_BATCH_SIZE} messages")
    return batch
