"""Protocol interfaces for qtransfer abstractions.

Structural typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from qtransfer.core.types import QueueUrl, ReceiptHandle
from qtransfer.models.message import Message, OutboundMessage


# ---------------------------------------------------------------------------
# Queue service
# ---------------------------------------------------------------------------

@runtime_checkable
class IQueueClient(Protocol):
    """Queue service client (SQS or in-memory). Must be safe for concurrent use."""

    def receive(
        self,
        queue_url: QueueUrl,
        max_messages: int = 10,
        wait_seconds: int = 0,
        with_attributes: bool = True,
    ) -> list[Message]: ...

    def send(self, outbound: OutboundMessage) -> str: ...

    def delete(self, queue_url: QueueUrl, receipt_handle: ReceiptHandle) -> None: ...
