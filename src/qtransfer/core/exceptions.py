"""qtransfer exception hierarchy."""

from __future__ import annotations


class QTransferError(Exception):
    """Base exception for all qtransfer errors."""


class ConfigurationError(QTransferError):
    """Missing or invalid run configuration."""


class QueueError(QTransferError):
    """A queue service call failed."""

    operation = "call"

    def __init__(self, queue_url: str, message: str) -> None:
        self.queue_url = queue_url
        super().__init__(f"{self.operation} on {queue_url!r} failed: {message}")


class ReceiveError(QueueError):
    """ReceiveMessage failed."""

    operation = "receive"


class SendError(QueueError):
    """SendMessage failed."""

    operation = "send"


class DeleteError(QueueError):
    """DeleteMessage failed."""

    operation = "delete"


class MissingFifoAttributeError(QTransferError):
    """FIFO message lacks a group id or deduplication id."""

    def __init__(self, message_id: str, attribute: str) -> None:
        self.message_id = message_id
        self.attribute = attribute
        super().__init__(f"Message {message_id!r} has no {attribute}")
