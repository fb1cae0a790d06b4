"""Acknowledger: delete the source message once it has been forwarded."""

from __future__ import annotations

from typing import Any

import structlog

from qtransfer.core.exceptions import DeleteError
from qtransfer.core.protocols import IQueueClient
from qtransfer.models.message import Message, QueueRef

logger = structlog.get_logger(__name__)


class Acknowledger:
    """Exchanges a receipt handle for a delete. One attempt per received message."""

    def __init__(self, client: IQueueClient, source: QueueRef, log: Any = None) -> None:
        self._client = client
        self._source = source
        self._log = log or logger

    def acknowledge(self, message: Message) -> bool:
        try:
            self._client.delete(self._source.url, message.receipt_handle)
        except DeleteError as exc:
            # Left on the source; a redelivery may forward it a second time.
            self._log.error(
                "delete failed",
                queue=self._source.url,
                message_id=message.message_id,
                receipt_handle=message.receipt_handle,
                error=str(exc),
            )
            return False
        return True
