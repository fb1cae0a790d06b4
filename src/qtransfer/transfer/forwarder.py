"""Forwarder: a single send attempt to the destination queue."""

from __future__ import annotations

from typing import Any

import structlog

from qtransfer.core.exceptions import SendError
from qtransfer.core.protocols import IQueueClient
from qtransfer.models.message import OutboundMessage

logger = structlog.get_logger(__name__)


class Forwarder:
    """Sends outbound messages. No retry; the source redelivers unacknowledged messages."""

    def __init__(self, client: IQueueClient, log: Any = None) -> None:
        self._client = client
        self._log = log or logger

    def forward(self, outbound: OutboundMessage, message_id: str = "") -> bool:
        """Send once. ``message_id`` is the source message id, used for logging."""
        try:
            self._client.send(outbound)
        except SendError as exc:
            self._log.error(
                "send failed",
                queue=outbound.queue_url,
                message_id=message_id,
                error=str(exc),
            )
            return False
        return True
