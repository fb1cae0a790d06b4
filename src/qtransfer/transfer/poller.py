"""Poller: one bounded receive call against the source queue."""

from __future__ import annotations

from typing import Any

import structlog

from qtransfer.core.exceptions import ReceiveError
from qtransfer.core.protocols import IQueueClient
from qtransfer.models.message import MAX_BATCH_SIZE, QueueRef, check_batch
from qtransfer.models.results import PollResult

logger = structlog.get_logger(__name__)


class Poller:
    """Receives up to ``max_messages`` messages with all attributes included.

    No retry: a failed receive comes back as ``PollResult.error`` and the caller
    applies its own policy.
    """

    def __init__(self, client: IQueueClient, source: QueueRef, *,
                 max_messages: int = MAX_BATCH_SIZE, wait_seconds: int = 0,
                 log: Any = None) -> None:
        if not 1 <= max_messages <= MAX_BATCH_SIZE:
            raise ValueError(f"max_messages must be between 1 and {MAX_BATCH_SIZE}")
        self._client = client
        self._source = source
        self._max_messages = max_messages
        self._wait_seconds = wait_seconds
        self._log = log or logger

    def poll(self) -> PollResult:
        try:
            batch = self._client.receive(
                self._source.url,
                max_messages=self._max_messages,
                wait_seconds=self._wait_seconds,
                with_attributes=True,
            )
        except ReceiveError as exc:
            return PollResult(error=exc)

        self._log.debug("polled", queue=self._source.url, count=len(batch))
        return PollResult(batch=check_batch(batch))
