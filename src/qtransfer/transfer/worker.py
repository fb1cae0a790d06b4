"""TransferWorker: the poll → transform → forward → acknowledge loop."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any

import structlog

from qtransfer.core.config import TransferConfig
from qtransfer.core.exceptions import MissingFifoAttributeError, QTransferError
from qtransfer.core.protocols import IQueueClient
from qtransfer.models.message import Message, TransferBatch
from qtransfer.models.results import (
    BatchResult,
    MessageOutcome,
    MessageStatus,
    WorkerResult,
    WorkerStatus,
)
from qtransfer.transfer.acknowledger import Acknowledger
from qtransfer.transfer.forwarder import Forwarder
from qtransfer.transfer.poller import Poller
from qtransfer.transfer.termination import WorkerState
from qtransfer.transfer.transformer import transform

logger = structlog.get_logger(__name__)


class TransferWorker:
    """Drains the source queue one batch at a time until the termination policy fires.

    Messages of a batch are delivered concurrently on a bounded thread pool; the
    batch is a barrier, so the next poll waits for every message of the previous
    one. Send and delete failures are contained per message. A poll failure ends
    the worker (``on_poll_error="abort"``) or propagates (``"raise"``).
    """

    def __init__(self, client: IQueueClient, config: TransferConfig, *,
                 worker_id: int = 1, log: Any = None) -> None:
        self.worker_id = worker_id
        self.state = WorkerState()
        self._source = config.source_ref
        self._destination = config.destination_ref
        self._fifo = config.fifo
        self._on_poll_error = config.on_poll_error
        self._concurrency = config.batch_concurrency
        self._log = (log or logger).bind(worker=worker_id)

        self.poller = Poller(
            client,
            self._source,
            max_messages=config.max_messages,
            wait_seconds=config.wait_time_seconds,
            log=self._log,
        )
        self.forwarder = Forwarder(client, log=self._log)
        self.acknowledger = Acknowledger(client, self._source, log=self._log)

    def run(self) -> WorkerResult:
        result = WorkerResult(worker_id=self.worker_id)
        with ThreadPoolExecutor(
            max_workers=self._concurrency,
            thread_name_prefix=f"qtransfer-worker-{self.worker_id}",
        ) as pool:
            while True:
                polled = self.poller.poll()
                if not polled.ok:
                    if self._on_poll_error == "raise":
                        raise polled.error
                    self._log.error("poll failed", queue=self._source.url, error=str(polled.error))
                    result.status = WorkerStatus.FAILED
                    result.error = str(polled.error)
                    return result

                if self.state.observe(len(polled.batch)) is WorkerStatus.STOPPED:
                    # two empty polls in a row, the queue is probably drained
                    self._log.info("done", batches=result.batches, delivered=result.delivered)
                    result.status = WorkerStatus.STOPPED
                    return result

                self._log.info("received messages", count=len(polled.batch))
                if polled.batch:
                    result.record(self.process_batch(polled.batch, pool))

    def process_batch(self, batch: TransferBatch, pool: ThreadPoolExecutor | None = None) -> BatchResult:
        """Deliver every message of the batch and wait for all of them."""
        if not batch:
            return BatchResult()
        if pool is None:
            with ThreadPoolExecutor(max_workers=self._concurrency) as own_pool:
                return self.process_batch(batch, own_pool)

        futures = [pool.submit(self.deliver, message) for message in batch]
        wait(futures)
        return BatchResult(outcomes=[f.result() for f in futures])

    def deliver(self, message: Message) -> MessageOutcome:
        """Transform, forward, then acknowledge one message. Never raises a QTransferError."""
        try:
            return self._deliver(message)
        except QTransferError as exc:
            self._log.error("delivery failed", message_id=message.message_id, error=str(exc))
            return MessageOutcome(message_id=message.message_id, status=MessageStatus.FAILED, error=str(exc))

    def _deliver(self, message: Message) -> MessageOutcome:
        try:
            outbound = transform(message, self._destination, self._fifo, log=self._log)
        except MissingFifoAttributeError as exc:
            self._log.error("fifo attributes missing", message_id=message.message_id, error=str(exc))
            return MessageOutcome(message_id=message.message_id, status=MessageStatus.REJECTED, error=str(exc))

        if not self.forwarder.forward(outbound, message_id=message.message_id):
            return MessageOutcome(message_id=message.message_id, status=MessageStatus.SEND_FAILED)

        # sent, now dequeue from the source
        if not self.acknowledger.acknowledge(message):
            return MessageOutcome(message_id=message.message_id, status=MessageStatus.DELETE_FAILED)

        return MessageOutcome(message_id=message.message_id, status=MessageStatus.DELIVERED)
