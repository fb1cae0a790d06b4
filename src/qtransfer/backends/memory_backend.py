"""In-memory queue backend for unit tests and local dry runs."""

from __future__ import annotations

import threading
import uuid
from collections import Counter
from typing import Any

from qtransfer.core.exceptions import DeleteError, ReceiveError, SendError
from qtransfer.models.message import (
    DEDUPLICATION_ID_ATTRIBUTE,
    GROUP_ID_ATTRIBUTE,
    MAX_BATCH_SIZE,
    Message,
    OutboundMessage,
)


class MemoryQueueClient:
    """Dict-backed IQueueClient.

    Received messages move to an in-flight set keyed by a fresh receipt handle.
    They come back only through ``redeliver()``, or on every receive when
    ``redeliver_unacked`` is set (a zero visibility timeout).
    """

    def __init__(self, redeliver_unacked: bool = False) -> None:
        self._redeliver_unacked = redeliver_unacked
        self._lock = threading.Lock()
        self._visible: dict[str, list[Message]] = {}
        self._in_flight: dict[str, dict[str, Message]] = {}
        self._receive_failures: Counter[str] = Counter()
        self._send_failures: Counter[str] = Counter()
        self._delete_failures: Counter[str] = Counter()
        self.calls: list[tuple[str, str, str]] = []

    # ---- setup ----

    def create_queue(self, queue_url: str) -> str:
        with self._lock:
            self._visible.setdefault(queue_url, [])
            self._in_flight.setdefault(queue_url, {})
        return queue_url

    def put(self, queue_url: str, body: str, attributes: dict[str, Any] | None = None,
            group_id: str | None = None, deduplication_id: str | None = None) -> str:
        """Enqueue a message directly, bypassing send() and its failure injection."""
        system: dict[str, str] = {}
        if group_id is not None:
            system[GROUP_ID_ATTRIBUTE] = group_id
        if deduplication_id is not None:
            system[DEDUPLICATION_ID_ATTRIBUTE] = deduplication_id
        message_id = str(uuid.uuid4())
        msg = Message(
            message_id=message_id,
            body=body,
            receipt_handle="",
            attributes=attributes or {},
            system_attributes=system,
        )
        self.create_queue(queue_url)
        with self._lock:
            self._visible[queue_url].append(msg)
        return message_id

    def fail_receive(self, queue_url: str, times: int = 1) -> None:
        with self._lock:
            self._receive_failures[queue_url] += times

    def fail_send(self, body: str, times: int = 1) -> None:
        with self._lock:
            self._send_failures[body] += times

    def fail_delete(self, body: str, times: int = 1) -> None:
        with self._lock:
            self._delete_failures[body] += times

    # ---- inspection ----

    def messages(self, queue_url: str) -> list[Message]:
        """Visible messages, oldest first."""
        with self._lock:
            return list(self._visible.get(queue_url, []))

    def in_flight(self, queue_url: str) -> list[Message]:
        with self._lock:
            return list(self._in_flight.get(queue_url, {}).values())

    def redeliver(self, queue_url: str) -> int:
        """Make every in-flight message visible again, as a lapsed visibility timeout would."""
        with self._lock:
            return self._redeliver(queue_url)

    def calls_for(self, operation: str) -> list[tuple[str, str, str]]:
        with self._lock:
            return [c for c in self.calls if c[0] == operation]

    # ---- IQueueClient ----

    def receive(self, queue_url: str, max_messages: int = MAX_BATCH_SIZE,
                wait_seconds: int = 0, with_attributes: bool = True) -> list[Message]:
        with self._lock:
            self.calls.append(("receive", queue_url, ""))
            if queue_url not in self._visible:
                raise ReceiveError(queue_url, "queue does not exist")
            if self._take_failure(self._receive_failures, queue_url):
                raise ReceiveError(queue_url, "injected failure")
            if self._redeliver_unacked:
                self._redeliver(queue_url)

            visible = self._visible[queue_url]
            count = min(max_messages, MAX_BATCH_SIZE)
            taken, self._visible[queue_url] = visible[:count], visible[count:]

            batch = []
            for msg in taken:
                delivery = msg.model_copy(update={"receipt_handle": uuid.uuid4().hex})
                if not with_attributes:
                    delivery = delivery.model_copy(update={"attributes": {}, "system_attributes": {}})
                self._in_flight[queue_url][delivery.receipt_handle] = msg
                batch.append(delivery)
            return batch

    def send(self, outbound: OutboundMessage) -> str:
        with self._lock:
            self.calls.append(("send", outbound.queue_url, outbound.body))
            if outbound.queue_url not in self._visible:
                raise SendError(outbound.queue_url, "queue does not exist")
            if self._take_failure(self._send_failures, outbound.body):
                raise SendError(outbound.queue_url, "injected failure")

        return self.put(
            outbound.queue_url,
            outbound.body,
            attributes=outbound.attributes,
            group_id=outbound.group_id,
            deduplication_id=outbound.deduplication_id,
        )

    def delete(self, queue_url: str, receipt_handle: str) -> None:
        with self._lock:
            in_flight = self._in_flight.get(queue_url, {})
            msg = in_flight.get(receipt_handle)
            self.calls.append(("delete", queue_url, msg.body if msg else ""))
            if msg is None:
                raise DeleteError(queue_url, f"receipt handle {receipt_handle!r} is not valid")
            if self._take_failure(self._delete_failures, msg.body):
                raise DeleteError(queue_url, "injected failure")
            del in_flight[receipt_handle]

    # ---- internals (lock held) ----

    def _redeliver(self, queue_url: str) -> int:
        in_flight = self._in_flight.get(queue_url, {})
        returned = list(in_flight.values())
        in_flight.clear()
        self._visible[queue_url] = returned + self._visible.get(queue_url, [])
        return len(returned)

    @staticmethod
    def _take_failure(failures: Counter[str], key: str) -> bool:
        if failures[key] > 0:
            failures[key] -= 1
            return True
        return False
