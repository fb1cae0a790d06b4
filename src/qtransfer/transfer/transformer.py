"""Build the outbound message for a standard or FIFO destination."""

from __future__ import annotations

from typing import Any

import structlog

from qtransfer.core.exceptions import MissingFifoAttributeError
from qtransfer.models.message import (
    DEDUPLICATION_ID_ATTRIBUTE,
    GROUP_ID_ATTRIBUTE,
    Message,
    OutboundMessage,
    QueueRef,
)

logger = structlog.get_logger(__name__)


def build_standard_message(message: Message, destination: QueueRef) -> OutboundMessage:
    """Body and custom attributes only; standard queues reject group/dedup ids."""
    return OutboundMessage(
        queue_url=destination.url,
        body=message.body,
        attributes=message.attributes,
    )


def build_fifo_message(message: Message, destination: QueueRef, log: Any = None) -> OutboundMessage:
    """Carry the group id and deduplication id over from the system attributes.

    Raises:
        MissingFifoAttributeError: either id is absent or empty.
    """
    group_id = message.group_id
    if group_id is None:
        raise MissingFifoAttributeError(message.message_id, GROUP_ID_ATTRIBUTE)
    deduplication_id = message.deduplication_id
    if deduplication_id is None:
        raise MissingFifoAttributeError(message.message_id, DEDUPLICATION_ID_ATTRIBUTE)

    (log or logger).debug(
        "fifo attributes",
        message_id=message.message_id,
        group_id=group_id,
        deduplication_id=deduplication_id,
    )
    return OutboundMessage(
        queue_url=destination.url,
        body=message.body,
        attributes=message.attributes,
        group_id=group_id,
        deduplication_id=deduplication_id,
    )


def transform(message: Message, destination: QueueRef, fifo: bool, log: Any = None) -> OutboundMessage:
    if fifo:
        return build_fifo_message(message, destination, log=log)
    return build_standard_message(message, destination)
