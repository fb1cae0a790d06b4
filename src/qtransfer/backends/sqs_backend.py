"""SQS backend implementing IQueueClient."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from qtransfer.core.exceptions import DeleteError, ReceiveError, SendError
from qtransfer.models.message import MAX_BATCH_SIZE, Message, OutboundMessage

# Fields of a received MessageAttributeValue that SendMessage accepts back.
_SENDABLE_ATTRIBUTE_FIELDS = ("DataType", "StringValue", "BinaryValue")


def _sendable_attributes(raw: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """Drop the list-valued fields SQS returns but does not accept on send."""
    return {
        name: {k: v for k, v in value.items() if k in _SENDABLE_ATTRIBUTE_FIELDS}
        for name, value in raw.items()
    }


def _to_message(raw: dict[str, Any]) -> Message:
    return Message(
        message_id=raw.get("MessageId", ""),
        body=raw.get("Body", ""),
        receipt_handle=raw["ReceiptHandle"],
        attributes=_sendable_attributes(raw.get("MessageAttributes", {})),
        system_attributes=raw.get("Attributes", {}),
    )


class SQSQueueClient:
    """Production IQueueClient backed by SQS.

    boto3 clients are thread-safe, so one instance is shared by every worker.
    """

    def __init__(self, region: str = "us-east-1", endpoint_url: str | None = None,
                 profile: str | None = None, client: Any = None) -> None:
        if client is None:
            # Session honours AWS_PROFILE and ~/.aws/config like the aws cli.
            session = boto3.Session(profile_name=profile, region_name=region)
            kwargs: dict = {}
            if endpoint_url:
                kwargs["endpoint_url"] = endpoint_url
            client = session.client("sqs", **kwargs)
        self._client = client

    def receive(self, queue_url: str, max_messages: int = MAX_BATCH_SIZE,
                wait_seconds: int = 0, with_attributes: bool = True) -> list[Message]:
        kwargs: dict[str, Any] = {
            "QueueUrl": queue_url,
            "MaxNumberOfMessages": min(max_messages, MAX_BATCH_SIZE),
            "WaitTimeSeconds": wait_seconds,
        }
        if with_attributes:
            kwargs["MessageAttributeNames"] = ["All"]
            kwargs["AttributeNames"] = ["All"]
        try:
            resp = self._client.receive_message(**kwargs)
        except (ClientError, BotoCoreError) as exc:
            raise ReceiveError(queue_url, str(exc)) from exc
        return [_to_message(m) for m in resp.get("Messages", [])]

    def send(self, outbound: OutboundMessage) -> str:
        kwargs: dict[str, Any] = {
            "QueueUrl": outbound.queue_url,
            "MessageBody": outbound.body,
        }
        if outbound.attributes:
            kwargs["MessageAttributes"] = outbound.attributes
        if outbound.group_id is not None:
            kwargs["MessageGroupId"] = outbound.group_id
        if outbound.deduplication_id is not None:
            kwargs["MessageDeduplicationId"] = outbound.deduplication_id
        try:
            resp = self._client.send_message(**kwargs)
        except (ClientError, BotoCoreError) as exc:
            raise SendError(outbound.queue_url, str(exc)) from exc
        return resp.get("MessageId", "")

    def delete(self, queue_url: str, receipt_handle: str) -> None:
        try:
            self._client.delete_message(QueueUrl=queue_url, ReceiptHandle=receipt_handle)
        except (ClientError, BotoCoreError) as exc:
            raise DeleteError(queue_url, str(exc)) from exc
