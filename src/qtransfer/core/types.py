"""Type aliases used across qtransfer."""

from __future__ import annotations

from typing import Any

QueueUrl = str
ReceiptHandle = str
MessageAttributes = dict[str, dict[str, Any]]
SystemAttributes = dict[str, str]
