"""Pluggable queue client backends behind the IQueueClient protocol."""

from __future__ import annotations

from qtransfer.backends.sqs_backend import SQSQueueClient
from qtransfer.core.config import AppSettings


def create_queue_client(settings: AppSettings | None = None) -> SQSQueueClient:
    """Create an SQS queue client from application settings."""
    if settings is None:
        settings = AppSettings()

    return SQSQueueClient(
        region=settings.sqs.region,
        endpoint_url=settings.sqs.endpoint_url,
        profile=settings.sqs.profile,
    )
