"""Integration test fixtures: LocalStack SQS."""

from __future__ import annotations

import os
import uuid

import boto3
import pytest
from botocore.config import Config

# Default LocalStack endpoint
LOCALSTACK_URL = os.environ.get("LOCALSTACK_URL", "http://localhost:4566")
REGION = "us-east-1"


def _sqs_client():
    return boto3.client(
        "sqs",
        region_name=REGION,
        endpoint_url=LOCALSTACK_URL,
        aws_access_key_id="test",
        aws_secret_access_key="test",
        config=Config(connect_timeout=1, read_timeout=2, retries={"max_attempts": 1}),
    )


def _localstack_available() -> bool:
    """Check if LocalStack is reachable."""
    try:
        _sqs_client().list_queues()
        return True
    except Exception:
        return False


skip_no_localstack = pytest.mark.skipif(
    not _localstack_available(),
    reason="LocalStack not available",
)


@pytest.fixture(scope="session")
def localstack_sqs():
    """SQS client pointing at LocalStack."""
    return _sqs_client()


@pytest.fixture
def queue_pair(localstack_sqs):
    """Fresh standard source/destination queues, removed afterwards."""
    suffix = uuid.uuid4().hex[:8]
    src = localstack_sqs.create_queue(QueueName=f"qt-src-{suffix}")["QueueUrl"]
    dest = localstack_sqs.create_queue(QueueName=f"qt-dest-{suffix}")["QueueUrl"]
    yield src, dest
    localstack_sqs.delete_queue(QueueUrl=src)
    localstack_sqs.delete_queue(QueueUrl=dest)
