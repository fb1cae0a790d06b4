"""Create a source/destination queue pair and seed the source with sample messages.

Usage:
    python scripts/seed_queues.py --endpoint-url http://localhost:4566 --count 25 --fifo
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3


def create_queues(sqs: Any, prefix: str = "qtransfer", fifo: bool = False) -> tuple[str, str]:
    """Create (or look up) the source and destination queues. Returns their URLs."""
    suffix = ".fifo" if fifo else ""
    attributes = {"FifoQueue": "true"} if fifo else {}
    urls = []
    for role in ("source", "destination"):
        name = f"{prefix}-{role}{suffix}"
        resp = sqs.create_queue(QueueName=name, Attributes=attributes)
        print(f"  Queue {name}: {resp['QueueUrl']}")
        urls.append(resp["QueueUrl"])
    return urls[0], urls[1]


def seed_messages(sqs: Any, queue_url: str, count: int = 10, fifo: bool = False,
                  groups: int = 3) -> int:
    """Send ``count`` numbered messages with a custom attribute, ten per batch call."""
    sent = 0
    for start in range(0, count, 10):
        entries: list[dict[str, Any]] = []
        for i in range(start, min(start + 10, count)):
            entry: dict[str, Any] = {
                "Id": str(i),
                "MessageBody": f"sample message {i}",
                "MessageAttributes": {
                    "seq": {"DataType": "Number", "StringValue": str(i)},
                },
            }
            if fifo:
                entry["MessageGroupId"] = f"group-{i % groups}"
                entry["MessageDeduplicationId"] = f"dedup-{i}"
            entries.append(entry)
        resp = sqs.send_message_batch(QueueUrl=queue_url, Entries=entries)
        sent += len(resp.get("Successful", []))
        for failure in resp.get("Failed", []):
            print(f"  Failed to seed message {failure['Id']}: {failure.get('Message', '')}")
    print(f"  Seeded {sent} messages")
    return sent


def main() -> None:
    parser = argparse.ArgumentParser(description="Create and seed SQS queues for qtransfer")
    parser.add_argument("--endpoint-url", default=None, help="SQS endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--prefix", default="qtransfer", help="Queue name prefix")
    parser.add_argument("--count", type=int, default=10, help="Messages to seed")
    parser.add_argument("--fifo", action="store_true", help="Create FIFO queues")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    sqs = boto3.client("sqs", **kwargs)

    print("Creating queues...")
    source_url, _ = create_queues(sqs, prefix=args.prefix, fifo=args.fifo)

    print("Seeding messages...")
    seed_messages(sqs, source_url, count=args.count, fifo=args.fifo)

    print("Done!")


if __name__ == "__main__":
    main()
