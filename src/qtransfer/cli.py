"""Command-line entry point.

Usage:
    qtransfer --src SOURCE_QUEUE_URL --dest DEST_QUEUE_URL [--clients 4] [--fifo]
"""

from __future__ import annotations

import argparse
import sys

import structlog
from pydantic import ValidationError

from qtransfer.backends import create_queue_client
from qtransfer.core.config import AppSettings, LoggingConfig, SQSConfig, TransferConfig
from qtransfer.core.exceptions import ConfigurationError
from qtransfer.core.logging import configure_logging
from qtransfer.transfer.orchestrator import Orchestrator


def build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    transfer = settings.transfer
    parser = argparse.ArgumentParser(
        prog="qtransfer",
        description="Move every message from one SQS queue to another.",
    )
    parser.add_argument("--src", default=transfer.source_queue_url, help="source queue URL")
    parser.add_argument("--dest", default=transfer.destination_queue_url, help="destination queue URL")
    parser.add_argument("--clients", type=int, default=transfer.workers, help="number of concurrent workers")
    parser.add_argument("--fifo", action="store_true", default=transfer.fifo, help="queues are FIFO queues")
    parser.add_argument("--wait-time", type=int, default=transfer.wait_time_seconds,
                        help="receive wait time in seconds (0 returns immediately)")
    parser.add_argument("--max-messages", type=int, default=transfer.max_messages,
                        help="messages per receive call (1-10)")
    parser.add_argument("--batch-concurrency", type=int, default=transfer.batch_concurrency,
                        help="messages of a batch delivered in parallel per worker")
    parser.add_argument("--on-poll-error", choices=["abort", "raise"], default=transfer.on_poll_error,
                        help="what a worker does when a receive call fails")
    parser.add_argument("--region", default=settings.sqs.region, help="AWS region")
    parser.add_argument("--endpoint-url", default=settings.sqs.endpoint_url,
                        help="SQS endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--profile", default=settings.sqs.profile, help="AWS shared-config profile")
    parser.add_argument("--log-level", default=settings.logging.level, help="log level")
    parser.add_argument("--json-logs", action="store_true", default=settings.logging.json_logs,
                        help="emit one JSON object per log line")
    return parser


def settings_from_args(args: argparse.Namespace) -> AppSettings:
    """Build validated settings from parsed flags.

    Raises:
        ConfigurationError: a queue is missing or a value is out of range.
    """
    try:
        transfer = TransferConfig(
            source_queue_url=args.src,
            destination_queue_url=args.dest,
            workers=args.clients,
            fifo=args.fifo,
            wait_time_seconds=args.wait_time,
            max_messages=args.max_messages,
            batch_concurrency=args.batch_concurrency,
            on_poll_error=args.on_poll_error,
        )
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
    transfer.require_queues()

    return AppSettings(
        sqs=SQSConfig(region=args.region, endpoint_url=args.endpoint_url, profile=args.profile),
        transfer=transfer,
        logging=LoggingConfig(level=args.log_level, json_logs=args.json_logs),
    )


def _builtin_defaults() -> AppSettings:
    """Settings holding the field defaults only, without reading the environment."""
    return AppSettings.model_construct(
        sqs=SQSConfig.model_construct(),
        transfer=TransferConfig.model_construct(),
        logging=LoggingConfig.model_construct(),
    )


def _usage_error(parser: argparse.ArgumentParser, message: str) -> int:
    parser.print_usage(sys.stderr)
    print(f"{parser.prog}: error: {message}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    try:
        env_settings = AppSettings()
    except ValidationError as exc:
        return _usage_error(build_parser(_builtin_defaults()), f"invalid environment: {exc}")

    parser = build_parser(env_settings)
    args = parser.parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ConfigurationError as exc:
        return _usage_error(parser, str(exc))

    configure_logging(settings.logging.level, settings.logging.json_logs)
    client = create_queue_client(settings)
    Orchestrator(client, settings.transfer, log=structlog.get_logger("qtransfer")).run()
    # Worker failures are reported in the logs, not the exit status.
    return 0


if __name__ == "__main__":
    sys.exit(main())
