"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from qtransfer.core.exceptions import ConfigurationError
from qtransfer.models.message import MAX_BATCH_SIZE, QueueMode, QueueRef


class SQSConfig(BaseSettings):
    """SQS client configuration."""

    model_config = {"env_prefix": "QTRANSFER_SQS_"}

    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    profile: str | None = None  # shared-config profile, like AWS_PROFILE


class TransferConfig(BaseSettings):
    """Source/destination queues and worker tuning."""

    model_config = {"env_prefix": "QTRANSFER_TRANSFER_"}

    source_queue_url: str = ""
    destination_queue_url: str = ""
    workers: int = Field(default=1, ge=1)
    fifo: bool = False
    wait_time_seconds: int = Field(default=0, ge=0, le=20)
    max_messages: int = Field(default=MAX_BATCH_SIZE, ge=1, le=MAX_BATCH_SIZE)
    batch_concurrency: int = Field(default=MAX_BATCH_SIZE, ge=1)
    on_poll_error: Literal["abort", "raise"] = "abort"

    @property
    def mode(self) -> QueueMode:
        return QueueMode.FIFO if self.fifo else QueueMode.STANDARD

    @property
    def source_ref(self) -> QueueRef:
        return QueueRef(url=self.source_queue_url, mode=self.mode)

    @property
    def destination_ref(self) -> QueueRef:
        return QueueRef(url=self.destination_queue_url, mode=self.mode)

    def require_queues(self) -> None:
        """Raise ConfigurationError unless both queue ids are set."""
        missing = [
            name
            for name, value in (
                ("source queue", self.source_queue_url),
                ("destination queue", self.destination_queue_url),
            )
            if not value.strip()
        ]
        if missing:
            raise ConfigurationError(f"Missing {' and '.join(missing)}")


class LoggingConfig(BaseSettings):
    """Log output configuration."""

    model_config = {"env_prefix": "QTRANSFER_LOG_"}

    level: str = "INFO"
    json_logs: bool = False


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "QTRANSFER_"}

    sqs: SQSConfig = Field(default_factory=SQSConfig)
    transfer: TransferConfig = Field(default_factory=TransferConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
