"""Orchestrator: run N independent transfer workers to completion."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any

import structlog

from qtransfer.core.config import TransferConfig
from qtransfer.core.protocols import IQueueClient
from qtransfer.models.results import WorkerResult, WorkerStatus
from qtransfer.transfer.worker import TransferWorker

logger = structlog.get_logger(__name__)


class Orchestrator:
    """Starts ``config.workers`` workers on threads and waits for all of them.

    Workers share only the read-only config and the queue client. A worker that
    crashes is logged and recorded as failed; its siblings keep running.
    """

    def __init__(self, client: IQueueClient, config: TransferConfig, log: Any = None) -> None:
        config.require_queues()
        self._client = client
        self._config = config
        self._log = log or logger

    def build_worker(self, worker_id: int) -> TransferWorker:
        return TransferWorker(self._client, self._config, worker_id=worker_id, log=self._log)

    def run(self) -> list[WorkerResult]:
        cfg = self._config
        self._log.info(
            "transfer starting",
            source_queue=cfg.source_queue_url,
            destination_queue=cfg.destination_queue_url,
            workers=cfg.workers,
            fifo=cfg.fifo,
        )

        workers = [self.build_worker(i) for i in range(1, cfg.workers + 1)]
        with ThreadPoolExecutor(max_workers=cfg.workers, thread_name_prefix="qtransfer") as pool:
            futures = [(w.worker_id, pool.submit(w.run)) for w in workers]

        results: list[WorkerResult] = []
        for worker_id, future in futures:
            exc = future.exception()
            if exc is not None:
                self._log.error("worker crashed", worker=worker_id, error=str(exc), exc_info=exc)
                results.append(WorkerResult(worker_id=worker_id, status=WorkerStatus.FAILED, error=str(exc)))
            else:
                results.append(future.result())

        self._log.info("all done")
        return results
