"""Shared test doubles: re-export the in-memory queue backend."""

from __future__ import annotations

from qtransfer.backends.memory_backend import MemoryQueueClient

__all__ = ["MemoryQueueClient"]
