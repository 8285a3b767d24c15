"""Bounded worker pool that runs channel sends off the request path."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from functools import lru_cache
from typing import Callable, Optional, TypeVar

from app.config import get_settings

logger = logging.getLogger(__name__)

CHANNEL_SEND_TIMEOUT_SECONDS = 10.0

T = TypeVar("T")


class ChannelTimeoutError(TimeoutError):
    """Raised inside a delivery future when the send exceeded its time budget."""


class ChannelDeliveryPool:
    """Run send tasks with a per-task timeout and a cap on in-flight work.

    Each accepted task runs on a supervisor thread that waits for the actual
    send on a second executor, so a hung provider call only costs one sender
    thread and the task still resolves once the timeout elapses.
    """

    def __init__(
        self,
        *,
        max_workers: int = 4,
        max_pending: int = 256,
        timeout: float = CHANNEL_SEND_TIMEOUT_SECONDS,
    ) -> None:
        self._timeout = timeout
        self._slots = threading.BoundedSemaphore(max_pending)
        self._supervisors = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="delivery-supervisor"
        )
        self._senders = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="delivery-sender"
        )
        self._closed = False

    @property
    def timeout(self) -> float:
        return self._timeout

    def submit(
        self,
        task: Callable[[], T],
        on_complete: Optional[Callable[[T | None, BaseException | None], None]] = None,
    ) -> Future | None:
        """Schedule ``task``; return ``None`` when the pool is saturated or closed.

        ``on_complete`` runs on the worker with ``(result, error)`` before the
        returned future resolves, so waiting on the future also waits for it.
        """

        if self._closed or not self._slots.acquire(blocking=False):
            logger.warning("Channel delivery queue is saturated; dropping send")
            return None
        try:
            future = self._supervisors.submit(self._supervise, task, on_complete)
        except RuntimeError:
            self._slots.release()
            logger.warning("Channel delivery pool is shut down; dropping send")
            return None
        future.add_done_callback(lambda _future: self._slots.release())
        return future

    def _supervise(
        self,
        task: Callable[[], T],
        on_complete: Optional[Callable[[T | None, BaseException | None], None]],
    ) -> T:
        try:
            result = self._run_with_timeout(task)
        except Exception as exc:
            if on_complete is not None:
                on_complete(None, exc)
            raise
        if on_complete is not None:
            on_complete(result, None)
        return result

    def _run_with_timeout(self, task: Callable[[], T]) -> T:
        inner = self._senders.submit(task)
        try:
            return inner.result(timeout=self._timeout)
        except FutureTimeoutError as exc:
            inner.cancel()
            raise ChannelTimeoutError(
                f"Channel send exceeded {self._timeout:g}s"
            ) from exc

    def shutdown(self, *, wait: bool = True) -> None:
        self._closed = True
        self._supervisors.shutdown(wait=wait)
        self._senders.shutdown(wait=wait)


@lru_cache
def get_delivery_pool() -> ChannelDeliveryPool:
    """Return the process-wide delivery pool configured from settings."""

    settings = get_settings()
    return ChannelDeliveryPool(
        max_workers=settings.delivery_workers,
        max_pending=settings.delivery_queue_size,
    )


def shutdown_delivery_pool() -> None:
    """Drain the shared pool and forget it so a later call builds a fresh one."""

    if get_delivery_pool.cache_info().currsize:
        get_delivery_pool().shutdown(wait=True)
    get_delivery_pool.cache_clear()


__all__ = [
    "CHANNEL_SEND_TIMEOUT_SECONDS",
    "ChannelDeliveryPool",
    "ChannelTimeoutError",
    "get_delivery_pool",
    "shutdown_delivery_pool",
]
