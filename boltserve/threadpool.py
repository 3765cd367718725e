"""Worker thread pool fed from a shared completion queue."""

from __future__ import annotations

import logging
import os
import queue
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .constants import MAX_THREADS, MIN_THREADS, THREADS_PER_CORE

logger = logging.getLogger(__name__)

_SHUTDOWN = object()
_DEFAULT_SHUTDOWN_TIMEOUT = 5.0


def get_cpu_count() -> int:
    """Return the number of CPU cores, at least 1."""
    return os.cpu_count() or 1


def _default_worker_count() -> int:
    wanted = get_cpu_count() * THREADS_PER_CORE
    return max(MIN_THREADS, min(MAX_THREADS, wanted))


@dataclass(frozen=True)
class PoolStats:
    """Totals gathered from every worker of a pool."""

    total_requests: int = 0
    bytes_sent: int = 0
    bytes_received: int = 0


@dataclass
class Worker:
    """One worker thread and the work it has accounted for."""

    worker_id: int
    thread: Optional[threading.Thread] = None
    running: bool = True
    requests_handled: int = 0
    bytes_sent: int = 0
    bytes_received: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_request(self) -> None:
        """Count one handled request."""
        with self._lock:
            self.requests_handled += 1

    def record_sent(self, count: int) -> None:
        """Add ``count`` bytes to the bytes sent."""
        if count < 0:
            raise ValueError("byte count must not be negative")
        with self._lock:
            self.bytes_sent += count

    def record_received(self, count: int) -> None:
        """Add ``count`` bytes to the bytes received."""
        if count < 0:
            raise ValueError("byte count must not be negative")
        with self._lock:
            self.bytes_received += count


Handler = Callable[[Worker, Any], None]
ErrorHandler = Callable[[Worker, Any, BaseException], None]


class ThreadPool:
    """Threads that take completions from one queue and pass them to a handler.

    The handler is called as ``handler(worker, item)`` and may record
    requests and byte counts on the worker. An exception from the handler
    is reported to ``on_error`` (or logged) and the worker carries on.
    """

    def __init__(
        self,
        handler: Handler,
        num_workers: int | None = None,
        on_error: ErrorHandler | None = None,
    ) -> None:
        if num_workers is None:
            num_workers = _default_worker_count()
        if num_workers < 1:
            raise ValueError("a thread pool needs at least one worker")
        self._handler = handler
        self._on_error = on_error
        self._queue: queue.Queue = queue.Queue()
        self._closed = False
        self._state_lock = threading.Lock()
        self.workers: list[Worker] = [Worker(worker_id=i) for i in range(num_workers)]
        for worker in self.workers:
            thread = threading.Thread(
                target=self._run,
                args=(worker,),
                name=f"bolt-worker-{worker.worker_id}",
                daemon=True,
            )
            worker.thread = thread
            thread.start()

    @property
    def num_workers(self) -> int:
        """Number of worker threads."""
        return len(self.workers)

    @property
    def closed(self) -> bool:
        """True once shutdown has begun."""
        return self._closed

    def _run(self, worker: Worker) -> None:
        logger.debug("worker %d started", worker.worker_id)
        while worker.running:
            item = self._queue.get()
            try:
                if item is _SHUTDOWN:
                    break
                try:
                    self._handler(worker, item)
                except Exception as exc:  # the worker must survive a failed item
                    if self._on_error is not None:
                        self._on_error(worker, item, exc)
                    else:
                        logger.error("worker %d failed on %r: %s", worker.worker_id, item, exc)
            finally:
                self._queue.task_done()
        worker.running = False
        logger.debug("worker %d stopped", worker.worker_id)

    def submit(self, item: Any) -> None:
        """Queue a completion for the next free worker."""
        with self._state_lock:
            if self._closed:
                raise RuntimeError("thread pool is shut down")
            self._queue.put(item)

    def join(self) -> None:
        """Block until every queued item has been handled."""
        self._queue.join()

    def shutdown(self, timeout: float | None = _DEFAULT_SHUTDOWN_TIMEOUT) -> None:
        """Stop the workers, waiting up to ``timeout`` seconds for each."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            for _ in self.workers:
                self._queue.put(_SHUTDOWN)
        for worker in self.workers:
            if worker.thread is not None:
                worker.thread.join(timeout)

    def stats(self) -> PoolStats:
        """Sum the counters of all workers."""
        return PoolStats(
            total_requests=sum(w.requests_handled for w in self.workers),
            bytes_sent=sum(w.bytes_sent for w in self.workers),
            bytes_received=sum(w.bytes_received for w in self.workers),
        )

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()