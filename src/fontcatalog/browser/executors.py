"""
Serial Executors
================

Single-worker task queues. Each queue runs its tasks one at a time in
submission order, so state owned by a queue is never observed mid-mutation.
Delayed tasks can be cancelled until they start; running tasks always finish.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, TypeVar

from fontcatalog.core.exceptions import ExecutorShutdownError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScheduledTask:
    """Handle for a task submitted after a delay."""

    def __init__(self, executor: "SerialExecutor", delay: float, fn: Callable[[], Any]):
        self._executor = executor
        self._fn = fn
        self._cancelled = threading.Event()
        self._started = threading.Event()
        self.future: Future | None = None
        self._timer = threading.Timer(delay, self._enqueue)
        self._timer.daemon = True

    def start(self) -> None:
        self._timer.start()

    def _enqueue(self) -> None:
        if self._cancelled.is_set():
            return
        try:
            self.future = self._executor.submit(self._run)
        except ExecutorShutdownError:
            logger.debug(f"Dropped delayed task, {self._executor.name} is shut down")

    def _run(self) -> None:
        if self._cancelled.is_set():
            return
        self._started.set()
        self._fn()

    def cancel(self) -> bool:
        """Cancel the task. Returns False if it had already started."""
        self._cancelled.set()
        self._timer.cancel()
        return not self._started.is_set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def started(self) -> bool:
        return self._started.is_set()


class SerialExecutor:
    """A named task queue backed by a one-thread pool."""

    def __init__(self, name: str):
        self.name = name
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._worker_ident: int | None = None
        self._pending: set[ScheduledTask] = set()
        self._lock = threading.Lock()
        self._shutdown = False

    def _run(self, fn: Callable[..., T], args: tuple, kwargs: dict) -> T:
        self._worker_ident = threading.get_ident()
        try:
            return fn(*args, **kwargs)
        except Exception:
            logger.exception(f"Task failed on {self.name}")
            raise

    def submit(self, fn: Callable[..., T], *args, **kwargs) -> "Future[T]":
        """Queue ``fn`` and return its future."""
        with self._lock:
            if self._shutdown:
                raise ExecutorShutdownError(self.name)
            return self._executor.submit(self._run, fn, args, kwargs)

    def in_worker(self) -> bool:
        return threading.get_ident() == self._worker_ident

    def call(self, fn: Callable[..., T], *args, **kwargs) -> T:
        """Run ``fn`` on the queue and block for its result.

        Calls made from the queue's own worker run inline instead of
        deadlocking on themselves.
        """
        if self.in_worker():
            return fn(*args, **kwargs)
        return self.submit(fn, *args, **kwargs).result()

    def submit_after(self, delay: float, fn: Callable[[], Any]) -> ScheduledTask:
        """Queue ``fn`` once ``delay`` seconds have passed."""
        task = ScheduledTask(self, delay, fn)
        with self._lock:
            if self._shutdown:
                raise ExecutorShutdownError(self.name)
            self._pending = {t for t in self._pending if not t.started and not t.cancelled}
            self._pending.add(task)
        task.start()
        return task

    def shutdown(self, wait: bool = True) -> None:
        """Cancel delayed tasks and stop accepting work."""
        with self._lock:
            self._shutdown = True
            pending, self._pending = self._pending, set()
        for task in pending:
            task.cancel()
        self._executor.shutdown(wait=wait)
        logger.debug(f"Executor {self.name} shut down")


class Debouncer:
    """Coalesces bursts of calls so only the last one within ``delay`` runs.

    Every schedule bumps a generation counter; a task whose generation is no
    longer current does nothing when it runs.
    """

    def __init__(self, executor: SerialExecutor, delay: float):
        self.executor = executor
        self.delay = delay
        self._generation = 0
        self._task: ScheduledTask | None = None
        self._lock = threading.Lock()

    def schedule(self, fn: Callable[[], Any], delay: float | None = None) -> ScheduledTask:
        """Run ``fn`` after ``delay`` (the debouncer's default when None),
        cancelling whatever was scheduled before."""
        with self._lock:
            self._generation += 1
            token = self._generation
            if self._task is not None:
                self._task.cancel()

            def run() -> None:
                if token != self._generation:
                    return
                fn()

            self._task = self.executor.submit_after(self.delay if delay is None else delay, run)
            return self._task

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            if self._task is not None:
                self._task.cancel()
                self._task = None

    @property
    def generation(self) -> int:
        return self._generation
