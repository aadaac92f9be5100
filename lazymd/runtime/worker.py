"""Background execution of controller tasks.

Tasks run on a small thread pool; each finished task puts its result message
on a queue that only the event loop drains, so controller state is never
touched from a worker thread.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from queue import Empty, Queue

from loguru import logger

from .messages import Message, Task

DEFAULT_MAX_WORKERS = 4


class BackgroundWorker:
    """Thread-pool task runner with a single-consumer result queue."""

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lazymd-worker")
        self._results: Queue[Message] = Queue()

    def _run(self, task: Task) -> None:
        try:
            message = task.run()
        except Exception:
            logger.exception("background task {} crashed", task.name)
            return
        if message is not None:
            self._results.put(message)

    def submit(self, task: Task) -> Future:
        """Start ``task`` in the background and return its future."""
        return self._executor.submit(self._run, task)

    def drain_results(self) -> list[Message]:
        """Drain all completed task messages in completion order."""
        out: list[Message] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


__all__ = ["BackgroundWorker"]
