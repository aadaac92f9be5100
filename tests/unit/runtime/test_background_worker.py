"""Tests for the thread-pool background worker."""

from __future__ import annotations

import threading
import time
import unittest
from pathlib import Path

from lazymd.runtime.messages import DocumentLoaded, Task
from lazymd.runtime.worker import BackgroundWorker


def _wait_for_results(worker: BackgroundWorker, *, expected_count: int, timeout_seconds: float = 2.0) -> list:
    deadline = time.monotonic() + timeout_seconds
    out: list = []
    while time.monotonic() < deadline:
        out.extend(worker.drain_results())
        if len(out) >= expected_count:
            break
        time.sleep(0.01)
    return out


class BackgroundWorkerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.worker = BackgroundWorker(max_workers=2)

    def tearDown(self) -> None:
        self.worker.shutdown()

    def test_task_result_is_delivered_through_queue(self) -> None:
        path = Path("/tmp/doc.md")
        self.worker.submit(Task(lambda p: DocumentLoaded(path=p, content="body"), (path,), name="load"))

        results = _wait_for_results(self.worker, expected_count=1)

        self.assertEqual(results, [DocumentLoaded(path=path, content="body")])

    def test_task_runs_off_the_calling_thread(self) -> None:
        seen: list[str] = []

        def record() -> DocumentLoaded:
            seen.append(threading.current_thread().name)
            return DocumentLoaded(path=Path("x"), content="")

        self.worker.submit(Task(record))
        _wait_for_results(self.worker, expected_count=1)

        self.assertEqual(len(seen), 1)
        self.assertNotEqual(seen[0], threading.current_thread().name)
        self.assertTrue(seen[0].startswith("lazymd-worker"))

    def test_crashing_task_is_dropped_and_worker_keeps_running(self) -> None:
        def crash() -> DocumentLoaded:
            raise RuntimeError("boom")

        self.worker.submit(Task(crash, name="crash")).result(timeout=2)
        self.worker.submit(Task(lambda: DocumentLoaded(path=Path("ok"), content="fine")))

        results = _wait_for_results(self.worker, expected_count=1)

        self.assertEqual([msg.content for msg in results], ["fine"])

    def test_drain_without_results_is_empty(self) -> None:
        self.assertEqual(self.worker.drain_results(), [])


if __name__ == "__main__":
    unittest.main()
