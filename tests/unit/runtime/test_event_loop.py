"""Tests for the tick scheduler, command dispatch and the main loop."""

from __future__ import annotations

import os
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from lazymd.runtime.loop import (
    RuntimeLoopTiming,
    TickScheduler,
    dispatch_commands,
    read_timeout_ms,
    run_main_loop,
)
from lazymd.runtime.messages import DocumentLoaded, ExpandTree, Key, PerformExpansion, Quit, Resize, StartScan, Task, Tick


class _FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TickSchedulerTests(unittest.TestCase):
    def test_ticks_fire_after_their_delay(self) -> None:
        clock = _FakeClock()
        scheduler = TickScheduler(clock=clock)
        scheduler.schedule(Tick(0.5, ExpandTree()))
        scheduler.schedule(Tick(0.1, PerformExpansion()))

        self.assertEqual(scheduler.pop_due(), [])
        clock.now += 0.2
        self.assertEqual(scheduler.pop_due(), [PerformExpansion()])
        self.assertEqual(len(scheduler), 1)
        clock.now += 0.3
        self.assertEqual(scheduler.pop_due(), [ExpandTree()])
        self.assertEqual(len(scheduler), 0)

    def test_equal_deadlines_keep_scheduling_order(self) -> None:
        scheduler = TickScheduler(clock=_FakeClock())
        scheduler.schedule(Tick(0.0, Key("a")))
        scheduler.schedule(Tick(0.0, Key("b")))
        scheduler.schedule(Tick(-1.0, Key("c")))

        self.assertEqual(scheduler.pop_due(), [Key("a"), Key("b"), Key("c")])

    def test_seconds_until_next(self) -> None:
        clock = _FakeClock()
        scheduler = TickScheduler(clock=clock)
        self.assertIsNone(scheduler.seconds_until_next())

        scheduler.schedule(Tick(0.25, StartScan()))
        self.assertAlmostEqual(scheduler.seconds_until_next(), 0.25)
        clock.now += 1
        self.assertEqual(scheduler.seconds_until_next(), 0.0)


class DispatchTests(unittest.TestCase):
    def test_tasks_ticks_and_quit(self) -> None:
        worker = mock.Mock()
        scheduler = TickScheduler(clock=_FakeClock())
        task = Task(lambda: StartScan(), name="scan")

        quit_requested = dispatch_commands([task, Tick(1.0, ExpandTree())], worker, scheduler)

        self.assertFalse(quit_requested)
        worker.submit.assert_called_once_with(task)
        self.assertEqual(len(scheduler), 1)
        self.assertTrue(dispatch_commands([Quit()], worker, scheduler))

    def test_read_timeout_shortened_by_pending_tick(self) -> None:
        clock = _FakeClock()
        scheduler = TickScheduler(clock=clock)
        timing = RuntimeLoopTiming(poll_timeout_ms=30)
        self.assertEqual(read_timeout_ms(scheduler, timing), 30)

        scheduler.schedule(Tick(0.01, StartScan()))
        self.assertEqual(read_timeout_ms(scheduler, timing), 10)
        scheduler.schedule(Tick(0.0, StartScan()))
        self.assertEqual(read_timeout_ms(scheduler, timing), 0)


class _RecordingController:
    def __init__(self) -> None:
        self.dirty = True
        self.received: list = []

    def init(self) -> list:
        return [Tick(0.0, DocumentLoaded(path=Path("x"), content="ready"))]

    def update(self, message) -> list:
        self.received.append(message)
        self.dirty = True
        if message == Key("q"):
            return [Quit()]
        return []


class _FakeTerminal:
    def __init__(self, stdout_fd: int) -> None:
        self.stdout_fd = stdout_fd
        self.entered = False
        self.exited = False

    @contextmanager
    def raw_mode(self):
        self.entered = True
        try:
            yield
        finally:
            self.exited = True


class RunMainLoopTests(unittest.TestCase):
    def test_loop_delivers_resize_ticks_and_keys_until_quit(self) -> None:
        key_read, key_write = os.pipe()
        out_read, out_write = os.pipe()
        try:
            os.write(key_write, b"q")
            controller = _RecordingController()
            terminal = _FakeTerminal(out_write)
            worker = mock.Mock()
            worker.drain_results.return_value = []

            with mock.patch(
                "lazymd.runtime.loop.shutil.get_terminal_size",
                return_value=os.terminal_size((90, 30)),
            ):
                run_main_loop(controller, terminal, key_read, worker, lambda c: "frame")

            written = os.read(out_read, 4096)
        finally:
            for fd in (key_read, key_write, out_read, out_write):
                os.close(fd)

        self.assertTrue(terminal.entered)
        self.assertTrue(terminal.exited)
        self.assertEqual(controller.received[0], Resize(width=90, height=30))
        self.assertIn(DocumentLoaded(path=Path("x"), content="ready"), controller.received)
        self.assertEqual(controller.received[-1], Key("q"))
        self.assertTrue(written.startswith(b"\033[H\033[Jframe"))


if __name__ == "__main__":
    unittest.main()
