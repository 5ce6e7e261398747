from __future__ import annotations

import asyncio
from collections.abc import Callable

from async_drain_queue.adapters.asyncio_scheduler import AsyncioScheduler
from async_drain_queue.adapters.virtual_scheduler import VirtualClockScheduler, VirtualTimerHandle
from async_drain_queue.application.ports.scheduler import SchedulerPort, TimerHandle
from async_drain_queue.queue import AsyncDrainQueue
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    def record(self, name: str, **payload) -> None:
        self.calls.append((name, payload))


class _FakeHandle(TimerHandle):
    def __init__(self, recorder: _Recorder) -> None:
        self.recorder = recorder

    def cancel(self) -> None:
        self.recorder.record("cancel")


class _FakeScheduler(SchedulerPort):
    def __init__(self, recorder: _Recorder) -> None:
        self.recorder = recorder

    def now(self) -> float:
        return 0.0

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        self.recorder.record("call_later", delay=delay)
        return _FakeHandle(self.recorder)


def test_adapters_satisfy_scheduler_port() -> None:
    loop = asyncio.new_event_loop()
    try:
        assert isinstance(AsyncioScheduler(loop), SchedulerPort)
    finally:
        loop.close()
    assert isinstance(VirtualClockScheduler(), SchedulerPort)
    assert isinstance(VirtualTimerHandle(0.0, lambda: None), TimerHandle)


def test_queue_drives_any_scheduler_port() -> None:
    recorder = _Recorder()
    queue = AsyncDrainQueue(100, scheduler=_FakeScheduler(recorder))

    queue.start()
    queue.set_interval(40)
    queue.pause()

    assert recorder.calls == [
        ("call_later", {"delay": 0.1}),
        ("call_later", {"delay": 0.04}),
        ("cancel", {}),
        ("cancel", {}),
    ]
