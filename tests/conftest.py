"""Pytest configuration for text-marquee."""

from __future__ import annotations

from typing import Callable, Optional

import pytest


class FakeTimer:
    def __init__(self, delay: float, callback: Callable[[], None], repeat: bool) -> None:
        self.delay = delay
        self.callback = callback
        self.repeat = repeat
        self.stopped = False
        self.fired = False

    def stop(self) -> None:
        self.stopped = True

    @property
    def active(self) -> bool:
        return not self.stopped and not self.fired


class FakeScheduler:
    """Records timers instead of running them; tests fire them by hand."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []
        self.intervals: list[FakeTimer] = []

    def set_timer(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback, repeat=False)
        self.timers.append(timer)
        return timer

    def set_interval(
        self, interval: float, callback: Callable[[], None]
    ) -> FakeTimer:
        timer = FakeTimer(interval, callback, repeat=True)
        self.intervals.append(timer)
        return timer

    def pending_timer(self) -> Optional[FakeTimer]:
        active = [timer for timer in self.timers if timer.active]
        return active[-1] if active else None

    def active_interval(self) -> Optional[FakeTimer]:
        active = [timer for timer in self.intervals if timer.active]
        return active[-1] if active else None

    def fire_timer(self) -> None:
        timer = self.pending_timer()
        assert timer is not None, "no pending timer"
        timer.fired = True
        timer.callback()


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


def run_frames(
    scheduler: FakeScheduler, clock: FakeClock, step: float, count: int
) -> int:
    """Tick the active frame clock up to `count` times; return ticks run."""
    ran = 0
    for _ in range(count):
        interval = scheduler.active_interval()
        if interval is None:
            break
        clock.advance(step)
        interval.callback()
        ran += 1
    return ran


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
