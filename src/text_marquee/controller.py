"""Round/pause state machine driving the scroll animator."""

from __future__ import annotations

from enum import Enum
import logging
import time
from typing import Callable, Optional, Protocol

from text_marquee.animator import Direction, ScrollAnimator

logger = logging.getLogger(__name__)

DEFAULT_FRAME_INTERVAL = 1 / 60


class Phase(Enum):
    IDLE = "idle"
    DELAYING = "delaying"
    RUNNING = "running"
    PAUSING = "pausing"
    STOPPED = "stopped"


class TimerHandle(Protocol):
    def stop(self) -> None: ...


class Scheduler(Protocol):
    """The subset of Textual's timer API the controller needs."""

    def set_timer(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...

    def set_interval(
        self, interval: float, callback: Callable[[], None]
    ) -> TimerHandle: ...


class RoundController:
    """Sequences delay, run, pause and repeat (or reverse) for one marquee.

    A round is one forward leg, or a forward and return pair when bouncing.
    The per-frame clock is only subscribed while running; delays and pauses
    are single one-shot timers.
    """

    def __init__(
        self,
        animator: ScrollAnimator,
        scheduler: Scheduler,
        *,
        bounce: bool = False,
        start_after: float = 0.0,
        pause_after_round: float = 0.0,
        number_of_rounds: Optional[int] = None,
        pause_after_last_round: bool = False,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
        now: Callable[[], float] = time.monotonic,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self._animator = animator
        self._scheduler = scheduler
        self._bounce = bounce
        self._start_after = start_after
        self._pause_after_round = pause_after_round
        self._number_of_rounds = number_of_rounds
        self._pause_after_last_round = pause_after_last_round
        self._frame_interval = frame_interval
        self._now = now
        self._on_change = on_change
        self._timer: Optional[TimerHandle] = None
        self._frame_timer: Optional[TimerHandle] = None
        self._last_tick = 0.0
        self._alive = True
        self._rounds_complete = False
        self.phase = Phase.IDLE
        self.rounds_completed = 0
        self.legs_completed = 0
        animator.on_complete = self._handle_completion

    @property
    def is_animating(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def is_alive(self) -> bool:
        return self._alive

    def start(self) -> None:
        """Leave Idle: wait `start_after`, then run the first leg."""
        if not self._alive or self.phase is not Phase.IDLE:
            return
        self._set_phase(Phase.DELAYING)
        if self._start_after > 0:
            self._timer = self._scheduler.set_timer(
                self._start_after, self._on_delay_elapsed
            )
        else:
            self._on_delay_elapsed()

    def cancel(self) -> None:
        """Tear down: cancel pending timers and release the frame clock."""
        if not self._alive:
            return
        self._alive = False
        self._stop_timer()
        self._stop_frame_clock()
        self._animator.stop()
        self.phase = Phase.STOPPED
        logger.debug("Marquee controller cancelled")

    def on_frame(self) -> None:
        """Frame clock callback: advance the animator by real elapsed time."""
        if not self._alive or self.phase is not Phase.RUNNING:
            return
        current = self._now()
        elapsed = current - self._last_tick
        self._last_tick = current
        self._animator.tick(elapsed)
        self._notify()

    def geometry_changed(self) -> None:
        """Re-check the frame clock after the animator's cycle length changed."""
        if not self._alive or self.phase is not Phase.RUNNING:
            return
        if self._animator.duration <= 0:
            self._stop_frame_clock()
        else:
            self._start_frame_clock()

    def _on_delay_elapsed(self) -> None:
        self._timer = None
        if not self._alive or self.phase is not Phase.DELAYING:
            return
        self._animator.start(0.0)
        self._enter_running()

    def _on_pause_elapsed(self) -> None:
        self._timer = None
        if not self._alive or self.phase is not Phase.PAUSING:
            return
        self._resume()

    def _handle_completion(self, direction: Direction) -> None:
        if not self._alive or self.phase is not Phase.RUNNING:
            return
        self._stop_frame_clock()
        self.legs_completed += 1
        if not self._bounce or direction is Direction.REVERSE:
            self.rounds_completed += 1
        if (
            self._number_of_rounds is not None
            and self.rounds_completed >= self._number_of_rounds
        ):
            self._rounds_complete = True
            if self._pause_after_last_round and self._pause_after_round > 0:
                self._enter_pausing()
            else:
                self._enter_stopped()
            return
        if self._pause_after_round > 0:
            self._enter_pausing()
        else:
            self._resume()

    def _resume(self) -> None:
        # A pending stop wins over the next leg.
        if self._rounds_complete:
            self._enter_stopped()
            return
        if self._bounce and self._animator.direction is Direction.FORWARD:
            self._animator.reverse_from(1.0)
        else:
            self._animator.start(0.0)
        self._enter_running()

    def _enter_running(self) -> None:
        self._set_phase(Phase.RUNNING)
        self._start_frame_clock()
        self._notify()

    def _enter_pausing(self) -> None:
        self._set_phase(Phase.PAUSING)
        self._timer = self._scheduler.set_timer(
            self._pause_after_round, self._on_pause_elapsed
        )
        self._notify()

    def _enter_stopped(self) -> None:
        self._stop_timer()
        self._stop_frame_clock()
        self._animator.stop()
        self._set_phase(Phase.STOPPED)
        logger.debug("Marquee stopped after %s rounds", self.rounds_completed)
        self._notify()

    def _set_phase(self, phase: Phase) -> None:
        logger.debug("Marquee phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _start_frame_clock(self) -> None:
        # A zero-length cycle has nothing to animate; leave it parked at the start.
        if self._frame_timer is not None or self._animator.duration <= 0:
            return
        self._last_tick = self._now()
        self._frame_timer = self._scheduler.set_interval(
            self._frame_interval, self.on_frame
        )

    def _stop_frame_clock(self) -> None:
        if self._frame_timer is not None:
            self._frame_timer.stop()
            self._frame_timer = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
