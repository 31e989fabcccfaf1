"""Scroll animator: progress over time mapped to a horizontal text offset."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from text_marquee.curves import Curve, linear, shape


class Direction(Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


class ScrollAnimator:
    """Linear 0..1 progress clock with curve shaping.

    `direction` is the way progress runs (forward 0 -> 1, reverse 1 -> 0).
    `reverse_scroll` picks which end of the offset range progress 0 maps to.
    When progress reaches the end it is running towards, the animator stops
    and calls `on_complete` with the direction of the finished leg.
    """

    def __init__(
        self,
        *,
        duration: float,
        span: float,
        reverse_scroll: bool = False,
        curve: Curve = linear,
        on_complete: Optional[Callable[[Direction], None]] = None,
    ) -> None:
        self.duration = duration
        self.span = span
        self.reverse_scroll = reverse_scroll
        self.curve = curve
        self.on_complete = on_complete
        self.progress = 0.0
        self.direction = Direction.FORWARD
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self, from_value: float = 0.0) -> None:
        """Run forward from `from_value` towards 1."""
        self.progress = _clamp(from_value)
        self.direction = Direction.FORWARD
        self._running = True

    def reverse_from(self, value: float = 1.0) -> None:
        """Run backward from `value` towards 0."""
        self.progress = _clamp(value)
        self.direction = Direction.REVERSE
        self._running = True

    def stop(self) -> None:
        self._running = False

    def update_geometry(self, *, duration: float, span: float) -> None:
        """Swap in a new cycle length, keeping the normalized progress."""
        self.duration = duration
        self.span = span

    def tick(self, elapsed: float) -> bool:
        """Advance by `elapsed` seconds; return True if the leg completed."""
        if not self._running:
            return False
        step = 1.0 if self.duration <= 0 else max(0.0, elapsed) / self.duration
        if self.direction is Direction.FORWARD:
            self.progress = min(1.0, self.progress + step)
            done = self.progress >= 1.0
        else:
            self.progress = max(0.0, self.progress - step)
            done = self.progress <= 0.0
        if done:
            self._running = False
            if self.on_complete is not None:
                self.on_complete(self.direction)
        return done

    def shaped_progress(self) -> float:
        return shape(self.curve, self.progress)

    def current_offset(self) -> float:
        """Offset in [0, span] for the current shaped progress."""
        shaped = self.shaped_progress()
        if self.reverse_scroll:
            return self.span * shaped
        return self.span * (1.0 - shaped)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))
