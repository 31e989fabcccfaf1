"""Cycle duration math."""

from __future__ import annotations

import math

MICROSECONDS_PER_SECOND = 1_000_000


def cycle_duration_us(velocity: float, text_width: float, blank_space: float) -> int:
    """Return the time for one cycle in whole microseconds.

    One cycle moves the text by its own width plus the blank space, at
    `velocity` units per second.
    """
    for name, value in (
        ("velocity", velocity),
        ("text_width", text_width),
        ("blank_space", blank_space),
    ):
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")
    if velocity <= 0:
        raise ValueError(f"velocity must be positive, got {velocity!r}")
    if text_width < 0 or blank_space < 0:
        raise ValueError("text_width and blank_space cannot be negative")
    return int(MICROSECONDS_PER_SECOND / velocity * (text_width + blank_space))


def cycle_duration(velocity: float, text_width: float, blank_space: float) -> float:
    """Return the cycle duration in seconds, truncated to microseconds."""
    return (
        cycle_duration_us(velocity, text_width, blank_space) / MICROSECONDS_PER_SECOND
    )
