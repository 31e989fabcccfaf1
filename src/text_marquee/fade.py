"""Edge fading for the marquee viewport."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FadeStop:
    position: float
    opacity: float


@dataclass(frozen=True)
class FadeGradient:
    """Horizontal opacity gradient across the viewport, positions in [0, 1]."""

    stops: tuple[FadeStop, ...]

    @property
    def is_opaque(self) -> bool:
        return all(stop.opacity >= 1.0 for stop in self.stops)

    def opacity_at(self, position: float) -> float:
        """Interpolate the opacity at a normalized horizontal position."""
        stops = self.stops
        if not stops:
            return 1.0
        for left, right in zip(stops, stops[1:]):
            span = right.position - left.position
            if span <= 0:
                continue
            if left.position <= position <= right.position:
                ratio = (position - left.position) / span
                return left.opacity + (right.opacity - left.opacity) * ratio
        if position <= stops[0].position:
            return stops[0].opacity
        return stops[-1].opacity


OPAQUE = FadeGradient((FadeStop(0.0, 1.0), FadeStop(1.0, 1.0)))


def build_gradient(
    fade_start_fraction: float, fade_end_fraction: float
) -> Optional[FadeGradient]:
    """Gradient that fades both edges, or None when neither edge fades."""
    if fade_start_fraction == 0 and fade_end_fraction == 0:
        return None
    return FadeGradient(
        (
            FadeStop(0.0, 0.0),
            FadeStop(fade_start_fraction, 1.0),
            FadeStop(1.0 - fade_end_fraction, 1.0),
            FadeStop(1.0, 0.0),
        )
    )


def resolve_mask(
    gradient: Optional[FadeGradient],
    *,
    fade_only_when_scrolling: bool,
    is_animating: bool,
    text_width: float,
    viewport_width: float,
) -> Optional[FadeGradient]:
    """Pick the mask to apply this frame.

    A still line, or one that fits the viewport, is never faded.
    """
    if gradient is None:
        return None
    if fade_only_when_scrolling and not is_animating:
        return OPAQUE
    if text_width < viewport_width:
        return OPAQUE
    return gradient
