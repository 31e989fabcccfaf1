"""Frame layout: where to draw the text copies for a given offset."""

from __future__ import annotations

from dataclasses import dataclass

from text_marquee.metrics import Size, TextMetrics


@dataclass(frozen=True)
class DrawCommand:
    text: str
    x: float
    y: float


def render(
    text: str,
    offset: float,
    metrics: TextMetrics,
    viewport: Size,
    blank_space: float,
    start_padding: float,
) -> list[DrawCommand]:
    """Lay out the text for one frame.

    Text that fits is drawn once at the left edge. Otherwise two copies one
    period apart are drawn; the caller clips them to the viewport. With
    `offset` in [0, width + blank_space] two copies always cover it.
    """
    y = (viewport.height - metrics.height) / 2
    if metrics.width < viewport.width:
        return [DrawCommand(text, 0.0, y)]
    leading = start_padding + offset
    return [
        DrawCommand(text, leading, y),
        DrawCommand(text, leading - metrics.width - blank_space, y),
    ]


def is_scrolling(metrics: TextMetrics, viewport: Size) -> bool:
    return metrics.width >= viewport.width
