"""Text measurement for the marquee."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Protocol, Union

from rich.style import Style
from rich.text import Text

StyleType = Union[str, Style]


class Size(NamedTuple):
    width: float
    height: float


@dataclass(frozen=True)
class TextMetrics:
    """Measured extent of one line of styled text."""

    width: float
    height: float


class TextMeasurer(Protocol):
    def __call__(self, text: str, style: StyleType) -> TextMetrics: ...


def measure_text(text: str, style: StyleType = "") -> TextMetrics:
    """Measure text in terminal cells (one row high)."""
    rendered = Text(text, style=style, no_wrap=True)
    return TextMetrics(width=float(rendered.cell_len), height=1.0)
