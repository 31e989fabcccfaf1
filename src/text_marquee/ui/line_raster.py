"""Rasterize marquee draw commands into a single row of terminal cells."""

from __future__ import annotations

import math
from typing import Iterable, Optional

from rich.cells import cell_len
from rich.style import Style
from rich.text import Text
from textual.color import Color

from text_marquee.fade import FadeGradient
from text_marquee.metrics import StyleType
from text_marquee.renderer import DrawCommand


def place_cells(commands: Iterable[DrawCommand], width: int) -> list[str]:
    """Return one string per column; "" marks the tail of a wide character."""
    if width <= 0:
        return []
    cells = [" "] * width
    for command in commands:
        column = math.floor(command.x + 0.5)
        for char in command.text:
            if column >= width:
                break
            char_width = cell_len(char)
            if char_width == 0:
                continue
            end = column + char_width
            if column >= 0 and end <= width:
                cells[column] = char
                for tail in range(column + 1, end):
                    cells[tail] = ""
            elif end > 0:
                # Wide character cut by an edge.
                for partial in range(max(0, column), min(end, width)):
                    cells[partial] = " "
            column = end
    return cells


def rasterize(
    commands: Iterable[DrawCommand],
    width: int,
    *,
    style: StyleType = "",
    mask: Optional[FadeGradient] = None,
    foreground: Optional[Color] = None,
    background: Optional[Color] = None,
) -> Text:
    """Paint the commands clipped to `width` cells.

    With a non-opaque mask every cell's foreground is blended toward the
    background by the mask opacity sampled at the cell centre.
    """
    cells = place_cells(commands, width)
    base = Style.parse(style) if isinstance(style, str) else style
    if mask is None or mask.is_opaque or foreground is None or background is None:
        return Text("".join(cells), style=base, no_wrap=True, end="")
    line = Text(no_wrap=True, end="")
    for column, cell in enumerate(cells):
        if not cell:
            continue
        opacity = mask.opacity_at((column + 0.5) / width)
        faded = background.blend(foreground, opacity)
        line.append(cell, style=base + Style(color=faded.rich_color))
    return line


def resolve_foreground(style: StyleType, fallback: Color) -> Color:
    """Concrete colour for a text style, or `fallback` when it sets none."""
    parsed = Style.parse(style) if isinstance(style, str) else style
    if parsed.color is None:
        return fallback
    return Color.from_rich_color(parsed.color)
