"""Marquee widget for scrolling single-line text."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from rich.text import Text
from textual.widget import Widget

from text_marquee.config import MarqueeConfig
from text_marquee.controller import DEFAULT_FRAME_INTERVAL, Phase
from text_marquee.engine import Frame, MarqueeEngine
from text_marquee.metrics import Size
from text_marquee.ui.line_raster import rasterize, resolve_foreground


class Marquee(Widget):
    """Single-line marquee that scrolls or bounces text that overflows."""

    DEFAULT_CSS = """
    Marquee {
        height: 1;
        width: 1fr;
    }
    """

    def __init__(
        self,
        config: Optional[MarqueeConfig] = None,
        *,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
        disabled: bool = False,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes, disabled=disabled)
        self._config = config or MarqueeConfig()
        self._engine = MarqueeEngine(
            self, frame_interval=frame_interval, on_change=self.refresh
        )

    def on_mount(self) -> None:
        self._engine.on_create(self._config)

    def on_unmount(self) -> None:
        self._engine.on_destroy()

    @property
    def config(self) -> MarqueeConfig:
        return self._config

    @property
    def engine(self) -> MarqueeEngine:
        return self._engine

    @property
    def is_animating(self) -> bool:
        return self._engine.is_animating

    @property
    def phase(self) -> Phase:
        return self._engine.phase

    def set_config(self, config: MarqueeConfig) -> None:
        old = self._config
        self._config = config
        if self._engine.is_created:
            self._engine.on_config_changed(old, config)
        self.refresh()

    def set_text(self, text: str) -> None:
        self.set_config(replace(self._config, text=text))

    def current_frame(self) -> Frame:
        size = self.content_size
        return self._engine.frame(Size(float(size.width), float(max(1, size.height))))

    def render(self) -> Text:
        frame = self.current_frame()
        background = self.background_colors[1]
        foreground = resolve_foreground(self._config.style, self.styles.color)
        return rasterize(
            frame.commands,
            self.content_size.width,
            style=self._config.style,
            mask=frame.mask,
            foreground=foreground,
            background=background,
        )
