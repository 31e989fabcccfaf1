"""Textual demo application for the marquee widget."""

from __future__ import annotations

import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Static

from text_marquee.config import MarqueeConfig
from text_marquee.ui.marquee import Marquee

logger = logging.getLogger(__name__)


def simple_config() -> MarqueeConfig:
    return MarqueeConfig(text="This is a simple marquee.", blank_space=10)


def customized_config() -> MarqueeConfig:
    return MarqueeConfig(
        text="This is a very customized marquee.",
        velocity=15,
        blank_space=3,
        start_padding=1,
        reverse=True,
        bounce=True,
        pause_after_round=1.0,
        fade_only_when_scrolling=True,
        fade_start_fraction=0.05,
        fade_end_fraction=0.05,
        curve="out_cubic",
    )


class MarqueeDemoApp(App):
    """Shows one marquee per configuration in a narrow column."""

    CSS = """
    #marquee_column {
        width: 30;
        height: auto;
        align: center middle;
    }
    .marquee_label {
        text-style: bold;
        margin-top: 1;
    }
    """
    TITLE = "text-marquee"
    BINDINGS = [Binding("q", "quit", "Quit")]

    def __init__(self, configs: Optional[list[MarqueeConfig]] = None) -> None:
        super().__init__()
        self._configs = configs or [simple_config(), customized_config()]

    def compose(self) -> ComposeResult:
        with Vertical(id="marquee_column"):
            for index, config in enumerate(self._configs):
                yield Static(f"Marquee {index + 1}", classes="marquee_label")
                yield Marquee(config, id=f"marquee_{index}")
        yield Footer()

    def on_mount(self) -> None:
        logger.info("Demo started with %s marquee(s)", len(self._configs))


def run_demo(configs: Optional[list[MarqueeConfig]] = None) -> int:
    """Run the demo app and return an exit code."""
    MarqueeDemoApp(configs).run()
    return 0
