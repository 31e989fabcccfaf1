"""Marquee engine: lifecycle events in, drawable frames out."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable, Optional

from text_marquee.animator import ScrollAnimator
from text_marquee.config import ConfigDiff, MarqueeConfig, diff_configs
from text_marquee.controller import (
    DEFAULT_FRAME_INTERVAL,
    Phase,
    RoundController,
    Scheduler,
)
from text_marquee.curves import resolve_curve
from text_marquee.duration import cycle_duration
from text_marquee.fade import FadeGradient, build_gradient, resolve_mask
from text_marquee.metrics import Size, TextMeasurer, TextMetrics, measure_text
from text_marquee.renderer import DrawCommand, is_scrolling, render

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """Everything a rasterizer needs to paint one tick."""

    commands: tuple[DrawCommand, ...]
    mask: Optional[FadeGradient]
    clip: bool
    offset: float
    is_animating: bool
    phase: Phase


class MarqueeEngine:
    """Owns the animation state of one marquee instance."""

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        measure: TextMeasurer = measure_text,
        now: Callable[[], float] = time.monotonic,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self._scheduler = scheduler
        self._measure = measure
        self._now = now
        self._frame_interval = frame_interval
        self._on_change = on_change
        self._config: Optional[MarqueeConfig] = None
        self._metrics = TextMetrics(0.0, 0.0)
        self._duration = 0.0
        self._gradient: Optional[FadeGradient] = None
        self._animator: Optional[ScrollAnimator] = None
        self._controller: Optional[RoundController] = None

    @property
    def config(self) -> Optional[MarqueeConfig]:
        return self._config

    @property
    def metrics(self) -> TextMetrics:
        return self._metrics

    @property
    def cycle_duration(self) -> float:
        return self._duration

    @property
    def is_created(self) -> bool:
        return self._controller is not None

    @property
    def is_alive(self) -> bool:
        return self._controller is not None and self._controller.is_alive

    @property
    def phase(self) -> Phase:
        if self._controller is None:
            return Phase.IDLE
        return self._controller.phase

    @property
    def is_animating(self) -> bool:
        return self._controller is not None and self._controller.is_animating

    @property
    def rounds_completed(self) -> int:
        return 0 if self._controller is None else self._controller.rounds_completed

    def current_offset(self) -> float:
        if self._animator is None:
            return 0.0
        return self._animator.current_offset()

    def on_create(self, config: MarqueeConfig) -> None:
        """Measure, compute the cycle and start the delay."""
        if self._controller is not None:
            raise RuntimeError("Marquee engine has already been created.")
        self._config = config
        self._metrics = self._measure(config.text, config.style)
        self._duration = self._compute_duration(config)
        self._gradient = build_gradient(
            config.fade_start_fraction, config.fade_end_fraction
        )
        logger.debug(
            "Marquee created: width=%s cycle=%.6fs", self._metrics.width, self._duration
        )
        self._build_animation(config)

    def on_config_changed(
        self, old: MarqueeConfig, new: MarqueeConfig
    ) -> ConfigDiff:
        """Apply a replacement configuration, redoing only what changed.

        Measurements, the cycle and the fade are refreshed even after teardown
        so `frame` keeps describing the current config; timers are only
        touched while the engine is alive.
        """
        diff = diff_configs(old, new)
        self._config = new
        if diff.needs_remeasure:
            self._metrics = self._measure(new.text, new.style)
        if diff.needs_duration_recalc:
            self._duration = self._compute_duration(new)
            if self._animator is not None:
                self._animator.update_geometry(
                    duration=self._duration, span=self._span(new)
                )
        self._gradient = build_gradient(new.fade_start_fraction, new.fade_end_fraction)
        if not self.is_alive:
            return diff
        if diff.needs_duration_recalc and self._controller is not None:
            self._controller.geometry_changed()
        if diff.needs_animation_rebuild:
            logger.debug("Marquee animation rebuilt after config change")
            if self._controller is not None:
                self._controller.cancel()
            self._build_animation(new)
        elif diff.needs_repaint and self._on_change is not None:
            self._on_change()
        return diff

    def on_destroy(self) -> None:
        """Cancel timers and release the frame clock; safe to call twice."""
        if self._controller is not None:
            self._controller.cancel()

    def frame(self, viewport: Size) -> Frame:
        """Compute the draw commands and fade mask for the current tick."""
        config = self._config
        if config is None:
            return Frame((), None, False, 0.0, False, Phase.IDLE)
        offset = self.current_offset()
        commands = render(
            config.text,
            offset,
            self._metrics,
            viewport,
            config.blank_space,
            config.start_padding,
        )
        mask = resolve_mask(
            self._gradient,
            fade_only_when_scrolling=config.fade_only_when_scrolling,
            is_animating=self.is_animating,
            text_width=self._metrics.width,
            viewport_width=viewport.width,
        )
        return Frame(
            commands=tuple(commands),
            mask=mask,
            clip=is_scrolling(self._metrics, viewport),
            offset=offset,
            is_animating=self.is_animating,
            phase=self.phase,
        )

    def _build_animation(self, config: MarqueeConfig) -> None:
        self._animator = ScrollAnimator(
            duration=self._duration,
            span=self._span(config),
            reverse_scroll=config.reverse,
            curve=resolve_curve(config.curve),
        )
        self._controller = RoundController(
            self._animator,
            self._scheduler,
            bounce=config.bounce,
            start_after=config.start_after,
            pause_after_round=config.pause_after_round,
            number_of_rounds=config.number_of_rounds,
            pause_after_last_round=config.pause_after_last_round,
            frame_interval=self._frame_interval,
            now=self._now,
            on_change=self._on_change,
        )
        self._controller.start()

    def _compute_duration(self, config: MarqueeConfig) -> float:
        return cycle_duration(config.velocity, self._metrics.width, config.blank_space)

    def _span(self, config: MarqueeConfig) -> float:
        return self._metrics.width + config.blank_space
