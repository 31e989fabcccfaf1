"""Marquee configuration: validation, loading and change detection."""

from __future__ import annotations

from dataclasses import dataclass, fields
import json
import logging
import math
from pathlib import Path
from typing import Any, Mapping, Optional

from rich.errors import StyleSyntaxError
from rich.style import Style

from text_marquee.curves import CurveSpec, check_curve, resolve_curve
from text_marquee.metrics import StyleType

logger = logging.getLogger(__name__)

MAX_FADE_FRACTION = 0.5


class MarqueeConfigError(ValueError):
    """Raised when a marquee configuration value is invalid."""


@dataclass(frozen=True)
class MarqueeConfig:
    """Immutable marquee settings, replaced wholesale on change."""

    text: str = ""
    style: StyleType = "green"
    velocity: float = 100.0
    blank_space: float = 0.0
    start_padding: float = 0.0
    reverse: bool = False
    bounce: bool = False
    start_after: float = 0.0
    pause_after_round: float = 0.0
    number_of_rounds: Optional[int] = None
    pause_after_last_round: bool = False
    fade_only_when_scrolling: bool = True
    fade_start_fraction: float = 0.0
    fade_end_fraction: float = 0.0
    curve: CurveSpec = "linear"

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise MarqueeConfigError(
                "The text must be a string. Pass an empty string to show nothing."
            )
        _check_style(self.style)
        _require_finite("velocity", self.velocity)
        if self.velocity == 0:
            raise MarqueeConfigError("The velocity cannot be zero.")
        if self.velocity < 0:
            raise MarqueeConfigError(
                "The velocity cannot be negative. Set reverse to true instead."
            )
        _require_finite("blank_space", self.blank_space)
        if self.blank_space < 0:
            raise MarqueeConfigError("The blank_space needs to be positive or zero.")
        _require_finite("start_padding", self.start_padding)
        if self.start_padding < 0:
            raise MarqueeConfigError("The start_padding cannot be negative.")
        if self.start_padding > self.blank_space:
            raise MarqueeConfigError(
                "The start_padding must be less than or equal to the blank_space."
            )
        _require_finite("start_after", self.start_after)
        if self.start_after < 0:
            raise MarqueeConfigError("The start_after delay cannot be negative.")
        _require_finite("pause_after_round", self.pause_after_round)
        if self.pause_after_round < 0:
            raise MarqueeConfigError(
                "The pause_after_round cannot be negative as time travel isn't "
                "invented yet."
            )
        if self.number_of_rounds is not None and (
            isinstance(self.number_of_rounds, bool)
            or not isinstance(self.number_of_rounds, int)
            or self.number_of_rounds <= 0
        ):
            raise MarqueeConfigError(
                "The number_of_rounds must be a positive integer or None."
            )
        for name in ("fade_start_fraction", "fade_end_fraction"):
            value = getattr(self, name)
            _require_finite(name, value)
            if not 0 <= value <= MAX_FADE_FRACTION:
                raise MarqueeConfigError(
                    f"The {name} value should be between 0 and "
                    f"{MAX_FADE_FRACTION}, inclusive."
                )
        try:
            check_curve(resolve_curve(self.curve))
        except ValueError as exc:
            raise MarqueeConfigError(str(exc)) from exc


@dataclass(frozen=True)
class ConfigDiff:
    """What a configuration change requires the engine to redo."""

    needs_remeasure: bool = False
    needs_duration_recalc: bool = False
    needs_animation_rebuild: bool = False
    needs_repaint: bool = False


_ANIMATION_FIELDS = (
    "reverse",
    "bounce",
    "curve",
    "start_after",
    "pause_after_round",
    "number_of_rounds",
    "pause_after_last_round",
)


def diff_configs(old: MarqueeConfig, new: MarqueeConfig) -> ConfigDiff:
    """Compare two configurations and report the work a change needs."""

    def changed(*names: str) -> bool:
        return any(getattr(old, name) != getattr(new, name) for name in names)

    remeasure = changed("text", "style")
    return ConfigDiff(
        needs_remeasure=remeasure,
        needs_duration_recalc=remeasure or changed("velocity", "blank_space"),
        needs_animation_rebuild=changed(*_ANIMATION_FIELDS),
        needs_repaint=old != new,
    )


def config_from_mapping(raw: Mapping[str, Any]) -> MarqueeConfig:
    """Build a config from JSON-style data, rejecting unknown keys and types."""
    known = {field.name for field in fields(MarqueeConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise MarqueeConfigError(f"Unknown config keys: {', '.join(unknown)}")
    values: dict[str, Any] = {}
    for key, value in raw.items():
        if key in {"text", "style", "curve"}:
            values[key] = _expect(key, value, str)
        elif key in {
            "reverse",
            "bounce",
            "pause_after_last_round",
            "fade_only_when_scrolling",
        }:
            values[key] = _expect(key, value, bool)
        elif key == "number_of_rounds":
            values[key] = None if value is None else _expect(key, value, int)
        else:
            values[key] = float(_expect(key, value, (int, float)))
    return MarqueeConfig(**values)


def load_config(path: Path) -> MarqueeConfig:
    """Load a marquee configuration from a JSON file."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.exception("Failed to load config from %s", path)
        raise MarqueeConfigError(f"Cannot read config {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise MarqueeConfigError(f"Config {path} must contain a JSON object.")
    return config_from_mapping(raw)


def _check_style(style: Any) -> None:
    if isinstance(style, Style):
        return
    if not isinstance(style, str):
        raise MarqueeConfigError(
            f"The style must be a style string or a rich Style, got {style!r}."
        )
    try:
        Style.parse(style)
    except StyleSyntaxError as exc:
        raise MarqueeConfigError(f"The style {style!r} is not valid: {exc}") from exc


def _require_finite(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MarqueeConfigError(f"The {name} must be a number, got {value!r}.")
    if not math.isfinite(value):
        raise MarqueeConfigError(f"The {name} must be finite, got {value!r}.")


def _expect(key: str, value: Any, kind: type | tuple[type, ...]) -> Any:
    # bool is an int subclass; only accept it where bool is asked for.
    if isinstance(value, bool) and kind is not bool:
        raise MarqueeConfigError(f"Config key {key!r} has invalid value {value!r}.")
    if not isinstance(value, kind):
        raise MarqueeConfigError(f"Config key {key!r} has invalid value {value!r}.")
    return value
