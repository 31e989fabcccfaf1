"""Tests for marquee configuration."""

from __future__ import annotations

from dataclasses import replace
import json
import math
from pathlib import Path

import pytest
from rich.style import Style

from text_marquee import config
from text_marquee.config import MarqueeConfig, MarqueeConfigError


def test_defaults_are_valid() -> None:
    cfg = MarqueeConfig()
    assert cfg.velocity == 100.0
    assert cfg.number_of_rounds is None
    assert cfg.fade_only_when_scrolling is True
    assert cfg.curve == "linear"


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"velocity": 0}, "cannot be zero"),
        ({"velocity": -5}, "Set reverse"),
        ({"velocity": math.inf}, "finite"),
        ({"velocity": math.nan}, "finite"),
        ({"blank_space": -1}, "blank_space"),
        ({"blank_space": 2, "start_padding": 3}, "start_padding"),
        ({"start_padding": -1}, "start_padding"),
        ({"start_after": -0.1}, "start_after"),
        ({"pause_after_round": -1}, "time travel"),
        ({"number_of_rounds": 0}, "number_of_rounds"),
        ({"number_of_rounds": 2.5}, "number_of_rounds"),
        ({"number_of_rounds": True}, "number_of_rounds"),
        ({"fade_start_fraction": 0.6}, "fade_start_fraction"),
        ({"fade_end_fraction": -0.1}, "fade_end_fraction"),
        ({"curve": "wobbly"}, "Unknown curve"),
        ({"curve": "none"}, "map 0 to 0"),
        ({"curve": lambda x: 0.5}, "map 0 to 0"),
        ({"text": None}, "string"),
        ({"velocity": "fast"}, "number"),
        ({"style": "definitely not a style"}, "style"),
        ({"style": 42}, "style"),
        ({"style": None}, "style"),
    ],
)
def test_invalid_values_are_rejected(overrides: dict, message: str) -> None:
    with pytest.raises(MarqueeConfigError, match=message):
        MarqueeConfig(**overrides)


def test_boundary_values_are_accepted() -> None:
    cfg = MarqueeConfig(
        blank_space=5,
        start_padding=5,
        fade_start_fraction=0.5,
        fade_end_fraction=0.0,
        number_of_rounds=1,
        curve="in_out_cubic",
    )
    assert cfg.start_padding == cfg.blank_space


def test_style_strings_and_objects_are_accepted() -> None:
    assert MarqueeConfig(style="bold red on black").style == "bold red on black"
    assert MarqueeConfig(style="").style == ""
    style = Style(color="blue", italic=True)
    assert MarqueeConfig(style=style).style is style


def test_config_from_mapping_rejects_bad_style() -> None:
    with pytest.raises(MarqueeConfigError, match="not valid"):
        config.config_from_mapping({"style": "bold nonsense-colour"})


def test_callable_curve_is_accepted() -> None:
    cfg = MarqueeConfig(curve=lambda x: x * x)
    assert callable(cfg.curve)


def test_config_from_mapping() -> None:
    cfg = config.config_from_mapping(
        {
            "text": "hello",
            "velocity": 20,
            "blank_space": 4,
            "bounce": True,
            "number_of_rounds": 3,
            "curve": "out_cubic",
        }
    )
    assert cfg == MarqueeConfig(
        text="hello",
        velocity=20.0,
        blank_space=4.0,
        bounce=True,
        number_of_rounds=3,
        curve="out_cubic",
    )


@pytest.mark.parametrize(
    "raw",
    [
        {"colour": "red"},
        {"bounce": "yes"},
        {"velocity": True},
        {"velocity": "10"},
        {"number_of_rounds": 1.5},
        {"text": 12},
    ],
)
def test_config_from_mapping_rejects_bad_data(raw: dict) -> None:
    with pytest.raises(MarqueeConfigError):
        config.config_from_mapping(raw)


def test_load_config_reads_json(tmp_path: Path) -> None:
    path = tmp_path / "marquee.json"
    path.write_text(
        json.dumps({"text": "from file", "reverse": True, "pause_after_round": 1}),
        encoding="utf-8",
    )
    cfg = config.load_config(path)
    assert cfg.text == "from file"
    assert cfg.reverse is True
    assert cfg.pause_after_round == 1.0


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MarqueeConfigError, match="Cannot read"):
        config.load_config(tmp_path / "missing.json")


def test_load_config_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "marquee.json"
    path.write_text("{not-json", encoding="utf-8")
    with pytest.raises(MarqueeConfigError):
        config.load_config(path)


def test_load_config_requires_object(tmp_path: Path) -> None:
    path = tmp_path / "marquee.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(MarqueeConfigError, match="JSON object"):
        config.load_config(path)


def test_diff_identical_configs_needs_nothing() -> None:
    diff = config.diff_configs(MarqueeConfig(text="a"), MarqueeConfig(text="a"))
    assert diff == config.ConfigDiff()


def test_diff_text_change_remeasures() -> None:
    base = MarqueeConfig(text="a")
    diff = config.diff_configs(base, replace(base, text="b"))
    assert diff.needs_remeasure
    assert diff.needs_duration_recalc
    assert not diff.needs_animation_rebuild
    assert diff.needs_repaint


def test_diff_style_change_remeasures() -> None:
    base = MarqueeConfig(text="a")
    diff = config.diff_configs(base, replace(base, style="bold red"))
    assert diff.needs_remeasure


@pytest.mark.parametrize("field", ["velocity", "blank_space"])
def test_diff_speed_changes_recalculate_duration(field: str) -> None:
    base = MarqueeConfig(text="a", blank_space=1)
    diff = config.diff_configs(base, replace(base, **{field: 3.0}))
    assert not diff.needs_remeasure
    assert diff.needs_duration_recalc
    assert not diff.needs_animation_rebuild


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("reverse", True),
        ("bounce", True),
        ("curve", "out_cubic"),
        ("start_after", 1.0),
        ("pause_after_round", 1.0),
        ("number_of_rounds", 2),
        ("pause_after_last_round", True),
    ],
)
def test_diff_animation_changes_rebuild(field: str, value: object) -> None:
    base = MarqueeConfig(text="a")
    diff = config.diff_configs(base, replace(base, **{field: value}))
    assert diff.needs_animation_rebuild
    assert not diff.needs_duration_recalc


def test_diff_padding_and_fade_only_repaint() -> None:
    base = MarqueeConfig(text="a", blank_space=2)
    changed = replace(base, start_padding=1, fade_start_fraction=0.2)
    diff = config.diff_configs(base, changed)
    assert diff == config.ConfigDiff(needs_repaint=True)
