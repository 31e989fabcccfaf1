"""Command-line interface for text-marquee."""

from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path
import sys
from typing import Any, Iterable, Optional

from text_marquee.config import MarqueeConfig, MarqueeConfigError, load_config
from text_marquee.curves import curve_names
from text_marquee.logging_setup import init_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="text-marquee", description="Scroll a line of text in the terminal"
    )
    parser.add_argument("text", nargs="?", default=None, help="Text to scroll")
    parser.add_argument(
        "--config", type=Path, default=None, help="JSON file with marquee settings"
    )
    parser.add_argument("--velocity", type=float, help="Cells per second")
    parser.add_argument(
        "--blank-space", type=float, help="Gap between copies of the text"
    )
    parser.add_argument(
        "--start-padding", type=float, help="Resting offset from the left edge"
    )
    parser.add_argument(
        "--reverse", action="store_true", default=None, help="Scroll to the right"
    )
    parser.add_argument(
        "--bounce", action="store_true", default=None, help="Bounce back and forth"
    )
    parser.add_argument("--start-after", type=float, help="Seconds before starting")
    parser.add_argument(
        "--pause", dest="pause_after_round", type=float, help="Seconds between rounds"
    )
    parser.add_argument(
        "--rounds", dest="number_of_rounds", type=int, help="Stop after N rounds"
    )
    parser.add_argument(
        "--fade-start", dest="fade_start_fraction", type=float, help="Left fade"
    )
    parser.add_argument(
        "--fade-end", dest="fade_end_fraction", type=float, help="Right fade"
    )
    parser.add_argument(
        "--always-fade",
        dest="fade_only_when_scrolling",
        action="store_false",
        default=None,
        help="Keep the fade while paused",
    )
    parser.add_argument(
        "--curve", choices=curve_names(), default=None, help="Easing curve name"
    )
    parser.add_argument(
        "--demo", action="store_true", help="Show the built-in demo marquees"
    )
    return parser


_OVERRIDES = (
    "text",
    "velocity",
    "blank_space",
    "start_padding",
    "reverse",
    "bounce",
    "start_after",
    "pause_after_round",
    "number_of_rounds",
    "fade_start_fraction",
    "fade_end_fraction",
    "fade_only_when_scrolling",
    "curve",
)


def config_from_args(args: argparse.Namespace) -> MarqueeConfig:
    """Merge a config file (if any) with command-line overrides."""
    base = load_config(args.config) if args.config is not None else MarqueeConfig()
    overrides: dict[str, Any] = {
        key: getattr(args, key)
        for key in _OVERRIDES
        if getattr(args, key, None) is not None
    }
    return replace(base, **overrides)


def _run_demo(configs: Optional[list[MarqueeConfig]]) -> int:
    try:
        from text_marquee.ui.demo_app import run_demo
    except ImportError as exc:
        print(f"Textual is required to display the marquee: {exc}", file=sys.stderr)
        return 1
    return run_demo(configs)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point for the CLI."""
    init_logging()
    logger.info("App start")

    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.demo:
        exit_code = _run_demo(None)
    else:
        try:
            config = config_from_args(args)
        except MarqueeConfigError as exc:
            print(f"Invalid marquee settings: {exc}", file=sys.stderr)
            return 2
        exit_code = _run_demo([config])
    logger.info("App exit code=%s", exit_code)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
