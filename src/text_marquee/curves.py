"""Easing curves used to shape scroll progress.

Curves accept a float in [0.0, 1.0] and return the shaped progress. Named
curves come from Textual's easing table so the marquee moves the same way
Textual's own animations do.
"""

from __future__ import annotations

from typing import Callable, Union
from typing_extensions import TypeAlias

from textual._easing import EASING

Curve: TypeAlias = Callable[[float], float]
CurveSpec: TypeAlias = Union[str, Curve]

_ENDPOINT_TOLERANCE = 1e-6


def linear(x: float) -> float:
    return x


def curve_names() -> list[str]:
    """Return the easing names `check_curve` accepts, sorted."""
    return sorted(name for name, curve in EASING.items() if _has_fixed_ends(curve))


def resolve_curve(spec: CurveSpec) -> Curve:
    """Turn an easing name or callable into a curve function."""
    if callable(spec):
        return spec
    try:
        return EASING[spec]
    except KeyError:
        raise ValueError(
            f"Unknown curve {spec!r}; expected one of: {', '.join(curve_names())}"
        ) from None


def check_curve(curve: Curve) -> None:
    """Raise ValueError unless the curve maps 0 to 0 and 1 to 1."""
    if not _has_fixed_ends(curve):
        raise ValueError(
            "A curve must map 0 to 0 and 1 to 1 "
            f"(got {curve(0.0)!r} and {curve(1.0)!r})."
        )


def _has_fixed_ends(curve: Curve) -> bool:
    return (
        abs(curve(0.0)) <= _ENDPOINT_TOLERANCE
        and abs(curve(1.0) - 1.0) <= _ENDPOINT_TOLERANCE
    )


def shape(curve: Curve, progress: float) -> float:
    """Apply a curve and clamp the result to [0, 1]."""
    return max(0.0, min(1.0, curve(max(0.0, min(1.0, progress)))))
