"""Value <-> display mapping for parameter controls.

Pure helpers, no Qt. Step indices round half up so a value exactly between
two grid positions selects the upper one.
"""
import re

import numpy as np

_TRAILING_ZEROS = re.compile(r"\.?0+$")


def percent(value: float, min_value: float, max_value: float) -> float:
    """Return value's position within [min, max] as 0-100, clamped. Degenerate range gives 0."""
    mn = float(min_value)
    mx = float(max_value)
    if mx == mn:
        return 0.0
    pct = (float(value) - mn) / (mx - mn) * 100.0
    return float(np.clip(pct, 0.0, 100.0))


def step_delta(min_value: float, max_value: float, steps: int) -> float:
    """Distance between neighbouring grid positions for steps >= 2."""
    return (float(max_value) - float(min_value)) / (int(steps) - 1)


def nearest_step_index(value: float, min_value: float, delta: float) -> int:
    """Grid index closest to value. Not clamped; see clamp_step_index."""
    if delta == 0:
        return 0
    return int(np.floor((float(value) - float(min_value)) / delta + 0.5))


def clamp_step_index(index: int, steps: int) -> int:
    return max(0, min(int(steps) - 1, int(index)))


def step_values(min_value: float, max_value: float, steps: int) -> list[float]:
    """Grid values in ascending order, both endpoints included."""
    delta = step_delta(min_value, max_value, steps)
    grid = float(min_value) + np.arange(int(steps)) * delta
    return [float(v) for v in grid]


def format_step_value(value: float) -> str:
    """Integers without decimals, anything else to two places with trailing zeros dropped."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return _TRAILING_ZEROS.sub("", f"{number:.2f}")


def slider_resolution(steps: int, continuous_resolution: int = 1000) -> int:
    """Number of slider intervals: one per grid gap, or a fine default without a grid."""
    if int(steps) > 1:
        return int(steps) - 1
    return max(1, int(continuous_resolution))


def slider_position(value: float, min_value: float, max_value: float, resolution: int) -> int:
    """Integer slider position for value, clamped into [0, resolution]."""
    mn = float(min_value)
    mx = float(max_value)
    if mx == mn:
        return 0
    position = int(np.floor((float(value) - mn) / (mx - mn) * resolution + 0.5))
    return max(0, min(int(resolution), position))


def slider_value(position: int, min_value: float, max_value: float, resolution: int) -> float:
    """Parameter value at an integer slider position."""
    mn = float(min_value)
    return mn + int(position) * (float(max_value) - mn) / int(resolution)
