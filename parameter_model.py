"""Parameter descriptors and control archetype classification."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ControlArchetype(IntEnum):
    """Which control a parameter is rendered with"""
    BOOLEAN = 1            # min 0, max 1, two steps: ON/OFF toggle
    DISCRETE_STEPPED = 2   # more than two steps: row of step buttons
    CONTINUOUS = 3         # everything else: slider


@dataclass(frozen=True)
class ParameterSpec:
    """Static shape of a device parameter as declared by the patch"""
    id: str
    name: Optional[str] = None
    min: float = 0.0
    max: float = 1.0
    steps: int = 1                     # 1 = continuous, >= 2 = evenly spaced grid incl. endpoints
    initial_value: float = 0.0
    labels: Optional[tuple[str, ...]] = None  # One per step, used when steps > 2


def classify(min_value: float, max_value: float, steps: int) -> ControlArchetype:
    """Archetype from numeric shape alone."""
    mn = float(min_value)
    mx = float(max_value)
    n = int(steps)
    if mn == 0 and mx == 1 and n == 2:
        return ControlArchetype.BOOLEAN
    if n > 2:
        return ControlArchetype.DISCRETE_STEPPED
    return ControlArchetype.CONTINUOUS


def classify_parameter(param) -> ControlArchetype:
    """Classify anything exposing min/max/steps. Value, labels, name and id are never consulted."""
    return classify(param.min, param.max, param.steps)


def display_name(param) -> str:
    return param.name or param.id


def next_toggle_value(value: float, min_value: float, max_value: float) -> float:
    """Local toggle: at max goes to min, anywhere else goes to max."""
    if float(value) == float(max_value):
        return float(min_value)
    return float(max_value)


def is_on(value: float) -> bool:
    """ON/OFF reading of a device-reported boolean value."""
    return float(value) >= 1
