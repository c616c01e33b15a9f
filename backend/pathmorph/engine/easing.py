"""Timing functions and range remapping. No engine imports."""

from __future__ import annotations

import math
from typing import Callable

# Maps linear time in [0, 1] to eased progress
TimingFunction = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_in_out_sine(t: float) -> float:
    return 0.5 - math.cos(t * math.pi) / 2


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def smoothstep(t: float) -> float:
    """Hermite ease, ``3t² - 2t³``."""
    return t * t * (3.0 - 2.0 * t)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def clamp_remap(from_low: float, from_high: float, to_low: float, to_high: float, value: float) -> float:
    """Map ``value`` from one range to another, clamped to the target range."""
    if from_high == from_low:
        return to_high if value >= from_high else to_low
    t = clamp((value - from_low) / (from_high - from_low))
    return to_low + (to_high - to_low) * t
