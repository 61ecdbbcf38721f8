# SPDX-License-Identifier: MIT

"""
Drag-gesture quantization.

A continuous drag distance is mapped onto a signed minute delta through four
speed gears. Each gear has its own pixels-to-minutes ratio and rounding step,
so short drags move a block minute by minute while long drags jump by half
hours. After rounding, the resulting minute-of-day is snapped onto a nearby
5-minute boundary when it lands one minute away from it.
"""

import math
from typing import NamedTuple

from blockday.time import MINUTES_PER_DAY


class Gear(NamedTuple):
    lower_bound: float
    base_minutes: float
    minutes_per_pixel: float
    step: int


# Ordered from fastest to slowest so the first match wins
GEARS: tuple[Gear, ...] = (
    Gear(lower_bound=250, base_minutes=152, minutes_per_pixel=1.5, step=30),
    Gear(lower_bound=120, base_minutes=48, minutes_per_pixel=0.8, step=10),
    Gear(lower_bound=40, base_minutes=16, minutes_per_pixel=0.4, step=5),
    Gear(lower_bound=0, base_minutes=0, minutes_per_pixel=0.4, step=1),
)


def select_gear(distance: float) -> Gear:
    for gear in GEARS:
        if distance >= gear.lower_bound:
            return gear
    return GEARS[-1]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def quantize(delta_pixels: float, original_minute_of_day: int) -> int:
    """
    Map a signed drag distance to a signed minute delta.

    The result is not clamped to the day; see clamp_minute_of_day().
    """
    if delta_pixels == 0:
        return 0

    distance = abs(delta_pixels)
    sign = 1 if delta_pixels > 0 else -1

    gear = select_gear(distance)
    raw_minutes = gear.base_minutes + (distance - gear.lower_bound) * gear.minutes_per_pixel
    minutes = _round_half_up(raw_minutes / gear.step) * gear.step
    delta = sign * minutes

    # Magnetic correction onto the nearest 5-minute boundary
    remainder = (original_minute_of_day + delta) % 5
    if remainder == 1:
        delta -= 1
    elif remainder == 4:
        delta += 1

    return delta


def clamp_minute_of_day(original_minute_of_day: int, minute_delta: int) -> int:
    """Apply a delta to a minute-of-day, keeping it inside [0, 1440)."""
    return max(0, min(MINUTES_PER_DAY - 1, original_minute_of_day + minute_delta))
