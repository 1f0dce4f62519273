"""Static seat placement and chip-count helpers handed to the renderer.

None of this is game state: positions are keyed by seat index only and the
chip counts are derived from amounts at read time.
"""

from __future__ import annotations

import math
from typing import List, Tuple

from .models import SeatLayout

# Offsets from the table centre for the default six-seat table, clockwise
# from the top.
SEAT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, -200),
    (200, -120),
    (220, 60),
    (0, 200),
    (-220, 60),
    (-200, -120),
)

_RADIUS_X = 220
_RADIUS_Y = 200

MIN_CHIPS = 2
MAX_CHIPS = 6


def _alignment(x: int) -> str:
    if x < 0:
        return "left"
    if x > 0:
        return "right"
    return "center"


def seat_layout(index: int, seats: int = len(SEAT_OFFSETS)) -> SeatLayout:
    if not 0 <= index < seats:
        raise ValueError(f"Invalid seat index: {index}")
    if seats == len(SEAT_OFFSETS):
        x, y = SEAT_OFFSETS[index]
    else:
        # Spread evenly on the table ellipse, seat 0 at the top.
        angle = 2 * math.pi * index / seats - math.pi / 2
        x = round(_RADIUS_X * math.cos(angle))
        y = round(_RADIUS_Y * math.sin(angle))
    return SeatLayout(x=x, y=y, alignment=_alignment(x), variant="top" if y <= 0 else "bottom")


def table_layout(seats: int) -> List[SeatLayout]:
    return [seat_layout(idx, seats) for idx in range(seats)]


def amount_to_chip_count(amount: int) -> int:
    return min(MAX_CHIPS, max(MIN_CHIPS, math.ceil(amount / 20)))


def pot_chip_count(amount: int) -> int:
    # Half-up rounding; an empty pot still shows the minimum stack.
    rounded = math.floor(amount / 25 + 0.5)
    return min(MAX_CHIPS, max(MIN_CHIPS, rounded or MIN_CHIPS))
