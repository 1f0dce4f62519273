from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .cards import Card


class Phase(str, Enum):
    IDLE = "IDLE"
    DEALT = "DEALT"


@dataclass
class TableConfig:
    seats: int = 6
    starting_stack: int = 200
    bet_size: int = 25
    initial_seed: int = 42
    seed_step: int = 137
    seed_modulus: int = 1000
    hole_cards: int = 1  # 1 = single-card demo deal, 2 = two interleaved passes

    def validate(self) -> None:
        if self.seats < 1:
            raise ValueError("Table needs at least one seat")
        if self.starting_stack < 0:
            raise ValueError("Starting stack must be non-negative")
        if self.bet_size <= 0:
            raise ValueError("Bet size must be positive")
        if self.hole_cards not in (1, 2):
            raise ValueError("hole_cards must be 1 or 2")
        if self.seats * self.hole_cards > 52:
            raise ValueError("Not enough cards for every seat")
        if self.seed_modulus <= 0:
            raise ValueError("Seed modulus must be positive")


@dataclass
class PlayerSeat:
    seat: int
    label: str
    stack: int
    bet: int = 0
    cards: Tuple[Card, ...] = ()

    def reset_for_round(self, cards: Tuple[Card, ...]) -> None:
        self.bet = 0
        self.cards = cards


@dataclass(frozen=True)
class SeatLayout:
    x: int
    y: int
    alignment: str = "center"
    variant: str = "top"

    def offset(self) -> dict:
        return {"x": self.x, "y": self.y}
