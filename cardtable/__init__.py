"""Deterministic deck, shuffle and table-round engine behind the table demo."""

from .cards import Card, Dealt, RANKS, SUITS, build_deck, create_deck, deal, deal_to_seats, shuffle
from .layout import SEAT_OFFSETS, amount_to_chip_count, pot_chip_count, seat_layout
from .models import Phase, PlayerSeat, SeatLayout, TableConfig
from .rng import create_rng, rng_stream
from .table import RoundContext, TableEngine, next_seed

__all__ = [
    "Card",
    "Dealt",
    "RANKS",
    "SUITS",
    "build_deck",
    "create_deck",
    "deal",
    "deal_to_seats",
    "shuffle",
    "SEAT_OFFSETS",
    "amount_to_chip_count",
    "pot_chip_count",
    "seat_layout",
    "Phase",
    "PlayerSeat",
    "SeatLayout",
    "TableConfig",
    "create_rng",
    "rng_stream",
    "RoundContext",
    "TableEngine",
    "next_seed",
]
