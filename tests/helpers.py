from __future__ import annotations

from typing import Iterable

from cardtable.models import TableConfig
from cardtable.table import RoundContext, TableEngine


def create_engine(
    *,
    seats: int = 6,
    starting_stack: int = 200,
    bet_size: int = 25,
    initial_seed: int = 42,
    hole_cards: int = 1,
) -> TableEngine:
    """Instantiate an engine with the demo defaults unless overridden."""
    return TableEngine(
        TableConfig(
            seats=seats,
            starting_stack=starting_stack,
            bet_size=bet_size,
            initial_seed=initial_seed,
            hole_cards=hole_cards,
        )
    )


def start_round(engine: TableEngine) -> RoundContext:
    ctx = engine.start_round()
    assert ctx is not None
    return ctx


def place_bets(engine: TableEngine, seats: Iterable[int]) -> list[bool]:
    """Place one default-size bet per listed seat and collect the outcomes."""
    return [engine.place_bet(seat_idx) for seat_idx in seats]
