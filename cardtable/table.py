from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .cards import Card, Deck, build_deck, deal_to_seats, shuffle
from .layout import amount_to_chip_count, pot_chip_count, table_layout
from .models import Phase, PlayerSeat, SeatLayout, TableConfig
from .rng import create_rng

# TableEngine keeps all table state in memory. Rendering, sockets and timing
# live elsewhere; this module only does dealing and chip accounting.


@dataclass
class RoundContext:
    # Everything produced by one deal. Replaced wholesale on every redeal.
    round_id: int
    seed: int
    deck: Deck
    hands: Dict[int, Deck] = field(default_factory=dict)
    remaining: Deck = ()
    pot: int = 0


def next_seed(seed: int, step: int = 137, modulus: int = 1000) -> int:
    return (seed + step) % modulus


class TableEngine:
    """Ante-and-redeal table: seeded deals, fixed-size bets, one pot."""

    def __init__(self, config: Optional[TableConfig] = None) -> None:
        self.config = config or TableConfig()
        self.config.validate()
        self.layouts: List[SeatLayout] = table_layout(self.config.seats)
        self.seats: List[PlayerSeat] = [
            PlayerSeat(seat=idx, label=f"Seat {idx + 1}", stack=self.config.starting_stack)
            for idx in range(self.config.seats)
        ]
        self.seed = self.config.initial_seed
        self.round_counter = 0
        self.round: Optional[RoundContext] = None

    @property
    def phase(self) -> Phase:
        return Phase.DEALT if self.round is not None else Phase.IDLE

    @property
    def pot(self) -> int:
        return self.round.pot if self.round else 0

    # Round lifecycle -------------------------------------------------

    def start_round(self) -> RoundContext:
        if self.round is not None:
            self.seed = next_seed(self.seed, self.config.seed_step, self.config.seed_modulus)

        deck = shuffle(build_deck(), create_rng(self.seed))
        hands, remaining = deal_to_seats(deck, self.config.seats, self.config.hole_cards)
        for seat, cards in zip(self.seats, hands):
            seat.reset_for_round(cards)

        self.round_counter += 1
        self.round = RoundContext(
            round_id=self.round_counter,
            seed=self.seed,
            deck=deck,
            hands={seat.seat: seat.cards for seat in self.seats},
            remaining=remaining,
            pot=0,
        )
        return self.round

    # Betting ---------------------------------------------------------

    def place_bet(self, seat_idx: int, amount: Optional[int] = None) -> bool:
        """Move ``amount`` (default: the table bet size) from a stack to the pot.

        Returns False and leaves every number untouched when the seat cannot
        cover the bet.
        """
        if self.round is None:
            raise RuntimeError("Round not in progress")
        seat = self._seat(seat_idx)
        if amount is None:
            amount = self.config.bet_size
        if amount < 0:
            raise ValueError("Bet amount must be non-negative")

        if seat.stack < amount:
            return False
        seat.stack -= amount
        seat.bet += amount
        self.round.pot += amount
        return True

    def can_bet(self, seat_idx: int, amount: Optional[int] = None) -> bool:
        seat = self._seat(seat_idx)
        return self.round is not None and seat.stack >= (self.config.bet_size if amount is None else amount)

    def total_chips(self) -> int:
        return sum(seat.stack for seat in self.seats) + self.pot

    def _seat(self, seat_idx: int) -> PlayerSeat:
        if not isinstance(seat_idx, int) or not 0 <= seat_idx < len(self.seats):
            raise ValueError(f"Invalid seat: {seat_idx}")
        return self.seats[seat_idx]

    # View payloads ---------------------------------------------------

    def seat_view(self, seat_idx: int) -> Dict[str, object]:
        seat = self._seat(seat_idx)
        layout = self.layouts[seat_idx]
        return {
            "seat": seat.seat,
            "label": seat.label,
            "cards": [card.label for card in seat.cards],
            "stack": seat.stack,
            "bet": seat.bet,
            "layout": {
                "x": layout.x,
                "y": layout.y,
                "alignment": layout.alignment,
                "variant": layout.variant,
            },
        }

    def seat_views(self) -> List[Dict[str, object]]:
        return [self.seat_view(idx) for idx in range(len(self.seats))]

    def table_state(self) -> Dict[str, object]:
        return {
            "round": self.round_counter,
            "seed": self.seed,
            "phase": self.phase.value,
            "pot": self.pot,
            "pot_chips": pot_chip_count(self.pot),
            "bet_size": self.config.bet_size,
            "hole_cards": self.config.hole_cards,
            "seats": self.seat_views(),
        }

    def deal_targets(self) -> List[Dict[str, object]]:
        # Animation order follows dealing order: pass by pass, seat by seat.
        if self.round is None:
            return []
        targets: List[Dict[str, object]] = []
        for pass_idx in range(self.config.hole_cards):
            for seat in self.seats:
                card: Card = seat.cards[pass_idx]
                targets.append(
                    {
                        "id": f"{seat.label}-{self.round_counter}-{card.label}",
                        "seat": seat.seat,
                        "order": len(targets),
                        "offset": self.layouts[seat.seat].offset(),
                        "card": card.label,
                    }
                )
        return targets

    def chip_targets_for_bet(self, seat_idx: int, key: object, amount: Optional[int] = None) -> List[Dict[str, object]]:
        seat = self._seat(seat_idx)
        if amount is None:
            amount = self.config.bet_size
        return [
            {
                "id": f"bet-{seat.seat}-{key}",
                "seat": seat.seat,
                "offset": self.layouts[seat.seat].offset(),
                "chip_count": amount_to_chip_count(amount),
            }
        ]

    def chip_demo_targets(self, key: object) -> List[Dict[str, object]]:
        return [
            {
                "id": f"demo-{seat.label}-{key}-{seat.seat}",
                "seat": seat.seat,
                "offset": self.layouts[seat.seat].offset(),
                "chip_count": amount_to_chip_count(max(seat.bet, self.config.bet_size)),
            }
            for seat in self.seats
        ]
