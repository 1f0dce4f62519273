from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Sequence, Tuple

from .rng import Rng

RANKS = "23456789TJQKA"
SUITS = ("clubs", "diamonds", "hearts", "spades")

_SUIT_BY_INITIAL = {suit[0]: suit for suit in SUITS}


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    def __post_init__(self) -> None:
        if len(self.rank) != 1 or self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def label(self) -> str:
        return f"{self.rank}{self.suit[0]}"


Deck = Tuple[Card, ...]


class Dealt(NamedTuple):
    hand: Deck
    remaining: Deck


def build_deck() -> Deck:
    return tuple(Card(rank, suit) for suit in SUITS for rank in RANKS)


create_deck = build_deck


def shuffle(deck: Sequence[Card], rng: Rng) -> Deck:
    """Fisher-Yates over a copy of ``deck``; the input is left untouched."""
    cards = list(deck)
    for i in range(len(cards) - 1, 0, -1):
        # rng() can return exactly 1.0 when the LCG state hits 2**32 - 1.
        j = min(int(rng() * (i + 1)), i)
        cards[i], cards[j] = cards[j], cards[i]
    return tuple(cards)


def deal(deck: Sequence[Card], count: int) -> Dealt:
    if count < 0:
        raise ValueError("Deal count must be non-negative")
    if len(deck) < count:
        raise ValueError("Not enough cards left in deck")
    return Dealt(tuple(deck[:count]), tuple(deck[count:]))


def deal_to_seats(deck: Sequence[Card], seats: int, per_seat: int) -> Tuple[List[Deck], Deck]:
    """Deal ``per_seat`` cards to each seat, one card per seat per pass.

    In pass ``p`` seat ``i`` receives the card at position ``p * seats + i``,
    so the first pass is always ``deck[:seats]`` in seat order.
    """
    hands: List[List[Card]] = [[] for _ in range(seats)]
    remaining: Deck = tuple(deck)
    for _ in range(per_seat):
        for seat_idx in range(seats):
            drawn, remaining = deal(remaining, 1)
            hands[seat_idx].extend(drawn)
    return [tuple(hand) for hand in hands], remaining


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    suit = _SUIT_BY_INITIAL.get(label[1])
    if suit is None:
        raise ValueError(f"Invalid suit: {label[1]}")
    return Card(label[0], suit)


def parse_cards(labels: Iterable[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
