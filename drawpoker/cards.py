from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence


class Suit(str, Enum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"  # high; the evaluator handles the wheel

    @property
    def strength(self) -> int:
        return RANK_VALUE[self]


RANK_VALUE = {rank: idx for idx, rank in enumerate(Rank, start=2)}
SUIT_SYMBOLS = {Suit.HEARTS: "♥", Suit.DIAMONDS: "♦", Suit.CLUBS: "♣", Suit.SPADES: "♠"}
DECK_SIZE = 52


@dataclass(frozen=True)
class Card:
    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "rank", Rank(self.rank))
        except ValueError:
            raise ValueError(f"Invalid rank: {self.rank}") from None
        try:
            object.__setattr__(self, "suit", Suit(self.suit))
        except ValueError:
            raise ValueError(f"Invalid suit: {self.suit}") from None

    @property
    def strength(self) -> int:
        return self.rank.strength

    @property
    def label(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    @property
    def pretty(self) -> str:
        rank = "10" if self.rank is Rank.TEN else self.rank.value
        return f"{rank}{SUIT_SYMBOLS[self.suit]}"


def build_deck() -> List[Card]:
    """Full deck in canonical order: suit-major, ranks ascending."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    return Card(label[0], label[1])
