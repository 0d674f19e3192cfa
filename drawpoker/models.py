from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .cards import Card

MAX_SEATS = 10  # five cards each from a 52-card deck


@dataclass
class TableConfig:
    seats: int = 6
    starting_chips: int = 1_000
    variant: str = "FIVE_CARD_DRAW"

    def __post_init__(self) -> None:
        if not 2 <= self.seats <= MAX_SEATS:
            raise ValueError(f"seats must be between 2 and {MAX_SEATS}")
        if self.starting_chips < 0:
            raise ValueError("starting_chips cannot be negative")


@dataclass
class Stats:
    games_played: int = 0
    games_won: int = 0
    games_lost: int = 0
    games_folded: int = 0
    total_chips_won: int = 0


@dataclass(eq=False)
class Player:
    id: int
    name: str
    chips: int = 0
    hand: List[Card] = field(default_factory=list)
    current_bet: int = 0
    active: bool = False
    stats: Stats = field(default_factory=Stats)

    def add_chips(self, chips: int) -> None:
        if chips < 0:
            raise ValueError("Chip amount cannot be negative")
        self.chips += chips

    def remove_chips(self, chips: int) -> None:
        if chips < 0:
            raise ValueError("Chip amount cannot be negative")
        if chips > self.chips:
            raise ValueError("Not enough chips")
        self.chips -= chips

    def set_active(self, active: bool) -> None:
        self.active = active

    def reset_for_round(self) -> None:
        self.hand.clear()
        self.current_bet = 0

    # Stats -----------------------------------------------------------

    def game_won(self, chips: int) -> None:
        self.stats.games_won += 1
        self.stats.total_chips_won += chips
        self.add_chips(chips)
        self.stats.games_played += 1

    def game_lost(self) -> None:
        self.stats.games_lost += 1
        self.stats.games_played += 1

    def game_folded(self) -> None:
        self.stats.games_folded += 1
        self.stats.games_played += 1

    def reset_stats(self) -> None:
        self.stats = Stats()


@dataclass
class TableState:
    # Per-round bookkeeping; seat indices are positions in the dealer roster.
    pot: int = 0
    current_bet: int = 0
    small_blind_seat: int = 0
    big_blind_seat: int = 0
    last_bet_seat: int = 0
    current_player_seat: int = 0
    round: int = 0
