"""Five-card draw dealer primitives used by the websocket host."""

from .cards import Card, Rank, Suit, build_deck
from .dealer import FiveDrawDealer
from .errors import DealerError, EmptyDeck, InsufficientPlayers, InvalidHandSize, RosterLocked, TableFull
from .evaluator import compare_hands, describe_rank, evaluate_hand, parse_cards
from .models import Player, Stats, TableConfig, TableState
from .session import GameRecord, GameSession

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "build_deck",
    "FiveDrawDealer",
    "DealerError",
    "EmptyDeck",
    "InsufficientPlayers",
    "InvalidHandSize",
    "RosterLocked",
    "TableFull",
    "compare_hands",
    "describe_rank",
    "evaluate_hand",
    "parse_cards",
    "Player",
    "Stats",
    "TableConfig",
    "TableState",
    "GameRecord",
    "GameSession",
]
