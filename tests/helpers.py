from __future__ import annotations

import random
from typing import List, Sequence

from drawpoker.dealer import FiveDrawDealer
from drawpoker.evaluator import parse_cards
from drawpoker.models import Player, TableConfig


def create_dealer(*, players: int = 4, seats: int = 6, starting_chips: int = 1_000, seed: int = 42) -> FiveDrawDealer:
    """Instantiate a dealer with a populated roster and a seeded random source."""
    dealer = FiveDrawDealer(TableConfig(seats=seats, starting_chips=starting_chips), rng=random.Random(seed))
    for idx in range(players):
        dealer.add_player(Player(id=idx + 1, name=f"Player{idx}", chips=starting_chips))
    return dealer


def seat_hands(dealer: FiveDrawDealer, hands: Sequence[Sequence[str]]) -> List[Player]:
    """Seat one active player per hand with the given card labels, bypassing the deck."""
    players = []
    for labels in hands:
        player = Player(id=len(dealer.players) + 1, name=f"Seat{len(dealer.players)}", active=True)
        player.hand = parse_cards(labels)
        dealer.add_player(player)
        players.append(player)
    return players
