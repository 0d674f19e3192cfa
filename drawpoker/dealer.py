from __future__ import annotations

import random
from typing import Dict, List, Optional

from .cards import Card, build_deck, cards_to_labels
from .errors import EmptyDeck, InsufficientPlayers, RosterLocked, TableFull
from .evaluator import HAND_SIZE, HandScore, describe_rank, evaluate_hand
from .models import Player, TableConfig, TableState

# FiveDrawDealer keeps all table state in memory. No networking lives here,
# only the deck, the roster, and the per-round bookkeeping.

MIN_PLAYERS = 2


class FiveDrawDealer:
    """Five-card draw dealer for a single table."""

    def __init__(self, config: Optional[TableConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or TableConfig()
        self.rng = rng or random.Random()
        self.players: List[Player] = []
        self.deck: List[Card] = []
        self.discard: List[Card] = []
        self.table = TableState()
        self.in_round = False

    # Roster ----------------------------------------------------------

    def add_player(self, player: Player) -> int:
        if self.in_round:
            raise RosterLocked("Cannot join while a round is in progress")
        if len(self.players) >= self.config.seats:
            raise TableFull("Table is full")
        if self.find_player(player.id) is not None:
            raise ValueError(f"Player {player.id} already seated")
        self.players.append(player)
        return len(self.players) - 1

    def remove_player(self, player_id: int) -> Player:
        if self.in_round:
            raise RosterLocked("Cannot leave while a round is in progress")
        player = self.find_player(player_id)
        if player is None:
            raise ValueError(f"Player {player_id} is not seated")
        self.players.remove(player)
        return player

    def find_player(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def seat_of(self, player: Player) -> int:
        for idx, seated in enumerate(self.players):
            if seated is player:
                return idx
        raise ValueError(f"Player {player.id} is not seated")

    # Deck & dealing --------------------------------------------------

    @property
    def remaining(self) -> int:
        return len(self.deck)

    def create_deck(self) -> None:
        self.deck = build_deck()

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        (rng or self.rng).shuffle(self.deck)

    def deal_card(self, player: Player) -> Card:
        if not self.deck:
            raise EmptyDeck("No cards left in deck")
        card = self.deck.pop(0)
        player.hand.append(card)
        return card

    def deal_initial_hand(self, rng: Optional[random.Random] = None) -> None:
        if len(self.players) < MIN_PLAYERS:
            raise InsufficientPlayers(
                f"Need at least {MIN_PLAYERS} players to deal, have {len(self.players)}"
            )

        for player in self.players:
            player.reset_for_round()
        self.discard.clear()
        self.create_deck()
        self.shuffle(rng)

        # One card per seat per pass so hands fill evenly.
        for _ in range(HAND_SIZE):
            for seat_idx in range(len(self.players)):
                self.deal_card(self.players[seat_idx])

    def cards_in_play(self) -> int:
        return len(self.deck) + sum(len(player.hand) for player in self.players) + len(self.discard)

    # Round lifecycle -------------------------------------------------

    def start_game(self, rng: Optional[random.Random] = None) -> TableState:
        count = len(self.players)
        if count < MIN_PLAYERS:
            raise InsufficientPlayers(f"Need at least {MIN_PLAYERS} players to start, have {count}")

        table = self.table
        table.round += 1
        # An unclaimed pot from a round without winners carries over.
        table.current_bet = 0
        self.deal_initial_hand(rng)

        # Seats are recomputed from the roster size at the start of every round.
        previous_big = table.big_blind_seat
        table.small_blind_seat = previous_big % count
        table.big_blind_seat = (previous_big + 1) % count
        table.last_bet_seat = table.big_blind_seat
        for player in self.players:
            player.set_active(True)
        table.current_player_seat = (table.big_blind_seat + 1) % count

        self.in_round = True
        return table

    # Showdown --------------------------------------------------------

    @staticmethod
    def evaluate_hand(hand: List[Card]) -> HandScore:
        return evaluate_hand(hand)

    def scores(self) -> Dict[int, HandScore]:
        """Hand score per seat index for every active player."""
        return {
            seat_idx: evaluate_hand(player.hand)
            for seat_idx, player in enumerate(self.players)
            if player.active
        }

    def check_for_winning_hand(self) -> List[Player]:
        scores = self.scores()
        if not scores:
            return []
        best = max(scores.values())
        return [self.players[seat_idx] for seat_idx in sorted(scores) if scores[seat_idx] == best]

    def settle_round(self, winners: List[Player]) -> Dict[int, int]:
        """Split the pot among ``winners`` and record results. Returns payouts by player id.

        With no winners the pot is left on the table for the next round.
        """
        payouts: Dict[int, int] = {}
        if winners:
            ordered = sorted(winners, key=self.seat_of)
            share, remainder = divmod(self.table.pot, len(ordered))
            for idx, player in enumerate(ordered):
                payout = share + (1 if idx < remainder else 0)
                player.game_won(payout)
                payouts[player.id] = payout
            self.table.pot = 0

        for player in self.players:
            if player.active and player.id not in payouts:
                player.game_lost()

        self.table.current_bet = 0
        self.in_round = False
        return payouts

    # Payload helpers -------------------------------------------------

    def lobby_state(self) -> Dict[str, object]:
        return {
            "players": [
                {
                    "seat": seat_idx,
                    "id": player.id,
                    "name": player.name,
                    "chips": player.chips,
                    "active": player.active,
                }
                for seat_idx, player in enumerate(self.players)
            ],
            "seats": self.config.seats,
            "in_round": self.in_round,
        }

    def start_game_payload(self) -> Dict[str, object]:
        table = self.table
        return {
            "round": table.round,
            "pot": table.pot,
            "current_bet": table.current_bet,
            "small_blind_seat": table.small_blind_seat,
            "big_blind_seat": table.big_blind_seat,
            "last_bet_seat": table.last_bet_seat,
            "current_player_seat": table.current_player_seat,
            "remaining": self.remaining,
            "players": [
                {"seat": seat_idx, "id": player.id, "name": player.name, "cards": len(player.hand)}
                for seat_idx, player in enumerate(self.players)
            ],
        }

    def hand_payload(self, player: Player) -> Dict[str, object]:
        return {
            "round": self.table.round,
            "seat": self.seat_of(player),
            "hand": cards_to_labels(player.hand),
        }

    def showdown_payload(self, winners: List[Player], payouts: Optional[Dict[int, int]] = None) -> Dict[str, object]:
        payouts = payouts or {}
        hands = []
        for seat_idx, score in sorted(self.scores().items()):
            player = self.players[seat_idx]
            hands.append(
                {
                    "seat": seat_idx,
                    "id": player.id,
                    "name": player.name,
                    "hand": cards_to_labels(player.hand),
                    "rank": describe_rank(score),
                }
            )
        return {
            "round": self.table.round,
            "hands": hands,
            "winners": [
                {"id": player.id, "name": player.name, "amount": payouts.get(player.id, 0)}
                for player in winners
            ],
        }
