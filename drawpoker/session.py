from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .dealer import FiveDrawDealer
from .models import Player

LOGGER = logging.getLogger("draw_session")


@dataclass
class GameRecord:
    id: int
    round: int
    players: List[str]
    winners: List[str] = field(default_factory=list)
    total_chips: int = 0


class GameSession:
    """One table's run of games: the dealer plus an in-memory history of finished games."""

    def __init__(self, session_id: int, dealer: Optional[FiveDrawDealer] = None) -> None:
        self.session_id = session_id
        self.dealer = dealer or FiveDrawDealer()
        self.games: List[GameRecord] = []
        self.current_game: Optional[GameRecord] = None
        self.departed: List[Player] = []

    def join(self, player: Player) -> int:
        return self.dealer.add_player(player)

    def leave(self, player: Player) -> Optional[Dict[str, object]]:
        """Remove ``player``; mid-round they fold and are removed at showdown.

        Returns the showdown payload when the last active player leaves and the
        round is closed early.
        """
        if not self.dealer.in_round:
            self.dealer.remove_player(player.id)
            return None
        if self.dealer.find_player(player.id) is not player:
            raise ValueError(f"Player {player.id} is not seated")
        # Roster stays fixed until showdown; the player sits out the rest of the round.
        if player.active:
            player.set_active(False)
            player.game_folded()
        if player not in self.departed:
            self.departed.append(player)
        if not any(seated.active for seated in self.dealer.players) and self.current_game is not None:
            LOGGER.info("Session %s: every player left, closing game %s", self.session_id, self.current_game.id)
            return self.end_game()
        return None

    def is_departing(self, player: Player) -> bool:
        return player in self.departed

    def start_game(self, rng: Optional[random.Random] = None) -> GameRecord:
        table = self.dealer.start_game(rng)
        self.current_game = GameRecord(
            id=len(self.games),
            round=table.round,
            players=[player.name for player in self.dealer.players],
        )
        LOGGER.info(
            "Session %s game %s started with %s players",
            self.session_id,
            self.current_game.id,
            len(self.dealer.players),
        )
        return self.current_game

    def end_game(self) -> Dict[str, object]:
        if self.current_game is None or not self.dealer.in_round:
            raise RuntimeError("No game in progress")

        winners = self.dealer.check_for_winning_hand()
        total_chips = self.dealer.table.pot
        payouts = self.dealer.settle_round(winners)
        payload = self.dealer.showdown_payload(winners, payouts)

        record = self.current_game
        record.winners = [player.name for player in winners]
        record.total_chips = total_chips
        self.games.append(record)
        self.current_game = None
        LOGGER.info("Session %s game %s won by %s", self.session_id, record.id, record.winners)

        for player in self.departed:
            if self.dealer.find_player(player.id) is player:
                self.dealer.remove_player(player.id)
        self.departed.clear()
        return payload

    def summary(self) -> Dict[str, object]:
        return {
            "game_id": self.session_id,
            "players": len(self.dealer.players),
            "seats": self.dealer.config.seats,
            "in_round": self.dealer.in_round,
            "games_played": len(self.games),
        }
