import random

import pytest

from drawpoker.cards import DECK_SIZE
from drawpoker.dealer import FiveDrawDealer
from drawpoker.errors import InsufficientPlayers
from drawpoker.models import Player, TableConfig
from drawpoker.session import GameSession


def create_session(players: int = 3) -> GameSession:
    session = GameSession(1, FiveDrawDealer(TableConfig(seats=4), rng=random.Random(3)))
    for idx in range(players):
        session.join(Player(id=idx + 1, name=f"P{idx}", chips=500))
    return session


def test_start_and_end_game_archives_record():
    session = create_session()
    record = session.start_game()
    assert session.current_game is record
    assert record.players == ["P0", "P1", "P2"]

    payload = session.end_game()

    assert session.current_game is None
    assert session.games == [record]
    assert record.winners
    assert [winner["name"] for winner in payload["winners"]] == record.winners
    assert len(payload["hands"]) == 3
    assert not session.dealer.in_round


def test_game_ids_follow_history_length():
    session = create_session(players=2)
    for expected in range(3):
        record = session.start_game()
        assert record.id == expected
        session.end_game()
    assert session.summary()["games_played"] == 3


def test_end_game_without_round_rejected():
    session = create_session()
    with pytest.raises(RuntimeError, match="No game in progress"):
        session.end_game()


def test_start_game_needs_two_players():
    session = create_session(players=1)
    with pytest.raises(InsufficientPlayers):
        session.start_game()
    assert session.current_game is None


def test_leave_mid_round_folds_and_removes_after_showdown():
    session = create_session()
    session.start_game()
    leaver = session.dealer.players[1]

    session.leave(leaver)

    assert leaver.active is False
    assert leaver.stats.games_folded == 1
    assert leaver in session.dealer.players
    assert session.dealer.cards_in_play() == DECK_SIZE

    payload = session.end_game()

    assert leaver not in session.dealer.players
    assert leaver.id not in [entry["id"] for entry in payload["hands"]]
    assert leaver.stats.games_played == 1


def test_leave_between_rounds_removes_immediately():
    session = create_session()
    leaver = session.dealer.players[0]
    session.leave(leaver)
    assert leaver not in session.dealer.players


def test_summary_reports_lobby_view():
    session = create_session(players=2)
    assert session.summary() == {
        "game_id": 1,
        "players": 2,
        "seats": 4,
        "in_round": False,
        "games_played": 0,
    }


def test_last_player_leaving_mid_round_closes_the_game():
    session = create_session(players=2)
    record = session.start_game()
    first, second = session.dealer.players

    assert session.leave(first) is None
    payload = session.leave(second)

    assert payload is not None
    assert payload["winners"] == []
    assert not session.dealer.in_round
    assert session.dealer.players == []
    assert session.games == [record]
    assert session.current_game is None

    session.join(Player(id=9, name="Newcomer", chips=500))
    assert [player.name for player in session.dealer.players] == ["Newcomer"]


def test_leave_mid_round_rejects_player_from_another_table():
    session = create_session()
    session.start_game()
    stranger = Player(id=1, name="P0", chips=500)

    with pytest.raises(ValueError, match="not seated"):
        session.leave(stranger)

    assert stranger.stats.games_folded == 0
    assert not session.is_departing(stranger)
