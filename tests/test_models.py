import pytest

from drawpoker.models import Player, Stats


def test_new_player_starts_inactive_with_empty_hand():
    player = Player(id=1, name="John", chips=1_000)
    assert player.name == "John"
    assert player.chips == 1_000
    assert player.hand == []
    assert player.current_bet == 0
    assert player.active is False
    assert player.stats == Stats()


def test_chip_mutators_never_go_negative():
    player = Player(id=1, name="John", chips=100)
    player.add_chips(50)
    player.remove_chips(120)
    assert player.chips == 30
    with pytest.raises(ValueError, match="Not enough chips"):
        player.remove_chips(31)
    with pytest.raises(ValueError):
        player.add_chips(-1)


def test_game_results_accumulate_and_reset():
    player = Player(id=1, name="John", chips=0)
    player.game_won(80)
    player.game_lost()
    player.game_folded()
    assert player.chips == 80
    assert player.stats == Stats(games_played=3, games_won=1, games_lost=1, games_folded=1, total_chips_won=80)
    player.reset_stats()
    assert player.stats == Stats()
    assert player.chips == 80


def test_players_compare_by_identity():
    first = Player(id=1, name="Twin")
    second = Player(id=1, name="Twin")
    assert first != second
    assert first in [first]
