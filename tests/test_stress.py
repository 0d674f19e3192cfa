from drawpoker.cards import DECK_SIZE

from .helpers import create_dealer


def test_dealer_handles_thousand_rounds_without_losing_cards():
    dealer = create_dealer(players=6, starting_chips=1_000_000, seed=2024)
    total_chips = sum(player.chips for player in dealer.players)

    for _ in range(1_000):
        dealer.start_game()
        assert dealer.cards_in_play() == DECK_SIZE
        held = [card for player in dealer.players for card in player.hand]
        assert len(set(held)) == len(held) == 30
        assert not set(held) & set(dealer.deck)
        dealer.table.pot = 60
        for player in dealer.players:
            player.remove_chips(10)
        winners = dealer.check_for_winning_hand()
        assert winners
        dealer.settle_round(winners)

    assert dealer.table.round == 1_000
    assert sum(player.chips for player in dealer.players) == total_chips
    assert sum(player.stats.games_won for player in dealer.players) >= 1_000
    assert all(player.stats.games_played == 1_000 for player in dealer.players)
