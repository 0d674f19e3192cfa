from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .cards import Card, parse_label
from .errors import InvalidHandSize

HAND_SIZE = 5

HIGH_CARD = 1
ONE_PAIR = 2
TWO_PAIR = 3
THREE_OF_A_KIND = 4
STRAIGHT = 5
FLUSH = 6
FULL_HOUSE = 7
FOUR_OF_A_KIND = 8
STRAIGHT_FLUSH = 9
ROYAL_FLUSH = 10

CATEGORY_NAMES = {
    HIGH_CARD: "high_card",
    ONE_PAIR: "pair",
    TWO_PAIR: "two_pair",
    THREE_OF_A_KIND: "three_of_a_kind",
    STRAIGHT: "straight",
    FLUSH: "flush",
    FULL_HOUSE: "full_house",
    FOUR_OF_A_KIND: "four_of_a_kind",
    STRAIGHT_FLUSH: "straight_flush",
    ROYAL_FLUSH: "royal_flush",
}

WHEEL = [14, 5, 4, 3, 2]

HandScore = Tuple[int, List[int]]


def evaluate_hand(hand: Sequence[Card]) -> HandScore:
    """Return ``(category, tiebreak)`` for exactly five cards. Higher is better.

    The tiebreak lists the ranks of the count profile (most frequent first,
    higher rank first among equal counts) followed by all five strengths in
    descending order, so two hands of the same category compare
    lexicographically. In a wheel (A-5-4-3-2) the Ace counts as 1, which makes
    it the lowest straight.
    """
    if len(hand) != HAND_SIZE:
        raise InvalidHandSize(f"Expected {HAND_SIZE} cards, got {len(hand)}")

    ranks = sorted((card.strength for card in hand), reverse=True)
    is_flush = len({card.suit for card in hand}) == 1
    straight_high = _straight_high(ranks)
    if straight_high == 5:
        ranks = [5, 4, 3, 2, 1]

    counts: Dict[int, int] = {}
    for rank in ranks:
        counts.setdefault(rank, 0)
        counts[rank] += 1

    ordered_counts = sorted(counts.items(), key=lambda x: (x[1], x[0]), reverse=True)
    count_values = [count for _, count in ordered_counts]
    tiebreak = [rank for rank, _ in ordered_counts] + ranks

    if straight_high and is_flush:
        category = ROYAL_FLUSH if straight_high == 14 else STRAIGHT_FLUSH
    elif count_values[0] == 4:
        category = FOUR_OF_A_KIND
    elif count_values[0] == 3 and count_values[1] == 2:
        category = FULL_HOUSE
    elif is_flush:
        category = FLUSH
    elif straight_high:
        category = STRAIGHT
    elif count_values[0] == 3:
        category = THREE_OF_A_KIND
    elif count_values[0] == 2 and count_values[1] == 2:
        category = TWO_PAIR
    elif count_values[0] == 2:
        category = ONE_PAIR
    else:
        category = HIGH_CARD
    return (category, tiebreak)


def _straight_high(ranks: List[int]) -> Optional[int]:
    # ranks sorted descending
    if len(set(ranks)) != HAND_SIZE:
        return None
    if ranks[0] - ranks[-1] == 4:
        return ranks[0]
    if ranks == WHEEL:
        return 5
    return None


def compare_hands(hand_a: Sequence[Card], hand_b: Sequence[Card]) -> int:
    """-1, 0 or 1 as ``hand_a`` loses to, ties or beats ``hand_b``."""
    score_a = evaluate_hand(hand_a)
    score_b = evaluate_hand(hand_b)
    return (score_a > score_b) - (score_a < score_b)


def describe_rank(score: HandScore) -> str:
    category, _ = score
    return CATEGORY_NAMES[category]


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
