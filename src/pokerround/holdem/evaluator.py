"""Hand-strength ranking used at showdown.

The round engine only needs a total order over 7-card holdings, so the
public entry point is ``rank_hand``: best five of the given cards, packed
into a single int where a higher score wins and equal scores tie.

Score layout: ``category << 20 | kickers``, each kicker taking 4 bits
from most to least significant.
"""

from __future__ import annotations

import itertools
from collections import Counter
from enum import IntEnum
from typing import Sequence

from pokerround.holdem.cards import Card

__all__ = ["HandRank", "evaluate_hand", "best_five", "rank_hand", "category_of"]

_ACE = 12
_WHEEL = [_ACE, 3, 2, 1, 0]


class HandRank(IntEnum):
    """Hand categories ordered from weakest to strongest."""

    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


def _pack(category: HandRank, kickers: Sequence[int]) -> int:
    score = 0
    for i, v in enumerate(kickers[:5]):
        score |= v << (4 * (4 - i))
    return (int(category) << 20) | score


def _straight_high(values: Sequence[int]) -> int | None:
    """High card of a five-value straight, or None. The wheel plays 5-high."""
    distinct = sorted(set(values), reverse=True)
    if len(distinct) != 5:
        return None
    if distinct[0] - distinct[4] == 4:
        return distinct[0]
    if distinct == _WHEEL:
        return 3
    return None


def evaluate_hand(hand: Sequence[Card]) -> int:
    """Score exactly five cards."""
    if len(hand) != 5:
        raise ValueError(f"Expected 5 cards, got {len(hand)}")

    values = sorted((c.value for c in hand), reverse=True)
    flush = len({c.suit for c in hand}) == 1
    high = _straight_high(values)

    # (count, value) pairs, biggest group first, ties broken by value
    groups = sorted(Counter(values).items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
    shape = [count for _, count in groups]
    ordered = [value for value, _ in groups]

    if flush and high is not None:
        return _pack(HandRank.STRAIGHT_FLUSH, [high])
    if shape[0] == 4:
        return _pack(HandRank.FOUR_OF_A_KIND, ordered)
    if shape[:2] == [3, 2]:
        return _pack(HandRank.FULL_HOUSE, ordered)
    if flush:
        return _pack(HandRank.FLUSH, values)
    if high is not None:
        return _pack(HandRank.STRAIGHT, [high])
    if shape[0] == 3:
        return _pack(HandRank.THREE_OF_A_KIND, ordered)
    if shape[:2] == [2, 2]:
        return _pack(HandRank.TWO_PAIR, ordered)
    if shape[0] == 2:
        return _pack(HandRank.PAIR, ordered)
    return _pack(HandRank.HIGH_CARD, values)


def best_five(cards: Sequence[Card]) -> list[Card]:
    """Pick the strongest five-card combination out of ``cards``."""
    if len(cards) < 5:
        raise ValueError(f"Need at least 5 cards, got {len(cards)}")
    return list(max(itertools.combinations(cards, 5), key=evaluate_hand))


def rank_hand(cards: Sequence[Card]) -> int:
    """Strength of the best five cards among up to seven."""
    return evaluate_hand(best_five(cards))


def category_of(score: int) -> HandRank:
    return HandRank(score >> 20)
