"""Tests for hand-strength ranking."""

import pytest

from pokerround.holdem.cards import parse_card, parse_cards
from pokerround.holdem.evaluator import (
    HandRank,
    best_five,
    category_of,
    evaluate_hand,
    rank_hand,
)


def c(s: str):
    return parse_card(s)


def cards(s: str):
    return parse_cards(s)


class TestCategories:
    @pytest.mark.parametrize(
        "hand, category",
        [
            ("Ah Kd 9c 7s 3h", HandRank.HIGH_CARD),
            ("Ah Ad 9c 7s 3h", HandRank.PAIR),
            ("Ah Ad 9c 9s 3h", HandRank.TWO_PAIR),
            ("Ah Ad As 9s 3h", HandRank.THREE_OF_A_KIND),
            ("9h Td Jc Qs Kh", HandRank.STRAIGHT),
            ("Ah 2d 3c 4s 5h", HandRank.STRAIGHT),
            ("Ah Jh 9h 7h 3h", HandRank.FLUSH),
            ("Ah Ad As 9s 9h", HandRank.FULL_HOUSE),
            ("Ah Ad As Ac 9h", HandRank.FOUR_OF_A_KIND),
            ("9h Th Jh Qh Kh", HandRank.STRAIGHT_FLUSH),
        ],
    )
    def test_category(self, hand, category):
        assert category_of(evaluate_hand(cards(hand))) == category

    def test_wrong_card_count(self):
        with pytest.raises(ValueError):
            evaluate_hand(cards("Ah Kd 9c 7s"))


class TestOrdering:
    def test_higher_category_wins(self):
        assert evaluate_hand(cards("Ah Jh 9h 7h 3h")) > evaluate_hand(cards("9h Td Jc Qs Kh"))

    def test_wheel_is_lowest_straight(self):
        wheel = evaluate_hand(cards("Ah 2d 3c 4s 5h"))
        six_high = evaluate_hand(cards("2h 3d 4c 5s 6h"))
        assert six_high > wheel

    def test_kicker_decides(self):
        assert evaluate_hand(cards("Ah Ad Kc 7s 3h")) > evaluate_hand(cards("Ac As Qc 7d 3d"))

    def test_full_house_trips_first(self):
        assert evaluate_hand(cards("3h 3d 3c 2s 2h")) > evaluate_hand(cards("2h 2d 2c As Ah"))

    def test_identical_strength_ties(self):
        assert evaluate_hand(cards("Ah Kd 9c 7s 3h")) == evaluate_hand(cards("As Kc 9d 7h 3c"))


class TestSevenCards:
    def test_best_five_picks_flush(self):
        best = best_five(cards("Ah Kh 2h 7h 9h 2c 2d"))
        assert all(card.suit == "h" for card in best)

    def test_rank_hand_uses_board(self):
        board = "Ts Js Qs 2d 3c"
        royal = rank_hand(cards(f"As Ks {board}"))
        pair = rank_hand(cards(f"Ad 2h {board}"))
        assert royal > pair
        assert category_of(royal) == HandRank.STRAIGHT_FLUSH

    def test_board_plays_ties(self):
        board = "Ts Js Qs Ks As"
        assert rank_hand(cards(f"2d 3c {board}")) == rank_hand(cards(f"4d 5c {board}"))

    def test_needs_five(self):
        with pytest.raises(ValueError):
            best_five([c("Ah"), c("Kh")])
