"""Tests for cards, notation and the standard deck."""

import random

import pytest

from pokerround.holdem.cards import Card, CardCollection, parse_card, parse_cards
from pokerround.holdem.errors import CardError


class TestNotation:
    def test_parse_card(self):
        assert parse_card("Ah") == Card("A", "h")

    def test_parse_card_normalises_case(self):
        assert parse_card("tD") == Card("T", "d")

    def test_repr_round_trips(self):
        assert str(parse_card("9c")) == "9c"

    def test_bad_value(self):
        with pytest.raises(CardError, match="value"):
            parse_card("Xh")

    def test_bad_suit(self):
        with pytest.raises(CardError, match="suit"):
            parse_card("Ax")

    def test_parse_cards_compact(self):
        assert parse_cards("AdKd") == [Card("A", "d"), Card("K", "d")]

    def test_parse_cards_spaced(self):
        assert parse_cards("Ad Kd 2c") == [Card("A", "d"), Card("K", "d"), Card("2", "c")]

    def test_duplicate_rejected(self):
        with pytest.raises(CardError, match="already"):
            parse_cards("AdKdAd")

    def test_dangling_char_rejected(self):
        with pytest.raises(CardError):
            parse_cards("AdK")

    def test_card_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_card("??")

    def test_value(self):
        assert Card("2", "s").value == 0
        assert Card("A", "s").value == 12


class TestCardCollection:
    def test_default_deck_has_52_unique_cards(self, deck):
        cards = list(deck)
        assert len(cards) == 52
        assert len(set(cards)) == 52

    def test_default_deck_is_value_major(self, deck):
        cards = list(deck)
        assert cards[:4] == [Card("2", s) for s in "schd"]
        assert cards[-1] == Card("A", "d")

    def test_deal_pops_from_end(self, deck):
        assert deck.deal() == Card("A", "d")
        assert deck.deal() == Card("A", "h")
        assert len(deck) == 50

    def test_deal_empty_returns_none(self):
        pile = CardCollection([])
        assert pile.is_empty()
        assert pile.deal() is None

    def test_from_notation_deals_last_first(self):
        pile = CardCollection.from_notation("2c3c4c")
        assert pile.deal() == Card("4", "c")
        assert pile.deal() == Card("3", "c")
        assert pile.deal() == Card("2", "c")
        assert pile.is_empty()

    def test_from_notation_rejects_duplicates(self):
        with pytest.raises(CardError):
            CardCollection.from_notation("2c2c")

    def test_contains(self, deck):
        assert Card("7", "h") in deck

    @pytest.mark.parametrize("seed", [0, 1, 42, 2024])
    def test_shuffle_is_permutation(self, deck, seed):
        before = sorted(deck, key=repr)
        deck.shuffle(random.Random(seed).randrange)
        assert sorted(deck, key=repr) == before

    def test_shuffle_with_constant_source(self, deck):
        deck.shuffle(lambda n: 0)
        assert len(set(deck)) == 52

    def test_shuffle_deterministic(self):
        a, b = CardCollection(), CardCollection()
        a.shuffle(random.Random(7).randrange)
        b.shuffle(random.Random(7).randrange)
        assert list(a) == list(b)

    def test_shuffle_changes_order(self, deck):
        before = list(deck)
        deck.shuffle(random.Random(3).randrange)
        assert list(deck) != before
