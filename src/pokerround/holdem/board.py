"""Community cards."""

from __future__ import annotations

from typing import Callable, Sequence

from pokerround.holdem.cards import Card
from pokerround.holdem.evaluator import rank_hand

__all__ = ["Board", "HandRanker"]

HandRanker = Callable[[Sequence[Card]], int]


class Board:
    """Up to five shared cards, dealt 3/1/1.

    Hand strength is delegated to ``ranker``; any callable taking the seven
    cards and returning an int (higher wins, equal ties) will do.
    """

    def __init__(self, ranker: HandRanker = rank_hand) -> None:
        self._cards: list[Card] = []
        self._ranker = ranker

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def deal_flop(self, cards: Sequence[Card]) -> None:
        if len(cards) != 3 or self._cards:
            raise ValueError("The flop is three cards on an empty board")
        self._cards.extend(cards)

    def deal_turn(self, card: Card) -> None:
        if len(self._cards) != 3:
            raise ValueError("The turn follows the flop")
        self._cards.append(card)

    def deal_river(self, card: Card) -> None:
        if len(self._cards) != 4:
            raise ValueError("The river follows the turn")
        self._cards.append(card)

    def rank(self, hole_cards: Sequence[Card]) -> int:
        """Strength of ``hole_cards`` combined with the full board."""
        return self._ranker([*hole_cards, *self._cards])

    def clear(self) -> None:
        self._cards.clear()

    def __repr__(self) -> str:
        return f"Board({''.join(map(str, self._cards))})"
