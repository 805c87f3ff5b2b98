"""Cards, card notation and the default deck.

Cards use two-character notation: a rank from ``23456789TJQKA`` followed
by a suit from ``schd`` (``"Ah"``, ``"Td"``). The round engine only ever
sees a ``Deck``; ``CardCollection`` is the stock implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

from pokerround.holdem.errors import CardError

__all__ = [
    "RANKS",
    "SUITS",
    "RANK_VALUE",
    "Card",
    "Deck",
    "CardCollection",
    "parse_card",
    "parse_cards",
]

RANKS = "23456789TJQKA"
SUITS = "schd"
RANK_VALUE: dict[str, int] = {r: i for i, r in enumerate(RANKS)}


@dataclass(frozen=True)
class Card:
    """A playing card with rank and suit."""

    rank: str
    suit: str

    def __repr__(self) -> str:
        return f"{self.rank}{self.suit}"

    __str__ = __repr__

    @property
    def value(self) -> int:
        """Rank as 0 (deuce) .. 12 (ace)."""
        return RANK_VALUE[self.rank]


def parse_card(text: str) -> Card:
    """Parse a single card such as ``"Ah"``."""
    if len(text) != 2:
        raise CardError(f"Card notation must be two characters, got {text!r}")
    rank, suit = text[0].upper(), text[1].lower()
    if rank not in RANK_VALUE:
        raise CardError(f"Couldn't parse value {text[0]!r}")
    if suit not in SUITS:
        raise CardError(f"Couldn't parse suit {text[1]!r}")
    return Card(rank=rank, suit=suit)


def parse_cards(text: str) -> list[Card]:
    """Parse a run of cards, e.g. ``"AdKd"`` or ``"Ad Kd 2c"``.

    Duplicates are rejected.
    """
    compact = "".join(text.split())
    if len(compact) % 2:
        raise CardError(f"Extra un-used chars found in {text!r}")

    cards: list[Card] = []
    seen: set[Card] = set()
    for i in range(0, len(compact), 2):
        card = parse_card(compact[i:i + 2])
        if card in seen:
            raise CardError(f"This card has already been added {card}")
        seen.add(card)
        cards.append(card)
    return cards


class Deck(ABC):
    """Source of cards for a round."""

    @abstractmethod
    def deal(self) -> Card | None:
        """Remove and return the next card, or None when empty."""

    @abstractmethod
    def is_empty(self) -> bool:
        """Return True when no cards remain."""


class CardCollection(Deck):
    """An ordered pile of cards. Dealing takes from the end.

    With no arguments it holds the standard 52-card deck, value-major.
    """

    def __init__(self, cards: Iterable[Card] | None = None) -> None:
        if cards is None:
            cards = (Card(rank=r, suit=s) for r in RANKS for s in SUITS)
        self._cards: list[Card] = list(cards)

    @classmethod
    def from_notation(cls, text: str) -> CardCollection:
        """Build a collection from notation; the last card is dealt first."""
        return cls(parse_cards(text))

    def shuffle(self, random_source: Callable[[int], int]) -> None:
        """Fisher-Yates shuffle.

        ``random_source(n)`` must return an int in ``[0, n)``; pass
        ``rng.randrange`` for a seeded ``random.Random``.
        """
        for i in range(len(self._cards) - 1, 0, -1):
            j = random_source(i + 1)
            self._cards[i], self._cards[j] = self._cards[j], self._cards[i]

    def deal(self) -> Card | None:
        if not self._cards:
            return None
        return self._cards.pop()

    def is_empty(self) -> bool:
        return not self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __repr__(self) -> str:
        return f"CardCollection({''.join(map(str, self._cards))})"
