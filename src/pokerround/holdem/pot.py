"""Pot — chip ledger for one round.

Tracks what each seat has put in this round, the settled high-water mark
from finished streets, the current street's increment on top of it, and
the size of the last raise. It knows nothing about legality; the round
state decides what may be placed.
"""

from __future__ import annotations

from typing import Sequence

__all__ = ["Pot"]


class Pot:
    """Per-seat contributions and side-pot distribution."""

    def __init__(self, seats: int) -> None:
        self._bets = [0] * seats
        self._bet_size = 0
        self._bet_size_round = 0
        self._last_raise = 0

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def seats(self) -> int:
        return len(self._bets)

    def contribution(self, seat: int) -> int:
        return self._bets[seat]

    def contributions(self) -> list[int]:
        return list(self._bets)

    def total_size(self) -> int:
        return sum(self._bets)

    def total_bet_size(self) -> int:
        """High-water mark every seat must match to stay in."""
        return self._bet_size + self._bet_size_round

    def bet_size_round(self) -> int:
        return self._bet_size_round

    def last_raise_amount(self) -> int:
        return self._last_raise

    def required_bet_size(self, seat: int) -> int:
        return self.total_bet_size() - self._bets[seat]

    def effective_total_size(self, seat: int, extra: int) -> int:
        """Pot size if ``seat`` adds ``extra``, counting others only up to its level."""
        level = self._bets[seat] + extra
        return sum(min(level, bet) for bet in self._bets) + extra

    def is_empty(self) -> bool:
        return self.total_size() == 0

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def place_chips(self, seat: int, amount: int) -> bool:
        """Add chips for ``seat``. Returns True if that raised the high-water mark."""
        if amount < 0:
            raise ValueError(f"Cannot place a negative amount ({amount})")
        self._bets[seat] += amount
        over = self._bets[seat] - self.total_bet_size()
        if over > 0:
            self._last_raise = over
            self._bet_size_round += over
            return True
        return False

    def end_bet_round(self) -> None:
        self._bet_size += self._bet_size_round
        self._bet_size_round = 0
        self._last_raise = 0

    def reset(self) -> None:
        self._bets = [0] * len(self._bets)
        self._bet_size = 0
        self._bet_size_round = 0
        self._last_raise = 0

    def distribute(self, positions: Sequence[int]) -> dict[int, int]:
        """Pay one tier of equally ranked winners.

        Each winner can only collect, from every seat, as much as it put in
        itself. Smaller contributors are settled first so their layer is
        shared by everyone above them. Odd chips go to ``positions[0]``.
        Whatever the tier cannot claim stays in the pot for the next call.
        """
        if not positions:
            return {}
        if self._bet_size_round:
            self.end_bet_round()

        first = positions[0]
        ordered = sorted(positions, key=lambda seat: self._bets[seat])
        won = {seat: 0 for seat in positions}
        remaining = len(ordered)
        pot = 0

        for seat in ordered:
            cap = self._bets[seat]
            for other, bet in enumerate(self._bets):
                taken = min(bet, cap)
                self._bets[other] -= taken
                pot += taken
            share, rest = divmod(pot, remaining)
            won[seat] += share
            won[first] += rest
            pot -= share + rest
            remaining -= 1

        return won

    def __repr__(self) -> str:
        return (
            f"Pot(bets={self._bets}, bet_size={self._bet_size}, "
            f"round={self._bet_size_round}, last_raise={self._last_raise})"
        )
