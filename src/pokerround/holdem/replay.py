"""Rebuild chip positions from a recorded action stream."""

from __future__ import annotations

from typing import Iterable, Sequence

from pokerround.holdem.actions import Action, Move, SeatAction, StartRound, Win

__all__ = ["ActionLedger", "replay"]

_COMMITS = {Move.BLIND, Move.CALL, Move.BET, Move.RAISE, Move.ALL_IN}


class ActionLedger:
    """Applies actions to a set of stacks and the current round's pot.

    Dealing, checks and folds move no chips; blinds, calls, bets, raises
    and all-ins move chips from the seat into the pot; wins move them back.
    ``contributions`` holds what each seat has put in since the last
    ``StartRound``, so a partially replayed stream shows who is in for how
    much. Wins are not attributed to a contributor and only lower ``pot``.
    """

    def __init__(self, stacks: Sequence[int]):
        self.stacks = list(stacks)
        self.contributions = [0] * len(self.stacks)
        self.paid_out = 0
        self.round_id: int | None = None
        self.rounds = 0

    @property
    def pot(self) -> int:
        return sum(self.contributions) - self.paid_out

    def apply(self, action: Action) -> None:
        if isinstance(action, StartRound):
            self.round_id = action.round_id
            self.rounds += 1
            self.contributions = [0] * len(self.stacks)
            self.paid_out = 0
        elif isinstance(action, SeatAction):
            if action.move in _COMMITS:
                if action.amount > self.stacks[action.seat]:
                    raise ValueError(
                        f"Seat {action.seat} commits {action.amount} "
                        f"with only {self.stacks[action.seat]} behind"
                    )
                self.stacks[action.seat] -= action.amount
                self.contributions[action.seat] += action.amount
        elif isinstance(action, Win):
            for seat, amount in action.wins:
                self.stacks[seat] += amount
                self.paid_out += amount

    def apply_all(self, actions: Iterable[Action]) -> None:
        for action in actions:
            self.apply(action)


def replay(actions: Iterable[Action], stacks: Sequence[int]) -> ActionLedger:
    ledger = ActionLedger(stacks)
    ledger.apply_all(actions)
    return ledger
