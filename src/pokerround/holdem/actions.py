"""Action vocabulary for a round.

Two families of records:

- ``PlayerAction`` is a choice: what the engine offers a seat and what the
  seat answers with.
- ``Action`` subclasses are the logged events of a round, in the order the
  driver produces them. Each one serialises to a flat dict with a ``type``
  discriminator so the stream can be written to JSONL and read back.

Amounts are always the chips committed by that single action, not the
seat's running total for the street.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Sequence

from pokerround.holdem.cards import Card, parse_card
from pokerround.holdem.errors import PlayerContractError

__all__ = [
    "Move",
    "PlayerAction",
    "Action",
    "StartRound",
    "IncreaseBlind",
    "DealHand",
    "DealFlop",
    "DealTurn",
    "DealRiver",
    "SeatAction",
    "Win",
    "EndRound",
    "action_from_dict",
]

logger = logging.getLogger(__name__)


class Move(Enum):
    BLIND = "blind"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    ALL_IN = "all_in"
    FOLD = "fold"


# Moves whose size the engine fixes regardless of what the seat asks for.
_FIXED_SIZE = {Move.BLIND, Move.CHECK, Move.CALL, Move.ALL_IN, Move.FOLD}


@dataclass(frozen=True)
class PlayerAction:
    """A choice offered to, or made by, a seat."""

    move: Move
    amount: int = 0

    def __str__(self) -> str:
        if self.move in (Move.CHECK, Move.FOLD):
            return self.move.value
        return f"{self.move.value}({self.amount})"

    def to_dict(self) -> dict:
        return {"action": self.move.value, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: dict) -> PlayerAction:
        """Build from a schema-shaped dict: ``{"action": "raise", "amount": 8}``."""
        return cls(move=Move(data["action"]), amount=int(data.get("amount", 0)))


# ------------------------------------------------------------------
# Logged actions
# ------------------------------------------------------------------

class Action(ABC):
    """Base for every event in the action stream."""

    type: ClassVar[str] = ""

    @abstractmethod
    def to_dict(self) -> dict:
        """Flat dict with a ``type`` discriminator."""


@dataclass(frozen=True)
class StartRound(Action):
    round_id: int
    small_blind: int
    big_blind: int

    type: ClassVar[str] = "start_round"

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "round_id": self.round_id,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
        }


@dataclass(frozen=True)
class IncreaseBlind(Action):
    amount: int

    type: ClassVar[str] = "increase_blind"

    def to_dict(self) -> dict:
        return {"type": self.type, "amount": self.amount}


@dataclass(frozen=True)
class DealHand(Action):
    seat: int
    cards: tuple[Card, Card]

    type: ClassVar[str] = "deal_hand"

    def to_dict(self) -> dict:
        return {"type": self.type, "seat": self.seat, "cards": [str(c) for c in self.cards]}


@dataclass(frozen=True)
class DealFlop(Action):
    cards: tuple[Card, Card, Card]

    type: ClassVar[str] = "deal_flop"

    def to_dict(self) -> dict:
        return {"type": self.type, "cards": [str(c) for c in self.cards]}


@dataclass(frozen=True)
class DealTurn(Action):
    card: Card

    type: ClassVar[str] = "deal_turn"

    def to_dict(self) -> dict:
        return {"type": self.type, "card": str(self.card)}


@dataclass(frozen=True)
class DealRiver(Action):
    card: Card

    type: ClassVar[str] = "deal_river"

    def to_dict(self) -> dict:
        return {"type": self.type, "card": str(self.card)}


@dataclass(frozen=True)
class SeatAction(Action):
    """A seat committing to a move: blind, check, call, bet, raise, all-in or fold."""

    seat: int
    move: Move
    amount: int = 0

    @property
    def type(self) -> str:  # type: ignore[override]
        return self.move.value

    def __str__(self) -> str:
        return f"seat {self.seat} {PlayerAction(self.move, self.amount)}"

    def to_dict(self) -> dict:
        return {"type": self.type, "seat": self.seat, "amount": self.amount}

    @classmethod
    def from_player_action(
        cls,
        seat: int,
        reply: PlayerAction,
        offered: Sequence[PlayerAction],
        stack: int,
    ) -> SeatAction:
        """Turn a seat's reply into the action that actually gets logged.

        The reply's kind must be among ``offered``. Call, all-in and forced
        moves take the engine's size. Bets and raises below the offered
        minimum are lifted to it; anything reaching the stack becomes an
        all-in for the whole stack.
        """
        match = next((o for o in offered if o.move is reply.move), None)
        if match is None:
            raise PlayerContractError(seat, reply, offered)

        if reply.move in _FIXED_SIZE:
            amount = match.amount
        else:
            amount = max(reply.amount, match.amount)
            if amount != reply.amount:
                logger.debug("Seat %d %s lifted to minimum %d", seat, reply, amount)

        if reply.move not in (Move.FOLD, Move.CHECK) and amount >= stack:
            if reply.move is not Move.ALL_IN:
                logger.debug("Seat %d %s clamped to all-in %d", seat, reply, stack)
            return cls(seat=seat, move=Move.ALL_IN, amount=stack)
        return cls(seat=seat, move=reply.move, amount=amount)


@dataclass(frozen=True)
class Win(Action):
    """One showdown tier: every seat paid from the pot at this rank."""

    wins: tuple[tuple[int, int], ...]

    type: ClassVar[str] = "win"

    def to_dict(self) -> dict:
        return {"type": self.type, "wins": [[seat, amount] for seat, amount in self.wins]}


@dataclass(frozen=True)
class EndRound(Action):
    type: ClassVar[str] = "end_round"

    def to_dict(self) -> dict:
        return {"type": self.type}


def action_from_dict(data: dict) -> Action:
    """Inverse of ``Action.to_dict``."""
    kind = data["type"]
    if kind == StartRound.type:
        return StartRound(data["round_id"], data["small_blind"], data["big_blind"])
    if kind == IncreaseBlind.type:
        return IncreaseBlind(data["amount"])
    if kind == DealHand.type:
        first, second = (parse_card(c) for c in data["cards"])
        return DealHand(data["seat"], (first, second))
    if kind == DealFlop.type:
        a, b, c = (parse_card(c) for c in data["cards"])
        return DealFlop((a, b, c))
    if kind == DealTurn.type:
        return DealTurn(parse_card(data["card"]))
    if kind == DealRiver.type:
        return DealRiver(parse_card(data["card"]))
    if kind == Win.type:
        return Win(tuple((int(s), int(a)) for s, a in data["wins"]))
    if kind == EndRound.type:
        return EndRound()
    try:
        move = Move(kind)
    except ValueError:
        raise ValueError(f"Unknown action type {kind!r}") from None
    return SeatAction(seat=data["seat"], move=move, amount=data.get("amount", 0))
