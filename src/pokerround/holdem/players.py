"""Seat behaviours.

Every seat is a ``Player``. The round engine calls:

- ``init(seat, initial_stack)`` once when the table is built,
- ``act(view, legal_actions)`` whenever the seat must decide, including the
  forced blinds, which arrive with a single option,
- ``bust()`` once when the seat's stack reaches zero.

Variants:
- ScriptedPlayer: replays a fixed list of answers (tests, replays).
- CallingPlayer: checks when free, otherwise calls, otherwise shoves.
- RandomPlayer: picks uniformly among what it is offered.
- ChannelPlayer: hands the decision to another thread over queues.
"""

from __future__ import annotations

import logging
import queue
import random
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Sequence

from pokerround.core.parser import DecisionParser, ParseResult
from pokerround.holdem.actions import Move, PlayerAction
from pokerround.holdem.errors import ConfigError, PlayerContractError
from pokerround.holdem.state import StateView

__all__ = [
    "Player",
    "ScriptedPlayer",
    "CallingPlayer",
    "RandomPlayer",
    "ChannelPlayer",
    "DecisionRequest",
]

logger = logging.getLogger(__name__)


class Player(ABC):
    """Decision policy behind one seat."""

    def __init__(self) -> None:
        self.seat: int | None = None
        self.initial_stack = 0
        self.busted = False

    def init(self, seat: int, initial_stack: int) -> None:
        self.seat = seat
        self.initial_stack = initial_stack
        self.busted = False

    @abstractmethod
    def act(self, view: StateView, legal_actions: Sequence[PlayerAction]) -> PlayerAction:
        """Choose one of ``legal_actions``. Never called with an empty set."""

    def bust(self) -> None:
        self.busted = True


def _find(legal_actions: Sequence[PlayerAction], move: Move) -> PlayerAction | None:
    return next((a for a in legal_actions if a.move is move), None)


class ScriptedPlayer(Player):
    """Answers from a fixed script, in order.

    Script entries are ``PlayerAction`` objects or schema-shaped dicts such
    as ``{"action": "raise", "amount": 8}``. Forced blinds, offered as a
    single option, are answered without using up an entry. Remembers the
    options it was last offered.
    """

    def __init__(self, script: Iterable[PlayerAction | dict] = ()) -> None:
        super().__init__()
        parser = DecisionParser()
        entries: list[PlayerAction] = []
        for entry in script:
            if isinstance(entry, dict):
                problem = parser.validate(entry)
                if problem is not None:
                    raise ConfigError(f"Invalid scripted decision {entry!r}: {problem}")
                entry = PlayerAction.from_dict(entry)
            entries.append(entry)
        self._script = deque(entries)
        self.last_possible_actions: list[PlayerAction] = []

    @property
    def remaining(self) -> int:
        return len(self._script)

    def push(self, action: PlayerAction) -> None:
        self._script.append(action)

    def act(self, view: StateView, legal_actions: Sequence[PlayerAction]) -> PlayerAction:
        self.last_possible_actions = list(legal_actions)
        if len(legal_actions) == 1:
            return legal_actions[0]
        if not self._script:
            raise PlayerContractError(view.seat, "nothing (script exhausted)", legal_actions)
        reply = self._script.popleft()
        if _find(legal_actions, reply.move) is None:
            raise PlayerContractError(view.seat, reply, legal_actions)
        return reply


class CallingPlayer(Player):
    """Never folds, never raises."""

    def act(self, view: StateView, legal_actions: Sequence[PlayerAction]) -> PlayerAction:
        for move in (Move.BLIND, Move.CHECK, Move.CALL):
            option = _find(legal_actions, move)
            if option is not None:
                return option
        return _find(legal_actions, Move.ALL_IN) or legal_actions[0]


class RandomPlayer(Player):
    """Uniform choice over the offered actions, at their offered sizes."""

    def __init__(self, rng: random.Random | None = None) -> None:
        super().__init__()
        self._rng = rng or random.Random()

    def act(self, view: StateView, legal_actions: Sequence[PlayerAction]) -> PlayerAction:
        return self._rng.choice(list(legal_actions))


@dataclass(frozen=True)
class DecisionRequest:
    """Posted to the presentation side when a seat must decide."""

    seat: int
    view: StateView
    legal_actions: tuple[PlayerAction, ...]


class ChannelPlayer(Player):
    """Bridge to a decision maker on another thread.

    Each decision posts a ``DecisionRequest`` on ``requests`` and blocks on
    ``responses`` until an answer arrives. Answers are ``PlayerAction``
    objects or raw text holding a JSON decision; text that does not parse
    is sent back on ``requests`` as a failed ``ParseResult`` and the seat
    keeps waiting. There is no timeout.
    """

    def __init__(
        self,
        requests: queue.Queue,
        responses: queue.Queue,
        parser: DecisionParser | None = None,
    ) -> None:
        super().__init__()
        self.requests = requests
        self.responses = responses
        self._parser = parser or DecisionParser()

    def act(self, view: StateView, legal_actions: Sequence[PlayerAction]) -> PlayerAction:
        self.requests.put(DecisionRequest(view.seat, view, tuple(legal_actions)))
        while True:
            answer = self.responses.get()
            if isinstance(answer, PlayerAction):
                return answer
            result: ParseResult = self._parser.parse(str(answer))
            if result.success:
                return PlayerAction.from_dict(result.action)
            logger.debug("Seat %s sent an unusable decision: %s", view.seat, result.error)
            self.requests.put(result)
