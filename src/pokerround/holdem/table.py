"""Table — long-lived seating around a sequence of rounds.

The table owns the RoundState between rounds, tells every player its seat
once, applies the blind policy before each round, and busts seats whose
stack has run out. Rounds themselves are played by a ``RoundDriver``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterator, Sequence

from pokerround.holdem.actions import Action, IncreaseBlind
from pokerround.holdem.board import HandRanker
from pokerround.holdem.cards import Deck
from pokerround.holdem.driver import RoundCheckpoint, RoundDriver
from pokerround.holdem.evaluator import rank_hand
from pokerround.holdem.players import Player
from pokerround.holdem.state import RoundState

__all__ = ["BlindPolicy", "NeverIncrease", "ScheduledBlinds", "Table"]

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Blind policy
# ------------------------------------------------------------------

class BlindPolicy(ABC):
    """Decides the small blind for each round."""

    @abstractmethod
    def next_blind(self, round_id: int, blind_size: int) -> int:
        """Small blind for ``round_id``, given the one currently in force."""


class NeverIncrease(BlindPolicy):
    def next_blind(self, round_id: int, blind_size: int) -> int:
        return blind_size


class ScheduledBlinds(BlindPolicy):
    """Fixed levels: ``{round_id: small_blind}``.

    A level applies from its round onwards until the next one.
    """

    def __init__(self, schedule: dict[int, int]):
        for round_id, size in schedule.items():
            if size <= 0:
                raise ValueError(f"Blind for round {round_id} must be positive, got {size}")
        self._levels = sorted(schedule.items())

    def next_blind(self, round_id: int, blind_size: int) -> int:
        current = blind_size
        for start, size in self._levels:
            if start > round_id:
                break
            current = size
        return current


# ------------------------------------------------------------------
# Table
# ------------------------------------------------------------------

class Table:
    """Seats 2 to 22 players with equal starting stacks. Dealer starts at seat 0."""

    def __init__(
        self,
        players: Sequence[Player],
        stack_size: int,
        blind_size: int,
        blind_policy: BlindPolicy | None = None,
        action_logger=None,
        ranker: HandRanker = rank_hand,
    ) -> None:
        self._players = list(players)
        self._state = RoundState([stack_size] * len(self._players), blind_size, ranker=ranker)
        self._policy = blind_policy or NeverIncrease()
        self._action_logger = action_logger
        self._busted: list[int] = []
        for seat, player in enumerate(self._players):
            player.init(seat, stack_size)

    @property
    def players(self) -> list[Player]:
        return list(self._players)

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def stacks(self) -> list[int]:
        return list(self._state.stacks)

    @property
    def busted(self) -> list[int]:
        """Seats that ran out of chips, in the order they busted."""
        return list(self._busted)

    @property
    def round_id(self) -> int:
        return self._state.id

    def is_finished(self) -> bool:
        """True once fewer than two seats have chips."""
        return len(self._state.seats_with_chips()) < 2

    def start_round(self, deck: Deck) -> RoundDriver:
        return RoundDriver(self._state, self._players, deck)

    def resume(
        self,
        checkpoint: RoundCheckpoint,
        players: Sequence[Player] | None = None,
    ) -> RoundDriver:
        """Replay a round from ``checkpoint``. The table's own state is untouched."""
        return RoundDriver.from_checkpoint(
            players if players is not None else self._players, checkpoint
        )

    def play_round(self, deck: Deck) -> Iterator[Action]:
        """Play one round, yielding its actions as they happen."""
        round_id = self._state.id
        blind = self._policy.next_blind(round_id, self._state.blind_size)
        if blind > self._state.blind_size:
            self._state.blind_size = blind
            action = IncreaseBlind(blind)
            self._log(round_id, action)
            yield action
        elif blind < self._state.blind_size:
            # Only increases are announced; StartRound still carries the new size.
            logger.info("Round %d: blind lowered to %d", round_id, blind)
            self._state.blind_size = blind

        for action in self.start_round(deck):
            self._log(round_id, action)
            yield action

        self._bust_broke_seats(round_id)
        logger.info("Round %d finished, stacks %s", round_id, self._state.stacks)

    def finalize(self, extra: dict | None = None) -> None:
        if self._action_logger is not None:
            self._action_logger.finalize_table(self.stacks, self.busted, extra=extra)

    def _bust_broke_seats(self, round_id: int) -> None:
        for seat, stack in enumerate(self._state.stacks):
            if stack == 0 and seat not in self._busted:
                self._busted.append(seat)
                self._players[seat].bust()
                logger.info("Seat %d busted in round %d", seat, round_id)

    def _log(self, round_id: int, action: Action) -> None:
        if self._action_logger is not None:
            self._action_logger.log_action(round_id, action)
