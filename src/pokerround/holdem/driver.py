"""RoundDriver — lazy stage machine over one round.

Iterating a driver produces the round's actions one at a time:

    StartRound, DealHand x N, small blind, big blind,
    pre-flop betting, DealFlop, flop betting, DealTurn, turn betting,
    DealRiver, river betting, Win per showdown tier, EndRound

A street where only one seat still holds cards jumps straight to the
showdown. Once EndRound has been produced the state has already been
reset for the next round and the iterator is exhausted.

Consumers that stop iterating early keep every chip movement made so
far; ``checkpoint()`` captures enough to pick the round up again.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Sequence

from pokerround.holdem.actions import Action
from pokerround.holdem.cards import Card, Deck
from pokerround.holdem.errors import DeckExhaustedError, SeatCountError
from pokerround.holdem.state import BettingCursor, RoundState, Street

__all__ = ["Stage", "RoundCheckpoint", "RoundDriver"]

logger = logging.getLogger(__name__)


class Stage(Enum):
    INIT = "init"
    DEAL_HAND = "deal_hand"
    SMALL_BLIND = "small_blind"
    BIG_BLIND = "big_blind"
    STREET = "street"
    DEAL_FLOP = "deal_flop"
    DEAL_TURN = "deal_turn"
    DEAL_RIVER = "deal_river"
    SHOWDOWN = "showdown"
    END = "end"
    PAST_END = "past_end"


_NEXT_DEAL = {
    Street.PREFLOP: Stage.DEAL_FLOP,
    Street.FLOP: Stage.DEAL_TURN,
    Street.TURN: Stage.DEAL_RIVER,
    Street.RIVER: Stage.SHOWDOWN,
}


@dataclass(frozen=True)
class RoundCheckpoint:
    """Snapshot of a round in flight. Never mutated; resumes work on copies."""

    state: RoundState
    board_cards: tuple[Card, ...]
    stage: Stage
    deal_index: int = 0
    street: Street | None = None
    cursor: BettingCursor | None = None
    tiers: tuple[tuple[int, ...], ...] = field(default_factory=tuple)

    @property
    def seats(self) -> int:
        return self.state.seats


class RoundDriver:
    """Walks a ``RoundState`` through one round, one action per step."""

    def __init__(self, state: RoundState, players: Sequence, deck: Deck) -> None:
        if len(players) != state.seats:
            raise SeatCountError(
                f"State has {state.seats} seats but {len(players)} players were given"
            )
        if len(state.active_positions) < 2:
            raise SeatCountError("A round needs at least two seats with chips")
        self._state = state
        self._players = players

        state.prepare_hands(deck)
        board_cards: list[Card] = []
        for _ in range(5):
            card = deck.deal()
            if card is None:
                raise DeckExhaustedError("Deck ran out while drawing the board")
            board_cards.append(card)
        # popped from the end as the streets are dealt
        self._board_cards = list(reversed(board_cards))

        self._stage = Stage.INIT
        self._deal_index = 0
        self._street: Street | None = None
        self._cursor: BettingCursor | None = None
        self._tiers: list[list[int]] = []

    @classmethod
    def from_checkpoint(cls, players: Sequence, checkpoint: RoundCheckpoint) -> RoundDriver:
        """Resume a round on a private copy of the checkpointed state."""
        if len(players) != checkpoint.seats:
            raise SeatCountError(
                f"Checkpoint has {checkpoint.seats} seats but {len(players)} players were given"
            )
        driver = cls.__new__(cls)
        driver._state = copy.deepcopy(checkpoint.state)
        driver._players = players
        driver._board_cards = list(checkpoint.board_cards)
        driver._stage = checkpoint.stage
        driver._deal_index = checkpoint.deal_index
        driver._street = checkpoint.street
        driver._cursor = copy.deepcopy(checkpoint.cursor)
        driver._tiers = [list(t) for t in checkpoint.tiers]
        return driver

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def stage(self) -> Stage:
        return self._stage

    def checkpoint(self) -> RoundCheckpoint:
        return RoundCheckpoint(
            state=copy.deepcopy(self._state),
            board_cards=tuple(self._board_cards),
            stage=self._stage,
            deal_index=self._deal_index,
            street=self._street,
            cursor=copy.deepcopy(self._cursor),
            tiers=tuple(tuple(t) for t in self._tiers),
        )

    def __iter__(self) -> Iterator[Action]:
        return self

    def __next__(self) -> Action:
        while True:
            action = self._step()
            if action is not None:
                return action
            if self._stage is Stage.PAST_END:
                raise StopIteration

    # ------------------------------------------------------------------
    # Stage machine
    # ------------------------------------------------------------------

    def _enter(self, stage: Stage) -> None:
        logger.debug("Round %d: %s -> %s", self._state.id, self._stage.value, stage.value)
        self._stage = stage

    def _start_street(self, street: Street) -> None:
        if len(self._state.active_positions) == 1:
            self._enter_showdown()
            return
        self._street = street
        self._cursor = self._state.new_cursor(street)
        self._enter(Stage.STREET)

    def _enter_showdown(self) -> None:
        self._street = None
        self._cursor = None
        self._tiers = self._state.showdown_tiers()
        self._enter(Stage.SHOWDOWN)

    def _step(self) -> Action | None:
        """Advance one transition. Returns None when nothing was produced."""
        state = self._state
        stage = self._stage

        if stage is Stage.INIT:
            self._deal_index = 0
            self._enter(Stage.DEAL_HAND)
            return state.start_round()

        if stage is Stage.DEAL_HAND:
            seat = state.active_positions[self._deal_index]
            self._deal_index += 1
            if self._deal_index >= len(state.active_positions):
                self._enter(Stage.SMALL_BLIND)
            return state.deal_hand(seat)

        if stage is Stage.SMALL_BLIND:
            self._enter(Stage.BIG_BLIND)
            return state.small_blind(self._players)

        if stage is Stage.BIG_BLIND:
            action = state.big_blind(self._players)
            self._start_street(Street.PREFLOP)
            return action

        if stage is Stage.STREET:
            cursor = self._cursor
            street = self._street
            action = state.step_bet_round(self._players, cursor)
            if cursor.done:
                next_stage = _NEXT_DEAL[street]
                if len(state.active_positions) == 1 or next_stage is Stage.SHOWDOWN:
                    self._enter_showdown()
                else:
                    self._cursor = None
                    self._enter(next_stage)
            return action

        if stage is Stage.DEAL_FLOP:
            cards = [self._board_cards.pop() for _ in range(3)]
            action = state.deal_flop(cards)
            self._start_street(Street.FLOP)
            return action

        if stage is Stage.DEAL_TURN:
            action = state.deal_turn(self._board_cards.pop())
            self._start_street(Street.TURN)
            return action

        if stage is Stage.DEAL_RIVER:
            action = state.deal_river(self._board_cards.pop())
            self._start_street(Street.RIVER)
            return action

        if stage is Stage.SHOWDOWN:
            if not self._tiers or state.pot.is_empty():
                self._enter(Stage.END)
                return None
            action = state.distribute(self._tiers.pop(0))
            if state.pot.is_empty() or not self._tiers:
                self._enter(Stage.END)
            return action

        if stage is Stage.END:
            action = state.end_round()
            state.reset()
            self._enter(Stage.PAST_END)
            return action

        return None
