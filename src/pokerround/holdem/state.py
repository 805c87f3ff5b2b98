"""RoundState — everything one round of Hold'em needs to remember.

Owns the board, the pot, every seat's stack and hole cards, the ordered
list of seats still holding cards and the round's action log. Exposes the
steps the driver sequences: blinds, one seat at a time on a street,
showdown tiers, distribution and reset.

Seats are addressed by their fixed position at the table. Players are
not part of the state; the caller passes them in whenever a decision is
needed so the state can be copied for checkpoints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from pokerround.holdem.actions import (
    Action,
    DealFlop,
    DealHand,
    DealRiver,
    DealTurn,
    EndRound,
    Move,
    PlayerAction,
    SeatAction,
    StartRound,
    Win,
)
from pokerround.holdem.board import Board, HandRanker
from pokerround.holdem.cards import Card, Deck
from pokerround.holdem.errors import DeckExhaustedError, SeatCountError
from pokerround.holdem.evaluator import rank_hand
from pokerround.holdem.pot import Pot

__all__ = ["MAX_SEATS", "Street", "BettingCursor", "StateView", "RoundState"]

logger = logging.getLogger(__name__)

MAX_SEATS = 22


class Street(Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"


@dataclass
class BettingCursor:
    """Progress through one street. Fresh per street, dropped once done."""

    index: int
    starting_index: int
    last_raiser: int | None = None
    done: bool = False


@dataclass(frozen=True)
class StateView:
    """Read-only snapshot handed to a seat when it has to decide."""

    seat: int
    round_id: int
    dealer: int
    blind_size: int
    stack: int
    hole_cards: tuple[Card, ...]
    board: tuple[Card, ...]
    stacks: tuple[int, ...]
    contributions: tuple[int, ...]
    pot_total: int
    required_bet: int
    active_positions: tuple[int, ...]
    actions: tuple[Action, ...]


class RoundState:
    """Aggregate state of the round in progress."""

    def __init__(
        self,
        stacks: Sequence[int],
        blind_size: int,
        dealer: int = 0,
        ranker: HandRanker = rank_hand,
    ) -> None:
        if not 2 <= len(stacks) <= MAX_SEATS:
            raise SeatCountError(
                f"A table seats 2 to {MAX_SEATS} players, got {len(stacks)}"
            )
        if blind_size <= 0:
            raise ValueError(f"Blind size must be positive, got {blind_size}")
        self.id = 0
        self.dealer = dealer
        self.blind_size = blind_size
        self.stacks: list[int] = list(stacks)
        self.hands: list[tuple[Card, Card] | None] = [None] * len(stacks)
        self.board = Board(ranker)
        self.pot = Pot(len(stacks))
        self.actions: list[Action] = []
        self.active_positions: list[int] = self._generate_positions()

    @property
    def seats(self) -> int:
        return len(self.stacks)

    def _generate_positions(self) -> list[int]:
        """Seats with chips, starting left of the dealer and ending on it."""
        n = len(self.stacks)
        order = [(self.dealer + 1 + x) % n for x in range(n)]
        return [seat for seat in order if self.stacks[seat] > 0]

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def view(self, seat: int) -> StateView:
        hand = self.hands[seat]
        return StateView(
            seat=seat,
            round_id=self.id,
            dealer=self.dealer,
            blind_size=self.blind_size,
            stack=self.stacks[seat],
            hole_cards=tuple(hand) if hand else (),
            board=self.board.cards,
            stacks=tuple(self.stacks),
            contributions=tuple(self.pot.contributions()),
            pot_total=self.pot.total_size(),
            required_bet=self.pot.required_bet_size(seat),
            active_positions=tuple(self.active_positions),
            actions=tuple(self.actions),
        )

    def legal_actions(self, seat: int) -> list[PlayerAction]:
        """What ``seat`` may do right now. Empty for a seat that is all-in."""
        stack = self.stacks[seat]
        if stack == 0:
            return []

        required = self.pot.required_bet_size(seat)
        min_raise = max(self.pot.last_raise_amount(), 2 * self.blind_size) + required

        options: list[PlayerAction] = []
        if required == 0:
            options.append(PlayerAction(Move.CHECK))
        else:
            options.append(PlayerAction(Move.FOLD))
            if required < stack:
                options.append(PlayerAction(Move.CALL, required))
        if min_raise < stack:
            move = Move.BET if required == 0 else Move.RAISE
            options.append(PlayerAction(move, min_raise))
        options.append(PlayerAction(Move.ALL_IN, stack))
        return options

    # ------------------------------------------------------------------
    # Dealing
    # ------------------------------------------------------------------

    def start_round(self) -> StartRound:
        action = StartRound(self.id, self.blind_size, 2 * self.blind_size)
        self.actions.append(action)
        return action

    def prepare_hands(self, deck: Deck) -> None:
        """Give two hole cards to every seat in the round."""
        for seat in self.active_positions:
            first, second = deck.deal(), deck.deal()
            if first is None or second is None:
                raise DeckExhaustedError("Deck ran out while dealing hole cards")
            self.hands[seat] = (first, second)

    def deal_hand(self, seat: int) -> DealHand:
        hand = self.hands[seat]
        if hand is None:
            raise ValueError(f"Seat {seat} was not dealt in")
        action = DealHand(seat, hand)
        self.actions.append(action)
        return action

    def deal_flop(self, cards: Sequence[Card]) -> DealFlop:
        self.board.deal_flop(cards)
        first, second, third = cards
        action = DealFlop((first, second, third))
        self.actions.append(action)
        return action

    def deal_turn(self, card: Card) -> DealTurn:
        self.board.deal_turn(card)
        action = DealTurn(card)
        self.actions.append(action)
        return action

    def deal_river(self, card: Card) -> DealRiver:
        self.board.deal_river(card)
        action = DealRiver(card)
        self.actions.append(action)
        return action

    # ------------------------------------------------------------------
    # Betting
    # ------------------------------------------------------------------

    def _apply(self, action: SeatAction) -> bool:
        self.stacks[action.seat] -= action.amount
        raised = self.pot.place_chips(action.seat, action.amount)
        self.actions.append(action)
        return raised

    def post_blind(self, players: Sequence, index: int, size: int) -> SeatAction:
        """Force ``active_positions[index]`` to put in ``size`` (or all it has).

        The seat is told through ``act`` with the single option it has.
        """
        seat = self.active_positions[index]
        stack = self.stacks[seat]
        if stack <= size:
            option = PlayerAction(Move.ALL_IN, stack)
        else:
            option = PlayerAction(Move.BLIND, size)
        reply = players[seat].act(self.view(seat), [option])
        action = SeatAction.from_player_action(seat, reply, [option], stack)
        self._apply(action)
        return action

    def small_blind(self, players: Sequence) -> SeatAction:
        return self.post_blind(players, 0, self.blind_size)

    def big_blind(self, players: Sequence) -> SeatAction:
        return self.post_blind(players, 1, 2 * self.blind_size)

    def player_action(self, players: Sequence, seat: int) -> tuple[SeatAction | None, bool]:
        """Ask ``seat`` for a decision and apply it.

        Returns the logged action (None for a seat with nothing left to
        bet) and whether it raised the street's high-water mark.
        """
        options = self.legal_actions(seat)
        if not options:
            return None, False
        stack = self.stacks[seat]
        reply = players[seat].act(self.view(seat), list(options))
        action = SeatAction.from_player_action(seat, reply, options, stack)
        raised = self._apply(action)
        return action, raised

    def new_cursor(self, street: Street) -> BettingCursor:
        if street is Street.PREFLOP:
            start = 2 % len(self.active_positions)
        else:
            start = 0
        return BettingCursor(index=start, starting_index=start)

    def _finish_street(self, cursor: BettingCursor) -> None:
        cursor.done = True
        self.pot.end_bet_round()

    def step_bet_round(self, players: Sequence, cursor: BettingCursor) -> SeatAction | None:
        """Poll the seat under the cursor once and move the cursor on."""
        positions = self.active_positions
        i = cursor.index
        seat = positions[i]

        action, raised = self.player_action(players, seat)
        if raised:
            cursor.last_raiser = seat

        if action is not None and action.move is Move.FOLD:
            positions.pop(i)
            if cursor.last_raiser is None and i == cursor.starting_index:
                # first to act folded: whoever slid into its place opens instead
                i %= len(positions)
                cursor.index = i
                cursor.starting_index = i
                if len(positions) == 1:
                    self._finish_street(cursor)
                return action
            if i < cursor.starting_index:
                cursor.starting_index -= 1
        else:
            i += 1

        i %= len(positions)
        cursor.index = i
        if (
            positions[i] == cursor.last_raiser
            or (cursor.last_raiser is None and i == cursor.starting_index)
            or len(positions) == 1
        ):
            self._finish_street(cursor)
        return action

    # ------------------------------------------------------------------
    # Showdown
    # ------------------------------------------------------------------

    def showdown_tiers(self) -> list[list[int]]:
        """Active seats grouped by hand strength, strongest first.

        A lone survivor is its own tier and is never ranked.
        """
        if len(self.active_positions) == 1:
            return [list(self.active_positions)]

        scores = {}
        for seat in self.active_positions:
            hand = self.hands[seat]
            if hand is None:
                raise ValueError(f"Seat {seat} has no cards to show")
            scores[seat] = self.board.rank(hand)

        tiers: list[list[int]] = []
        for score in sorted(set(scores.values()), reverse=True):
            tiers.append([seat for seat in self.active_positions if scores[seat] == score])
        return tiers

    def distribute(self, positions: Sequence[int]) -> Win:
        won = self.pot.distribute(positions)
        for seat, amount in won.items():
            self.stacks[seat] += amount
        action = Win(tuple((seat, won[seat]) for seat in positions))
        self.actions.append(action)
        return action

    def end_round(self) -> EndRound:
        action = EndRound()
        self.actions.append(action)
        return action

    # ------------------------------------------------------------------
    # Between rounds
    # ------------------------------------------------------------------

    def seats_with_chips(self) -> list[int]:
        return [seat for seat, stack in enumerate(self.stacks) if stack > 0]

    def reset(self) -> None:
        """Move the button and clear everything but the stacks."""
        if not self.pot.is_empty():
            logger.warning(
                "Round %d reset with %d chips left in the pot",
                self.id, self.pot.total_size(),
            )
        n = len(self.stacks)
        for step in range(1, n + 1):
            candidate = (self.dealer + step) % n
            if self.stacks[candidate] > 0:
                self.dealer = candidate
                break
        self.board.clear()
        self.actions.clear()
        self.pot.reset()
        self.hands = [None] * n
        self.active_positions = self._generate_positions()
        self.id += 1
