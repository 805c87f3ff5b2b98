"""TableRunner — plays the rounds a TableConfig describes.

Builds the seats from config, shuffles a fresh deck per round from the
table seed, plays rounds until the configured count is reached or only one
seat has chips left, and writes the JSONL action log.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from pokerround.config import SeatConfig, TableConfig
from pokerround.core.seed import SeedManager
from pokerround.core.telemetry import ActionLogger
from pokerround.holdem.actions import Action
from pokerround.holdem.cards import CardCollection
from pokerround.holdem.players import CallingPlayer, Player, RandomPlayer, ScriptedPlayer
from pokerround.holdem.table import NeverIncrease, ScheduledBlinds, Table

logger = logging.getLogger(__name__)

ActionCallback = Callable[[int, Action], None]


@dataclass
class TableResult:
    """Outcome of a run."""

    table_id: str
    rounds_played: int
    stacks: list[int]
    busted: list[int]
    seat_names: list[str]
    log_path: Path


class TableRunner:
    """Runs a table defined by a TableConfig."""

    def __init__(self, config: TableConfig) -> None:
        self.config = config
        self.seed_mgr = SeedManager(config.seed)
        self.output_dir = self._resolve_output_dir()
        self.action_logger = ActionLogger(self.output_dir, config.name)
        self.table = Table(
            self._build_players(),
            stack_size=config.stack_size,
            blind_size=config.blind_size,
            blind_policy=(
                ScheduledBlinds(config.blind_schedule)
                if config.blind_schedule else NeverIncrease()
            ),
            action_logger=self.action_logger,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, rounds: int | None = None, on_action: ActionCallback | None = None) -> TableResult:
        """Play up to ``rounds`` rounds (config default) and finalize the log."""
        limit = rounds if rounds is not None else self.config.rounds
        played = 0
        while played < limit and not self.table.is_finished():
            round_id = self.table.round_id
            for action in self.table.play_round(self._deck_for(round_id)):
                if on_action is not None:
                    on_action(round_id, action)
            played += 1

        seat_names = [s.name for s in self.config.seats]
        self.table.finalize({"rounds_played": played, "seat_names": seat_names})
        logger.info("Table %s done after %d rounds", self.config.name, played)
        return TableResult(
            table_id=self.config.name,
            rounds_played=played,
            stacks=self.table.stacks,
            busted=self.table.busted,
            seat_names=seat_names,
            log_path=self.action_logger.file_path,
        )

    # ------------------------------------------------------------------
    # Internal: setup
    # ------------------------------------------------------------------

    def _resolve_output_dir(self) -> Path:
        if self.config.output_dir:
            return Path(self.config.output_dir)
        return Path("output") / "actions"

    def _deck_for(self, round_id: int) -> CardCollection:
        deck = CardCollection()
        deck.shuffle(self.seed_mgr.deck_rng(self.config.name, round_id).randrange)
        return deck

    def _build_players(self) -> list[Player]:
        return [self._build_player(i, s) for i, s in enumerate(self.config.seats)]

    def _build_player(self, index: int, seat: SeatConfig) -> Player:
        if seat.kind == "scripted":
            return ScriptedPlayer(seat.script)
        if seat.kind == "random":
            return RandomPlayer(self.seed_mgr.seat_rng(self.config.name, seat.name, index))
        return CallingPlayer()
