"""No-limit Texas Hold'em, one round at a time.

Usage:
    from pokerround.holdem import CallingPlayer, CardCollection, Table

    table = Table([CallingPlayer(), CallingPlayer()], stack_size=100, blind_size=1)
    for action in table.play_round(CardCollection()):
        print(action)
"""

from .actions import Action, Move, PlayerAction, SeatAction, action_from_dict
from .cards import Card, CardCollection, Deck, parse_card, parse_cards
from .driver import RoundCheckpoint, RoundDriver
from .errors import (
    CardError,
    ConfigError,
    DeckExhaustedError,
    PlayerContractError,
    PokerRoundError,
    SeatCountError,
)
from .players import CallingPlayer, ChannelPlayer, Player, RandomPlayer, ScriptedPlayer
from .pot import Pot
from .replay import ActionLedger, replay
from .state import MAX_SEATS, RoundState, StateView
from .table import BlindPolicy, NeverIncrease, ScheduledBlinds, Table

__all__ = [
    "Action",
    "Move",
    "PlayerAction",
    "SeatAction",
    "action_from_dict",
    "Card",
    "CardCollection",
    "Deck",
    "parse_card",
    "parse_cards",
    "RoundCheckpoint",
    "RoundDriver",
    "CardError",
    "ConfigError",
    "DeckExhaustedError",
    "PlayerContractError",
    "PokerRoundError",
    "SeatCountError",
    "CallingPlayer",
    "ChannelPlayer",
    "Player",
    "RandomPlayer",
    "ScriptedPlayer",
    "Pot",
    "ActionLedger",
    "replay",
    "MAX_SEATS",
    "RoundState",
    "StateView",
    "BlindPolicy",
    "NeverIncrease",
    "ScheduledBlinds",
    "Table",
]
