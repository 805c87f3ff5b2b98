"""Exceptions raised by the Hold'em round engine.

Contract violations (a seat answering with an action it was not offered,
a deck running dry mid-round, an impossible seat count) are fatal: the
engine does not retry and the round state past the failure is undefined.
Representation errors (bad card notation, duplicate cards) are raised to
whoever builds the deck and never reach a running round.
"""


class PokerRoundError(Exception):
    """Base class for every error raised by pokerround."""


class PlayerContractError(PokerRoundError):
    """A Player replied with an action kind that was not on offer."""

    def __init__(self, seat: int, reply: object, offered: list) -> None:
        self.seat = seat
        self.reply = reply
        self.offered = offered
        kinds = ", ".join(str(a) for a in offered)
        super().__init__(f"seat {seat} answered {reply} but was offered [{kinds}]")


class DeckExhaustedError(PokerRoundError):
    """The deck could not supply enough cards for the round."""


class SeatCountError(PokerRoundError):
    """A table or checkpoint was used with an unsupported number of seats."""


class CardError(PokerRoundError, ValueError):
    """Card notation could not be parsed, or a card appeared twice."""


class ConfigError(PokerRoundError, ValueError):
    """The table configuration is missing keys or holds invalid values."""
