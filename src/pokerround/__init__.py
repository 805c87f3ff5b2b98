"""pokerround — a single round of no-limit Texas Hold'em, driven step by step."""

__version__ = "0.1.0"
