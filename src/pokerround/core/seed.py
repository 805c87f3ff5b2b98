"""SeedManager — deterministic, HMAC-derived RNG for decks and seats.

Every seed is an HMAC-SHA256 of a labelled message under the table seed,
so playing more or fewer rounds never shifts the deck of another round,
and a random seat's choices never depend on how many decks were shuffled.
"""

import hashlib
import hmac
import random


class SeedManager:
    """Produces deterministic, isolated Random instances for a table."""

    def __init__(self, table_seed: int):
        self._table_seed = table_seed
        self._key = table_seed.to_bytes(8, byteorder="big", signed=True)

    @property
    def table_seed(self) -> int:
        return self._table_seed

    def _derive(self, label: str) -> int:
        digest = hmac.new(self._key, label.encode("utf-8"), hashlib.sha256).digest()
        return int.from_bytes(digest[:8], byteorder="big")

    def get_round_seed(self, table: str, round_id: int) -> int:
        """Seed for the deck of ``round_id``. Same inputs always produce the same seed."""
        return self._derive(f"deck:{table}:{round_id}")

    def get_seat_seed(self, table: str, seat_name: str, seat: int) -> int:
        """Seed for a random seat, fixed for the life of the table."""
        return self._derive(f"seat:{table}:{seat}:{seat_name}")

    def get_rng(self, seed: int) -> random.Random:
        """Return an isolated Random instance. Never touches global state."""
        return random.Random(seed)

    def deck_rng(self, table: str, round_id: int) -> random.Random:
        return self.get_rng(self.get_round_seed(table, round_id))

    def seat_rng(self, table: str, seat_name: str, seat: int) -> random.Random:
        return self.get_rng(self.get_seat_seed(table, seat_name, seat))
