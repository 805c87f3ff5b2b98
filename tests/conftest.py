"""Shared test fixtures for pokerround."""

import pytest

from pokerround.holdem.cards import CardCollection


@pytest.fixture
def tmp_output(tmp_path):
    """Provide a temporary output directory for test runs."""
    return tmp_path / "output"


@pytest.fixture
def deck():
    """Unshuffled standard deck. Deals from the end: Ad, Ah, Ac, As, Kd, ..."""
    return CardCollection()
