"""Shared fixtures for Hanabi tests."""

from __future__ import annotations

import pytest

from src.hanabi.game import Deck
from src.hanabi.models import CARD_COUNTS, COLORS, Card, Color


def build_stacked_deck(*faces: tuple[Color, int]) -> Deck:
    """A full 50-card deck whose first draws are ``faces``, in order."""
    remaining = [
        (color, number)
        for color in COLORS
        for number, count in CARD_COUNTS.items()
        for _ in range(count)
    ]
    for face in faces:
        remaining.remove(face)
    order = list(faces) + remaining
    cards = [Card.create(i, color, number) for i, (color, number) in enumerate(order)]
    # Cards are drawn from the end of the list
    return Deck(cards=list(reversed(cards)))


@pytest.fixture
def stacked_deck():
    return build_stacked_deck
