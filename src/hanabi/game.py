"""Core game logic for Hanabi: the deck, the shared table and the players."""

from __future__ import annotations

import logging
import random

from pydantic import BaseModel, Field

from .models import (
    CARD_COUNTS,
    COLORS,
    MAX_HINTS,
    MAX_LIVES,
    Card,
    CardKnowledge,
    Color,
    EndReason,
    HanabiConfig,
    hand_size_for,
)

logger = logging.getLogger(__name__)


def create_deck(seed: int | None = None) -> list[Card]:
    """Create and shuffle a standard Hanabi deck."""
    rng = random.Random(seed)
    cards: list[Card] = []

    for color in COLORS:
        for number, count in CARD_COUNTS.items():
            for _ in range(count):
                cards.append(Card.create(len(cards), color, number))

    rng.shuffle(cards)
    return cards


def init_discard_limits() -> dict[Color, dict[int, int]]:
    """Copies of every (color, number) in the deck."""
    return {color: dict(CARD_COUNTS) for color in COLORS}


class Deck(BaseModel):
    """The remaining draw pile. Cards are drawn from the end."""

    cards: list[Card]
    depleted: bool = False

    @classmethod
    def shuffled(cls, seed: int | None = None) -> "Deck":
        return cls(cards=create_deck(seed))

    def draw_one(self) -> Card:
        """Remove and return the top card.

        Raises IndexError on an empty deck; callers check ``is_empty`` first.
        """
        if not self.cards:
            raise IndexError("draw from an empty deck")
        if len(self.cards) == 1:
            self.depleted = True
        return self.cards.pop()

    @property
    def is_empty(self) -> bool:
        return self.depleted

    def __len__(self) -> int:
        return len(self.cards)


class Game(BaseModel):
    """Shared table state: tokens, lives, played stacks and discards.

    The game is the referee, so it reads the real face of every card handed
    to it. It keeps only counts, never the cards themselves.
    """

    deck: Deck = Field(default_factory=Deck.shuffled)
    hints: int = MAX_HINTS
    max_hints: int = MAX_HINTS
    lives: int = MAX_LIVES
    max_lives: int = MAX_LIVES
    # color -> highest number played; absent means nothing played yet
    played: dict[Color, int] = Field(default_factory=dict)
    # color -> number -> copies removed from play
    discarded: dict[Color, dict[int, int]] = Field(default_factory=dict)
    discard_limits: dict[Color, dict[int, int]] = Field(default_factory=init_discard_limits)
    perfection: bool = False
    ended: bool = False
    end_reason: EndReason | None = None

    @classmethod
    def from_config(cls, config: HanabiConfig) -> "Game":
        return cls(
            deck=Deck.shuffled(config.seed),
            hints=config.max_hints,
            max_hints=config.max_hints,
            lives=config.max_lives,
            max_lives=config.max_lives,
            perfection=config.perfection,
        )

    @property
    def score(self) -> int:
        """Sum of the highest played number per color."""
        return sum(self.played.values())

    @property
    def max_score(self) -> int:
        return len(COLORS) * max(CARD_COUNTS)

    def is_valid_play(self, card: Card) -> bool:
        face = card.peek()
        return face.number == self.played.get(face.color, 0) + 1

    def play(self, card: Card) -> bool:
        """Resolve a played card. Returns whether it landed on its stack."""
        face = card.peek()
        if self.is_valid_play(card):
            self.played[face.color] = self.played.get(face.color, 0) + 1
            logger.debug("Played %s", face)
            if all(self.played.get(color, 0) == 5 for color in COLORS):
                self.end_game(EndReason.ALL_COLORS_COMPLETED)
            return True

        self.lives -= 1
        logger.debug("Misplayed %s, %d lives left", face, self.lives)
        if self.lives == 0:
            self.end_game(EndReason.OUT_OF_LIVES)
        self.drop_card(card)
        return False

    def discard(self, card: Card) -> None:
        """Discard a card, regaining a hint token unless already at max."""
        if self.hints < self.max_hints:
            self.hints += 1
        self.drop_card(card)

    def drop_card(self, card: Card) -> None:
        """Count a card as gone for good (discarded or misplayed)."""
        face = card.peek()
        per_color = self.discarded.setdefault(face.color, {})
        per_color[face.number] = per_color.get(face.number, 0) + 1

        if self.perfection and per_color[face.number] == self.discard_limits[face.color][face.number]:
            self.end_game(EndReason.PERFECTION_DISCARD_LIMIT)

    def use_hint(self) -> bool:
        """Spend a hint token. Refused when none are left."""
        if self.hints == 0:
            return False
        self.hints -= 1
        return True

    def check_dangerous(self, color: Color, number: int, count: int) -> bool:
        """Whether one more discard of (color, number) risks the last copy still needed."""
        if self.played.get(color, 0) > number:
            return False
        return count + 1 >= self.discard_limits[color][number]

    def end_game(self, reason: EndReason) -> None:
        if self.ended:
            return
        self.ended = True
        self.end_reason = reason
        logger.info("Game over: %s", reason.value)


class Player:
    """One seat at the table: a hand of cards bound to a shared game.

    Commands address cards by their current position in the hand; each card
    keeps its ``card_id`` as positions shift after plays and discards.
    """

    def __init__(self, game: Game, hand_size: int):
        self.game = game
        self.hand_size = hand_size
        self._hand: list[Card] = []
        for _ in range(hand_size):
            self.draw()

    @property
    def hand(self) -> tuple[Card, ...]:
        return tuple(self._hand)

    def draw(self) -> None:
        self._hand.append(self.game.deck.draw_one())

    def _replace(self) -> None:
        if not self.game.deck.is_empty:
            self.draw()

    def _take(self, card_index: int) -> Card:
        if not 0 <= card_index < len(self._hand):
            raise IndexError(f"card index {card_index} out of range for a hand of {len(self._hand)}")
        return self._hand.pop(card_index)

    def play(self, card_index: int) -> bool:
        """Play the card at ``card_index``. Raises IndexError when out of range."""
        card = self._take(card_index)
        landed = self.game.play(card)
        self._replace()
        return landed

    def discard(self, card_index: int) -> None:
        """Discard the card at ``card_index``. Raises IndexError when out of range."""
        card = self._take(card_index)
        self.game.discard(card)
        self._replace()

    def get_color_hint(self, color: Color) -> None:
        for card in self._hand:
            card.hint_color(color)

    def get_number_hint(self, number: int) -> None:
        for card in self._hand:
            card.hint_number(number)

    def knowledge(self) -> list[CardKnowledge]:
        return [card.knowledge() for card in self._hand]


def deal_players(game: Game, num_players: int) -> list[Player]:
    """Seat ``num_players`` players at ``game``, each with a full hand."""
    hand_size = hand_size_for(num_players)
    return [Player(game, hand_size) for _ in range(num_players)]
