"""Data models for the Hanabi rule engine."""

from __future__ import annotations

from enum import Enum
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Color(str, Enum):
    """Card color. Definition order is the canonical display order."""
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    WHITE = "white"
    RED = "red"

    @property
    def letter(self) -> str:
        return self.value[0]

    @classmethod
    def from_letter(cls, letter: str) -> "Color | None":
        for color in cls:
            if color.letter == letter:
                return color
        return None


COLORS: list[Color] = list(Color)
NUMBERS: list[int] = [1, 2, 3, 4, 5]

# Card distribution: 1s x3, 2s x2, 3s x2, 4s x2, 5s x1 per color = 10 per color, 50 total
CARD_COUNTS: dict[int, int] = {1: 3, 2: 2, 3: 2, 4: 2, 5: 1}

MAX_HINTS = 7
MAX_LIVES = 3


class EndReason(str, Enum):
    """Why a game ended."""
    ALL_COLORS_COMPLETED = "All colors completed"
    OUT_OF_LIVES = "Ran out of lives"
    PERFECTION_DISCARD_LIMIT = "Hit discard limit with perfection enabled."
    QUIT = "Quit by player"
    FINAL_ROUND_COMPLETE = "Final round complete"


T = TypeVar("T")


class Hidden(BaseModel, Generic[T]):
    """One concealed attribute of a card.

    The wrapped value never changes. ``revealed`` only ever goes from
    False to True, and the only way a hint can flip it is ``reveal_if``
    with an equal candidate.
    """

    value: T = Field(frozen=True, repr=False)
    revealed: bool = False

    def reveal(self) -> None:
        self.revealed = True

    def reveal_if(self, candidate: T) -> None:
        """Reveal when ``candidate`` matches. A mismatch leaves no trace."""
        if self.value == candidate:
            self.reveal()

    def get(self) -> T | None:
        """The value if it has been revealed, else None."""
        if self.revealed:
            return self.value
        return None

    def peek(self) -> T:
        """The value regardless of whether it was revealed.

        Privileged: for the referee resolving a card and for spectator
        rendering only.
        """
        return self.value


class CardFace(BaseModel):
    """Full identity of a card (privileged read)."""

    model_config = ConfigDict(frozen=True)

    color: Color
    number: int

    def __str__(self) -> str:
        return f"{self.color.letter.upper()}{self.number}"


class CardKnowledge(BaseModel):
    """What the holder of a card knows about it from hints received."""

    model_config = ConfigDict(frozen=True)

    color: Color | None = None
    number: int | None = None


class Card(BaseModel):
    """A physical card: a hidden color, a hidden number and a stable id."""

    card_id: int
    color: Hidden[Color]
    number: Hidden[int]

    @classmethod
    def create(cls, card_id: int, color: Color, number: int) -> "Card":
        return cls(
            card_id=card_id,
            color=Hidden[Color](value=color),
            number=Hidden[int](value=number),
        )

    def hint_color(self, value: Color) -> None:
        self.color.reveal_if(value)

    def hint_number(self, value: int) -> None:
        self.number.reveal_if(value)

    def knowledge(self) -> CardKnowledge:
        return CardKnowledge(color=self.color.get(), number=self.number.get())

    def peek(self) -> CardFace:
        """Privileged: the card's real color and number."""
        return CardFace(color=self.color.peek(), number=self.number.peek())

    def __str__(self) -> str:
        """Plain-text form of what the holder knows, e.g. ``R?`` or ``??``."""
        known = self.knowledge()
        color = known.color.letter.upper() if known.color is not None else "?"
        number = str(known.number) if known.number is not None else "?"
        return f"{color}{number}"


# Commands issued by the acting player
class PlayCommand(BaseModel):
    """Play a card from hand by position (0-indexed)."""

    action_type: Literal["play"] = "play"
    card_position: int = Field(ge=0)


class DiscardCommand(BaseModel):
    """Discard a card from hand by position (0-indexed)."""

    action_type: Literal["discard"] = "discard"
    card_position: int = Field(ge=0)


class HintCommand(BaseModel):
    """Give another player a hint about one color or one number."""

    action_type: Literal["hint"] = "hint"
    target_player: int = Field(ge=0)  # seat index
    hint_type: Literal["color", "number"]
    hint_value: Color | int

    @model_validator(mode="after")
    def _value_matches_type(self) -> "HintCommand":
        if self.hint_type == "color" and not isinstance(self.hint_value, Color):
            raise ValueError(f"color hint needs a color, got {self.hint_value!r}")
        if self.hint_type == "number" and (isinstance(self.hint_value, Color) or self.hint_value not in NUMBERS):
            raise ValueError(f"number hint needs one of {NUMBERS}, got {self.hint_value!r}")
        return self


class QuitCommand(BaseModel):
    action_type: Literal["quit"] = "quit"


class HelpCommand(BaseModel):
    action_type: Literal["help"] = "help"


Command = PlayCommand | DiscardCommand | HintCommand | QuitCommand | HelpCommand


class ActionResult(BaseModel):
    """Result of applying a command."""

    success: bool
    message: str
    card_played: CardFace | None = None  # For play commands
    card_discarded: CardFace | None = None  # For discard commands
    was_playable: bool | None = None  # For play commands: did the play land?
    positions_touched: list[int] | None = None  # For hints: which positions matched


class TurnLog(BaseModel):
    """Log of a single accepted turn."""

    turn_number: int
    player: int
    command: PlayCommand | DiscardCommand | HintCommand | QuitCommand
    result: ActionResult

    # State snapshot after the command
    hints_after: int
    lives_after: int
    score_after: int


class HanabiConfig(BaseModel):
    """Configuration for one game."""

    num_players: int = Field(default=3, ge=2, le=5)
    perfection: bool = False
    max_hints: int = Field(default=MAX_HINTS, ge=1)
    max_lives: int = Field(default=MAX_LIVES, ge=1)
    seed: int | None = None
    # When the deck runs out, everyone gets one more turn, then the game ends
    final_round: bool = True

    @property
    def hand_size(self) -> int:
        return hand_size_for(self.num_players)


class GameRecord(BaseModel):
    """Everything a finished game leaves behind for the end-of-game summary."""

    config: HanabiConfig
    turns: list[TurnLog] = Field(default_factory=list)
    final_score: int
    final_played: dict[Color, int]
    end_reason: EndReason | None
    lives_left: int
    hints_left: int


def hand_size_for(num_players: int) -> int:
    """5 cards for 2-4 players, 4 for 5 players."""
    if not 2 <= num_players <= 5:
        raise ValueError(f"Expected 2-5 players, got {num_players}")
    return 5 if num_players < 5 else 4
