"""Hanabi rule engine for pass-and-play games."""

from .models import (
    Color,
    COLORS,
    NUMBERS,
    CARD_COUNTS,
    EndReason,
    Hidden,
    Card,
    CardFace,
    CardKnowledge,
    PlayCommand,
    DiscardCommand,
    HintCommand,
    QuitCommand,
    HelpCommand,
    Command,
    ActionResult,
    TurnLog,
    HanabiConfig,
    GameRecord,
    hand_size_for,
)
from .game import (
    Deck,
    Game,
    Player,
    create_deck,
    deal_players,
)
from .orchestrator import (
    new_table,
    apply_command,
    run_game,
)
from .parsing import parse_command
from .visibility import (
    view_for_player,
    spectator_view,
    assert_no_leaks,
    assert_view_safe,
)
from .metrics import compute_game_summary

__all__ = [
    # Models
    "Color",
    "COLORS",
    "NUMBERS",
    "CARD_COUNTS",
    "EndReason",
    "Hidden",
    "Card",
    "CardFace",
    "CardKnowledge",
    "PlayCommand",
    "DiscardCommand",
    "HintCommand",
    "QuitCommand",
    "HelpCommand",
    "Command",
    "ActionResult",
    "TurnLog",
    "HanabiConfig",
    "GameRecord",
    "hand_size_for",
    # Game
    "Deck",
    "Game",
    "Player",
    "create_deck",
    "deal_players",
    # Orchestration
    "new_table",
    "apply_command",
    "run_game",
    "parse_command",
    # Visibility
    "view_for_player",
    "spectator_view",
    "assert_no_leaks",
    "assert_view_safe",
    # Summary
    "compute_game_summary",
]
