"""End-of-game summary for Hanabi games."""

from __future__ import annotations

from typing import Any

from .models import (
    COLORS,
    DiscardCommand,
    GameRecord,
    HintCommand,
    PlayCommand,
)

MAX_SCORE = 25


def compute_game_summary(record: GameRecord) -> dict[str, Any]:
    """
    Summarize a finished game.

    Returns dict with:
    - score: Final score (0-25)
    - score_percentage: Score as percentage of max (25)
    - total_turns: Number of accepted turns
    - hints_given, plays_attempted, plays_successful, plays_failed, discards
    - lives_lost: Lives spent on failed plays
    - stacks_completed: Colors played up to 5
    - per_color: Highest number played per color
    - per_player: Per-player breakdown
    """
    hints_given = 0
    plays_attempted = 0
    plays_successful = 0
    plays_failed = 0
    discards = 0

    per_player: dict[int, dict[str, int]] = {}

    for turn in record.turns:
        stats = per_player.setdefault(turn.player, {
            "hints": 0,
            "plays": 0,
            "plays_successful": 0,
            "plays_failed": 0,
            "discards": 0,
        })

        command = turn.command
        if isinstance(command, HintCommand):
            hints_given += 1
            stats["hints"] += 1
        elif isinstance(command, PlayCommand):
            plays_attempted += 1
            stats["plays"] += 1
            if turn.result.was_playable:
                plays_successful += 1
                stats["plays_successful"] += 1
            else:
                plays_failed += 1
                stats["plays_failed"] += 1
        elif isinstance(command, DiscardCommand):
            discards += 1
            stats["discards"] += 1

    play_success_rate = plays_successful / plays_attempted if plays_attempted > 0 else 0.0

    return {
        "score": record.final_score,
        "score_percentage": round(record.final_score / MAX_SCORE * 100, 1),
        "max_possible_score": MAX_SCORE,
        "score_category": score_category(record.final_score),
        "total_turns": len(record.turns),
        "end_reason": record.end_reason.value if record.end_reason is not None else None,

        # Action counts
        "hints_given": hints_given,
        "plays_attempted": plays_attempted,
        "plays_successful": plays_successful,
        "plays_failed": plays_failed,
        "discards": discards,
        "play_success_rate": round(play_success_rate, 3),
        "lives_lost": record.config.max_lives - record.lives_left,

        # Per-color breakdown
        "stacks_completed": sum(1 for v in record.final_played.values() if v == 5),
        "per_color": {color.value: record.final_played.get(color, 0) for color in COLORS},

        "per_player": per_player,
    }


def score_category(score: int) -> str:
    """Categorize a Hanabi score."""
    if score == 25:
        return "perfect"
    elif score >= 21:
        return "excellent"
    elif score >= 16:
        return "good"
    elif score >= 11:
        return "mediocre"
    elif score >= 6:
        return "poor"
    else:
        return "terrible"
