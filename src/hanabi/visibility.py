"""Visibility and view generation for Hanabi.

Core principle: a player can see ALL other players' hands but NOT their own
cards. They only know about their own cards through hints received.
"""

from __future__ import annotations

from typing import Any

from .game import Game, Player
from .models import COLORS, Card


# Keys that must NEVER appear in any player view
FORBIDDEN_KEYS = {
    "deck",
    "deck_order",
    "rng",
    "seed",
    "random",
    "debug",
    "_internal",
}


def _knowledge_dict(card: Card) -> dict[str, Any]:
    known = card.knowledge()
    return {
        "known_color": known.color.value if known.color is not None else None,
        "known_number": known.number,
    }


def _face_dict(card: Card) -> dict[str, Any]:
    face = card.peek()
    return {"color": face.color.value, "number": face.number}


def discard_piles(game: Game) -> list[dict[str, Any]]:
    """Discarded copies per (color, number), flagged when the pile is dangerous."""
    piles = []
    for color in COLORS:
        for number, count in sorted(game.discarded.get(color, {}).items()):
            piles.append({
                "color": color.value,
                "number": number,
                "count": count,
                "dangerous": game.check_dangerous(color, number, count),
            })
    return piles


def view_for_player(game: Game, players: list[Player], seat: int) -> dict[str, Any]:
    """
    Build the redacted table view for the player in ``seat``.

    CRITICAL: the player sees every other hand twice (real faces and what
    that player knows), but only hint knowledge for their own hand.
    """
    if not 0 <= seat < len(players):
        raise ValueError(f"Unknown player: {seat}")

    other_hands: dict[int, dict[str, list[dict[str, Any]]]] = {}
    for other, player in enumerate(players):
        if other != seat:
            other_hands[other] = {
                "cards": [_face_dict(card) for card in player.hand],
                "knowledge": [_knowledge_dict(card) for card in player.hand],
            }

    return {
        "role": "player",
        "player": seat,

        # Other players' hands - VISIBLE
        "other_hands": other_hands,

        # Own hand - only knowledge from hints, NOT actual cards
        "my_hand_knowledge": [_knowledge_dict(card) for card in players[seat].hand],
        "my_hand_size": len(players[seat].hand),

        # Public table state
        "hint_tokens": game.hints,
        "max_hints": game.max_hints,
        "lives": game.lives,
        "max_lives": game.max_lives,
        "played": {color.value: game.played.get(color, 0) for color in COLORS},
        "discards": discard_piles(game),
        "deck_remaining": len(game.deck),
        "score": game.score,
        "max_score": game.max_score,

        "game_over": game.ended,
        "end_reason": game.end_reason.value if game.end_reason is not None else None,
    }


def spectator_view(game: Game, players: list[Player]) -> dict[str, Any]:
    """Everything on the table, including every hand and the draw pile.

    Only for end-of-game summaries; never hand this to a player.
    """
    return {
        "role": "spectator",
        "hands": {seat: [_face_dict(card) for card in player.hand] for seat, player in enumerate(players)},
        "deck": [_face_dict(card) for card in game.deck.cards],
        "played": {color.value: game.played.get(color, 0) for color in COLORS},
        "discards": discard_piles(game),
        "hint_tokens": game.hints,
        "lives": game.lives,
        "score": game.score,
        "end_reason": game.end_reason.value if game.end_reason is not None else None,
    }


def assert_no_leaks(payload: Any, path: str = "") -> None:
    """
    Recursively assert that no forbidden keys appear in a payload.

    Raises AssertionError if any leak is detected.
    """
    if isinstance(payload, dict):
        for key, value in payload.items():
            key_str = str(key).lower()
            current_path = f"{path}.{key}" if path else str(key)

            if key_str in FORBIDDEN_KEYS:
                raise AssertionError(f"Forbidden key '{key}' found at {current_path}")

            if key_str == "my_hand" or key_str == "own_hand":
                raise AssertionError(f"Direct hand access found at {current_path}")

            assert_no_leaks(value, current_path)

    elif isinstance(payload, list):
        for i, item in enumerate(payload):
            assert_no_leaks(item, f"{path}[{i}]")


def assert_view_safe(view: dict[str, Any]) -> None:
    """
    Validate that a player view is safe (no information leaks).

    Checks:
    1. No forbidden keys anywhere in the payload
    2. Player's own cards are not in the visible hands
    3. Only hint knowledge is present for own hand
    """
    if not isinstance(view, dict):
        raise AssertionError("View must be a dictionary")

    if view.get("role") != "player":
        raise AssertionError(f"Unknown role in view: {view.get('role')}")

    seat = view.get("player")
    if seat is None:
        raise AssertionError("View missing player")

    if seat in view.get("other_hands", {}):
        raise AssertionError(f"Player {seat}'s own hand found in other_hands - LEAK!")

    allowed_keys = {"known_color", "known_number"}
    for i, k in enumerate(view.get("my_hand_knowledge", [])):
        if set(k) - allowed_keys:
            raise AssertionError(f"Actual card data found in my_hand_knowledge[{i}] - LEAK!")

    assert_no_leaks(view)


def get_hint_targets(players: list[Player], seat: int) -> list[int]:
    """Valid hint targets (everyone except the acting player)."""
    return [other for other in range(len(players)) if other != seat]
