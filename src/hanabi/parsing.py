"""Parsing of typed player commands."""

from __future__ import annotations

from .models import (
    Color,
    Command,
    DiscardCommand,
    HelpCommand,
    HintCommand,
    NUMBERS,
    PlayCommand,
    QuitCommand,
)


def _parse_index(token: str | None) -> int | None:
    if token is None or not token.isdigit():
        return None
    return int(token)


def parse_command(text: str) -> tuple[Command | None, str | None]:
    """
    Parse one line of player input.

    Accepted forms:
        ?              help
        q              quit
        p <i>          play card at index <i>
        d <i>          discard card at index <i>
        h <i> <v>      hint player <i>; <v> is a number 1-5 or a color letter (g,b,y,w,r)

    Returns:
        (command, error_message)
    """
    parts = text.split()
    if not parts:
        return None, "Empty command"

    verb, args = parts[0], parts[1:]

    if verb == "?":
        return HelpCommand(), None

    if verb == "q":
        return QuitCommand(), None

    if verb in ("p", "d"):
        index = _parse_index(args[0] if args else None)
        if index is None or len(args) != 1:
            return None, f"Expected '{verb} <index>'"
        if verb == "p":
            return PlayCommand(card_position=index), None
        return DiscardCommand(card_position=index), None

    if verb == "h":
        if len(args) != 2:
            return None, "Expected 'h <player> <number or color>'"
        target = _parse_index(args[0])
        if target is None:
            return None, f"Invalid player: {args[0]}"

        value = args[1]
        if value.isdigit():
            number = int(value)
            if number not in NUMBERS:
                return None, f"Invalid number: {value}"
            return HintCommand(target_player=target, hint_type="number", hint_value=number), None

        color = Color.from_letter(value)
        if color is None:
            return None, f"Invalid color: {value}"
        return HintCommand(target_player=target, hint_type="color", hint_value=color), None

    return None, f"Unknown command: {verb}"
