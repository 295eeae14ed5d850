"""Turn driver for pass-and-play Hanabi games."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .display import HELP_TEXT
from .game import Game, Player, deal_players
from .models import (
    ActionResult,
    Command,
    DiscardCommand,
    EndReason,
    GameRecord,
    HanabiConfig,
    HelpCommand,
    HintCommand,
    PlayCommand,
    QuitCommand,
    TurnLog,
)
from .parsing import parse_command
from .visibility import get_hint_targets, spectator_view

logger = logging.getLogger(__name__)

ReadCommandFn = Callable[[Game, list[Player], int], str]
EmitFn = Callable[[str, dict[str, Any]], None]


def new_table(config: HanabiConfig) -> tuple[Game, list[Player]]:
    """Create the shared game and deal a hand to every seat."""
    game = Game.from_config(config)
    players = deal_players(game, config.num_players)
    return game, players


def _apply_hint(game: Game, players: list[Player], seat: int, command: HintCommand) -> ActionResult:
    if game.hints == 0:
        return ActionResult(success=False, message="Out of hint tokens, must play or discard.")

    target = command.target_player
    if target == seat:
        return ActionResult(success=False, message="Cannot give a hint to yourself")
    if target not in get_hint_targets(players, seat):
        return ActionResult(success=False, message=f"Unknown player: {target}")

    target_player = players[target]

    # The hinter can see the target's cards
    if command.hint_type == "color":
        touched = [i for i, card in enumerate(target_player.hand) if card.peek().color == command.hint_value]
        target_player.get_color_hint(command.hint_value)  # type: ignore[arg-type]
    else:
        touched = [i for i, card in enumerate(target_player.hand) if card.peek().number == command.hint_value]
        target_player.get_number_hint(command.hint_value)  # type: ignore[arg-type]

    game.use_hint()
    value = getattr(command.hint_value, "value", command.hint_value)
    return ActionResult(
        success=True,
        message=f"Hinted player {target} about {command.hint_type}={value}, touching positions {touched}",
        positions_touched=touched,
    )


def _check_position(players: list[Player], seat: int, position: int) -> ActionResult | None:
    hand_size = len(players[seat].hand)
    if position >= hand_size:
        return ActionResult(
            success=False,
            message=f"Invalid card position: {position} (hand has {hand_size} cards)",
        )
    return None


def apply_command(game: Game, players: list[Player], seat: int, command: Command) -> ActionResult:
    """
    Apply one command for the player in ``seat``.

    Rejections (no tokens, bad index, bad target) leave the table untouched
    and come back as ``success=False``; they are never raised.
    """
    if game.ended:
        return ActionResult(success=False, message="Game is already over")

    if isinstance(command, HelpCommand):
        return ActionResult(success=False, message=HELP_TEXT)

    if isinstance(command, QuitCommand):
        game.end_game(EndReason.QUIT)
        return ActionResult(success=True, message="Quit by player")

    if isinstance(command, HintCommand):
        return _apply_hint(game, players, seat, command)

    if isinstance(command, PlayCommand):
        rejected = _check_position(players, seat, command.card_position)
        if rejected is not None:
            return rejected
        face = players[seat].hand[command.card_position].peek()
        landed = players[seat].play(command.card_position)
        if landed:
            message = f"Played {face} successfully"
        else:
            message = f"Played {face} but it was not playable. Lost a life."
        return ActionResult(success=True, message=message, card_played=face, was_playable=landed)

    if isinstance(command, DiscardCommand):
        rejected = _check_position(players, seat, command.card_position)
        if rejected is not None:
            return rejected
        face = players[seat].hand[command.card_position].peek()
        players[seat].discard(command.card_position)
        return ActionResult(success=True, message=f"Discarded {face}", card_discarded=face)

    return ActionResult(success=False, message=f"Unknown command type: {type(command)}")


def run_game(
    config: HanabiConfig,
    read_command: ReadCommandFn,
    emit_fn: EmitFn | None = None,
) -> GameRecord:
    """
    Run a complete game, prompting seats in order until it ends.

    Args:
        config: Game configuration
        read_command: Called with (game, players, seat); returns one line of input
        emit_fn: Optional callback for events ("init", "help", "rejected", "turn", "done")

    Returns:
        Record of the finished game
    """
    game, players = new_table(config)
    turns: list[TurnLog] = []
    seat = 0
    final_turns_left: int | None = None

    if emit_fn is not None:
        emit_fn("init", {
            "config": config.model_dump(),
            "hand_size": config.hand_size,
            "deck_remaining": len(game.deck),
        })

    while not game.ended:
        text = read_command(game, players, seat)
        command, error = parse_command(text)

        if isinstance(command, HelpCommand):
            if emit_fn is not None:
                emit_fn("help", {"player": seat, "message": HELP_TEXT})
            continue

        if command is None:
            result = ActionResult(success=False, message=f"Invalid command: {text.strip()} ({error})")
        else:
            result = apply_command(game, players, seat, command)

        if not result.success:
            logger.debug("Rejected command from player %d: %s", seat, result.message)
            if emit_fn is not None:
                emit_fn("rejected", {"player": seat, "message": result.message})
            continue

        turn_log = TurnLog(
            turn_number=len(turns) + 1,
            player=seat,
            command=command,
            result=result,
            hints_after=game.hints,
            lives_after=game.lives,
            score_after=game.score,
        )
        turns.append(turn_log)

        if emit_fn is not None:
            emit_fn("turn", turn_log.model_dump(mode="json"))

        # Once the deck is gone everyone gets exactly one more turn
        if config.final_round and not game.ended:
            if final_turns_left is not None:
                final_turns_left -= 1
                if final_turns_left == 0:
                    game.end_game(EndReason.FINAL_ROUND_COMPLETE)
            elif game.deck.is_empty:
                final_turns_left = len(players)
                logger.info("Deck exhausted, final round begins")

        seat = (seat + 1) % len(players)

    record = GameRecord(
        config=config,
        turns=turns,
        final_score=game.score,
        final_played={color: number for color, number in game.played.items()},
        end_reason=game.end_reason,
        lives_left=game.lives,
        hints_left=game.hints,
    )

    if emit_fn is not None:
        emit_fn("done", {
            "final_score": game.score,
            "end_reason": game.end_reason.value if game.end_reason is not None else None,
            "total_turns": len(turns),
            "table": spectator_view(game, players),
        })

    return record
