#!/usr/bin/env python3
"""Play a pass-and-play game of Hanabi in the terminal."""

import argparse
import logging
import os
from dotenv import load_dotenv
from pathlib import Path

load_dotenv(Path(__file__).parent.parent / ".env")

from src.hanabi import HanabiConfig, compute_game_summary, run_game
from src.hanabi.display import CLEAR_SCREEN, Colors, render_table


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "y")


def _env_int(name: str) -> int | None:
    value = os.environ.get(name)
    return int(value) if value else None


def read_command(game, players, seat):
    """Show the table to the player in ``seat`` and read one command."""
    print(render_table(game, players, seat))
    return input("> ")


def emit(event, payload):
    if event == "help":
        print(payload["message"])
    elif event == "rejected":
        print(f"{Colors.YELLOW}{payload['message']}{Colors.RESET}")
        print("Enter ? for help")
    elif event == "turn":
        print(CLEAR_SCREEN, end="")
        print(f"{Colors.BOLD}Player {payload['player']}:{Colors.RESET} {payload['result']['message']}")
    elif event == "done":
        table = payload["table"]
        print(f"\n{Colors.BOLD}{'=' * 60}{Colors.RESET}")
        print(f"{Colors.BOLD}Game Over: {payload['end_reason']}{Colors.RESET}")
        print(f"Score: {payload['final_score']}/25 after {payload['total_turns']} turns")
        for seat, cards in table["hands"].items():
            print(f"Player {seat}: {' '.join(c['color'][0].upper() + str(c['number']) for c in cards)}")
        deck = " ".join(c["color"][0].upper() + str(c["number"]) for c in table["deck"])
        print(f"Deck: {deck or '(empty)'}")
        print(f"{'=' * 60}\n")


def main():
    parser = argparse.ArgumentParser(
        description="Play Hanabi with 2-5 players sharing one terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Three players, standard rules
  python scripts/play_hanabi.py --players 3

  # End the game as soon as any card becomes unobtainable
  python scripts/play_hanabi.py --players 4 --perfection
        """
    )
    parser.add_argument("--players", type=int, default=_env_int("HANABI_PLAYERS") or 3,
                        choices=[2, 3, 4, 5], help="Number of players (default: $HANABI_PLAYERS or 3)")
    parser.add_argument(
        "--perfection",
        action=argparse.BooleanOptionalAction,
        default=_env_flag("HANABI_PERFECTION"),
        help="End the game when the last copy of any card is lost (default: $HANABI_PERFECTION)",
    )
    parser.add_argument("--seed", type=int, default=_env_int("HANABI_SEED"),
                        help="Random seed for the deck (default: $HANABI_SEED or random)")
    parser.add_argument(
        "--final-round",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Give everyone one last turn after the deck runs out, then end the game",
    )
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    config = HanabiConfig(
        num_players=args.players,
        perfection=args.perfection,
        seed=args.seed,
        final_round=args.final_round,
    )

    print("Welcome to Hanabi!")
    print(f"Initializing game with {config.num_players} players and perfection: {config.perfection}")
    print("Enter ? for help")

    try:
        record = run_game(config, read_command, emit)
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye.")
        return

    summary = compute_game_summary(record)
    print(f"{Colors.BOLD}SUMMARY{Colors.RESET}")
    print(f"Score: {summary['score']}/{summary['max_possible_score']} ({summary['score_category']})")
    print(f"Plays: {summary['plays_successful']}/{summary['plays_attempted']} successful")
    print(f"Hints given: {summary['hints_given']}  Discards: {summary['discards']}")
    print(f"Lives lost: {summary['lives_lost']}  Stacks completed: {summary['stacks_completed']}")


if __name__ == "__main__":
    main()
