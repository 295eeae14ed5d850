"""Terminal rendering of the table with ANSI colors."""

from __future__ import annotations

from .game import Game, Player
from .models import COLORS, Card, Color


# ANSI colors for terminal output
class Colors:
    RED = "\033[91m"
    BLUE = "\033[94m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    GRAY = "\033[90m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    UNDERLINE = "\033[4m"
    RESET = "\033[0m"


CLEAR_SCREEN = "\033[2J\033[1;1H"

TOKEN = "●"

_COLOR_CODES: dict[Color, str] = {
    Color.RED: Colors.RED,
    Color.BLUE: Colors.BLUE,
    Color.GREEN: Colors.GREEN,
    Color.YELLOW: Colors.YELLOW,
    Color.WHITE: "",
}

HELP_TEXT = """
Available commands:
'h <i> <n/c>' : Hint player <i> about <n>umber or <c>olor
\t Each color should be the first letter, lower case (g,b,y,w,r)
'p <i>' : Play card at index <i> in hand
'd <i>' : Discard card at index <i> in hand
'q' : End game.

Discards will be displayed below hands, underlines mean that card is at risk
"""


def paint(text: str, color: Color | None, underline: bool = False) -> str:
    """Wrap text in the escape codes for a card color (cyan when unknown)."""
    code = Colors.CYAN if color is None else _COLOR_CODES[color]
    if underline:
        code += Colors.UNDERLINE
    if not code:
        return text
    return f"{code}{text}{Colors.RESET}"


def card_string(card: Card) -> str:
    """A card as its holder knows it: '?' for an unknown number, cyan for an unknown color."""
    known = card.knowledge()
    number = str(known.number) if known.number is not None else "?"
    return paint(number, known.color)


def cheat_string(card: Card) -> str:
    """A card as a spectator sees it."""
    face = card.peek()
    return paint(str(face.number), face.color)


def hand_string(player: Player) -> str:
    return " ".join(card_string(card) for card in player.hand)


def peek_hand_string(player: Player) -> str:
    return " ".join(cheat_string(card) for card in player.hand)


def token_string(game: Game) -> str:
    """Hint tokens then lives; spent ones in gray."""
    hints = [f"{Colors.BLUE}{TOKEN}{Colors.RESET}"] * game.hints
    hints += [f"{Colors.GRAY}{TOKEN}{Colors.RESET}"] * (game.max_hints - game.hints)
    lives = [f"{Colors.RED}{TOKEN}{Colors.RESET}"] * game.lives
    lives += [f"{Colors.GRAY}{TOKEN}{Colors.RESET}"] * (game.max_lives - game.lives)
    return " ".join(hints) + "   " + " ".join(lives)


def played_string(game: Game) -> str:
    """Top of each stack in display order, 'X' where nothing is played."""
    parts = []
    for color in COLORS:
        played = game.played.get(color)
        parts.append(paint(str(played) if played else "X", color))
    return " ".join(parts)


def discarded_strings(game: Game) -> list[str]:
    """One line per color with discards: each number repeated by its count.

    Piles whose next discard would lose a needed card are underlined.
    """
    lines = []
    for color in COLORS:
        discards = game.discarded.get(color)
        if not discards:
            continue
        piles = []
        for number, count in sorted(discards.items()):
            danger = game.check_dangerous(color, number, count)
            piles.append(paint(str(number) * count, color, underline=danger))
        lines.append(" ".join(piles))
    return lines


def render_table(game: Game, players: list[Player], current: int) -> str:
    """The whole table as the current player may see it."""
    lines = [
        token_string(game),
        f"Played: {played_string(game)}",
        f"Your hand (Player {current}):",
        f"\t{hand_string(players[current])}",
        "",
    ]
    # Seats after the current player first, then the ones before
    order = list(range(current + 1, len(players))) + list(range(current))
    for seat in order:
        lines.append(f"Player {seat}:")
        lines.append(f"\t{peek_hand_string(players[seat])}")
        lines.append(f"\t{hand_string(players[seat])}")
        lines.append("")
    discards = discarded_strings(game)
    if discards:
        lines.append("Discards:")
        lines.extend(f"\t{line}" for line in discards)
    return "\n".join(lines)
