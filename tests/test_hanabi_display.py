"""Tests for terminal rendering."""

from src.hanabi.display import (
    Colors,
    card_string,
    cheat_string,
    discarded_strings,
    played_string,
    render_table,
    token_string,
)
from src.hanabi.game import Game, deal_players
from src.hanabi.models import Card, Color


class TestCardStrings:
    """Tests for the two card renderings."""

    def test_unknown_card_is_cyan_question_mark(self):
        card = Card.create(0, Color.RED, 4)
        assert card_string(card) == f"{Colors.CYAN}?{Colors.RESET}"

    def test_known_color_paints_number(self):
        card = Card.create(0, Color.RED, 4)
        card.hint_color(Color.RED)
        assert card_string(card) == f"{Colors.RED}?{Colors.RESET}"
        card.hint_number(4)
        assert card_string(card) == f"{Colors.RED}4{Colors.RESET}"

    def test_white_is_plain(self):
        card = Card.create(0, Color.WHITE, 2)
        card.hint_color(Color.WHITE)
        card.hint_number(2)
        assert card_string(card) == "2"

    def test_cheat_string_shows_everything(self):
        card = Card.create(0, Color.BLUE, 3)
        assert cheat_string(card) == f"{Colors.BLUE}3{Colors.RESET}"
        assert card_string(card) == f"{Colors.CYAN}?{Colors.RESET}"


class TestTableStrings:
    """Tests for token, played and discard strings."""

    def test_token_string_counts(self):
        game = Game(hints=5, lives=2)
        line = token_string(game)
        assert line.count(f"{Colors.BLUE}●") == 5
        assert line.count(f"{Colors.RED}●") == 2
        assert line.count(f"{Colors.GRAY}●") == 3

    def test_played_string_marks_empty_stacks(self):
        game = Game(played={Color.BLUE: 2})
        line = played_string(game)
        assert f"{Colors.BLUE}2{Colors.RESET}" in line
        assert line.count("X") == 4

    def test_discarded_strings_repeat_numbers(self):
        game = Game()
        game.discard(Card.create(0, Color.GREEN, 1))
        game.discard(Card.create(1, Color.GREEN, 1))
        game.discard(Card.create(2, Color.RED, 3))
        lines = discarded_strings(game)
        assert len(lines) == 2
        # Green comes first in display order; two 1s left one copy, underlined
        assert lines[0] == f"{Colors.GREEN}{Colors.UNDERLINE}11{Colors.RESET}"
        assert lines[1] == f"{Colors.RED}{Colors.UNDERLINE}3{Colors.RESET}"

    def test_safe_pile_not_underlined(self):
        game = Game()
        game.discard(Card.create(0, Color.YELLOW, 1))
        assert discarded_strings(game) == [f"{Colors.YELLOW}1{Colors.RESET}"]

    def test_no_discards_no_lines(self):
        assert discarded_strings(Game()) == []


class TestRenderTable:
    """Tests for the full table rendering."""

    def test_other_players_listed_after_current(self):
        game = Game()
        players = deal_players(game, 4)
        text = render_table(game, players, 2)
        assert "Your hand (Player 2):" in text
        assert text.index("Player 3:") < text.index("Player 0:") < text.index("Player 1:")
        assert "Player 2:" not in text

    def test_discards_section_only_when_present(self):
        game = Game()
        players = deal_players(game, 2)
        assert "Discards:" not in render_table(game, players, 0)
        players[0].discard(0)
        assert "Discards:" in render_table(game, players, 0)
