"""Tests for applying commands and running whole games."""

import pytest
from pydantic import ValidationError
from src.hanabi.display import HELP_TEXT
from src.hanabi.game import Game, deal_players
from src.hanabi.models import (
    Color,
    DiscardCommand,
    EndReason,
    HanabiConfig,
    HelpCommand,
    HintCommand,
    PlayCommand,
    QuitCommand,
)
from src.hanabi.orchestrator import apply_command, new_table, run_game


@pytest.fixture
def table(stacked_deck):
    # Seat 0: R1 R1 G2 B3 Y4, seat 1: R2 W1 R5 G1 B1
    deck = stacked_deck(
        (Color.RED, 1), (Color.RED, 1), (Color.GREEN, 2), (Color.BLUE, 3), (Color.YELLOW, 4),
        (Color.RED, 2), (Color.WHITE, 1), (Color.RED, 5), (Color.GREEN, 1), (Color.BLUE, 1),
    )
    game = Game(deck=deck)
    players = deal_players(game, 3)
    return game, players


def scripted(commands):
    lines = iter(commands)
    return lambda game, players, seat: next(lines)


class TestNewTable:
    """Tests for table setup."""

    @pytest.mark.parametrize("num_players,hand_size", [(2, 5), (3, 5), (4, 5), (5, 4)])
    def test_hand_sizes(self, num_players, hand_size):
        game, players = new_table(HanabiConfig(num_players=num_players, seed=1))
        assert len(players) == num_players
        assert all(len(p.hand) == hand_size for p in players)
        assert len(game.deck) == 50 - num_players * hand_size

    def test_config_rejects_bad_player_count(self):
        with pytest.raises(ValueError):
            HanabiConfig(num_players=6)


class TestHintCommand:
    """Tests for hint commands."""

    def test_hint_spends_token_and_reveals(self, table):
        game, players = table
        result = apply_command(game, players, 0, HintCommand(target_player=1, hint_type="color", hint_value=Color.RED))
        assert result.success
        assert result.positions_touched == [0, 2]
        assert game.hints == 6
        assert [str(card) for card in players[1].hand] == ["R?", "??", "R?", "??", "??"]

    def test_number_hint(self, table):
        game, players = table
        result = apply_command(game, players, 0, HintCommand(target_player=1, hint_type="number", hint_value=1))
        assert result.success
        assert result.positions_touched == [1, 3, 4]

    def test_hint_touching_nothing_still_costs_a_token(self, table):
        game, players = table
        result = apply_command(game, players, 0, HintCommand(target_player=1, hint_type="color", hint_value=Color.YELLOW))
        assert result.success
        assert result.positions_touched == []
        assert game.hints == 6

    def test_hint_refused_without_tokens(self, table):
        game, players = table
        game.hints = 0
        result = apply_command(game, players, 0, HintCommand(target_player=1, hint_type="number", hint_value=1))
        assert not result.success
        assert game.hints == 0
        assert [str(card) for card in players[1].hand] == ["??", "??", "??", "??", "??"]

    def test_hint_to_self_refused(self, table):
        game, players = table
        result = apply_command(game, players, 0, HintCommand(target_player=0, hint_type="number", hint_value=1))
        assert not result.success
        assert game.hints == 7

    def test_hint_to_unknown_player_refused(self, table):
        game, players = table
        result = apply_command(game, players, 0, HintCommand(target_player=3, hint_type="number", hint_value=1))
        assert not result.success
        assert "Unknown player" in result.message

    @pytest.mark.parametrize("hint_type,hint_value", [
        ("number", 9),
        ("number", 0),
        ("color", 3),
        ("number", Color.RED),
    ])
    def test_malformed_hint_never_reaches_the_table(self, table, hint_type, hint_value):
        game, players = table
        with pytest.raises(ValidationError):
            HintCommand(target_player=1, hint_type=hint_type, hint_value=hint_value)
        assert game.hints == 7
        assert all(card.knowledge().number is None for card in players[1].hand)

    def test_color_name_accepted_for_color_hint(self):
        command = HintCommand(target_player=1, hint_type="color", hint_value="red")
        assert command.hint_value is Color.RED


class TestPlayAndDiscardCommands:
    """Tests for play and discard commands."""

    def test_play_then_replay(self, table):
        game, players = table
        first = apply_command(game, players, 0, PlayCommand(card_position=0))
        assert first.success
        assert first.was_playable
        assert str(first.card_played) == "R1"

        second = apply_command(game, players, 0, PlayCommand(card_position=0))
        assert second.success
        assert second.was_playable is False
        assert game.lives == 2
        assert game.discarded[Color.RED][1] == 1

    def test_play_out_of_range_rejected(self, table):
        game, players = table
        result = apply_command(game, players, 0, PlayCommand(card_position=5))
        assert not result.success
        assert len(players[0].hand) == 5
        assert game.lives == 3

    def test_discard(self, table):
        game, players = table
        game.hints = 2
        result = apply_command(game, players, 0, DiscardCommand(card_position=4))
        assert result.success
        assert str(result.card_discarded) == "Y4"
        assert game.hints == 3

    def test_discard_at_full_tokens(self, table):
        game, players = table
        result = apply_command(game, players, 0, DiscardCommand(card_position=0))
        assert result.success
        assert game.hints == 7

    def test_quit_ends_game(self, table):
        game, players = table
        result = apply_command(game, players, 1, QuitCommand())
        assert result.success
        assert game.ended
        assert game.end_reason == EndReason.QUIT

    def test_help_is_not_a_turn(self, table):
        game, players = table
        result = apply_command(game, players, 0, HelpCommand())
        assert not result.success
        assert result.message == HELP_TEXT

    def test_commands_rejected_after_game_over(self, table):
        game, players = table
        game.end_game(EndReason.QUIT)
        result = apply_command(game, players, 0, PlayCommand(card_position=0))
        assert not result.success
        assert len(players[0].hand) == 5


class TestRunGame:
    """Tests for the turn loop."""

    def test_quit_immediately(self):
        record = run_game(HanabiConfig(num_players=2, seed=3), scripted(["q"]))
        assert record.end_reason == EndReason.QUIT
        assert len(record.turns) == 1
        assert record.final_score == 0

    def test_rejected_commands_reprompt_same_player(self):
        events = []
        record = run_game(
            HanabiConfig(num_players=2, seed=3),
            scripted(["nonsense", "?", "p 9", "h 0 1", "h 1 9", "d 0", "q"]),
            lambda event, payload: events.append((event, payload)),
        )
        rejected = [payload for event, payload in events if event == "rejected"]
        assert len(rejected) == 4
        assert all(payload["player"] == 0 for payload in rejected)
        assert [t.player for t in record.turns] == [0, 1]

    def test_help_is_its_own_event(self):
        events = []
        record = run_game(
            HanabiConfig(num_players=2, seed=3),
            scripted(["?", "q"]),
            lambda event, payload: events.append((event, payload)),
        )
        assert [event for event, _ in events] == ["init", "help", "turn", "done"]
        assert events[1][1] == {"player": 0, "message": HELP_TEXT}
        assert len(record.turns) == 1

    def test_out_of_range_number_hint_costs_nothing(self):
        record = run_game(HanabiConfig(num_players=2, seed=3), scripted(["h 1 9", "h 1 0", "q"]))
        assert record.hints_left == 7
        assert len(record.turns) == 1

    def test_turns_rotate(self):
        record = run_game(HanabiConfig(num_players=3, seed=3), scripted(["h 1 1", "h 2 r", "h 0 3", "q"]))
        assert [t.player for t in record.turns] == [0, 1, 2, 0]
        assert record.hints_left == 4

    def test_final_round_after_deck_runs_out(self):
        record = run_game(HanabiConfig(num_players=2, seed=5), scripted(["d 0"] * 60))
        # 40 draws empty the deck, then each player gets one more turn
        assert len(record.turns) == 42
        assert record.end_reason == EndReason.FINAL_ROUND_COMPLETE

    def test_without_final_round_play_continues(self):
        record = run_game(
            HanabiConfig(num_players=2, seed=5, final_round=False),
            scripted(["d 0"] * 45 + ["q"]),
        )
        assert len(record.turns) == 46
        assert record.end_reason == EndReason.QUIT

    def test_events_emitted(self):
        events = []
        run_game(
            HanabiConfig(num_players=2, seed=3),
            scripted(["d 0", "q"]),
            lambda event, payload: events.append(event),
        )
        assert events == ["init", "turn", "turn", "done"]

    def test_turn_log_snapshots(self):
        record = run_game(HanabiConfig(num_players=2, seed=3), scripted(["h 1 1", "q"]))
        first = record.turns[0]
        assert first.turn_number == 1
        assert first.hints_after == 6
        assert first.lives_after == 3
        assert isinstance(first.command, HintCommand)
