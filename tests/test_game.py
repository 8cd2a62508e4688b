import numpy as np
import pytest

from termsweep.engine import Board, Minefield
from termsweep.errors import (
    InvalidConfiguration,
    InvalidFormat,
    InvalidNumber,
    MoveRejected,
)
from termsweep.game import (
    CURSOR_PROMPT,
    TEXT_PROMPT,
    Game,
    GameStatus,
    parse_coordinates,
)


def test_new_game_starts_in_progress_at_origin(sample_game):
    assert sample_game.status is GameStatus.IN_PROGRESS
    assert sample_game.cursor == (0, 0)
    assert sample_game.moves == 0
    assert sample_game.message == CURSOR_PROMPT
    assert not sample_game.is_over


def test_new_game_rejects_bad_configuration():
    with pytest.raises(InvalidConfiguration):
        Game.new(3, 9)
    with pytest.raises(InvalidConfiguration):
        Game.new(0, 0)


def test_new_game_seed_is_reproducible():
    a = Game.new(9, 10, seed=42)
    b = Game.new(9, 10, seed=42)
    assert np.array_equal(a.board.mines, b.board.mines)


def test_cursor_moves_and_clamps(sample_game):
    sample_game.move_cursor(-1, -1)
    assert sample_game.cursor == (0, 0)
    sample_game.move_cursor(1, 1)
    assert sample_game.cursor == (1, 1)
    sample_game.cursor = (2, 2)
    sample_game.move_cursor(1, 1)
    assert sample_game.cursor == (2, 2)
    sample_game.move_cursor(-10, 0)
    assert sample_game.cursor == (0, 2)
    sample_game.move_cursor(10, -10)
    assert sample_game.cursor == (2, 0)


def test_reveal_at_cursor_and_already_revealed(sample_game):
    sample_game.move_cursor(1, 1)
    assert sample_game.reveal_at_cursor() == CURSOR_PROMPT
    assert sample_game.field.is_revealed(1, 1)
    assert sample_game.moves == 1

    msg = sample_game.reveal_at_cursor()
    assert "Cell already revealed" in msg
    assert sample_game.moves == 1
    assert sample_game.field.revealed_count == 1


def test_flagged_cell_cannot_be_revealed_until_unflagged(sample_game):
    sample_game.move_cursor(1, 1)
    sample_game.toggle_flag()
    assert sample_game.field.is_flagged(1, 1)

    msg = sample_game.reveal_at_cursor()
    assert "Cannot reveal flagged cell" in msg
    assert not sample_game.field.is_revealed(1, 1)
    assert sample_game.moves == 0

    sample_game.toggle_flag()
    assert not sample_game.field.is_flagged(1, 1)
    sample_game.reveal_at_cursor()
    assert sample_game.field.is_revealed(1, 1)


def test_cannot_flag_revealed_cell(sample_game):
    sample_game.move_cursor(1, 1)
    sample_game.reveal_at_cursor()
    msg = sample_game.toggle_flag()
    assert "Cannot flag revealed cell" in msg
    assert not sample_game.field.is_flagged(1, 1)


def test_revealing_mine_loses_and_freezes():
    game = Game(Minefield(Board.from_rows(["*.", ".."])))
    msg = game.reveal_at_cursor()
    assert "BOOM" in msg
    assert game.status is GameStatus.LOST
    assert game.is_over
    expected = np.array([[True, False], [False, False]])
    assert np.array_equal(game.field.revealed, expected)

    game.move_cursor(1, 1)
    assert game.cursor == (0, 0)
    game.toggle_flag()
    assert not game.field.flagged.any()
    game.reveal(1, 1)
    game.handle_input("1,1")
    assert np.array_equal(game.field.revealed, expected)
    assert game.moves == 1
    assert "BOOM" in game.message


def test_zero_mine_board_wins_on_first_reveal():
    game = Game.new(2, 0, seed=3)
    msg = game.reveal_at_cursor()
    assert game.status is GameStatus.WON
    assert msg == "Congratulations! You won in 1 moves."
    assert game.field.revealed.all()


def test_win_counts_moves_not_flood_filled_cells(sample_game):
    sample_game.reveal(0, 2)
    assert sample_game.status is GameStatus.IN_PROGRESS
    sample_game.reveal(2, 0)
    assert sample_game.status is GameStatus.WON
    assert "Congratulations! You won in 2 moves." == sample_game.message
    assert not sample_game.field.revealed[0, 0]
    assert not sample_game.field.revealed[2, 2]


def test_won_game_ignores_further_input():
    game = Game.new(2, 0, seed=3)
    game.reveal_at_cursor()
    message = game.message
    game.move_cursor(1, 1)
    game.toggle_flag()
    assert game.cursor == (0, 0)
    assert game.message == message
    assert game.handle_input("nonsense") == message


@pytest.mark.parametrize("raw,expected", [
    ("0,1", (0, 1)),
    (" 2 , 0 ", (2, 0)),
    ("-1,4", (-1, 4)),
])
def test_parse_coordinates(raw, expected):
    assert parse_coordinates(raw) == expected


@pytest.mark.parametrize("raw", ["", "1", "1,2,3", "1 2"])
def test_parse_coordinates_bad_format(raw):
    with pytest.raises(InvalidFormat) as exc_info:
        parse_coordinates(raw)
    assert "Invalid input format" in exc_info.value.message


@pytest.mark.parametrize("raw", ["a,b", "1,b", "1.5,2", ",", "0_1,0", "\u0661,\u0660", "1,2e0"])
def test_parse_coordinates_bad_number(raw):
    with pytest.raises(InvalidNumber) as exc_info:
        parse_coordinates(raw)
    assert isinstance(exc_info.value, MoveRejected)


@pytest.mark.parametrize("raw,fragment", [
    ("3,0", "out of bounds (0-2)"),
    ("0,-1", "out of bounds"),
    ("a,b", "Must be numbers"),
    ("1;1", "Invalid input format"),
    ("0_1,0", "Must be numbers"),
])
def test_handle_input_rejections_leave_state_unchanged(text_game, raw, fragment):
    msg = text_game.handle_input(raw)
    assert fragment in msg
    assert text_game.status is GameStatus.IN_PROGRESS
    assert not text_game.field.revealed.any()
    assert text_game.moves == 0


def test_handle_input_reveals_and_rejects_repeat(text_game):
    assert text_game.handle_input("1,1") == TEXT_PROMPT
    assert text_game.field.is_revealed(1, 1)
    assert "Cell already revealed" in text_game.handle_input("1,1")
    assert text_game.moves == 1


def test_handle_input_refuses_flagged_cell(text_game):
    text_game.field.toggle_flag(1, 2)
    msg = text_game.handle_input("1,2")
    assert "Cannot reveal flagged cell" in msg
    assert not text_game.field.is_revealed(1, 2)


def test_handle_input_mine(text_game):
    assert "BOOM" in text_game.handle_input("2,2")
    assert text_game.status is GameStatus.LOST
