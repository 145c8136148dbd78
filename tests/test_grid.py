import numpy as np
import pytest

from tetris_search.errors import InvariantViolation
from tetris_search.game.grid import (
    buffer_occupied,
    clear_full_lines,
    fits,
    format_board,
    landing_row,
    place,
    stamp,
)
from tetris_search.game.pieces import PieceType, shape


def test_vertical_bar_lands_on_floor(board):
    assert landing_row(board, shape(PieceType.I, 1), 0) == 18


def test_square_lands_on_stack(board):
    board[21, 1] = 2
    assert landing_row(board, shape(PieceType.O, 0), 0) == 19


def test_piece_rests_on_overhang(board):
    board[15, 1] = 4
    assert landing_row(board, shape(PieceType.I, 1), 1) == 11


def test_only_occupied_piece_cells_collide(board):
    # T: [[0,5,0],[5,5,5]]; a block under the middle stops the bottom row
    board[21, 1] = 1
    assert landing_row(board, shape(PieceType.T, 0), 0) == 19
    # upside-down T: [[5,5,5],[0,5,0]]; a block under a side cell stops the top row
    other = np.zeros_like(board)
    other[21, 0] = 1
    assert landing_row(other, shape(PieceType.T, 2), 0) == 20


def test_no_landing_row_is_an_invariant_violation():
    tiny = np.zeros((3, 10), dtype=np.int8)
    with pytest.raises(InvariantViolation):
        landing_row(tiny, shape(PieceType.I, 1), 0)


def test_stamp_never_overwrites_and_copies(board):
    board[19, 1] = 3
    out = stamp(board, shape(PieceType.T, 0), 0, 19)
    assert out[19, 1] == 3
    assert out[19, 0] == 0
    assert out[19, 2] == 0
    assert list(out[20, :3]) == [5, 5, 5]
    assert board[20, 0] == 0


def test_clear_multiple_separated_rows(board, fill_rows):
    fill_rows(board, [19, 21])
    board[20, 4] = 6
    board[18, 0] = 2
    out, lines = clear_full_lines(board)
    assert lines == 2
    assert out.shape == board.shape
    assert out[21, 4] == 6
    assert out[20, 0] == 2
    assert not out[:20].any()


def test_clear_nothing_returns_same_board(board):
    board[21, 0] = 1
    out, lines = clear_full_lines(board)
    assert lines == 0
    np.testing.assert_array_equal(out, board)


def test_fits(board):
    i_flat = shape(PieceType.I, 0)
    assert fits(board, i_flat, 6)
    assert not fits(board, i_flat, 7)
    assert not fits(board, i_flat, -1)


def test_buffer_occupied(board):
    assert not buffer_occupied(board)
    board[2, 3] = 1
    assert not buffer_occupied(board)
    board[1, 3] = 1
    assert buffer_occupied(board)


def test_place_reports_lines_and_game_over(board, fill_rows):
    fill_rows(board, [21], except_cols=[0])
    result = place(board, shape(PieceType.I, 1), 0)
    assert result.lines_cleared == 1
    assert not result.game_over
    assert board[21, 0] == 0

    tall = np.zeros_like(board)
    tall[3:, 0] = 1
    assert place(tall, shape(PieceType.I, 1), 0).game_over


def test_format_board(board):
    board[21, 0] = 7
    text = format_board(board).splitlines()
    assert len(text) == 22
    assert text[21] == "7" + "·" * 9
