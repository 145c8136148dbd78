from __future__ import annotations

import random

import numpy as np
import pytest

from tetris_search.game import BOARD_HEIGHT, BOARD_WIDTH


def _fill_rows(board: np.ndarray, rows, except_cols=(), value: int = 3) -> np.ndarray:
    """Fill whole rows of `board` in place, leaving `except_cols` empty."""
    for r in rows:
        board[r, :] = value
        for c in except_cols:
            board[r, c] = 0
    return board


@pytest.fixture
def fill_rows():
    return _fill_rows


@pytest.fixture
def board() -> np.ndarray:
    return np.zeros((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8)


@pytest.fixture
def doomed_board() -> np.ndarray:
    """A stack up to row 2 that no piece can clear: every drop reaches the spawn rows.

    Row 2 is open only at the two edge columns, which no single piece spans;
    the rows below are open only under a covered cell.
    """
    b = np.ones((BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8)
    b[:2] = 0
    b[2, 0] = b[2, BOARD_WIDTH - 1] = 0
    b[3:, 5] = 0
    return b


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
