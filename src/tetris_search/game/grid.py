from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..errors import InvariantViolation


BOARD_HEIGHT = 22
BOARD_WIDTH = 10
# Rows at the top of the board that must stay empty; a stack reaching them ends the game.
BUFFER_ROWS = 2


@dataclass
class PlacementResult:
    board: np.ndarray
    lines_cleared: int
    game_over: bool


def empty_board(height: int = BOARD_HEIGHT, width: int = BOARD_WIDTH) -> np.ndarray:
    return np.zeros((height, width), dtype=np.int8)


def fits(board: np.ndarray, piece_shape: np.ndarray, x: int) -> bool:
    """Whether the piece's bounding box lies within the board columns at `x`."""
    h, w = piece_shape.shape
    return 0 <= x and x + w <= board.shape[1] and h <= board.shape[0]


def landing_row(board: np.ndarray, piece_shape: np.ndarray, x: int) -> int:
    """Row of the piece's top edge once dropped straight down at column `x`.

    Scans from the top: the first row where the piece either touches the
    floor or would overlap an occupied cell one row lower is where it rests.
    """
    h, w = piece_shape.shape
    floor = board.shape[0] - h
    mask = piece_shape != 0
    for y in range(floor + 1):
        if y == floor:
            return y
        below = board[y + 1 : y + 1 + h, x : x + w]
        if np.any(mask & (below != 0)):
            return y
    raise InvariantViolation(f"no landing row for piece of shape {piece_shape.shape} at column {x}")


def stamp(board: np.ndarray, piece_shape: np.ndarray, x: int, y: int) -> np.ndarray:
    """Return a copy of `board` with the piece's cells written at (x, y).

    Occupied board cells are never overwritten.
    """
    new_board = board.copy()
    h, w = piece_shape.shape
    region = new_board[y : y + h, x : x + w]
    fill = (piece_shape != 0) & (region == 0)
    region[fill] = piece_shape[fill]
    return new_board


def clear_full_lines(board: np.ndarray) -> Tuple[np.ndarray, int]:
    full_rows = np.where(np.all(board != 0, axis=1))[0]
    if full_rows.size == 0:
        return board, 0
    num = int(full_rows.size)
    # Remove full rows and add empty rows at the top
    remaining = np.delete(board, full_rows, axis=0)
    new_rows = np.zeros((num, board.shape[1]), dtype=board.dtype)
    return np.vstack((new_rows, remaining)), num


def buffer_occupied(board: np.ndarray) -> bool:
    return bool(np.any(board[:BUFFER_ROWS] != 0))


def place(board: np.ndarray, piece_shape: np.ndarray, x: int) -> PlacementResult:
    """Drop, stamp, clear lines and check for top-out. `board` is not modified."""
    y = landing_row(board, piece_shape, x)
    new_board = stamp(board, piece_shape, x, y)
    new_board, lines = clear_full_lines(new_board)
    return PlacementResult(board=new_board, lines_cleared=lines, game_over=buffer_occupied(new_board))


def format_board(board: np.ndarray) -> str:
    return "\n".join("".join(str(int(cell)) if cell else "·" for cell in row) for row in board)
