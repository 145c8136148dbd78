from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple

import numpy as np


NUM_ROTATIONS = 4


class PieceType(IntEnum):
    L = 1
    J = 2
    S = 3
    Z = 4
    T = 5
    O = 6
    I = 7


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


# Cells carry the piece id so a stamped board keeps the piece colours.
BASE_SHAPES = {
    PieceType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
    PieceType.J: np.array([[2, 0, 0], [2, 2, 2]], dtype=np.int8),
    PieceType.S: np.array([[0, 3, 3], [3, 3, 0]], dtype=np.int8),
    PieceType.Z: np.array([[4, 4, 0], [0, 4, 4]], dtype=np.int8),
    PieceType.T: np.array([[0, 5, 0], [5, 5, 5]], dtype=np.int8),
    PieceType.O: np.array([[6, 6], [6, 6]], dtype=np.int8),
    PieceType.I: np.array([[7, 7, 7, 7]], dtype=np.int8),
}


def _build_catalog() -> Dict[int, Tuple[Shape, ...]]:
    catalog: Dict[int, Tuple[Shape, ...]] = {}
    for kind, base in BASE_SHAPES.items():
        rotations = []
        for r in range(NUM_ROTATIONS):
            shape = np.ascontiguousarray(_rot90(base, r))
            shape.setflags(write=False)
            rotations.append(shape)
        catalog[int(kind)] = tuple(rotations)
    return catalog


PIECES = _build_catalog()


def shape(piece_id: int, rotation: int) -> Shape:
    """Cell matrix of `piece_id` at `rotation` (0..3). Read-only."""
    return PIECES[piece_id][rotation]


def shape_width(piece_id: int, rotation: int) -> int:
    return int(PIECES[piece_id][rotation].shape[1])


def is_piece_id(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool) and 1 <= int(value) <= len(PieceType)
