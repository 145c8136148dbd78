from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from ..errors import InvalidMoveError, InvalidPositionError
from .bag import Bag, draw, draw_many, fresh_bag
from .features import Features, extract_features
from .grid import BOARD_HEIGHT, BOARD_WIDTH, buffer_occupied, empty_board, fits, format_board, place
from .pieces import NUM_ROTATIONS, PieceType, is_piece_id, shape, shape_width
from .rules import DEFAULT_RULES


class Move(NamedTuple):
    column: int
    rotation: int
    use_swap: bool


@dataclass
class GameConfig:
    queue_length: int = 4
    random_seed: Optional[int] = None
    # Draw a new piece onto the queue tail for every piece taken from it.
    regenerate_next: bool = True
    # Optional cap on placements per game; None plays until game over.
    max_placements: Optional[int] = None


@dataclass(frozen=True, eq=False)
class Position:
    """Immutable game state.

    `apply_move` never edits a Position; it returns a new one, or ``None``
    when the placement tops out the board.
    """

    board: np.ndarray
    current_piece: int
    next_pieces: Tuple[int, ...] = ()
    pocket: Optional[int] = None
    bag: Bag = ()
    score: int = 0
    lines: int = 0

    def __post_init__(self) -> None:
        board = np.array(self.board, dtype=np.int8)
        board.setflags(write=False)
        object.__setattr__(self, "board", board)
        object.__setattr__(self, "current_piece", int(self.current_piece))
        object.__setattr__(self, "next_pieces", tuple(int(p) for p in self.next_pieces))
        object.__setattr__(self, "bag", tuple(int(p) for p in self.bag))
        if self.pocket is not None:
            object.__setattr__(self, "pocket", int(self.pocket))

    # ---------- Construction ----------
    @classmethod
    def new_game(cls, rng: Optional[random.Random] = None, queue_length: int = 4) -> "Position":
        rng = rng if rng is not None else random.Random()
        bag = fresh_bag(rng)
        current, bag = draw(bag, rng)
        next_pieces, bag = draw_many(bag, rng, queue_length)
        return cls(board=empty_board(), current_piece=current, next_pieces=next_pieces, bag=bag)

    @classmethod
    def from_snapshot(
        cls,
        current_piece: int,
        next_pieces: Iterable[int],
        lines: int,
        score: int,
        board: Any,
        pocket: Optional[int] = None,
        bag: Iterable[int] = (),
    ) -> "Position":
        """Build a Position from externally supplied state, rejecting malformed input."""
        next_pieces = tuple(next_pieces)
        bag = tuple(bag)
        if not is_piece_id(current_piece):
            raise InvalidPositionError(f"current_piece must be in 1..{len(PieceType)}, got {current_piece!r}")
        for p in next_pieces:
            if not is_piece_id(p):
                raise InvalidPositionError(f"next_pieces contains invalid piece id {p!r}")
        if pocket is not None and not is_piece_id(pocket):
            raise InvalidPositionError(f"pocket must be empty or in 1..{len(PieceType)}, got {pocket!r}")
        for p in bag:
            if not is_piece_id(p):
                raise InvalidPositionError(f"bag contains invalid piece id {p!r}")
        if len(set(bag)) != len(bag):
            raise InvalidPositionError(f"bag contains duplicates: {bag!r}")
        if isinstance(score, bool) or not isinstance(score, (int, np.integer)) or score < 0:
            raise InvalidPositionError(f"score must be a non-negative integer, got {score!r}")
        if isinstance(lines, bool) or not isinstance(lines, (int, np.integer)) or lines < 0:
            raise InvalidPositionError(f"lines must be a non-negative integer, got {lines!r}")

        cells = _validate_board(board)
        if buffer_occupied(cells):
            raise InvalidPositionError("board has occupied cells in the spawn rows")
        return cls(
            board=cells,
            current_piece=current_piece,
            next_pieces=next_pieces,
            pocket=pocket,
            bag=bag,
            score=int(score),
            lines=int(lines),
        )

    # ---------- Queries ----------
    @property
    def swap_piece(self) -> Optional[int]:
        """Piece placed by a hold move: the held piece, else the queue front."""
        if self.pocket is not None:
            return self.pocket
        if self.next_pieces:
            return self.next_pieces[0]
        return None

    def legal_moves(self) -> List[Move]:
        moves: List[Move] = []
        swap_piece = self.swap_piece
        for rotation in range(NUM_ROTATIONS):
            for x in range(BOARD_WIDTH + 1 - shape_width(self.current_piece, rotation)):
                moves.append(Move(x, rotation, False))
            if swap_piece is not None:
                for x in range(BOARD_WIDTH + 1 - shape_width(swap_piece, rotation)):
                    moves.append(Move(x, rotation, True))
        return moves

    def features(self) -> Features:
        return extract_features(self.board, self.lines)

    # ---------- Transition ----------
    def apply_move(
        self,
        column: int,
        rotation: int,
        use_swap: bool,
        regenerate_next: bool = True,
        rng: Optional[random.Random] = None,
    ) -> Optional["Position"]:
        """Drop a piece and return the resulting Position, or None on game over.

        With `use_swap` the held piece is dropped and the current piece goes
        to the pocket. On the first hold the pocket is empty, so the queue
        front is dropped instead and the queue advances twice.
        """
        if not 0 <= rotation < NUM_ROTATIONS:
            raise InvalidMoveError(f"rotation must be in 0..{NUM_ROTATIONS - 1}, got {rotation}")
        if not use_swap:
            dropped = self.current_piece
        else:
            dropped = self.swap_piece
            if dropped is None:
                raise InvalidMoveError("hold requested with an empty pocket and an empty queue")
        piece_shape = shape(dropped, rotation)
        if not fits(self.board, piece_shape, column):
            raise InvalidMoveError(f"piece {dropped} rotation {rotation} does not fit at column {column}")

        rng = rng if rng is not None else random.Random()
        queue = list(self.next_pieces)
        bag = self.bag

        def advance() -> int:
            nonlocal bag
            if queue:
                piece = queue.pop(0)
            else:
                piece, bag = draw(bag, rng)
            if regenerate_next:
                drawn, bag = draw(bag, rng)
                queue.append(drawn)
            return piece

        pocket = self.pocket
        new_current = advance()
        if use_swap:
            if pocket is None:
                new_current = advance()
            pocket = self.current_piece

        result = place(self.board, piece_shape, column)
        if result.game_over:
            return None

        lines = result.lines_cleared
        return Position(
            board=result.board,
            current_piece=new_current,
            next_pieces=tuple(queue),
            pocket=pocket,
            bag=bag,
            score=self.score + DEFAULT_RULES.score_for_lines(lines),
            lines=self.lines + lines,
        )

    def apply(self, move: Move, regenerate_next: bool = True, rng: Optional[random.Random] = None) -> Optional["Position"]:
        return self.apply_move(move.column, move.rotation, move.use_swap, regenerate_next, rng)

    # ---------- Export ----------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "current_piece": self.current_piece,
            "next_pieces": list(self.next_pieces),
            "pocket": self.pocket,
            "lines": self.lines,
            "board": self.board.tolist(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.current_piece == other.current_piece
            and self.next_pieces == other.next_pieces
            and self.pocket == other.pocket
            and self.bag == other.bag
            and self.score == other.score
            and self.lines == other.lines
            and np.array_equal(self.board, other.board)
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return format_board(self.board)


def _validate_board(board: Any) -> np.ndarray:
    try:
        cells = np.asarray(board)
    except (TypeError, ValueError) as exc:
        raise InvalidPositionError(f"board is not a rectangular grid: {exc}") from exc
    if cells.shape != (BOARD_HEIGHT, BOARD_WIDTH):
        raise InvalidPositionError(f"board must be {BOARD_HEIGHT}x{BOARD_WIDTH}, got shape {cells.shape}")
    if cells.dtype.kind not in "iu":
        raise InvalidPositionError(f"board cells must be integers, got dtype {cells.dtype}")
    if cells.min() < 0 or cells.max() > len(PieceType):
        raise InvalidPositionError(f"board cells must be in 0..{len(PieceType)}")
    return cells.astype(np.int8)
