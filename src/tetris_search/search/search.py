from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, Optional

from ..errors import InvariantViolation
from ..game.core import Move, Position
from .evaluator import Evaluator


logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    move: Move
    score: float
    # None when every candidate tops out the board.
    position: Optional[Position]
    candidates: int

    @property
    def game_over(self) -> bool:
        return self.position is None


@dataclass
class GameResult:
    score: int
    lines: int
    placements: int
    position: Position
    # False when the game was cut short by a placement cap.
    completed: bool = True


def best_move(
    evaluator: Evaluator,
    position: Position,
    rng: Optional[random.Random] = None,
    regenerate_next: bool = True,
) -> SearchResult:
    """Try every legal move and keep the one whose resulting board scores highest.

    Placements that end the game are skipped. Ties go to the earliest move in
    generation order. If every move ends the game, the first move is returned
    with ``position=None``.
    """
    rng = rng if rng is not None else random.Random()
    moves = position.legal_moves()
    if not moves:
        raise InvariantViolation(f"no legal moves for piece {position.current_piece}")

    best: Optional[SearchResult] = None
    for move in moves:
        next_position = position.apply(move, regenerate_next, rng)
        if next_position is None:
            continue
        value = evaluator.score(next_position.features())
        if best is None or value > best.score:
            best = SearchResult(move=move, score=value, position=next_position, candidates=len(moves))

    if best is None:
        logger.debug("all %d candidates top out", len(moves))
        return SearchResult(move=moves[0], score=float("-inf"), position=None, candidates=len(moves))
    logger.debug("best move %s score=%.4f of %d candidates", tuple(best.move), best.score, len(moves))
    return best


def iter_game(
    evaluator: Evaluator,
    position: Position,
    rng: Optional[random.Random] = None,
    max_placements: Optional[int] = None,
    regenerate_next: bool = True,
) -> Iterator[SearchResult]:
    """Yield one search result per placement until the game ends.

    The last result yielded has ``game_over`` set, unless `max_placements`
    stops the game first.
    """
    rng = rng if rng is not None else random.Random()
    placements = 0
    while max_placements is None or placements < max_placements:
        result = best_move(evaluator, position, rng, regenerate_next)
        yield result
        if result.position is None:
            return
        position = result.position
        placements += 1


def play_game(
    evaluator: Evaluator,
    position: Position,
    rng: Optional[random.Random] = None,
    max_placements: Optional[int] = None,
    regenerate_next: bool = True,
) -> GameResult:
    placements = 0
    completed = False
    for result in iter_game(evaluator, position, rng, max_placements, regenerate_next):
        if result.position is None:
            completed = True
            break
        position = result.position
        placements += 1
    return GameResult(
        score=position.score,
        lines=position.lines,
        placements=placements,
        position=position,
        completed=completed,
    )


def play_to_completion(
    evaluator: Evaluator,
    position: Position,
    rng: Optional[random.Random] = None,
    max_placements: Optional[int] = None,
) -> Position:
    """Play best moves until no move survives; return the last surviving Position."""
    return play_game(evaluator, position, rng, max_placements).position
