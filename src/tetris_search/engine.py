from __future__ import annotations

import logging
import random
from typing import Any, Dict, Iterable, Optional

from .errors import NotReadyError
from .game.core import GameConfig, Position
from .search.evaluator import Evaluator
from .search.search import GameResult, SearchResult, best_move, play_game


logger = logging.getLogger(__name__)


class Engine:
    """Long-lived decision session: one current Position plus an optional evaluator.

    This is what an external driver talks to. It can inject positions from an
    externally run game, ask for single decisions, or let the engine play a
    whole game on its own.
    """

    def __init__(self, config: Optional[GameConfig] = None, evaluator: Optional[Evaluator] = None) -> None:
        self.config = config or GameConfig()
        self.rng = random.Random(self.config.random_seed)
        self.evaluator = evaluator
        self.position = Position.new_game(self.rng, self.config.queue_length)

    def new_game(self) -> Position:
        self.position = Position.new_game(self.rng, self.config.queue_length)
        return self.position

    def load_evaluator(self, evaluator: Evaluator) -> None:
        self.evaluator = evaluator
        logger.info("evaluator loaded: %r", evaluator)

    def is_ready(self) -> bool:
        return self.evaluator is not None

    def set_position(
        self,
        current_piece: int,
        next_pieces: Iterable[int],
        lines: int,
        score: int,
        board: Any,
        pocket: Optional[int] = None,
        bag: Iterable[int] = (),
    ) -> Position:
        self.position = Position.from_snapshot(current_piece, next_pieces, lines, score, board, pocket, bag)
        return self.position

    def peek(self) -> Dict[str, Any]:
        return self.position.to_dict()

    def _require_evaluator(self) -> Evaluator:
        if self.evaluator is None:
            raise NotReadyError("no evaluator loaded")
        return self.evaluator

    def go(self) -> SearchResult:
        """Choose and play one move. On a lost board the position is kept as is."""
        evaluator = self._require_evaluator()
        result = best_move(evaluator, self.position, self.rng, self.config.regenerate_next)
        if result.position is None:
            logger.info("no surviving move; game lost at score %d", self.position.score)
        else:
            self.position = result.position
        return result

    def play_game(self) -> GameResult:
        """Play from the current position to the end, then start a fresh game."""
        evaluator = self._require_evaluator()
        result = play_game(
            evaluator, self.position, self.rng, self.config.max_placements, self.config.regenerate_next
        )
        logger.info(
            "game finished: score=%d lines=%d placements=%d",
            result.score,
            result.lines,
            result.placements,
        )
        self.new_game()
        return result
