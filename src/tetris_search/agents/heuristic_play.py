from __future__ import annotations

import argparse
import logging
import statistics
import sys
from typing import List, Optional, Sequence

from tetris_search.engine import Engine
from tetris_search.game import GameConfig, format_board
from tetris_search.search import GameResult, LinearEvaluator, Weights


logger = logging.getLogger(__name__)


def _print_progress(game_idx: int, total: int, last: GameResult) -> None:
    width = 30
    filled = int(width * (game_idx + 1) / max(1, total))
    bar = "=" * filled + "." * (width - filled)
    msg = f"\r[{bar}] {game_idx + 1}/{total}  score={last.score}  lines={last.lines}  pieces={last.placements}"
    print(msg, end="", file=sys.stdout, flush=True)


def run_games(engine: Engine, games: int, progress: bool = True, show: bool = False) -> List[GameResult]:
    results: List[GameResult] = []
    for i in range(games):
        result = engine.play_game()
        results.append(result)
        if progress:
            _print_progress(i, games, result)
        if show:
            if progress:
                print()
            print(format_board(result.position.board))
    if progress:
        print()
    return results


def build_parser() -> argparse.ArgumentParser:
    defaults = Weights()
    p = argparse.ArgumentParser(description="Self-play with the heuristic placement search")
    p.add_argument("--games", type=int, default=10)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max-pieces", type=int, default=None,
                   help="Stop a game after this many placements (default: play until game over)")
    p.add_argument("--queue-length", type=int, default=4)
    p.add_argument("--holes", type=float, default=defaults.holes)
    p.add_argument("--bumpiness", type=float, default=defaults.bumpiness)
    p.add_argument("--aggregate-height", type=float, default=defaults.aggregate_height)
    p.add_argument("--completed-lines", type=float, default=defaults.completed_lines)
    p.add_argument("--show", action="store_true", help="Print the final board of every game")
    p.add_argument("--no-progress", action="store_true")
    p.add_argument("--verbose", action="store_true")
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(message)s",
    )

    config = GameConfig(
        queue_length=args.queue_length,
        random_seed=args.seed,
        max_placements=args.max_pieces,
    )
    weights = Weights(
        holes=args.holes,
        bumpiness=args.bumpiness,
        aggregate_height=args.aggregate_height,
        completed_lines=args.completed_lines,
    )
    engine = Engine(config, LinearEvaluator(weights))
    logger.info("playing %d games with %r", args.games, weights)

    results = run_games(engine, args.games, progress=not args.no_progress, show=args.show)
    scores = [r.score for r in results]
    lines = [r.lines for r in results]
    print(f"games={len(results)}  mean_score={statistics.mean(scores):.1f}  max_score={max(scores)}  "
          f"mean_lines={statistics.mean(lines):.1f}")


if __name__ == "__main__":  # pragma: no cover
    main()
