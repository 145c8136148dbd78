from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

import numpy as np


FEATURE_NAMES = ("holes", "bumpiness", "aggregate_height", "completed_lines")


@dataclass(frozen=True)
class Features:
    """Board statistics handed to an evaluator.

    Note these are not the textbook column-height statistics:
    `aggregate_height` weights every occupied cell by its height and
    `bumpiness` compares per-column fill counts. Trained evaluators depend
    on exactly these definitions.
    """

    holes: float
    bumpiness: float
    aggregate_height: float
    completed_lines: float

    def as_array(self) -> np.ndarray:
        return np.array([getattr(self, name) for name in FEATURE_NAMES], dtype=np.float64)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def extract_features(board: np.ndarray, lines: int) -> Features:
    height = board.shape[0]
    occ = board != 0

    # Row 0 is the spawn row and does not count towards height or fill.
    body = occ[1:]
    row_heights = height - np.arange(1, height)
    aggregate_height = int(np.sum(row_heights[:, None] * body))

    fill_counts = body.sum(axis=0)
    bumpiness = int(np.sum(np.abs(np.diff(fill_counts))))

    # Holes: every empty cell with a filled cell somewhere above it in its column.
    covered = np.logical_or.accumulate(occ, axis=0)
    holes = int(np.sum(covered[:-1] & ~occ[1:]))

    return Features(
        holes=float(holes),
        bumpiness=float(bumpiness),
        aggregate_height=float(aggregate_height),
        completed_lines=float(lines),
    )
