"""7-bag piece randomizer.

Every id in 1..7 is handed out exactly once per cycle; an empty bag is
refilled with a fresh shuffled permutation on the next draw. The bag itself
is a plain tuple so it can live inside an immutable Position, and the random
source is always passed in explicitly.
"""

from __future__ import annotations

import random
from typing import Tuple

from .pieces import PieceType


Bag = Tuple[int, ...]


def fresh_bag(rng: random.Random) -> Bag:
    ids = [int(kind) for kind in PieceType]
    rng.shuffle(ids)
    return tuple(ids)


def draw(bag: Bag, rng: random.Random) -> Tuple[int, Bag]:
    """Take one piece from `bag`, refilling it first when empty.

    Returns the drawn id and the remaining bag; `bag` is left untouched.
    """
    if not bag:
        bag = fresh_bag(rng)
    return bag[-1], bag[:-1]


def draw_many(bag: Bag, rng: random.Random, count: int) -> Tuple[Tuple[int, ...], Bag]:
    pieces = []
    for _ in range(count):
        piece, bag = draw(bag, rng)
        pieces.append(piece)
    return tuple(pieces), bag
