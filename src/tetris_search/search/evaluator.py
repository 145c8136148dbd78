from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import Callable, Mapping, Optional, Protocol

import numpy as np

from ..errors import InvalidWeightsError
from ..game.features import FEATURE_NAMES, Features


class Evaluator(Protocol):
    """Anything that maps a feature vector to a desirability score (higher is better)."""

    def score(self, features: Features) -> float:
        ...


@dataclass(frozen=True)
class Weights:
    """Per-feature weights for LinearEvaluator, in feature-vector order."""

    holes: float = -0.35663
    bumpiness: float = -0.184483
    aggregate_height: float = -0.510066
    completed_lines: float = 0.760666

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "Weights":
        unknown = set(values) - set(FEATURE_NAMES)
        if unknown:
            raise InvalidWeightsError(f"unknown feature weights: {sorted(unknown)}")
        return cls(**{k: float(v) for k, v in values.items()})

    def as_array(self) -> np.ndarray:
        return np.array(astuple(self), dtype=np.float64)


class LinearEvaluator:
    """Weighted sum of the board features."""

    def __init__(self, weights: Optional[Weights] = None) -> None:
        self.weights = weights or Weights()
        self._w = self.weights.as_array()

    def score(self, features: Features) -> float:
        return float(np.dot(self._w, features.as_array()))

    def __repr__(self) -> str:
        return f"LinearEvaluator({self.weights!r})"


class CallableEvaluator:
    """Adapts a plain function of Features to the Evaluator interface."""

    def __init__(self, fn: Callable[[Features], float]) -> None:
        self.fn = fn

    def score(self, features: Features) -> float:
        return float(self.fn(features))

    def __repr__(self) -> str:
        name = getattr(self.fn, "__qualname__", None) or repr(self.fn)
        return f"CallableEvaluator({name})"
