"""Shared random sampling helpers."""

from __future__ import annotations

from typing import Sequence

import numpy as np

PI = 3.141592653
RANDOM_SEED = 123

_rng = np.random.default_rng(RANDOM_SEED)


def reseed(seed: int) -> None:
    """Reset the shared generator with ``seed``."""
    global _rng
    _rng = np.random.default_rng(seed)


def sample_normal() -> float:
    """Draw one sample from the standard normal distribution."""
    return float(_rng.standard_normal())


def sample_mv_normal(tril) -> np.ndarray:
    """Draw a zero-mean multivariate normal sample with Cholesky factor ``tril``."""
    tril = np.asarray(tril, dtype=float)
    if tril.ndim != 2 or tril.shape[0] != tril.shape[1]:
        raise ValueError("tril must be a square matrix")
    return tril @ _rng.standard_normal(tril.shape[0])


class DiscreteDistribution:
    """Samples indices with probability proportional to the given weights."""

    def __init__(self, weights: Sequence[float]) -> None:
        probs = np.asarray(list(weights), dtype=float)
        if probs.size == 0:
            probs = np.ones(1)
        if np.any(probs < 0) or not np.all(np.isfinite(probs)):
            raise ValueError("weights must be finite and non-negative")
        total = probs.sum()
        if total <= 0:
            raise ValueError("weights must not all be zero")
        self._probs = probs / total

    def sample(self) -> int:
        """Draw one index."""
        return int(_rng.choice(len(self._probs), p=self._probs))