"""A one-dimensional stochastic volatility model."""

from __future__ import annotations

import math

import numpy as np

from tradelab.random_sample import PI, sample_normal


def _first(values) -> float:
    return float(np.atleast_1d(np.asarray(values, dtype=float))[0])


class StochasticVolatility:
    """Observation ``coefficient * exp(h / 2) * e`` with standard normal ``e``."""

    def __init__(self, coefficient: float) -> None:
        self.coefficient = float(coefficient)

    def _volatility(self, hidden) -> float:
        return self.coefficient * math.exp(_first(hidden) / 2)

    def mutate(self, input_vector) -> np.ndarray:
        """Sample an observation given the hidden log-variance."""
        return np.array([self._volatility(input_vector) * sample_normal()])

    def probability(self, obs, hidden) -> float:
        """Density of ``obs`` given the hidden log-variance."""
        vol = self._volatility(hidden)
        return 1 / (2 * PI * vol) * math.exp(-((_first(obs) / vol) ** 2) / 2)