"""Bootstrap particle filter."""

from __future__ import annotations

from typing import Callable

import numpy as np

from tradelab.random_sample import DiscreteDistribution

_PROBABILITY_FLOOR = 1e-300


class ParticleFilter:
    """Sequential importance resampling filter driven by user-supplied samplers.

    ``initial_sampler()`` draws a particle from the prior,
    ``transition_sampler(particle)`` draws its successor and
    ``probability_observed(obs, particle)`` gives the likelihood of ``obs``.
    """

    def __init__(
        self,
        num_particles: int,
        num_hidden: int,
        initial_sampler: Callable[[], np.ndarray],
        transition_sampler: Callable[[np.ndarray], np.ndarray],
        probability_observed: Callable[[np.ndarray, np.ndarray], float],
    ) -> None:
        if num_particles < 1:
            raise ValueError("at least one particle is required")
        if num_hidden < 1:
            raise ValueError("at least one hidden variable is required")
        self._num_particles = num_particles
        self._num_hidden = num_hidden
        self._transition = transition_sampler
        self._probability = probability_observed
        self._particles = np.array(
            [self._as_particle(initial_sampler()) for _ in range(num_particles)]
        )
        self._weights = np.full(num_particles, 1.0 / num_particles)
        self._estimate = np.zeros(num_hidden)

    def _as_particle(self, values) -> np.ndarray:
        particle = np.asarray(values, dtype=float).reshape(-1)
        if particle.size != self._num_hidden:
            raise ValueError(
                f"particle must have {self._num_hidden} elements, got {particle.size}"
            )
        return particle

    @property
    def estimate(self) -> np.ndarray:
        """Weighted mean of the particles after the last update."""
        return self._estimate.copy()

    @property
    def weights(self) -> np.ndarray:
        """Normalised particle weights."""
        return self._weights.copy()

    def update(self, obs) -> None:
        """Resample, propagate and reweight the particles against ``obs``."""
        observation = np.asarray(obs, dtype=float)
        distribution = DiscreteDistribution(self._weights)
        chosen = [
            self._particles[distribution.sample()].copy()
            for _ in range(self._num_particles)
        ]
        new_particles = np.array(
            [self._as_particle(self._transition(particle.copy())) for particle in chosen]
        )
        probs = (
            np.array([float(self._probability(observation, particle)) for particle in chosen])
            + _PROBABILITY_FLOOR
        )

        self._particles = new_particles
        self._weights = probs / probs.sum()
        self._estimate = self._weights @ self._particles