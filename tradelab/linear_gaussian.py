"""Linear models with additive Gaussian noise."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from tradelab.random_sample import PI, sample_mv_normal


def _lower_factor(covariance: np.ndarray) -> np.ndarray:
    """Lower-triangular ``L`` with ``L @ L.T == covariance``.

    Uses a Cholesky factorisation, falling back to an eigen/QR construction
    for positive semi-definite matrices such as an all-zero covariance.
    """
    try:
        return np.linalg.cholesky(covariance)
    except np.linalg.LinAlgError:
        values, vectors = np.linalg.eigh(covariance)
        if np.any(values < -1e-12 * max(1.0, float(np.abs(values).max()))):
            raise ValueError("covariance matrix must be positive semi-definite")
        root = vectors * np.sqrt(np.clip(values, 0.0, None))
        _, upper = np.linalg.qr(root.T)
        return upper.T


def _as_vector(values, size: int, name: str) -> np.ndarray:
    vector = np.asarray(values, dtype=float).reshape(-1)
    if vector.size != size:
        raise ValueError(f"{name} must have {size} elements, got {vector.size}")
    return vector


class LinearGaussian:
    """The model ``output = coefficients @ input + noise`` with Gaussian noise."""

    def __init__(self, coefficients, covariance) -> None:
        coef = np.atleast_2d(np.asarray(coefficients, dtype=float))
        cov = np.atleast_2d(np.asarray(covariance, dtype=float))
        if coef.ndim != 2:
            raise ValueError("coefficients must be a matrix")
        if cov.ndim != 2 or cov.shape[0] != cov.shape[1]:
            raise ValueError("covariance matrix must be square")
        if cov.shape[0] != coef.shape[0]:
            raise ValueError("covariance size must match the number of outputs")

        self._coef = coef
        self._tril = _lower_factor(cov)
        determinant = float(np.linalg.det(cov))
        self._inverse_noise: Optional[np.ndarray]
        if determinant == 0.0:
            self._inverse_noise = None
            self._max_prob = math.inf
        else:
            self._inverse_noise = np.linalg.inv(cov)
            self._max_prob = 1.0 / math.sqrt((2 * PI) ** self.num_outputs * determinant)

    @property
    def num_inputs(self) -> int:
        return self._coef.shape[1]

    @property
    def num_outputs(self) -> int:
        return self._coef.shape[0]

    @property
    def coef_matrix(self) -> np.ndarray:
        return self._coef.copy()

    @property
    def noise_matrix(self) -> np.ndarray:
        return self._tril @ self._tril.T

    def mutate(self, input_vector) -> np.ndarray:
        """Sample an output for ``input_vector``."""
        x = _as_vector(input_vector, self.num_inputs, "input")
        return self._coef @ x + sample_mv_normal(self._tril)

    def probability(self, output, input_vector) -> float:
        """Unnormalised Gaussian density of ``output`` given ``input_vector``."""
        y = _as_vector(output, self.num_outputs, "output")
        x = _as_vector(input_vector, self.num_inputs, "input")
        if self._inverse_noise is None:
            raise ValueError("probability is undefined for a singular covariance")
        diff = y - self._coef @ x
        relative = float(diff @ self._inverse_noise @ diff)
        return self._max_prob * math.exp(-relative)


def create_random_walk(covariance) -> LinearGaussian:
    """A model whose output is its input plus noise with ``covariance``."""
    cov = np.atleast_2d(np.asarray(covariance, dtype=float))
    if cov.ndim != 2 or cov.shape[0] != cov.shape[1]:
        raise ValueError("covariance matrix must be square")
    return LinearGaussian(np.identity(cov.shape[0]), cov)