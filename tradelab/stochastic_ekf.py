"""Ensemble (stochastic) Kalman filter."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from tradelab.linear_gaussian import LinearGaussian
from tradelab.random_sample import sample_mv_normal
from tradelab.statistics import calculate_covariance


def _cholesky(matrix: np.ndarray, name: str) -> np.ndarray:
    try:
        return np.linalg.cholesky(matrix)
    except np.linalg.LinAlgError as exc:
        raise ValueError(f"{name} must be positive definite") from exc


class StochasticEKF:
    """Kalman filter whose state covariance is estimated from an ensemble of samples."""

    def __init__(
        self,
        state_estimate,
        cov_estimate,
        state_model: LinearGaussian,
        obs_model: LinearGaussian,
        num_samples: int = 1000,
    ) -> None:
        x = np.asarray(state_estimate, dtype=float).reshape(-1)
        p = np.atleast_2d(np.asarray(cov_estimate, dtype=float))
        hidden = x.size
        if p.ndim != 2 or p.shape[0] != p.shape[1]:
            raise ValueError("covariance estimate must be square")
        if p.shape[0] != hidden:
            raise ValueError("covariance estimate must match the state size")
        if state_model.num_inputs != state_model.num_outputs:
            raise ValueError("state model must be square")
        if state_model.num_outputs != hidden:
            raise ValueError("state model must match the state size")
        if obs_model.num_inputs != hidden:
            raise ValueError("observation model must take the hidden state as input")
        if num_samples < 2:
            raise ValueError("at least two samples are required")

        self._state_model = state_model
        self._h = obs_model.coef_matrix
        self._r = obs_model.noise_matrix
        self._num_samples = num_samples
        self._prediction: Optional[np.ndarray] = None
        self._estimate = x.copy()
        observed = obs_model.num_outputs
        self._y = np.zeros(observed)
        self._s = np.zeros((observed, observed))

        tril = _cholesky(p, "covariance estimate")
        # One sample per column.
        self._samples = np.column_stack(
            [x + sample_mv_normal(tril) for _ in range(num_samples)]
        )

    @property
    def estimate(self) -> np.ndarray:
        return self._estimate.copy()

    @property
    def last_innovation(self) -> Tuple[np.ndarray, np.ndarray]:
        """The latest innovation and its covariance."""
        return self._y.copy(), self._s.copy()

    def predict(self) -> np.ndarray:
        """Propagate the samples once and return their mean; cached until the next update."""
        if self._prediction is None:
            self._samples = np.column_stack(
                [self._state_model.mutate(sample) for sample in self._samples.T]
            )
            self._prediction = self._samples.mean(axis=1)
        return self._prediction.copy()

    def update(self, obs) -> None:
        """Incorporate one observation."""
        z = np.asarray(obs, dtype=float).reshape(-1)
        if z.size != self._h.shape[0]:
            raise ValueError(f"observation must have {self._h.shape[0]} elements")

        x_pred = self.predict()
        p_pred = calculate_covariance(self._samples.T, self._samples.T)

        self._y = z - self._h @ x_pred
        self._s = self._h @ p_pred @ self._h.T + self._r
        gain = p_pred @ self._h.T @ np.linalg.inv(self._s)
        self._estimate = x_pred + gain @ self._y

        self._update_samples(z, gain)
        self._prediction = None

    def _update_samples(self, obs: np.ndarray, gain: np.ndarray) -> None:
        tril = _cholesky(self._r, "observation noise")
        self._samples = np.column_stack(
            [
                sample + gain @ (obs + sample_mv_normal(tril) - self._h @ sample)
                for sample in self._samples.T
            ]
        )