"""Linear Kalman filter."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from tradelab.linear_gaussian import LinearGaussian


class KalmanFilter:
    """Kalman filter over linear Gaussian state and observation models."""

    def __init__(
        self,
        state_estimate,
        cov_estimate,
        state_model: LinearGaussian,
        obs_model: LinearGaussian,
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

        self._f = state_model.coef_matrix
        self._h = obs_model.coef_matrix
        self._q = state_model.noise_matrix
        self._r = obs_model.noise_matrix
        self._x = x
        self._p = p
        observed = obs_model.num_outputs
        self._y = np.zeros(observed)
        self._s = np.zeros((observed, observed))

    @property
    def estimate(self) -> np.ndarray:
        return self._x.copy()

    @property
    def last_innovation(self) -> Tuple[np.ndarray, np.ndarray]:
        """The latest innovation and its covariance."""
        return self._y.copy(), self._s.copy()

    def predict(self) -> np.ndarray:
        """One-step prediction of the hidden state."""
        return self._f @ self._x

    def update(self, obs) -> None:
        """Incorporate one observation."""
        z = np.asarray(obs, dtype=float).reshape(-1)
        if z.size != self._h.shape[0]:
            raise ValueError(f"observation must have {self._h.shape[0]} elements")

        x_pred = self.predict()
        p_pred = self._f.T @ self._p @ self._f + self._q

        self._y = z - self._h @ x_pred
        self._s = self._h @ p_pred @ self._h.T + self._r
        gain = p_pred @ self._h.T @ np.linalg.inv(self._s)
        self._x = x_pred + gain @ self._y
        self._p = (np.identity(self._x.size) - gain @ self._h) @ self._p