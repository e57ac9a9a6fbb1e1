"""Sample statistics."""

from __future__ import annotations

import numpy as np


def _as_columns(data) -> np.ndarray:
    arr = np.asarray(data, dtype=float)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ValueError("data must be one- or two-dimensional")
    return arr


def calculate_covariance(x, y) -> np.ndarray:
    """Sample cross-covariance of the columns of ``x`` and ``y`` (rows are observations)."""
    x = _as_columns(x)
    y = _as_columns(y)
    if x.shape[0] != y.shape[0]:
        raise ValueError("x and y must have the same number of rows")
    n = x.shape[0]
    if n < 2:
        raise ValueError("at least two observations are required")
    centred_x = x - x.mean(axis=0)
    centred_y = y - y.mean(axis=0)
    return (centred_x.T @ centred_y) / (n - 1)