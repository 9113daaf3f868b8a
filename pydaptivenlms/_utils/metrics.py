# ._utils.metrics.py
from __future__ import annotations

import numpy as np
from .typing import ArrayLike

__all__ = [
    "db10",
    "squared_error_db",
    "misalignment",
    "misalignment_db",
]

DB_EPSILON: float = 1e-40  # floor: 10*log10() never goes below -400 dB


def db10(x: ArrayLike, *, eps: float = DB_EPSILON) -> np.ndarray:
    """10*log10(eps + x), additive floor keeps the logarithm finite at x = 0."""
    x = np.asarray(x, dtype=float)
    return 10.0 * np.log10(float(eps) + x)


def squared_error_db(error: float, *, eps: float = DB_EPSILON) -> float:
    """Scalar squared error in dB: 10*log10(eps + e^2)."""
    e = float(error)
    return float(db10(e * e, eps=eps))


def misalignment(w_true: ArrayLike, w_est: ArrayLike) -> float:
    """
    Normalized weight misalignment ||w_true - w_est||^2 / ||w_true||^2.

    Raises
    ------
    ValueError
        If shapes differ or w_true is all zeros.
    """
    w_true = np.ravel(np.asarray(w_true, dtype=float))
    w_est = np.ravel(np.asarray(w_est, dtype=float))
    if w_true.shape != w_est.shape:
        raise ValueError(
            f"Misalignment shape mismatch: w_true has {w_true.shape}, w_est has {w_est.shape}"
        )
    diff = w_true - w_est
    ref = float(np.dot(w_true, w_true))
    if ref == 0.0:
        raise ValueError("Misalignment is undefined for an all-zero reference filter.")
    return float(np.dot(diff, diff)) / ref


def misalignment_db(w_true: ArrayLike, w_est: ArrayLike, *, eps: float = DB_EPSILON) -> float:
    """Misalignment in dB: 10*log10(eps + misalignment)."""
    return float(db10(misalignment(w_true, w_est), eps=eps))
