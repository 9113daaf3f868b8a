# tests/conftest.py

from __future__ import annotations

import numpy as np
import pytest
from scipy import signal

from pydaptivenlms.base import OptimizationResult


def _last_coefficients(obj):
    """
    Extract 'final' coefficients from an OptimizationResult or a plain array.

    OptimizationResult.coefficients is (N + 1, n_taps): the last row is final.
    Anything else is returned as-is (assumed final coefficients).
    """
    if isinstance(obj, OptimizationResult):
        coeffs = np.asarray(obj.coefficients)
        if coeffs.ndim >= 2:
            return coeffs[-1]
        return coeffs
    return np.asarray(obj)


@pytest.fixture
def calculate_msd():
    """Mean-square deviation (MSD) between true coefficients and an estimate."""
    def _calc(w_true, w_est):
        w_true_flat = np.asarray(w_true, dtype=float).reshape(-1)
        w_hat_flat = np.asarray(_last_coefficients(w_est), dtype=float).reshape(-1)

        if w_true_flat.shape != w_hat_flat.shape:
            raise ValueError(
                f"MSD shape mismatch: w_true has {w_true_flat.shape}, w_est has {w_hat_flat.shape}"
            )

        return float(np.mean((w_true_flat - w_hat_flat) ** 2))

    return _calc


@pytest.fixture
def system_data_real():
    rng = np.random.default_rng(42)
    n_samples = 3000

    w_optimal = np.array([0.4, -0.2, 0.1, 0.05], dtype=np.float64)
    length = int(len(w_optimal))

    x = rng.standard_normal(n_samples).astype(np.float64, copy=False)
    d_ideal = signal.lfilter(w_optimal, 1, x).astype(np.float64, copy=False)

    return {
        "x": x,
        "d_ideal": d_ideal,
        "w_optimal": w_optimal,
        "length": length,
        "n_samples": n_samples,
    }


@pytest.fixture
def uniform_stream():
    """Short white uniform stream on (-1, 1) with a matching desired signal."""
    rng = np.random.default_rng(7)
    n_samples = 400
    w_plant = rng.uniform(-1.0, 1.0, size=8)
    x = rng.uniform(-1.0, 1.0, size=n_samples)
    d = signal.lfilter(w_plant, 1, x)
    return {"x": x, "d": d, "w_plant": w_plant, "length": int(w_plant.size)}
