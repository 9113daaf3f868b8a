# pydaptivenlms/_utils/plotting.py
from __future__ import annotations

import numpy as np

from .system_id import SystemIDReport

__all__ = ["plot_system_id_results"]


def plot_system_id_results(report: SystemIDReport, *, show: bool = True):
    """
    One-window plot (3x1):
      (1) reference vs adaptive weights (stem)
      (2) misalignment learning curve [dB]
      (3) squared error learning curve [dB]

    Returns the matplotlib Figure.
    """
    import matplotlib.pyplot as plt  # local import avoids hard dependency in non-plot contexts

    cfg = report.config
    w_ref = np.asarray(report.reference_weights, dtype=float)
    w_hat = np.asarray(report.adaptive_weights, dtype=float)
    taps = np.arange(1, w_ref.size + 1)
    k = np.arange(1, report.misalignment_db.size + 1)

    fig, (ax1, ax2, ax3) = plt.subplots(3, 1, figsize=(10, 10))

    ax1.stem(taps, w_ref, linefmt="b-", markerfmt="bx", basefmt="k-", label="reference")
    ax1.stem(taps, w_hat, linefmt="r-", markerfmt="ro", basefmt="k-", label="adaptive")
    ax1.set_title(
        f"Reference and Adaptive Weights after {cfg.iterations} Iterations, "
        f"StepSize = {cfg.step_size:g}"
    )
    ax1.set_xlabel("Weight #")
    ax1.set_ylabel("Weight Value")
    ax1.legend(loc="best")
    ax1.grid(True, alpha=0.3)

    ax2.plot(k, report.misalignment_db)
    ax2.axhline(cfg.misalignment_threshold_db, color="black", linestyle="--", alpha=0.5)
    ax2.set_title("||w_ref - w||^2 / ||w_ref||^2 vs Iteration #")
    ax2.set_xlabel("Iteration #")
    ax2.set_ylabel("dB")
    ax2.grid(True, alpha=0.3)

    ax3.plot(k, report.squared_error_db)
    ax3.axhline(cfg.squared_error_threshold_db, color="black", linestyle="--", alpha=0.5)
    ax3.set_title("(desired - y)^2 vs Iteration #")
    ax3.set_xlabel("Iteration #")
    ax3.set_ylabel("dB")
    ax3.grid(True, alpha=0.3)

    fig.tight_layout()
    if show:
        plt.show()
    return fig
