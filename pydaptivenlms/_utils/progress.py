# pydaptivenlms/_utils/progress.py
from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "ProgressConfig",
    "report_iteration",
    "report_pass_fail",
]


def _should_print(it: int, iterations: int, print_every: int) -> bool:
    """Print every N iterations and on last."""
    is_last = it >= int(iterations)
    pe = int(print_every)
    if pe <= 0:
        return is_last
    return is_last or ((it % pe) == 0)


@dataclass
class ProgressConfig:
    """
    Per-iteration printing configuration for system identification runs.

    Parameters
    ----------
    verbose_progress : bool
        If True, prints iteration metrics.
    print_every : int
        Print every `print_every` iterations (also prints on the last one).
        1 reports every iteration; 0 or less reports only the last one.
    """
    verbose_progress: bool = True
    print_every: int = 1


def report_iteration(
    *,
    it: int,
    iterations: int,
    misalignment_db: float,
    squared_error_db: float,
    cfg: ProgressConfig,
) -> None:
    """
    Print the convergence metrics of one iteration.

    Parameters
    ----------
    it : int
        Iteration number (1-based).
    iterations : int
        Total number of iterations.
    misalignment_db, squared_error_db : float
        Metrics for this iteration, already in dB.
    cfg : ProgressConfig
        Printing configuration.
    """
    if not cfg.verbose_progress:
        return
    if not _should_print(it, iterations, cfg.print_every):
        return

    print(f"Iteration: {int(it)}")
    print(f"Misalignment (dB): {misalignment_db:f}")
    print(f"Squared error (dB): {squared_error_db:f}")


def report_pass_fail(
    *,
    misalignment_db: float,
    squared_error_db: float,
    misalignment_threshold_db: float,
    squared_error_threshold_db: float,
) -> bool:
    """Print PASS/FAIL for both metrics; returns True when both pass. NaN fails."""
    mis_ok = bool(misalignment_db <= misalignment_threshold_db)
    se_ok = bool(squared_error_db <= squared_error_threshold_db)

    if mis_ok:
        print(f"PASS: Misalignment < {misalignment_threshold_db:.0f}")
    else:
        print(f"FAIL: Misalignment !< {misalignment_threshold_db:.0f}")

    if se_ok:
        print(f"PASS: Squared Error < {squared_error_threshold_db:.0f}")
    else:
        print(f"FAIL: Squared Error !< {squared_error_threshold_db:.0f}")

    return mis_ok and se_ok
