# base.py

from __future__ import annotations

import functools
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from pydaptivenlms._utils.typing import ArrayLike, RealArrayLike


@dataclass
class OptimizationResult:
    """Standard output container for adaptation runs.

    Attributes
    ----------
    outputs:
        Estimated output signal y[k] produced by the adaptive filter.
    errors:
        Error signal, e[k] = d[k] - y[k].
    coefficients:
        Coefficient history over time, shape (N + 1, n_taps). Row 0 holds the
        coefficients before the first sample.
    algorithm:
        Algorithm name (class name).
    runtime_ms:
        Runtime in milliseconds.
    error_type:
        Error semantics tag, "a_priori" for the NLMS driver.
    extra:
        Optional container for internal states / debug info.
    """

    outputs: np.ndarray
    errors: np.ndarray
    coefficients: np.ndarray
    algorithm: str
    runtime_ms: float
    error_type: str = "a_priori"
    extra: Optional[Dict[str, Any]] = None

    def mse(self) -> np.ndarray:
        """Instantaneous squared error."""
        return np.asarray(self.errors, dtype=float) ** 2

    def __repr__(self) -> str:
        return f"<OptimizationResult algo={self.algorithm} samples={len(self.outputs)}>"


def validate_input(method: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to validate and normalize `optimize` inputs.

    Accepts all of the following calling styles:

    1) Standard, preferred:
        optimize(input_signal=..., desired_signal=..., **kwargs)
        optimize(input_signal, desired_signal, **kwargs)

    2) Legacy aliases:
        optimize(x=..., d=..., **kwargs)
        optimize(x, d, **kwargs)

    Notes
    -----
    - Signals are converted with `np.asarray` and flattened to 1D (ravel).
    - Complex data raises TypeError; the engine is real-valued only.
    - Length mismatch raises ValueError.
    """
    sig = inspect.signature(method)
    param_names = set(sig.parameters.keys())

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        input_signal = None
        desired_signal = None

        if len(args) >= 1:
            input_signal = args[0]
        if len(args) >= 2:
            desired_signal = args[1]

        if "input_signal" in kwargs:
            input_signal = kwargs.pop("input_signal")
        if "desired_signal" in kwargs:
            desired_signal = kwargs.pop("desired_signal")

        if "x" in kwargs:
            input_signal = kwargs.pop("x")
        if "d" in kwargs:
            desired_signal = kwargs.pop("d")

        if input_signal is None:
            raise TypeError(
                f"{self.__class__.__name__}: missing input signal (input_signal/x)."
            )

        x = np.ravel(np.asarray(input_signal))
        if np.iscomplexobj(x):
            raise TypeError(
                f"{self.__class__.__name__} does not support complex inputs for input_signal/x."
            )
        x = x.astype(float, copy=False)

        if desired_signal is None:
            if "desired_signal" in param_names:
                raise TypeError(
                    f"{self.__class__.__name__}: missing desired signal (desired_signal/d)."
                )
            return method(self, input_signal=x, **kwargs)

        d = np.ravel(np.asarray(desired_signal))
        if np.iscomplexobj(d):
            raise TypeError(
                f"{self.__class__.__name__} does not support complex inputs for desired_signal/d."
            )
        if x.shape[0] != d.shape[0]:
            raise ValueError(
                f"Inconsistent lengths: input({x.shape[0]}) != desired({d.shape[0]})"
            )
        d = d.astype(float, copy=False)

        return method(self, input_signal=x, desired_signal=d, **kwargs)

    return wrapper


class AdaptiveFilter(ABC):
    """Abstract base class for sample-by-sample adaptive FIR filters.

    Subclasses own their history buffer and weights and implement the two
    per-sample entry points. The base class drives them over whole signals
    and keeps the coefficient trajectory.
    """

    def __init__(self) -> None:
        self.w_history: List[np.ndarray] = []

    @property
    @abstractmethod
    def w(self) -> np.ndarray:
        """Copy of the current coefficient vector."""
        raise NotImplementedError

    @abstractmethod
    def run_with_desired(self, input_sample: float, desired: float) -> float:
        """Filter one sample, compute the error from `desired`, then adapt."""
        raise NotImplementedError

    @abstractmethod
    def run_with_error(self, input_sample: float, error: float) -> float:
        """Adapt with an externally computed error, then filter one sample."""
        raise NotImplementedError

    @abstractmethod
    def _reset_state(self, w_new: Optional[RealArrayLike]) -> None:
        """Restore buffers and scalar state to their initial values."""
        raise NotImplementedError

    def _record_history(self) -> None:
        """Store a snapshot of current coefficients."""
        self.w_history.append(self.w)

    def _pack_results(
        self,
        outputs: np.ndarray,
        errors: np.ndarray,
        runtime_s: float,
        error_type: str = "a_priori",
        extra: Optional[Dict[str, Any]] = None,
    ) -> OptimizationResult:
        """Centralized output packaging to standardize results."""
        return OptimizationResult(
            outputs=np.asarray(outputs),
            errors=np.asarray(errors),
            coefficients=np.asarray(self.w_history),
            algorithm=self.__class__.__name__,
            runtime_ms=float(runtime_s) * 1000.0,
            error_type=str(error_type),
            extra=extra,
        )

    @validate_input
    def optimize(
        self,
        input_signal: np.ndarray,
        desired_signal: np.ndarray,
        verbose: bool = False,
    ) -> OptimizationResult:
        """
        Run `run_with_desired` once per sample over paired input/desired sequences.

        Parameters
        ----------
        input_signal:
            Input signal x[k].
        desired_signal:
            Desired signal d[k].
        verbose:
            If True, prints runtime.

        Returns
        -------
        OptimizationResult
            outputs:
                Filter output y[k].
            errors:
                A priori error e[k] = d[k] - y[k].
            coefficients:
                Initial coefficients followed by one snapshot per sample.
            error_type:
                "a_priori".
        """
        tic: float = perf_counter()

        n_samples: int = int(input_signal.size)
        outputs: np.ndarray = np.zeros(n_samples, dtype=float)
        errors: np.ndarray = np.zeros(n_samples, dtype=float)

        self.w_history = []
        self._record_history()

        for k in range(n_samples):
            y_k: float = self.run_with_desired(input_signal[k], desired_signal[k])
            outputs[k] = y_k
            errors[k] = desired_signal[k] - y_k
            self._record_history()

        runtime_s: float = perf_counter() - tic
        if verbose:
            print(f"[{self.__class__.__name__}] Completed in {runtime_s * 1000:.03f} ms")

        return self._pack_results(
            outputs=outputs,
            errors=errors,
            runtime_s=runtime_s,
            error_type="a_priori",
        )

    def filter_signal(self, input_signal: ArrayLike) -> np.ndarray:
        """Filter an input signal using current coefficients, without adapting.

        Starts from an all-zero past and leaves the filter state untouched.
        Regressor convention (newest sample first):
            x_k = [x[k], x[k-1], ..., x[k-M]]
        and output:
            y[k] = w^T x_k
        """
        x = np.ravel(np.asarray(input_signal))
        if np.iscomplexobj(x):
            raise TypeError(
                f"{self.__class__.__name__} does not support complex inputs for input_signal."
            )
        x = x.astype(float, copy=False)
        w = self.w
        m = int(w.size - 1)
        n_samples = x.size
        y = np.zeros(n_samples, dtype=float)

        x_padded = np.zeros(n_samples + m, dtype=float)
        x_padded[m:] = x

        for k in range(n_samples):
            x_k = x_padded[k : k + m + 1][::-1]
            y[k] = np.dot(w, x_k)

        return y

    def reset_filter(self, w_new: Optional[RealArrayLike] = None) -> None:
        """Reset coefficients, buffers and the recorded trajectory."""
        self._reset_state(w_new)
        self.w_history = []
        self._record_history()


# EOF
