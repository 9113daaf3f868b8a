#  lms.nlms.py
#
#       Implements the Normalized LMS algorithm for REAL valued data as a
#       sample-by-sample engine over a circular input buffer.
#       Two entry points are provided: desired signal input and error signal
#       input (e.g. an error microphone in active noise control).

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from pydaptivenlms.base import AdaptiveFilter
from pydaptivenlms._utils.typing import RealArrayLike


def squared_norm(x: RealArrayLike) -> float:
    """Squared L2-norm of a buffer: the sum of every element squared."""
    x = np.asarray(x, dtype=float)
    return float(np.dot(x, x))


@dataclass(frozen=True)
class NLMSConfig:
    """
    Construction-time parameters of an NLMS engine.

    Parameters
    ----------
    step_size : float
        Adaptation rate ``mu``. Must be >= 0 (0 disables adaptation).
    regularization : float
        Constant ``delta`` added to the input energy. Must be >= 0.
    length : int
        Number of taps (history depth and weight count). Must be > 0.
    """

    step_size: float
    regularization: float
    length: int

    def __post_init__(self) -> None:
        if (
            isinstance(self.length, bool)
            or not isinstance(self.length, (int, np.integer))
            or self.length <= 0
        ):
            raise ValueError(f"length must be a positive integer. Got {self.length!r}.")
        if not (np.isfinite(self.step_size) and self.step_size >= 0.0):
            raise ValueError(f"step_size must be finite and >= 0. Got {self.step_size!r}.")
        if not (np.isfinite(self.regularization) and self.regularization >= 0.0):
            raise ValueError(
                f"regularization must be finite and >= 0. Got {self.regularization!r}."
            )


@dataclass
class NLMSState:
    """Mutable state of an NLMS engine: circular buffer, cursor, weights and last error."""

    history: np.ndarray
    history_index: int
    weights: np.ndarray
    error: float = 0.0


def _as_buffer(values: Optional[RealArrayLike], length: int, name: str) -> np.ndarray:
    if values is None:
        return np.zeros(length, dtype=float)
    arr = np.ravel(np.asarray(values))
    if np.iscomplexobj(arr):
        raise TypeError(f"NLMS does not support complex values for {name}.")
    if arr.size != length:
        raise ValueError(f"{name} must have exactly {length} elements. Got {arr.size}.")
    # always a private copy: the engine never aliases caller memory
    return np.array(arr, dtype=float)


class NLMS(AdaptiveFilter):
    """
    Normalized Least-Mean Squares (NLMS) engine with a circular input buffer.

    Each call performs one complete adaptation cycle. The newest input
    overwrites the oldest sample in ``history``; the cursor is wrapped to 0
    before every access that would read past the end of the buffer.

    Parameters
    ----------
    length : int
        Number of filter taps ``N``.
    step_size : float, optional
        Adaptation rate ``mu``. Default is 0.3.
    regularization : float, optional
        Regularization ``delta`` in the normalization. Default is 1e-10.
    w_init : array_like of float, optional
        Initial weights, shape ``(N,)``. If None, zeros.
    history_init : array_like of float, optional
        Initial buffer contents, shape ``(N,)``. If None, zeros.
    history_index : int, optional
        Initial cursor position, ``0 <= history_index <= N``. Default is 0.

    Notes
    -----
    With ``p`` the cursor right after the newest sample was written, the
    filter pass reads the buffer from ``p`` onward (oldest sample first) while
    walking the weights from ``N-1`` down to ``0``, so weight ``i`` always
    multiplies the sample that is ``i`` steps old:

    .. math::
        y[k] = \\sum_{i=0}^{N-1} w_i \\, x[k-i].

    The update walks the buffer and the weights in exactly the same order:

    .. math::
        w_i \\leftarrow w_i + \\frac{\\mu}{\\delta + \\|x_k\\|^2} \\, e[k] \\, x[k-i].

    ``\\|x_k\\|^2`` is summed over the whole buffer on every cycle. A running
    add/subtract energy would accumulate floating point error over long
    streams.

    ``run_with_desired`` filters and then adapts on the same window.
    ``run_with_error`` adapts on the previous window (the one that produced
    the external error) and then filters the new sample with the updated
    weights.
    """

    def __init__(
        self,
        length: int,
        step_size: float = 0.3,
        regularization: float = 1e-10,
        w_init: Optional[RealArrayLike] = None,
        history_init: Optional[RealArrayLike] = None,
        history_index: int = 0,
    ) -> None:
        super().__init__()
        self._config = NLMSConfig(
            step_size=float(step_size),
            regularization=float(regularization),
            length=length,
        )
        n = int(length)
        if not 0 <= int(history_index) <= n:
            raise ValueError(f"history_index must lie in [0, {n}]. Got {history_index!r}.")

        self._state = NLMSState(
            history=_as_buffer(history_init, n, "history_init"),
            history_index=int(history_index),
            weights=_as_buffer(w_init, n, "w_init"),
            error=0.0,
        )
        self._record_history()

    # ------------------------------------------------------------------
    # read-only views
    # ------------------------------------------------------------------

    @property
    def config(self) -> NLMSConfig:
        return self._config

    @property
    def step_size(self) -> float:
        return self._config.step_size

    @property
    def regularization(self) -> float:
        return self._config.regularization

    @property
    def length(self) -> int:
        return int(self._config.length)

    @property
    def w(self) -> np.ndarray:
        return self._state.weights.copy()

    @property
    def history(self) -> np.ndarray:
        """Copy of the circular buffer in storage order (not age order)."""
        return self._state.history.copy()

    @property
    def history_index(self) -> int:
        return self._state.history_index

    @property
    def error(self) -> float:
        return self._state.error

    # ------------------------------------------------------------------
    # entry points
    # ------------------------------------------------------------------

    def run_with_desired(self, input_sample: float, desired: float) -> float:
        """
        Filter ``input_sample``, set ``error = desired - output``, then adapt.

        Returns
        -------
        float
            Filter output ``y[k]`` computed with the weights before the update.
        """
        output = self._filter(input_sample)
        self._state.error = float(desired) - output
        self._adapt_weights()
        return output

    def run_with_error(self, input_sample: float, error: float) -> float:
        """
        Adapt with the externally computed ``error``, then filter ``input_sample``.

        The update uses the buffer as it stood before ``input_sample`` is
        inserted. The returned output uses the updated weights.
        """
        self._state.error = float(error)
        self._adapt_weights()
        return self._filter(input_sample)

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    def _next_index(self) -> int:
        """Wrap-before-use cursor access: returns the index to use and advances."""
        st = self._state
        if st.history_index >= self._config.length:
            st.history_index = 0
        idx = st.history_index
        st.history_index += 1
        return idx

    def _filter(self, input_sample: float) -> float:
        st = self._state
        st.history[self._next_index()] = float(input_sample)

        output = 0.0
        for i in range(self._config.length - 1, -1, -1):
            output += float(st.weights[i]) * float(st.history[self._next_index()])
        return output

    def _adapt_weights(self) -> None:
        st = self._state
        energy = squared_norm(st.history)
        # float64 division: a zero denominator yields inf/nan instead of raising
        norm_step = float(
            np.float64(self._config.step_size) / np.float64(self._config.regularization + energy)
        )

        for i in range(self._config.length - 1, -1, -1):
            st.weights[i] += norm_step * st.error * float(st.history[self._next_index()])

    def _reset_state(self, w_new: Optional[RealArrayLike]) -> None:
        n = self.length
        self._state = NLMSState(
            history=np.zeros(n, dtype=float),
            history_index=0,
            weights=_as_buffer(w_new, n, "w_new"),
            error=0.0,
        )


# EOF
