"""
spectrograph/core/window.py — Window functions applied to each FFT frame.

Each window is a pure function ``(index, frame_length) -> weight``. The index
may be a scalar or a numpy array, so the same function computes one weight
or a whole frame's weight vector.

The tapered windows divide by ``frame_length - 1``; a frame of length 1 is
rejected here, and the pipeline itself only ever sees frames longer than 16
samples (see core/config.py).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np

from spectrograph.core.errors import InvalidInputError
from spectrograph.core.types import WindowFunction

WindowFn = Callable[[Any, int], Any]
"""Signature shared by every window: (index or index array, frame_length) -> weight(s)."""

# 4-term Blackman-Harris coefficients
_BH_A0 = 0.35875
_BH_A1 = 0.48829
_BH_A2 = 0.14128
_BH_A3 = 0.01168


def _theta(index: Any, frame_length: int) -> Any:
    if frame_length <= 1:
        raise InvalidInputError(f"frame_length must be > 1 for a tapered window, got {frame_length}")
    return 2.0 * np.pi * np.asarray(index, dtype=np.float64) / (frame_length - 1)


def rectangular(index: Any, frame_length: int) -> Any:
    """Constant 1.0 — no tapering."""
    return np.ones_like(np.asarray(index, dtype=np.float64)) if np.ndim(index) else 1.0


def hann(index: Any, frame_length: int) -> Any:
    """Hann window: ``0.5 * (1 - cos(2πn / (N - 1)))``."""
    weight = 0.5 * (1.0 - np.cos(_theta(index, frame_length)))
    return weight if np.ndim(weight) else float(weight)


def blackman_harris(index: Any, frame_length: int) -> Any:
    """4-term Blackman-Harris window (-92 dB side lobes)."""
    theta = _theta(index, frame_length)
    weight = (
        _BH_A0
        - _BH_A1 * np.cos(theta)
        + _BH_A2 * np.cos(2.0 * theta)
        - _BH_A3 * np.cos(3.0 * theta)
    )
    return weight if np.ndim(weight) else float(weight)


_WINDOWS: dict[WindowFunction, WindowFn] = {
    WindowFunction.RECTANGULAR: rectangular,
    WindowFunction.HANN: hann,
    WindowFunction.BLACKMAN_HARRIS: blackman_harris,
}


def resolve_window(window: WindowFunction) -> WindowFn:
    """Return the pure window function for a `WindowFunction` variant."""
    return _WINDOWS[window]


def window_weights(window: WindowFunction | WindowFn, frame_length: int) -> np.ndarray:
    """Compute the full weight vector for one frame.

    Args:
        window: A `WindowFunction` variant or any callable with the
                ``(index, frame_length)`` signature.
        frame_length: Number of samples in the frame.

    Returns:
        float32 array of shape ``(frame_length,)``.
    """
    fn = resolve_window(window) if isinstance(window, WindowFunction) else window
    indices = np.arange(frame_length, dtype=np.float64)
    weights = np.broadcast_to(np.asarray(fn(indices, frame_length), dtype=np.float64), indices.shape)
    return weights.astype(np.float32)
