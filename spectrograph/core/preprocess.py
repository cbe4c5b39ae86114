"""
spectrograph/core/preprocess.py — Sample-buffer preparation before framing.

All functions are pure: they take a sample array and return a new one.
"""

from __future__ import annotations

import numpy as np

from spectrograph.core.errors import IncompleteDataError, InvalidDivisorError

PCM16_MAX: float = 32767.0
"""Full-scale value of signed 16-bit PCM (i16::MAX)."""


def _require_samples(samples: np.ndarray, step: str) -> np.ndarray:
    arr = np.asarray(samples, dtype=np.float32)
    if arr.size == 0:
        raise IncompleteDataError(f"load data before calling {step}")
    return arr


def from_pcm16(samples: np.ndarray) -> np.ndarray:
    """Convert signed 16-bit PCM to float32 in -1.0..1.0."""
    return np.asarray(samples, dtype=np.int16).astype(np.float32) / np.float32(PCM16_MAX)


def downsample(samples: np.ndarray, sample_rate: int, divisor: int) -> tuple[np.ndarray, int]:
    """Reduce the sample rate by averaging blocks of `divisor` samples.

    A cheap way of speeding up the FFT when high frequencies do not matter.
    Trailing samples that do not fill a whole block are dropped.

    Args:
        samples: Input samples.
        sample_rate: Input sample rate in Hz.
        divisor: Block length; 1 returns the input unchanged.

    Returns:
        ``(samples, sample_rate // divisor)``.

    Raises:
        InvalidDivisorError: If `divisor` < 1.
        IncompleteDataError: If `samples` is empty.
    """
    if divisor < 1:
        raise InvalidDivisorError(divisor)
    arr = _require_samples(samples, "downsample")
    if divisor == 1:
        return arr, sample_rate

    n_blocks = arr.size // divisor
    reduced = arr[: n_blocks * divisor].reshape(n_blocks, divisor).mean(axis=1, dtype=np.float64)
    return reduced.astype(np.float32), sample_rate // divisor


def scale(samples: np.ndarray, factor: float) -> np.ndarray:
    """Multiply every sample by `factor`."""
    arr = _require_samples(samples, "scale")
    if factor == 1.0:
        return arr
    return (arr * np.float32(factor)).astype(np.float32)


def normalise(samples: np.ndarray) -> np.ndarray:
    """Scale so the peak absolute amplitude is 1.0. Silence is returned as-is."""
    arr = _require_samples(samples, "normalise")
    peak = float(np.max(np.abs(arr)))
    if peak == 0.0:
        return arr
    return (arr / np.float32(peak)).astype(np.float32)
