"""
spectrograph/core/integrate.py — Fractional-bin integration and frequency remapping.

The source spectrum is treated as a step function (bin i holds value
spec[i] over [i, i+1)). Remapping to a different number of rows takes the
*area* under that step function over each row's ``[f1, f2)`` range, so
energy is neither dropped nor double counted when compressing or
stretching the frequency axis.

`integrate()` is the scalar reference. `integration_weights()` expresses the
same arithmetic as a weight vector, and `remap_frequency()` stacks one
weight vector per output row into a sparse (CSR) matrix so an entire
spectrogram is remapped with a single matrix product. Each row only touches
the few bins inside its range, so the product costs O(nnz * width).
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
import scipy.sparse

from spectrograph.core.errors import InvalidInputError
from spectrograph.core.freq_scales import FreqScalerProtocol

_EDGE_EPS = 1e-6  # keeps an exact integer upper bound out of the next bin


def _bin_span(x1: float, x2: float) -> tuple[int, int]:
    return math.floor(x1), math.floor(x2 - _EDGE_EPS)


def integrate(x1: float, x2: float, spec: Sequence[float] | np.ndarray) -> float:
    """Integrate `spec` from `x1` to `x2` (fractional indices).

    Args:
        x1: Lower fractional index into `spec`.
        x2: Upper fractional index into `spec`.
        spec: Per-bin values.

    Returns:
        Area under the step function over ``[x1, x2)``. 0.0 when
        ``x2 <= x1``.
    """
    if x2 <= x1:
        return 0.0
    i1, i2 = _bin_span(x1, x2)

    if i1 >= i2:
        # range lies inside one bin
        return float(spec[i1]) * (x2 - x1)

    result = float(spec[i1]) * ((i1 + 1) - x1)
    for i in range(i1 + 1, min(i2, len(spec))):
        result += float(spec[i])
    last = min(i2, len(spec) - 1)
    result += float(spec[last]) * (x2 - last)
    return result


def integration_weights(x1: float, x2: float, n: int) -> np.ndarray:
    """Weights ``w`` such that ``w @ spec == integrate(x1, x2, spec)``.

    Args:
        x1: Lower fractional index.
        x2: Upper fractional index.
        n: Length of the spectrum the weights apply to.

    Returns:
        float64 array of shape ``(n,)``.
    """
    weights = np.zeros(n, dtype=np.float64)
    if x2 <= x1:
        return weights
    i1, i2 = _bin_span(x1, x2)

    if i1 >= i2:
        weights[i1] = x2 - x1
        return weights

    weights[i1] += (i1 + 1) - x1
    weights[i1 + 1 : i2] += 1.0
    last = min(i2, n - 1)
    weights[last] += x2 - last
    return weights


def remap_matrix(
    scaler: FreqScalerProtocol,
    target_height: int,
    source_height: int,
) -> scipy.sparse.csr_matrix:
    """Stack the per-row integration weights for `scaler`.

    Returns:
        float64 CSR matrix of shape ``(target_height, source_height)``.
    """
    indptr = [0]
    indices: list[np.ndarray] = []
    data: list[np.ndarray] = []
    for y in range(target_height):
        weights = integration_weights(*scaler.scale(y), source_height)
        nonzero = np.flatnonzero(weights)
        indices.append(nonzero)
        data.append(weights[nonzero])
        indptr.append(indptr[-1] + nonzero.size)

    return scipy.sparse.csr_matrix(
        (np.concatenate(data), np.concatenate(indices), np.asarray(indptr)),
        shape=(target_height, source_height),
    )


def remap_frequency(
    values: np.ndarray,
    scaler: FreqScalerProtocol,
    target_height: int,
) -> np.ndarray:
    """Remap the rows (frequency axis) of a spectrogram to `target_height` rows.

    Args:
        values: Array of shape ``(source_height, width)``, row 0 = lowest bin.
        scaler: Maps each output row to its ``[f1, f2)`` source range.
        target_height: Number of output rows.

    Returns:
        float32 array of shape ``(target_height, width)``, row 0 = lowest
        frequency.

    Raises:
        InvalidInputError: If `values` is not 2-D or `target_height` < 1.
    """
    if values.ndim != 2:
        raise InvalidInputError(f"values must be 2-D, got shape {values.shape}")
    if target_height < 1:
        raise InvalidInputError(f"target_height must be positive, got {target_height}")

    weights = remap_matrix(scaler, target_height, values.shape[0])
    return np.asarray(weights @ values, dtype=np.float32)
