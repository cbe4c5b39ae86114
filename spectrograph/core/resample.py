"""
spectrograph/core/resample.py — 2-D resize of a single-channel float buffer.

Uses Pillow's Lanczos filter (order 3, separable) on a 32-bit float
("F" mode) image, so no precision is lost to 8-bit quantisation before
colour mapping. Works for both up- and down-sampling on either axis.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from spectrograph.core.errors import DegenerateError


def resize(buf: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize `buf` to ``(height, width)`` with a Lanczos-3 filter.

    Args:
        buf: 2-D array of shape ``(rows, cols)``.
        width: Output columns.
        height: Output rows.

    Returns:
        float32 array of shape ``(height, width)``.

    Raises:
        DegenerateError: If the input or the requested output has a zero
                         dimension.
    """
    if buf.ndim != 2 or buf.shape[0] == 0 or buf.shape[1] == 0:
        raise DegenerateError(f"cannot resize a buffer of shape {buf.shape}")
    if width < 1 or height < 1:
        raise DegenerateError(f"cannot resize to {width}x{height}")

    src = np.ascontiguousarray(buf, dtype=np.float32)
    if src.shape == (height, width):
        return src.copy()

    img = Image.fromarray(src)  # 2-D float32 -> mode "F"
    resized = img.resize((width, height), resample=Image.Resampling.LANCZOS)
    return np.asarray(resized, dtype=np.float32).copy()
