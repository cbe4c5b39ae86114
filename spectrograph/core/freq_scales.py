"""
spectrograph/core/freq_scales.py — Frequency-axis scaling for the output image.

A scaler maps output row ``y`` (row 0 = lowest frequency) to a half-open
range ``[f1, f2)`` in source-bin space. Consecutive rows are contiguous:
``scale(y)[1] == scale(y + 1)[0]``, and together they cover
``[0, source_height]``.

Scaler constructors take ``(target_height, source_height)``: the number of
output rows first, then the number of source bins. ``LinearFreq(10, 5)``
therefore spreads 5 bins over 10 rows (half a bin per row).
`FreqScaler.create()` takes keyword-friendly ``(source, target)`` order.

Log scale:
    edge(y) = S - c * ln(T + 1 - y),  c = S / ln(T + 1)

    edge(0) = 0 and edge(T) = S exactly, so the formula needs no special
    case at either end. Row widths grow with y: low frequencies get the
    finest resolution, which is what a log-frequency display is for.
"""

from __future__ import annotations

import math
from typing import Protocol

from spectrograph.core.errors import InvalidInputError
from spectrograph.core.types import FrequencyScale


class FreqScalerProtocol(Protocol):
    """The ``y -> (f1, f2)`` contract shared by every scaler."""

    target_height: float
    source_height: float

    def scale(self, y: int) -> tuple[float, float]: ...


def _check_heights(target_height: float, source_height: float) -> None:
    if target_height <= 0:
        raise InvalidInputError(f"target_height must be positive, got {target_height}")
    if source_height <= 0:
        raise InvalidInputError(f"source_height must be positive, got {source_height}")


class LinearFreq:
    """Scale the frequency axis linearly.

    Args:
        target_height: Number of output rows.
        source_height: Number of source bins (half the FFT length).
    """

    def __init__(self, target_height: float, source_height: float) -> None:
        _check_heights(target_height, source_height)
        self.target_height = float(target_height)
        self.source_height = float(source_height)
        self._ratio = self.source_height / self.target_height

    @classmethod
    def init(cls, target_height: float, source_height: float) -> LinearFreq:
        return cls(target_height, source_height)

    def scale(self, y: int) -> tuple[float, float]:
        # clamp rounding overshoot on the last row
        return (self._ratio * y, min(self._ratio * (y + 1), self.source_height))


class LogFreq:
    """Scale the frequency axis logarithmically (natural log).

    Args:
        target_height: Number of output rows.
        source_height: Number of source bins (half the FFT length).
    """

    def __init__(self, target_height: float, source_height: float) -> None:
        _check_heights(target_height, source_height)
        self.target_height = float(target_height)
        self.source_height = float(source_height)
        self._log_coef = self.source_height / math.log(self.target_height + 1.0)

    @classmethod
    def init(cls, target_height: float, source_height: float) -> LogFreq:
        return cls(target_height, source_height)

    def _edge(self, y: int) -> float:
        edge = self.source_height - self._log_coef * math.log(self.target_height + 1.0 - y)
        # clamp rounding overshoot at either end
        return min(max(edge, 0.0), self.source_height)

    def scale(self, y: int) -> tuple[float, float]:
        return (self._edge(y), self._edge(y + 1))


class FreqScaler:
    """Factory for frequency scalers."""

    @staticmethod
    def create(
        freq_scale: FrequencyScale,
        source_height: float,
        target_height: float,
    ) -> LinearFreq | LogFreq:
        """Create the scaler for `freq_scale`.

        Args:
            freq_scale: Which mapping to use.
            source_height: Number of source bins, i.e. the Nyquist-limited half
                           of the FFT.
            target_height: Output grid height in rows/pixels.
        """
        if freq_scale is FrequencyScale.LOG:
            return LogFreq(target_height=target_height, source_height=source_height)
        return LinearFreq(target_height=target_height, source_height=source_height)
