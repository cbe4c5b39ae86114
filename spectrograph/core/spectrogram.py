"""
spectrograph/core/spectrogram.py — The computed spectrogram and its renderers.

`Spectrogram` is the canonical intermediate artifact: a dense
``(height, width)`` float32 matrix (frequency rows × time columns) produced
once by `SpecCompute` and rendered any number of times.

Render pipeline (steps after the FFT/dB stage):
    remap_frequency()   — fractional-bin integration onto the output rows
    flip rows           — the ONLY place rows are reversed: after this,
                          row 0 is the highest frequency (image orientation)
    resize()            — Lanczos-3 to the output width × height
    gradient            — scalar → RGBA (or str for CSV)

Rendering never mutates the matrix (its array is read-only) or the
caller's `ColourGradient` (a domain-adjusted copy is used).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from spectrograph.core.colour_gradient import ColourGradient
from spectrograph.core.errors import DegenerateError, InvalidInputError
from spectrograph.core.freq_scales import FreqScaler
from spectrograph.core.integrate import remap_frequency
from spectrograph.core.resample import resize
from spectrograph.core.types import FrequencyScale

UNITS: frozenset[str] = frozenset({"db", "magnitude"})


def get_min_max(data: np.ndarray) -> tuple[float, float]:
    """Return ``(min, max)`` of `data` as Python floats."""
    return float(np.min(data)), float(np.max(data))


@dataclass(frozen=True, eq=False)
class Spectrogram:
    """A computed spectrogram.

    Invariants:
        data.shape == (height, width), data.size == width * height
        row 0 = DC bin, row height-1 = highest bin below Nyquist
        data is read-only
    """

    data: np.ndarray
    """float32 matrix, shape (height, width)."""

    num_bins: int
    """FFT length the matrix was computed with. height == num_bins // 2."""

    step_size: int
    """Frame stride in samples."""

    sample_rate: int
    """Sample rate of the source signal in Hz."""

    unit: str = "db"
    """'db' (relative decibels) or 'magnitude' (linear |FFT|)."""

    def __post_init__(self) -> None:
        if self.unit not in UNITS:
            raise InvalidInputError(f"unit must be one of {sorted(UNITS)}, got {self.unit!r}")
        arr = np.array(self.data, dtype=np.float32, copy=True)
        if arr.ndim != 2:
            raise InvalidInputError(f"spectrogram data must be 2-D, got shape {arr.shape}")
        arr.setflags(write=False)
        object.__setattr__(self, "data", arr)

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    def __len__(self) -> int:
        return self.data.size

    def frequency_of_row(self, row: float) -> float:
        """Frequency in Hz at the lower edge of matrix row `row`."""
        return row * self.sample_rate / self.num_bins

    def get_min_max(self) -> tuple[float, float]:
        """``(min, max)`` over the whole matrix, e.g. for a dB legend."""
        return get_min_max(self.data)

    def row_iter(self, row_idx: int) -> Iterator[float]:
        """Iterate over the values of one matrix row (row 0 = DC)."""
        for value in self.data[row_idx]:
            yield float(value)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_buffer(self, freq_scale: FrequencyScale, img_width: int, img_height: int) -> np.ndarray:
        """Map the spectrogram onto an ``img_height × img_width`` grid.

        Scales the frequency axis to `img_height` rows with `freq_scale`,
        flips it so low frequencies end up at the bottom, then resamples to
        `img_width` columns.

        Returns:
            float32 array of shape ``(img_height, img_width)``, row 0 = top
            (highest frequency).

        Raises:
            DegenerateError: If either output dimension is < 1.
        """
        if img_width < 1 or img_height < 1:
            raise DegenerateError(f"cannot render to {img_width}x{img_height}")
        scaler = FreqScaler.create(freq_scale, source_height=self.height, target_height=img_height)
        remapped = remap_frequency(self.data, scaler, img_height)
        return resize(remapped[::-1], img_width, img_height)

    def to_rgba(
        self,
        freq_scale: FrequencyScale,
        gradient: ColourGradient,
        img_width: int,
        img_height: int,
        domain: tuple[float, float] | None = None,
    ) -> np.ndarray:
        """Render to RGBA pixels.

        Args:
            freq_scale: Frequency axis mapping.
            gradient: Colour gradient. Its colours are used; its domain is
                      replaced by `domain` (or the buffer's min/max) on a copy.
            img_width: Output width in pixels.
            img_height: Output height in pixels.
            domain: Forced ``(min, max)`` for the gradient.

        Returns:
            uint8 array of shape ``(img_height, img_width, 4)``.
        """
        buf = self.to_buffer(freq_scale, img_width, img_height)
        lo, hi = domain if domain is not None else get_min_max(buf)
        return gradient.with_domain(lo, hi).get_colours(buf)

    def to_rgba_in_memory(
        self,
        freq_scale: FrequencyScale,
        gradient: ColourGradient,
        img_width: int,
        img_height: int,
        domain: tuple[float, float] | None = None,
    ) -> bytes:
        """`to_rgba` as a flat row-major byte string (``w * h * 4`` bytes)."""
        return self.to_rgba(freq_scale, gradient, img_width, img_height, domain).tobytes()

    def to_rows(self, freq_scale: FrequencyScale, cols: int, rows: int) -> list[list[str]]:
        """Render to a row-major grid of value strings (top row = highest frequency)."""
        buf = self.to_buffer(freq_scale, cols, rows)
        return [[str(v) for v in row] for row in buf]
