"""
Configuration dataclasses for the spectrogram pipeline.

These immutable config objects decouple parameter passing from function
signatures, making it easy to define standard configurations and reuse them
across the builder, the CLI and the exporters.
"""

from __future__ import annotations

from dataclasses import dataclass

from spectrograph.core.errors import DegenerateError, InvalidInputError
from spectrograph.core.types import FrequencyScale, WindowFunction
from spectrograph.core.window import WindowFn

MIN_NUM_BINS: int = 17
"""Smallest accepted FFT length. Shorter frames give a useless frequency axis."""


@dataclass(frozen=True)
class SpecConfig:
    """
    Configuration for the framing/FFT stage.

    Attributes:
        num_bins: FFT frame length in samples. Frequency resolution is
            ``num_bins // 2`` rows. Must be > 16.
        step_size: Frame stride in samples. ``None`` means ``num_bins``
            (no overlap). Must satisfy ``1 <= step_size <= num_bins``.
        window: Window applied to every frame: a `WindowFunction` variant
            or any ``(index, frame_length)`` callable.
        workers: Number of worker threads for the FFT and dB passes.
            1 runs everything synchronously on the calling thread.
        block_size: Frames transformed per FFT call. Bounds the scratch
            memory held by each worker.

    Example:
        >>> config = SpecConfig(num_bins=1024, step_size=256, window=WindowFunction.HANN)
        >>> compute = SpecCompute.from_config(samples, config)
    """

    num_bins: int = 2048
    step_size: int | None = None
    window: WindowFunction | WindowFn = WindowFunction.RECTANGULAR
    workers: int = 1
    block_size: int = 256

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.num_bins < MIN_NUM_BINS:
            raise InvalidInputError(f"num_bins must be greater than 16, got {self.num_bins}")
        if self.step_size is not None:
            if self.step_size < 1:
                raise InvalidInputError(f"step_size must be positive, got {self.step_size}")
            if self.step_size > self.num_bins:
                raise InvalidInputError(
                    f"step_size ({self.step_size}) must not exceed num_bins ({self.num_bins})"
                )
        if self.workers < 1:
            raise InvalidInputError(f"workers must be positive, got {self.workers}")
        if self.block_size < 1:
            raise InvalidInputError(f"block_size must be positive, got {self.block_size}")

    @property
    def effective_step_size(self) -> int:
        """The frame stride actually used: `step_size`, or `num_bins` when unset."""
        return self.num_bins if self.step_size is None else self.step_size


@dataclass(frozen=True)
class RenderConfig:
    """
    Configuration for rendering a computed spectrogram.

    Attributes:
        width: Output width in pixels (time axis).
        height: Output height in pixels (frequency axis).
        freq_scale: Linear or log frequency axis.
        theme: Name of the colour theme (see core/colour_gradient.py).
        domain: Forced ``(min, max)`` for the colour gradient. ``None``
            derives it from the rendered buffer.
    """

    width: int = 256
    height: int = 256
    freq_scale: FrequencyScale = FrequencyScale.LINEAR
    theme: str = "default"
    domain: tuple[float, float] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.width < 1 or self.height < 1:
            raise DegenerateError(
                f"output size must be at least 1x1, got {self.width}x{self.height}"
            )
        if self.domain is not None and self.domain[1] < self.domain[0]:
            raise DegenerateError(f"domain max must be >= min, got {self.domain}")


# Pre-defined configurations for common use cases

DEFAULT_CONFIG = SpecConfig()
"""2048-sample frames, no overlap, rectangular window."""

OVERLAP_CONFIG = SpecConfig(num_bins=2048, step_size=512, window=WindowFunction.HANN)
"""75% overlap with a Hann window — smoother time axis."""

HIGH_RESOLUTION_CONFIG = SpecConfig(
    num_bins=4096, step_size=1024, window=WindowFunction.BLACKMAN_HARRIS
)
"""Fine frequency resolution with low spectral leakage."""

DEFAULT_RENDER_CONFIG = RenderConfig()
"""256x256 image, linear frequency axis, default colour theme."""
