"""
spectrograph/ingestion/builder.py — Fluent builder that prepares a `SpecCompute`.

SpecOptionsBuilder wires together the input side of the pipeline:

    samples (file or memory)
        │
        ├─ load_wav()          [ingestion/audio_loader.py — I/O boundary]
        │       ↓
        ├─ downsample / scale / normalise   [core/preprocess.py]
        │       ↓
        └─ build() → SpecCompute            [core/transform.py]

This module is in `ingestion/` because `load_data_from_file` touches the
file system. Everything it delegates to is pure and lives in `core/`.

Validation happens eagerly in the step that needs it (a bad divisor fails
in `downsample`) and, for the frame parameters, in `build()`, before any
FFT runs.

Usage:
    compute = (
        SpecOptionsBuilder(2048)
        .set_window_fn(WindowFunction.HANN)
        .load_data_from_file("recording.wav")
        .downsample(2)
        .build()
    )
    spectrogram = compute.compute()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np

from spectrograph.core import preprocess
from spectrograph.core.config import SpecConfig
from spectrograph.core.errors import IncompleteDataError, InvalidChannelError
from spectrograph.core.observer import NULL_OBSERVER, LoggingObserver, SpectrogramObserver
from spectrograph.core.transform import SpecCompute
from spectrograph.core.types import WindowFunction
from spectrograph.core.window import WindowFn
from spectrograph.ingestion.audio_loader import load_wav

DEFAULT_SAMPLE_RATE: int = 8000


class SpecOptionsBuilder:
    """Collects the options and samples for one spectrogram.

    Args:
        num_bins: FFT frame length; must be > 16 (checked in `build`).

    Example:
        builder = SpecOptionsBuilder(512)
        builder.load_data_from_memory(pcm16_samples, 44100)
        spectrogram = builder.build().compute()
    """

    def __init__(self, num_bins: int = 2048) -> None:
        self._num_bins = num_bins
        self._step_size: int | None = None
        self._sample_rate = DEFAULT_SAMPLE_RATE
        self._data = np.empty(0, dtype=np.float32)
        self._channel = 1
        self._window: WindowFunction | WindowFn = WindowFunction.RECTANGULAR
        self._workers = 1
        self._observer: SpectrogramObserver = NULL_OBSERVER

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def data(self) -> np.ndarray:
        return self._data

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def set_step_size(self, step_size: int) -> SpecOptionsBuilder:
        """Frame stride in samples. Defaults to `num_bins` (no overlap)."""
        self._step_size = step_size
        return self

    def set_window_fn(self, window_fn: WindowFunction | WindowFn) -> SpecOptionsBuilder:
        """Window applied to each frame before the DFT.

        See https://en.wikipedia.org/wiki/Window_function for the trade-offs.
        """
        self._window = window_fn
        return self

    def channel(self, channel: int) -> SpecOptionsBuilder:
        """Select the 1-based channel read by `load_data_from_file`.

        Raises:
            InvalidChannelError: If `channel` < 1.
        """
        if channel < 1:
            raise InvalidChannelError(channel)
        self._channel = channel
        return self

    def set_workers(self, workers: int) -> SpecOptionsBuilder:
        self._workers = workers
        return self

    def set_observer(self, observer: SpectrogramObserver) -> SpecOptionsBuilder:
        self._observer = observer
        return self

    def set_verbose(self) -> SpecOptionsBuilder:
        """Report diagnostics through the ``spectrograph`` logger."""
        self._observer = LoggingObserver()
        return self

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def load_data_from_file(self, path: str | Path, *, librosa: Any = None) -> SpecOptionsBuilder:
        """Load the selected channel of a 16-bit PCM audio file.

        Raises:
            FileNotFoundError, InvalidCodecError, InvalidChannelError:
                See `load_wav`.
        """
        samples, sample_rate = load_wav(path, channel=self._channel, librosa=librosa)
        self._observer.notify("load.file", path=str(path), samples=samples.size, sample_rate=sample_rate)
        return self.load_data_from_memory_f32(samples, sample_rate)

    def load_data_from_memory(self, data: np.ndarray, sample_rate: int) -> SpecOptionsBuilder:
        """Load signed 16-bit PCM samples, scaled to -1.0..1.0."""
        return self.load_data_from_memory_f32(preprocess.from_pcm16(data), sample_rate)

    def load_data_from_memory_f32(self, data: np.ndarray, sample_rate: int) -> SpecOptionsBuilder:
        """Load float samples, which must already be in -1.0..1.0."""
        self._data = np.asarray(data, dtype=np.float32)
        self._sample_rate = sample_rate
        return self

    def downsample(self, divisor: int) -> SpecOptionsBuilder:
        """Average blocks of `divisor` samples — a cheap way to speed up the FFT.

        Raises:
            InvalidDivisorError: If `divisor` < 1.
            IncompleteDataError: If no data is loaded.
        """
        self._data, self._sample_rate = preprocess.downsample(self._data, self._sample_rate, divisor)
        return self

    def scale(self, scale_factor: float) -> SpecOptionsBuilder:
        """Multiply every sample by `scale_factor`.

        Raises:
            IncompleteDataError: If no data is loaded.
        """
        self._data = preprocess.scale(self._data, scale_factor)
        return self

    def normalise(self) -> SpecOptionsBuilder:
        """Scale the samples so the peak absolute amplitude is 1.0.

        Raises:
            IncompleteDataError: If no data is loaded.
        """
        self._data = preprocess.normalise(self._data)
        return self

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def config(self) -> SpecConfig:
        """Validated frame configuration for the current options, window included."""
        return SpecConfig(
            num_bins=self._num_bins,
            step_size=self._step_size,
            window=self._window,
            workers=self._workers,
        )

    def build(self) -> SpecCompute:
        """Validate everything and create the `SpecCompute`.

        Raises:
            InvalidInputError: Out-of-contract frame parameters.
            IncompleteDataError: No data loaded, or too few samples for one
                column, i.e. ``(len - num_bins) // step_size < 1``.
        """
        config = self.config()
        if self._data.size == 0:
            raise IncompleteDataError("SpecOptionsBuilder requires data to be loaded")
        step = config.effective_step_size
        if (self._data.size - config.num_bins) // step < 1:
            raise IncompleteDataError(
                f"{self._data.size} samples do not fill one spectrogram column "
                f"(frame {config.num_bins}, step {step})"
            )

        self._observer.notify(
            "build",
            samples=self._data.size,
            sample_rate=self._sample_rate,
            length_sec=round(self._data.size / self._sample_rate, 3),
            num_bins=config.num_bins,
            step_size=config.effective_step_size,
        )
        return SpecCompute(
            config.num_bins,
            config.effective_step_size,
            self._data.copy(),
            self._window,
            sample_rate=self._sample_rate,
            workers=config.workers,
            block_size=config.block_size,
            observer=self._observer,
        )
