"""
spectrograph/core/transform.py — Framing, windowing and the FFT stage.

`SpecCompute` slides a ``num_bins``-sample frame across the signal at a
stride of ``step_size`` samples, windows each frame, FFTs it and keeps the
magnitude of the lower ``num_bins // 2`` bins (the upper half mirrors it).

Layout of the result:
    width  = floor((len(samples) - num_bins) / step_size)   (time, columns)
    height = num_bins // 2                                   (frequency, rows)
    row 0  = DC, row height-1 = just below Nyquist

Frames are processed in blocks by an `FftPlan`, which owns the window
vector and a scratch block reused across calls. A plan is never shared
between threads: in parallel mode every worker thread lazily builds its own
plan (thread-local) and writes to a disjoint range of output columns, so no
locking is needed.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import scipy.fft
from numpy.lib.stride_tricks import sliding_window_view

from spectrograph.core.config import SpecConfig
from spectrograph.core.db import to_db
from spectrograph.core.errors import IncompleteDataError, InvalidInputError
from spectrograph.core.observer import NULL_OBSERVER, SpectrogramObserver
from spectrograph.core.spectrogram import Spectrogram
from spectrograph.core.types import WindowFunction
from spectrograph.core.window import WindowFn, window_weights


class FftPlan:
    """Precomputed per-``num_bins`` FFT resources owned by one worker.

    Args:
        num_bins: FFT length.
        window: Window applied to every frame.
        block_size: Maximum frames handled per `process` call.
    """

    def __init__(self, num_bins: int, window: WindowFunction | WindowFn, block_size: int) -> None:
        self.num_bins = num_bins
        self.height = num_bins // 2
        self.block_size = block_size
        self.weights = window_weights(window, num_bins)
        self._scratch = np.empty((block_size, num_bins), dtype=np.float32)

    def process(self, frames: np.ndarray, out: np.ndarray) -> None:
        """Transform up to `block_size` frames and write magnitudes to `out`.

        Args:
            frames: ``(n, num_bins)`` view of the signal, n <= block_size.
            out: ``(height, n)`` destination view (one column per frame).
        """
        n = frames.shape[0]
        scratch = self._scratch[:n]
        np.multiply(frames, self.weights, out=scratch)
        # real input -> rfft returns bins 0..N/2, identical to the lower half of a complex FFT
        spectrum = scipy.fft.rfft(scratch, n=self.num_bins, axis=1)
        out[:, :] = np.abs(spectrum[:, : self.height]).T


class SpecCompute:
    """Compute the spectrogram matrix of one signal.

    **You probably want `SpecOptionsBuilder` instead.** It validates and
    pre-processes the samples before constructing this object.

    Args:
        num_bins: FFT frame length (> 16).
        step_size: Frame stride, ``1 <= step_size <= num_bins``.
        data: Samples normalised to roughly -1.0..1.0.
        window_fn: Window applied to every frame.
        sample_rate: Sample rate in Hz, carried through to the result for
                     frequency labelling.
        workers: Worker threads. 1 = synchronous.
        block_size: Frames per FFT call.
        observer: Receives ``compute.*`` diagnostics.

    Example:
        compute = SpecCompute(2048, 512, samples, WindowFunction.HANN)
        spectrogram = compute.compute()
    """

    def __init__(
        self,
        num_bins: int,
        step_size: int,
        data: np.ndarray,
        window_fn: WindowFunction | WindowFn = WindowFunction.RECTANGULAR,
        *,
        sample_rate: int = 8000,
        workers: int = 1,
        block_size: int = 256,
        observer: SpectrogramObserver = NULL_OBSERVER,
    ) -> None:
        # reuse SpecConfig's parameter checks
        SpecConfig(num_bins=num_bins, step_size=step_size, workers=workers, block_size=block_size)
        if sample_rate <= 0:
            raise InvalidInputError(f"sample_rate must be positive, got {sample_rate}")

        self._num_bins = num_bins
        self._step_size = step_size
        self._window_fn = window_fn
        self._sample_rate = sample_rate
        self._workers = workers
        self._block_size = block_size
        self._observer = observer
        self._plan = FftPlan(num_bins, window_fn, block_size)
        self._local = threading.local()
        self._data = np.empty(0, dtype=np.float32)
        self.set_data(data)

    @classmethod
    def from_config(
        cls,
        data: np.ndarray,
        config: SpecConfig,
        *,
        sample_rate: int = 8000,
        observer: SpectrogramObserver = NULL_OBSERVER,
    ) -> SpecCompute:
        return cls(
            config.num_bins,
            config.effective_step_size,
            data,
            config.window,
            sample_rate=sample_rate,
            workers=config.workers,
            block_size=config.block_size,
            observer=observer,
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def num_bins(self) -> int:
        return self._num_bins

    @property
    def step_size(self) -> int:
        return self._step_size

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def width(self) -> int:
        """Number of frames (output columns)."""
        return max(0, (self._data.size - self._num_bins) // self._step_size)

    @property
    def height(self) -> int:
        """Number of frequency bins kept (output rows)."""
        return self._num_bins // 2

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def set_data(self, data: np.ndarray) -> None:
        """Replace the samples. No builder pre-processing is applied.

        Raises:
            InvalidInputError: If `data` is not one-dimensional.
            IncompleteDataError: If `data` is empty.
        """
        samples = np.asarray(data, dtype=np.float32)
        if samples.ndim != 1:
            raise InvalidInputError(f"data must be one-dimensional, got shape {samples.shape}")
        if samples.size == 0:
            raise IncompleteDataError("no samples to compute a spectrogram from")
        self._data = samples

    # ------------------------------------------------------------------
    # Compute
    # ------------------------------------------------------------------

    def _worker_plan(self) -> FftPlan:
        plan = getattr(self._local, "plan", None)
        if plan is None:
            plan = FftPlan(self._num_bins, self._window_fn, self._block_size)
            self._local.plan = plan
        return plan

    def compute_magnitudes(self) -> Spectrogram:
        """Run the FFT stage and return linear magnitudes.

        Raises:
            IncompleteDataError: If the signal holds no complete frame.
        """
        width = self.width
        if width == 0:
            raise IncompleteDataError(
                f"signal of {self._data.size} samples is too short for a frame of "
                f"{self._num_bins} samples at step {self._step_size}"
            )
        height = self.height
        start = time.perf_counter()

        frames = sliding_window_view(self._data, self._num_bins)[:: self._step_size][:width]
        spec = np.empty((height, width), dtype=np.float32)
        blocks = [(lo, min(lo + self._block_size, width)) for lo in range(0, width, self._block_size)]

        if self._workers <= 1 or len(blocks) == 1:
            for lo, hi in blocks:
                self._plan.process(frames[lo:hi], spec[:, lo:hi])
        else:

            def run(block: tuple[int, int]) -> None:
                lo, hi = block
                self._worker_plan().process(frames[lo:hi], spec[:, lo:hi])

            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                list(pool.map(run, blocks))

        self._observer.notify(
            "compute.fft",
            samples=self._data.size,
            frames=width,
            bins=height,
            seconds=round(time.perf_counter() - start, 4),
        )
        return Spectrogram(
            spec,
            num_bins=self._num_bins,
            step_size=self._step_size,
            sample_rate=self._sample_rate,
            unit="magnitude",
        )

    def compute(self) -> Spectrogram:
        """Run the FFT stage and the dB normalisation.

        Returns:
            `Spectrogram` of dB values, 0 dB = loudest bin, floored at -80 dB.
        """
        magnitudes = self.compute_magnitudes()
        start = time.perf_counter()
        db = to_db(magnitudes.data, workers=self._workers)
        self._observer.notify(
            "compute.db",
            min_db=round(float(db.min()), 2),
            max_db=round(float(db.max()), 2),
            seconds=round(time.perf_counter() - start, 4),
        )
        return Spectrogram(
            db,
            num_bins=self._num_bins,
            step_size=self._step_size,
            sample_rate=self._sample_rate,
            unit="db",
        )
