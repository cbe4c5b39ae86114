"""
Tests for spectrograph/ingestion/builder.py — SpecOptionsBuilder.

Covers:
    - Loading from memory (int16 and float) and from WAV files
    - Pre-processing steps and their validation
    - build() validation before any FFT runs
    - Observer wiring
"""

import logging

import numpy as np
import pytest

from spectrograph.core.errors import (
    IncompleteDataError,
    InvalidChannelError,
    InvalidDivisorError,
    InvalidInputError,
)
from spectrograph.core.observer import RecordingObserver
from spectrograph.core.transform import SpecCompute
from spectrograph.core.types import WindowFunction
from spectrograph.ingestion.builder import DEFAULT_SAMPLE_RATE, SpecOptionsBuilder
from conftest import SAMPLE_RATE, make_sine

# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestLoading:
    def test_load_int16_scales_to_unit_range(self):
        """16-bit samples are divided by i16::MAX."""
        pcm = np.array([0, 32767, -32767, 16384] * 100, dtype=np.int16)
        builder = SpecOptionsBuilder(64).load_data_from_memory(pcm, 11025)
        assert builder.sample_rate == 11025
        np.testing.assert_allclose(builder.data[:4], [0.0, 1.0, -1.0, 16384 / 32767], rtol=1e-6)

    def test_load_f32(self, sine_440):
        """Float samples are taken as-is."""
        builder = SpecOptionsBuilder(64).load_data_from_memory_f32(sine_440, SAMPLE_RATE)
        np.testing.assert_array_equal(builder.data, sine_440)

    def test_default_sample_rate(self):
        """Before loading, the sample rate is 8 kHz."""
        assert SpecOptionsBuilder().sample_rate == DEFAULT_SAMPLE_RATE == 8000

    def test_load_from_file(self, write_wav, sine_440):
        """A mono WAV loads at its native rate."""
        path = write_wav("tone.wav", sine_440 * 0.5)
        builder = SpecOptionsBuilder(256).load_data_from_file(path)
        assert builder.sample_rate == SAMPLE_RATE
        assert builder.data.size == sine_440.size

    def test_load_second_channel(self, write_wav):
        """channel(2) selects the right channel of a stereo WAV."""
        stereo = np.column_stack(
            [np.zeros(SAMPLE_RATE, dtype=np.float32), make_sine(amplitude=0.5)]
        )
        path = write_wav("stereo.wav", stereo)
        builder = SpecOptionsBuilder(256).channel(2).load_data_from_file(path)
        assert np.abs(builder.data).max() == pytest.approx(0.5, abs=1e-3)

    def test_channel_zero(self):
        """channel(0) is rejected immediately."""
        with pytest.raises(InvalidChannelError):
            SpecOptionsBuilder().channel(0)

    def test_channel_missing_from_file(self, write_wav, sine_440):
        """Selecting channel 2 of a mono file fails on load."""
        path = write_wav("mono.wav", sine_440)
        with pytest.raises(InvalidChannelError, match="1 channel"):
            SpecOptionsBuilder().channel(2).load_data_from_file(path)


# ---------------------------------------------------------------------------
# Pre-processing
# ---------------------------------------------------------------------------


class TestPreprocessing:
    def test_downsample(self, sine_440):
        """downsample(2) halves the samples and the sample rate."""
        builder = SpecOptionsBuilder(64).load_data_from_memory_f32(sine_440, SAMPLE_RATE).downsample(2)
        assert builder.sample_rate == SAMPLE_RATE // 2
        assert builder.data.size == sine_440.size // 2

    def test_downsample_zero(self, sine_440):
        """A zero divisor is rejected."""
        builder = SpecOptionsBuilder(64).load_data_from_memory_f32(sine_440, SAMPLE_RATE)
        with pytest.raises(InvalidDivisorError):
            builder.downsample(0)

    def test_steps_require_data(self):
        """Pre-processing before loading raises IncompleteDataError."""
        builder = SpecOptionsBuilder(64)
        with pytest.raises(IncompleteDataError):
            builder.downsample(2)
        with pytest.raises(IncompleteDataError):
            builder.scale(2.0)
        with pytest.raises(IncompleteDataError):
            builder.normalise()

    def test_scale_then_normalise(self, sine_440):
        """normalise() undoes any earlier scaling."""
        builder = SpecOptionsBuilder(64).load_data_from_memory_f32(sine_440, SAMPLE_RATE)
        builder.scale(0.1)
        assert np.abs(builder.data).max() == pytest.approx(0.1, rel=1e-3)
        builder.normalise()
        assert np.abs(builder.data).max() == pytest.approx(1.0)


# ---------------------------------------------------------------------------
# build()
# ---------------------------------------------------------------------------


class TestBuild:
    def test_build_returns_spec_compute(self, sine_440):
        """Options flow into the SpecCompute."""
        compute = (
            SpecOptionsBuilder(512)
            .set_step_size(128)
            .set_window_fn(WindowFunction.HANN)
            .load_data_from_memory_f32(sine_440, SAMPLE_RATE)
            .build()
        )
        assert isinstance(compute, SpecCompute)
        assert compute.num_bins == 512
        assert compute.step_size == 128
        assert compute.sample_rate == SAMPLE_RATE
        assert compute.compute().width == (sine_440.size - 512) // 128

    def test_default_step_is_num_bins(self, sine_440):
        """Without set_step_size frames do not overlap."""
        compute = SpecOptionsBuilder(256).load_data_from_memory_f32(sine_440, SAMPLE_RATE).build()
        assert compute.step_size == 256

    def test_no_data(self):
        """build() without data raises IncompleteDataError."""
        with pytest.raises(IncompleteDataError, match="requires data"):
            SpecOptionsBuilder().build()

    def test_shorter_than_one_frame(self):
        """Fewer samples than num_bins raises IncompleteDataError."""
        builder = SpecOptionsBuilder(2048).load_data_from_memory_f32(np.zeros(100), SAMPLE_RATE)
        with pytest.raises(IncompleteDataError, match="do not fill one spectrogram column"):
            builder.build()

    @pytest.mark.parametrize("size,step", [(2048, 2048), (3000, 2048), (2048, 512), (2400, 512)])
    def test_too_short_for_one_column(self, size, step):
        """(len - num_bins) // step < 1 is rejected before any FFT runs."""
        builder = (
            SpecOptionsBuilder(2048)
            .set_step_size(step)
            .load_data_from_memory_f32(np.zeros(size), SAMPLE_RATE)
        )
        with pytest.raises(IncompleteDataError, match="frame 2048, step"):
            builder.build()

    def test_exactly_one_column(self, sine_440):
        """num_bins + step samples give a one-column spectrogram."""
        compute = (
            SpecOptionsBuilder(2048)
            .set_step_size(512)
            .load_data_from_memory_f32(sine_440[:2560], SAMPLE_RATE)
            .build()
        )
        assert compute.compute().width == 1

    def test_config_carries_custom_window(self):
        """A callable window is reported by config(), not replaced by a preset."""

        def triangle(i, n):
            return 1.0 - abs(2.0 * i / (n - 1) - 1.0)

        assert SpecOptionsBuilder(256).set_window_fn(triangle).config().window is triangle
        hann = SpecOptionsBuilder(256).set_window_fn(WindowFunction.HANN).config()
        assert hann.window is WindowFunction.HANN

    def test_frame_too_small(self, sine_440):
        """num_bins <= 16 is out of contract."""
        builder = SpecOptionsBuilder(16).load_data_from_memory_f32(sine_440, SAMPLE_RATE)
        with pytest.raises(InvalidInputError, match="greater than 16"):
            builder.build()

    def test_step_too_large(self, sine_440):
        """step_size > num_bins is out of contract."""
        builder = (
            SpecOptionsBuilder(64).set_step_size(100).load_data_from_memory_f32(sine_440, SAMPLE_RATE)
        )
        with pytest.raises(InvalidInputError, match="must not exceed"):
            builder.build()

    def test_later_loads_do_not_change_built_compute(self, sine_440):
        """build() hands over a snapshot of the samples."""
        builder = SpecOptionsBuilder(256).load_data_from_memory_f32(sine_440, SAMPLE_RATE)
        compute = builder.build()
        builder.scale(0.0)
        assert compute.compute_magnitudes().data.max() > 0.0

    def test_workers(self, sine_440):
        """set_workers gives the same result as the serial build."""
        serial = SpecOptionsBuilder(128).load_data_from_memory_f32(sine_440, SAMPLE_RATE).build()
        parallel = (
            SpecOptionsBuilder(128)
            .set_workers(3)
            .load_data_from_memory_f32(sine_440, SAMPLE_RATE)
            .build()
        )
        np.testing.assert_allclose(parallel.compute().data, serial.compute().data, atol=1e-5)


# ---------------------------------------------------------------------------
# Observer
# ---------------------------------------------------------------------------


class TestBuilderObserver:
    def test_events_in_pipeline_order(self, write_wav, sine_440):
        """load → build → FFT → dB."""
        path = write_wav("tone.wav", sine_440 * 0.5)
        observer = RecordingObserver()
        SpecOptionsBuilder(256).set_observer(observer).load_data_from_file(path).build().compute()
        assert observer.names() == ["load.file", "build", "compute.fft", "compute.db"]

    def test_build_event_details(self, sine_440):
        """The build event reports the signal length."""
        observer = RecordingObserver()
        (
            SpecOptionsBuilder(256)
            .set_observer(observer)
            .load_data_from_memory_f32(sine_440, SAMPLE_RATE)
            .build()
        )
        _, details = observer.events[-1]
        assert details["samples"] == SAMPLE_RATE
        assert details["length_sec"] == 1.0

    def test_verbose_logs(self, sine_440, caplog):
        """set_verbose() routes diagnostics to the spectrograph logger."""
        with caplog.at_level(logging.INFO, logger="spectrograph"):
            (
                SpecOptionsBuilder(256)
                .set_verbose()
                .load_data_from_memory_f32(sine_440, SAMPLE_RATE)
                .build()
                .compute()
            )
        assert "build samples=8000" in caplog.text
        assert "compute.fft" in caplog.text
