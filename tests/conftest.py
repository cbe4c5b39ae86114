"""
Shared fixtures for the test suite.

Signals are synthesised with numpy; WAV fixtures are written with soundfile
into pytest's tmp_path, so no audio files are checked in.
"""

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
import soundfile

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SAMPLE_RATE: int = 8000
"""Sample rate used by the synthetic signals."""

TONE_HZ: float = 440.0
"""Frequency of the reference sine."""


# ---------------------------------------------------------------------------
# Signal helpers
# ---------------------------------------------------------------------------


def make_sine(
    freq: float = TONE_HZ,
    sample_rate: int = SAMPLE_RATE,
    seconds: float = 1.0,
    amplitude: float = 1.0,
) -> np.ndarray:
    """Return a float32 sine wave."""
    t = np.arange(int(sample_rate * seconds), dtype=np.float64) / sample_rate
    return (amplitude * np.sin(2.0 * np.pi * freq * t)).astype(np.float32)


@pytest.fixture()
def sine_440() -> np.ndarray:
    """1 s of a full-scale 440 Hz sine at 8 kHz."""
    return make_sine()


@pytest.fixture()
def white_noise() -> np.ndarray:
    """0.5 s of seeded white noise at 8 kHz, amplitude 0.5."""
    rng = np.random.default_rng(1234)
    return (0.5 * rng.uniform(-1.0, 1.0, SAMPLE_RATE // 2)).astype(np.float32)


# ---------------------------------------------------------------------------
# WAV writer
# ---------------------------------------------------------------------------


@pytest.fixture()
def write_wav(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a WAV file into tmp_path.

    ``data`` is 1-D (mono) or ``(frames, channels)``.
    """

    def _write(
        name: str,
        data: np.ndarray,
        sample_rate: int = SAMPLE_RATE,
        subtype: str = "PCM_16",
    ) -> Path:
        path = tmp_path / name
        soundfile.write(str(path), data, sample_rate, subtype=subtype)
        return path

    return _write
