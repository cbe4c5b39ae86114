"""
spectrograph/ingestion/audio_loader.py — File I/O boundary for audio loading.

This is the ONLY module that reads audio from disk. Everything downstream
(spectrograph/core/) takes pre-loaded sample arrays — never file paths.

Only 16-bit PCM is accepted. One channel is selected (1-based), never
mixed: for a stereo file, channel 2 is the right channel.

Usage:
    from spectrograph.ingestion.audio_loader import load_wav
    samples, sr = load_wav("/path/to/recording.wav", channel=1)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
import soundfile

from spectrograph.core.errors import InvalidChannelError, InvalidCodecError

SUPPORTED_SUBTYPE: str = "PCM_16"
"""libsndfile subtype name for signed 16-bit PCM."""


def load_wav(
    path: str | Path,
    *,
    channel: int = 1,
    librosa: Any = None,
) -> tuple[np.ndarray, int]:
    """Load one channel of a 16-bit PCM audio file.

    Args:
        path: Path to the audio file.
        channel: 1-based channel to keep.
        librosa: Injected librosa module (imported lazily when None).

    Returns:
        (samples, sample_rate) — float32 samples in -1.0..1.0 at the
        file's native rate.

    Raises:
        FileNotFoundError: File does not exist at the given path.
        InvalidCodecError: The file is not 16-bit PCM.
        InvalidChannelError: `channel` is 0 or exceeds the file's channels.

    Decoder errors (corrupt or unsupported containers) propagate unmodified.
    """
    if librosa is None:
        import librosa  # deferred to allow testing without audio backend

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Audio file not found: {file_path}")

    if channel < 1:
        raise InvalidChannelError(channel)

    info = soundfile.info(str(file_path))
    if info.subtype != SUPPORTED_SUBTYPE:
        raise InvalidCodecError(info.subtype)
    if channel > info.channels:
        raise InvalidChannelError(channel, info.channels)

    # sr=None keeps the native rate; mono=False keeps channels apart
    y, sr = librosa.load(file_path, sr=None, mono=False, dtype=np.float32)
    y = np.atleast_2d(np.asarray(y, dtype=np.float32))
    return np.ascontiguousarray(y[channel - 1]), int(sr)
