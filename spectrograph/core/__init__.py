"""
spectrograph/core — Pure spectrogram computation.

All functions are pure: numpy arrays in → numpy arrays / frozen values out.
No file I/O in this package (WAV loading and PNG/CSV writing live in
spectrograph/ingestion/).

Architecture note:
    numpy, scipy.fft and Pillow's resampler are pure computation libraries
    (no I/O, no side effects) and are used directly here.

Public API:
    Types:      Spectrogram, RGBAColour, WindowFunction, FrequencyScale
    Errors:     SpectrogramError, InvalidInputError, InvalidCodecError,
                InvalidChannelError, InvalidDivisorError, IncompleteDataError,
                DegenerateError
    Config:     SpecConfig, RenderConfig, DEFAULT_CONFIG, DEFAULT_RENDER_CONFIG
    Transform:  SpecCompute, FftPlan
    dB:         to_db
    Scaling:    FreqScaler, LinearFreq, LogFreq, integrate, remap_frequency
    Resample:   resize
    Colour:     ColourGradient, ColourTheme
    Observer:   SpectrogramObserver, NullObserver, LoggingObserver
"""

from spectrograph.core.colour_gradient import ColourGradient, ColourTheme
from spectrograph.core.config import (
    DEFAULT_CONFIG,
    DEFAULT_RENDER_CONFIG,
    HIGH_RESOLUTION_CONFIG,
    MIN_NUM_BINS,
    OVERLAP_CONFIG,
    RenderConfig,
    SpecConfig,
)
from spectrograph.core.db import DB_FLOOR_RANGE, to_db
from spectrograph.core.errors import (
    DegenerateError,
    IncompleteDataError,
    InvalidChannelError,
    InvalidCodecError,
    InvalidDivisorError,
    InvalidInputError,
    SpectrogramError,
)
from spectrograph.core.freq_scales import FreqScaler, LinearFreq, LogFreq
from spectrograph.core.integrate import integrate, integration_weights, remap_frequency
from spectrograph.core.observer import (
    LoggingObserver,
    NullObserver,
    RecordingObserver,
    SpectrogramObserver,
)
from spectrograph.core.resample import resize
from spectrograph.core.spectrogram import Spectrogram, get_min_max
from spectrograph.core.transform import FftPlan, SpecCompute
from spectrograph.core.types import FrequencyScale, RGBAColour, WindowFunction
from spectrograph.core.window import blackman_harris, hann, rectangular, window_weights

__all__ = [
    # Types
    "Spectrogram",
    "RGBAColour",
    "WindowFunction",
    "FrequencyScale",
    # Errors
    "SpectrogramError",
    "InvalidInputError",
    "InvalidCodecError",
    "InvalidChannelError",
    "InvalidDivisorError",
    "IncompleteDataError",
    "DegenerateError",
    # Config
    "SpecConfig",
    "RenderConfig",
    "DEFAULT_CONFIG",
    "OVERLAP_CONFIG",
    "HIGH_RESOLUTION_CONFIG",
    "DEFAULT_RENDER_CONFIG",
    "MIN_NUM_BINS",
    # Pipeline
    "SpecCompute",
    "FftPlan",
    "to_db",
    "DB_FLOOR_RANGE",
    "FreqScaler",
    "LinearFreq",
    "LogFreq",
    "integrate",
    "integration_weights",
    "remap_frequency",
    "resize",
    "ColourGradient",
    "ColourTheme",
    "get_min_max",
    # Windows
    "rectangular",
    "hann",
    "blackman_harris",
    "window_weights",
    # Observer
    "SpectrogramObserver",
    "NullObserver",
    "LoggingObserver",
    "RecordingObserver",
]
