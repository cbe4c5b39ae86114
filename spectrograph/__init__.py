"""
spectrograph — Audio spectrogram computation and rendering.

    samples → frames × window → FFT magnitude → dB (80 dB floor)
            → frequency remap (linear / log) → Lanczos resize → colours

Quick start:
    from spectrograph import ColourGradient, ColourTheme, FrequencyScale, SpecOptionsBuilder

    spectrogram = SpecOptionsBuilder(2048).load_data_from_file("a.wav").build().compute()
    pixels = spectrogram.to_rgba(
        FrequencyScale.LOG, ColourGradient.create(ColourTheme.DEFAULT), 512, 256
    )
"""

from spectrograph.core import *  # noqa: F401,F403
from spectrograph.core import __all__ as _core_all
from spectrograph.ingestion import *  # noqa: F401,F403
from spectrograph.ingestion import __all__ as _ingestion_all

__version__ = "0.1.0"

__all__ = [*_core_all, *_ingestion_all, "__version__"]
