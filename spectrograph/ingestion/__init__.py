"""
spectrograph/ingestion — I/O boundary of the pipeline.

    audio_loader  WAV (16-bit PCM) → float32 samples
    builder       samples → validated SpecCompute
    export        Spectrogram → PNG / CSV
"""

from spectrograph.ingestion.audio_loader import SUPPORTED_SUBTYPE, load_wav
from spectrograph.ingestion.builder import SpecOptionsBuilder
from spectrograph.ingestion.export import png_bytes, write_csv, write_legend_png, write_png

__all__ = [
    "SUPPORTED_SUBTYPE",
    "load_wav",
    "SpecOptionsBuilder",
    "write_png",
    "png_bytes",
    "write_csv",
    "write_legend_png",
]
