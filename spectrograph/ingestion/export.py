"""
spectrograph/ingestion/export.py — Write rendered spectrograms to PNG and CSV.

This module is the I/O output boundary:
    Spectrogram.to_rgba()   → write_png / png_bytes   (Pillow, RGBA 8-bit)
    Spectrogram.to_rows()   → write_csv               (csv module)
    ColourGradient.legend() → write_legend_png

File-system errors (OSError) propagate unmodified.

CSV layout:
    header row: column indices 0..cols-1
    then `rows` rows of values, top row = highest frequency
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from spectrograph.core.colour_gradient import ColourGradient
from spectrograph.core.spectrogram import Spectrogram
from spectrograph.core.types import FrequencyScale

logger = logging.getLogger(__name__)


def _rgba_image(pixels: np.ndarray) -> Image.Image:
    # (h, w, 4) uint8 -> mode "RGBA"
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


def write_png(
    spectrogram: Spectrogram,
    path: str | Path,
    freq_scale: FrequencyScale,
    gradient: ColourGradient,
    width: int,
    height: int,
    domain: tuple[float, float] | None = None,
) -> Path:
    """Render `spectrogram` and save it as an RGBA PNG.

    Returns:
        The path written.
    """
    out = Path(path)
    pixels = spectrogram.to_rgba(freq_scale, gradient, width, height, domain)
    _rgba_image(pixels).save(out, format="PNG")
    logger.debug("Wrote %dx%d PNG to %s", width, height, out)
    return out


def png_bytes(
    spectrogram: Spectrogram,
    freq_scale: FrequencyScale,
    gradient: ColourGradient,
    width: int,
    height: int,
    domain: tuple[float, float] | None = None,
) -> bytes:
    """Render `spectrogram` to an in-memory PNG file."""
    pixels = spectrogram.to_rgba(freq_scale, gradient, width, height, domain)
    buf = io.BytesIO()
    _rgba_image(pixels).save(buf, format="PNG")
    return buf.getvalue()


def write_csv(
    spectrogram: Spectrogram,
    path: str | Path,
    freq_scale: FrequencyScale,
    cols: int,
    rows: int,
) -> Path:
    """Render `spectrogram` to a ``rows × cols`` grid and save it as CSV.

    Returns:
        The path written.
    """
    out = Path(path)
    grid = spectrogram.to_rows(freq_scale, cols, rows)
    with out.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow([str(i) for i in range(cols)])
        writer.writerows(grid)
    logger.debug("Wrote %dx%d CSV to %s", cols, rows, out)
    return out


def write_legend_png(
    gradient: ColourGradient,
    path: str | Path,
    length: int = 256,
    thickness: int = 16,
) -> Path:
    """Save the gradient as a vertical legend strip, `min` at the bottom.

    Args:
        gradient: Gradient whose domain the legend spans.
        path: Output PNG path.
        length: Strip height in pixels.
        thickness: Strip width in pixels.
    """
    out = Path(path)
    strip = gradient.legend(length)[::-1]  # max at the top
    pixels = np.repeat(strip[:, np.newaxis, :], thickness, axis=1)
    _rgba_image(pixels).save(out, format="PNG")
    return out
