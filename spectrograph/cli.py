"""Spectrograph command line — WAV in, PNG and/or CSV out.

Usage
-----
    # 256x256 PNG with the default theme
    spectrograph --wav input.wav --png out.png

    # Log frequency axis, Hann window, 75% overlap
    spectrograph --wav input.wav --png out.png --freq-scale log \\
        --window-function hann --overlap 0.75

    # Raw dB values for plotting elsewhere
    spectrograph --wav input.wav --csv out.csv --width 128 --height 64

Exit codes
----------
    0  — success
    1  — the pipeline failed (unreadable file, unsupported codec, too short)
    2  — invalid arguments
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from spectrograph.core.colour_gradient import ColourGradient, ColourTheme
from spectrograph.core.config import RenderConfig, SpecConfig
from spectrograph.core.errors import (
    InvalidChannelError,
    InvalidDivisorError,
    InvalidInputError,
    SpectrogramError,
)
from spectrograph.core.types import FrequencyScale, WindowFunction
from spectrograph.ingestion.builder import SpecOptionsBuilder
from spectrograph.ingestion.export import write_csv, write_legend_png, write_png

logger = logging.getLogger("spectrograph.cli")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="spectrograph",
        description="Render the spectrogram of a 16-bit PCM WAV file",
    )
    p.add_argument("--wav", type=Path, required=True, help="Input WAV file (16-bit PCM)")
    p.add_argument("--png", type=Path, help="Write the spectrogram image here")
    p.add_argument("--csv", type=Path, help="Write the spectrogram values here")
    p.add_argument("--legend", type=Path, help="Write a colour legend strip here")
    p.add_argument(
        "--downsample",
        type=int,
        default=1,
        help="Average blocks of N samples before the FFT (default: 1)",
    )
    p.add_argument("--channel", type=int, default=1, help="1-based channel to read (default: 1)")
    p.add_argument(
        "--window-function",
        choices=[w.value for w in WindowFunction],
        default=WindowFunction.RECTANGULAR.value,
        help="Window applied to each frame (default: rectangular)",
    )
    p.add_argument("--width", type=int, default=256, help="Output width (default: 256)")
    p.add_argument("--height", type=int, default=256, help="Output height (default: 256)")
    p.add_argument(
        "--chunk-len",
        type=int,
        default=2048,
        help="FFT frame length in samples, > 16 (default: 2048)",
    )
    p.add_argument(
        "--overlap",
        type=float,
        default=0.0,
        help="Frame overlap as a fraction in [0, 1) (default: 0.0)",
    )
    p.add_argument(
        "--scale",
        type=float,
        default=1.0,
        help="Multiply every sample by this factor (default: 1.0)",
    )
    p.add_argument("--normalise", action="store_true", help="Scale the peak amplitude to 1.0")
    p.add_argument(
        "--freq-scale",
        choices=[s.value for s in FrequencyScale],
        default=FrequencyScale.LINEAR.value,
        help="Frequency axis (default: linear)",
    )
    p.add_argument(
        "--gradient",
        choices=[t.value for t in ColourTheme],
        default=ColourTheme.DEFAULT.value,
        help="Colour theme (default: default)",
    )
    p.add_argument("--workers", type=int, default=1, help="FFT worker threads (default: 1)")
    p.add_argument("--quiet", action="store_true", help="Only log errors")
    return p


def _step_size(chunk_len: int, overlap: float) -> int:
    if not 0.0 <= overlap < 1.0:
        raise InvalidInputError(f"overlap must be in [0, 1), got {overlap}")
    return max(1, int(chunk_len * (1.0 - overlap)))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.ERROR if args.quiet else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    if args.png is None and args.csv is None:
        logger.error("Nothing to do: pass --png and/or --csv")
        return 2

    try:
        config = SpecConfig(
            num_bins=args.chunk_len,
            step_size=_step_size(args.chunk_len, args.overlap),
            window=WindowFunction.from_name(args.window_function),
            workers=args.workers,
        )
        render = RenderConfig(
            width=args.width,
            height=args.height,
            freq_scale=FrequencyScale.from_name(args.freq_scale),
            theme=args.gradient,
        )
        if args.downsample < 1:
            raise InvalidDivisorError(args.downsample)
        if args.channel < 1:
            raise InvalidChannelError(args.channel)
    except SpectrogramError as exc:
        logger.error("%s", exc)
        return 2

    try:
        builder = (
            SpecOptionsBuilder(config.num_bins)
            .set_step_size(config.effective_step_size)
            .set_window_fn(config.window)
            .set_workers(config.workers)
            .channel(args.channel)
        )
        if not args.quiet:
            builder.set_verbose()

        builder.load_data_from_file(args.wav).downsample(args.downsample).scale(args.scale)
        if args.normalise:
            builder.normalise()

        spectrogram = builder.build().compute()
        gradient = ColourGradient.create(ColourTheme.from_name(render.theme))

        if args.png is not None:
            write_png(spectrogram, args.png, render.freq_scale, gradient, render.width, render.height)
            logger.info("Wrote %s", args.png)
        if args.csv is not None:
            write_csv(spectrogram, args.csv, render.freq_scale, render.width, render.height)
            logger.info("Wrote %s", args.csv)
        if args.legend is not None:
            write_legend_png(gradient, args.legend, length=render.height)
            logger.info("Wrote %s", args.legend)
    except (SpectrogramError, OSError, RuntimeError) as exc:
        # RuntimeError covers libsndfile decoder failures
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
