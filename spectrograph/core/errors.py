"""
spectrograph/core/errors.py — Typed failures raised by the spectrogram pipeline.

Every construction-time problem (missing data, out-of-contract parameters)
is reported as one of these before any computation starts. Numeric edge
cases inside the pipeline (log of zero, silent frames) are clamped locally
and never raised.

Hierarchy:
    SpectrogramError
    ├── InvalidInputError        (also a ValueError)
    │   ├── InvalidCodecError    — audio is not 16-bit PCM
    │   ├── InvalidChannelError  — channel is 0 or exceeds the file's channels
    │   └── InvalidDivisorError  — downsample divisor < 1
    ├── IncompleteDataError      — no samples, < 1 frame, < 2 gradient colours
    └── DegenerateError          — zero-sized resample, gradient max < min

File-system and decoder errors are NOT wrapped: they propagate unmodified
from ingestion/.
"""

from __future__ import annotations


class SpectrogramError(Exception):
    """Base class for all errors raised by this package."""


class InvalidInputError(SpectrogramError, ValueError):
    """A parameter or the input data violates the pipeline contract."""


class InvalidCodecError(InvalidInputError):
    """The audio source is not 16-bit PCM.

    Args:
        subtype: The sample format reported by the decoder, e.g. ``"PCM_24"``.
    """

    def __init__(self, subtype: str) -> None:
        self.subtype = subtype
        super().__init__(f"Only 16-bit PCM audio is supported, got {subtype!r}")


class InvalidChannelError(InvalidInputError):
    """The selected channel is 0 or beyond the number of available channels."""

    def __init__(self, channel: int, available: int | None = None) -> None:
        self.channel = channel
        self.available = available
        if available is None:
            message = f"channel must be an integer 1 or greater, got {channel}"
        else:
            message = f"Channel set to {channel}, but the audio has {available} channel(s)"
        super().__init__(message)


class InvalidDivisorError(InvalidInputError):
    """The downsample divisor is less than 1."""

    def __init__(self, divisor: int) -> None:
        self.divisor = divisor
        super().__init__(f"downsample divisor must be >= 1, got {divisor}")


class IncompleteDataError(SpectrogramError, ValueError):
    """There is not enough data to run the requested step."""


class DegenerateError(SpectrogramError, ValueError):
    """A numerically degenerate request, e.g. a zero-sized resample target."""
