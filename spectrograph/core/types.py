"""
spectrograph/core/types.py — Small frozen value types shared across the pipeline.

Design principles:
    - No I/O, no state, no side effects.
    - Variant choices (window, frequency scale) are closed enums resolved
      once at pipeline construction, never per sample.
    - `RGBAColour` is a frozen dataclass so gradients can hold it in tuples
      and themes can be plain module constants.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from spectrograph.core.errors import InvalidInputError


def _parse_enum_name(enum_cls: type[Enum], name: str) -> Enum:
    """Look up an enum member by its CLI spelling (value) or member name."""
    key = name.strip().lower().replace("-", "_")
    for member in enum_cls:
        if key in (member.value, member.name.lower()):
            return member
    valid = sorted(m.value for m in enum_cls)
    raise InvalidInputError(f"Unknown {enum_cls.__name__} {name!r}, valid options: {valid}")


class WindowFunction(Enum):
    """Window applied to every frame before the FFT."""

    RECTANGULAR = "rectangular"
    HANN = "hann"
    BLACKMAN_HARRIS = "blackman_harris"

    @classmethod
    def from_name(cls, name: str) -> WindowFunction:
        """Parse ``"rectangular"``, ``"hann"`` or ``"blackman_harris"``."""
        return _parse_enum_name(cls, name)  # type: ignore[return-value]


class FrequencyScale(Enum):
    """Mapping used for the vertical (frequency) axis of the output."""

    LINEAR = "linear"
    LOG = "log"

    @classmethod
    def from_name(cls, name: str) -> FrequencyScale:
        """Parse ``"linear"`` or ``"log"``."""
        return _parse_enum_name(cls, name)  # type: ignore[return-value]


@dataclass(frozen=True)
class RGBAColour:
    """One 8-bit RGBA colour, as written to a PNG.

    Invariants:
        0 <= r, g, b, a <= 255
    """

    r: int
    g: int
    b: int
    a: int = 255

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Return ``(r, g, b, a)``."""
        return (self.r, self.g, self.b, self.a)
