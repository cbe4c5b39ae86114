"""
spectrograph/core/colour_gradient.py — Map scalar values to RGBA colours.

A gradient is an ordered list of control colours spread evenly over a
scalar domain ``[min, max]``. Values between two control colours are
linearly interpolated per channel and rounded half-up; values outside the
domain clamp to the first/last colour.

Themes are pure data: each `ColourTheme` member carries a tuple of
`RGBAColour`s, and `ColourGradient.create()` copies them into a new
gradient.
"""

from __future__ import annotations

import math
from enum import Enum

import numpy as np

from spectrograph.core.errors import DegenerateError, IncompleteDataError, InvalidInputError
from spectrograph.core.types import RGBAColour

# ---------------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------------

_BLACK = RGBAColour(0, 0, 0, 255)
_WHITE = RGBAColour(255, 255, 255, 255)


class ColourTheme(Enum):
    """Named colour presets. The value is the CLI spelling."""

    DEFAULT = "default"
    AUDACITY = "audacity"  # same as the default of the audio editor of that name
    RAINBOW = "rainbow"
    BLACK_WHITE = "black-white"  # black background, white foreground
    WHITE_BLACK = "white-black"  # white background, black foreground

    @property
    def colours(self) -> tuple[RGBAColour, ...]:
        return THEME_COLOURS[self]

    @classmethod
    def from_name(cls, name: str) -> ColourTheme:
        key = name.strip().lower().replace("_", "-")
        for theme in cls:
            if key == theme.value:
                return theme
        valid = sorted(t.value for t in cls)
        raise InvalidInputError(f"Unknown colour theme {name!r}, valid options: {valid}")


THEME_COLOURS: dict[ColourTheme, tuple[RGBAColour, ...]] = {
    ColourTheme.DEFAULT: (
        _BLACK,
        RGBAColour(55, 0, 110, 255),  # purple
        RGBAColour(0, 0, 180, 255),  # blue
        RGBAColour(0, 255, 255, 255),  # cyan
        RGBAColour(0, 255, 0, 255),  # green
    ),
    ColourTheme.AUDACITY: (
        RGBAColour(215, 215, 215, 255),  # grey
        RGBAColour(114, 169, 242, 255),  # blue
        RGBAColour(227, 61, 215, 255),  # pink
        RGBAColour(246, 55, 55, 255),  # red
        _WHITE,
    ),
    ColourTheme.RAINBOW: (
        _BLACK,
        RGBAColour(148, 0, 211, 255),  # violet
        RGBAColour(75, 0, 130, 255),  # indigo
        RGBAColour(0, 0, 255, 255),  # blue
        RGBAColour(0, 255, 0, 255),  # green
        RGBAColour(255, 255, 0, 255),  # yellow
        RGBAColour(255, 127, 0, 255),  # orange
        RGBAColour(255, 0, 0, 255),  # red
        _WHITE,
    ),
    ColourTheme.BLACK_WHITE: (_BLACK, _WHITE),
    ColourTheme.WHITE_BLACK: (_WHITE, _BLACK),
}


def _interpolate(start: int, finish: int, ratio: float) -> int:
    return int(math.floor((finish - start) * ratio + start + 0.5))


# ---------------------------------------------------------------------------
# ColourGradient
# ---------------------------------------------------------------------------


class ColourGradient:
    """An ordered list of control colours over a scalar domain.

    Args:
        colours: Initial control colours, lowest value first.
        min: Domain lower bound.
        max: Domain upper bound.

    Example:
        >>> gradient = ColourGradient.create(ColourTheme.BLACK_WHITE)
        >>> gradient.get_colour(0.5)
        RGBAColour(r=128, g=128, b=128, a=255)
    """

    def __init__(
        self,
        colours: list[RGBAColour] | tuple[RGBAColour, ...] = (),
        min: float = 0.0,
        max: float = 1.0,
    ) -> None:
        self._colours: list[RGBAColour] = list(colours)
        self.min = float(min)
        self.max = float(max)

    @classmethod
    def create(cls, theme: ColourTheme) -> ColourGradient:
        """Build a gradient from a preset theme, domain ``[0, 1]``."""
        return cls(theme.colours)

    def __repr__(self) -> str:
        return f"ColourGradient(colours={len(self._colours)}, min={self.min}, max={self.max})"

    @property
    def colours(self) -> tuple[RGBAColour, ...]:
        return tuple(self._colours)

    def add_colour(self, colour: RGBAColour) -> None:
        self._colours.append(colour)

    def set_min(self, min: float) -> None:
        self.min = float(min)

    def set_max(self, max: float) -> None:
        self.max = float(max)

    def copy(self) -> ColourGradient:
        return ColourGradient(self._colours, self.min, self.max)

    def with_domain(self, min: float, max: float) -> ColourGradient:
        """Return a copy of this gradient over ``[min, max]``."""
        return ColourGradient(self._colours, min, max)

    def reversed(self) -> ColourGradient:
        """Return a copy with the colour order reversed (e.g. black-white → white-black)."""
        return ColourGradient(self._colours[::-1], self.min, self.max)

    def _check(self) -> None:
        if len(self._colours) < 2:
            raise IncompleteDataError(
                f"a colour gradient needs at least 2 colours, has {len(self._colours)}"
            )
        if self.max < self.min:
            raise DegenerateError(f"gradient max ({self.max}) must be >= min ({self.min})")

    def get_colour(self, value: float) -> RGBAColour:
        """Map one value to its colour.

        Raises:
            IncompleteDataError: Fewer than 2 colours.
            DegenerateError: ``max < min``.
            InvalidInputError: `value` is NaN.
        """
        self._check()
        if math.isnan(value):
            raise InvalidInputError("cannot map NaN to a colour")
        if value <= self.min:
            return self._colours[0]
        if value >= self.max:
            return self._colours[-1]

        n = len(self._colours)
        scaled = (value - self.min) / (self.max - self.min) * (n - 1)
        idx = min(math.floor(scaled), n - 2)
        ratio = scaled - idx

        first = self._colours[idx]
        second = self._colours[idx + 1]
        return RGBAColour(
            r=_interpolate(first.r, second.r, ratio),
            g=_interpolate(first.g, second.g, ratio),
            b=_interpolate(first.b, second.b, ratio),
            a=_interpolate(first.a, second.a, ratio),
        )

    def get_colours(self, values: np.ndarray) -> np.ndarray:
        """Vectorised `get_colour`.

        Args:
            values: Array of any shape.

        Returns:
            uint8 array of shape ``values.shape + (4,)``.

        Raises:
            InvalidInputError: Any value is NaN.
        """
        self._check()
        vals = np.asarray(values, dtype=np.float64)
        if np.isnan(vals).any():
            raise InvalidInputError("cannot map NaN to a colour")
        table = np.array([c.to_tuple() for c in self._colours], dtype=np.float64)
        n = len(table)

        span = self.max - self.min
        if span > 0:
            scaled = (vals - self.min) / span * (n - 1)
        else:
            scaled = np.zeros_like(vals)
        idx = np.clip(np.floor(scaled), 0, n - 2).astype(np.intp)
        ratio = (scaled - idx)[..., np.newaxis]

        first = table[idx]
        second = table[idx + 1]
        out = np.floor((second - first) * ratio + first + 0.5)

        # clamp outside the domain (value <= min wins, as in get_colour)
        out = np.where((vals >= self.max)[..., np.newaxis], table[-1], out)
        out = np.where((vals <= self.min)[..., np.newaxis], table[0], out)
        return out.astype(np.uint8)

    def legend(self, length: int) -> np.ndarray:
        """Sample the gradient at `length` evenly spaced values over ``[min, max]``.

        Returns:
            uint8 array of shape ``(length, 4)``, first entry = `min` colour.
        """
        if length < 1:
            raise DegenerateError(f"legend length must be positive, got {length}")
        return self.get_colours(np.linspace(self.min, self.max, length))
