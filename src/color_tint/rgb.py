from __future__ import annotations

import math
import string
from dataclasses import dataclass

import numpy as np
from coloraide import Color as CAColor

FIT_HEX = {"method": "clip"}  # extrapolated channels are clipped, not gamut-mapped


class TintError(ValueError):
    """Base class for rejected palette inputs."""


class ParseError(TintError):
    """Colour string is not six hex digits."""


class InvalidCountError(TintError):
    """Step count is not an integer ≥ 2."""


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    def as_array(self) -> np.ndarray:
        return np.array([self.r, self.g, self.b], dtype=np.int64)

    def to_srgb01(self) -> np.ndarray:
        """Gamma-encoded sRGB in [0-1] (unclipped for extrapolated colours)."""
        return self.as_array().astype(np.float64) / 255.0

    def in_gamut(self) -> bool:
        return all(0 <= v <= 255 for v in (self.r, self.g, self.b))

    def clamped(self) -> Color:
        r, g, b = (int(v) for v in np.clip(self.as_array(), 0, 255))
        return Color(r, g, b)

    def to_css(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"

    def to_hex(self) -> str:
        return CAColor("srgb", self.to_srgb01().tolist()).to_string(
            hex=True, fit=FIT_HEX
        )


def parse_hex(s: str) -> Color:
    """Parse 'RRGGBB' (case-insensitive, no leading '#') into a Color."""
    if not isinstance(s, str):
        raise ParseError(f"expected a hex string, got {type(s).__name__}")
    if len(s) != 6 or not all(c in string.hexdigits for c in s):
        raise ParseError(f"invalid hex colour {s!r}: need 6 hex digits RRGGBB")
    r, g, b = (int(s[i : i + 2], 16) for i in (0, 2, 4))
    return Color(r, g, b)


def _round_half_up(x: np.ndarray) -> np.ndarray:
    # Math.round() semantics: ties go toward +inf, also for negative deltas.
    # x - floor(x) is exact, unlike x + 0.5 just below a tie
    lo = np.floor(x)
    return np.where(x - lo >= 0.5, lo + 1.0, lo)


def blend(base: Color, target: Color, ratio: float) -> Color:
    """
    Move each channel of `base` toward `target` by `ratio`.

    Ratios outside [0, 1] extrapolate; the result is not clamped, so call
    `Color.clamped()` before display if that matters.
    """
    t = float(ratio)
    if not math.isfinite(t):
        raise ValueError(f"ratio must be finite, got {ratio!r}")
    a = base.as_array()
    delta = target.as_array() - a
    out = a + _round_half_up(delta * t).astype(np.int64)
    r, g, b = (int(v) for v in out)
    return Color(r, g, b)


__all__ = [
    "Color",
    "InvalidCountError",
    "ParseError",
    "TintError",
    "blend",
    "parse_hex",
]
