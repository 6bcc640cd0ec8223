from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np

from .rgb import Color, InvalidCountError, blend, parse_hex

log = logging.getLogger(__name__)

Ratio = float

DEFAULT_RESIDUAL = 0.05  # last step stops 5 % short of the target


def _check_count(n: Any) -> int:
    # bool is an Integral too; a checkbox value is not a step count
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidCountError(f"count must be an integer, got {n!r}")
    if n < 2:
        raise InvalidCountError(f"count must be ≥ 2, got {n}")
    return int(n)


def _check_residual(residual: float) -> float:
    r = float(residual)
    if not 0.0 < r < 1.0:
        raise ValueError(f"residual must lie in (0, 1), got {residual!r}")
    return r


def tint_ratios(n: int, *, residual: float = DEFAULT_RESIDUAL) -> np.ndarray:
    """
    Generate n blend ratios on a geometric curve.

      ratio(i) = 1 - (residual ** (1 / (n - 1))) ** i

    ratio(0) is 0 (the base colour itself) and ratio(n-1) is 1 - residual.
    Steps are wide near the base and shrink toward the target.
    """
    n = _check_count(n)
    r = _check_residual(residual)
    factor = r ** (1.0 / (n - 1))
    return 1.0 - factor ** np.arange(n, dtype=np.float64)


def format_percentage(ratio: Ratio) -> str:
    return f"{ratio * 100:.2f}"


@dataclass(frozen=True)
class PaletteEntry:
    color: Color
    ratio: Ratio
    label: str

    def to_dict(self) -> Dict[str, Any]:
        """JSON record for the page; display fields use the clamped colour."""
        shown = self.color.clamped()
        return {
            "label": self.label,
            "ratio": self.ratio,
            "rgb": [self.color.r, self.color.g, self.color.b],
            "css": shown.to_css(),
            "hex": shown.to_hex(),
        }


@dataclass(frozen=True)
class GenerationRequest:
    base: Color
    target: Color
    count: int
    residual: float = DEFAULT_RESIDUAL

    def __post_init__(self) -> None:
        _check_count(self.count)
        _check_residual(self.residual)

    @classmethod
    def from_strings(
        cls,
        base_hex: str,
        target_hex: str,
        count: str | int,
        *,
        residual: float = DEFAULT_RESIDUAL,
    ) -> GenerationRequest:
        """Build a request from raw form values ('RRGGBB', 'RRGGBB', '12')."""
        base = parse_hex(base_hex)
        target = parse_hex(target_hex)
        if isinstance(count, str):
            try:
                count = int(count.strip())
            except ValueError:
                raise InvalidCountError(
                    f"count must be an integer, got {count!r}"
                ) from None
        return cls(base, target, count, residual)


@dataclass
class TintPalette:
    residual: float = DEFAULT_RESIDUAL

    def ratios(self, n: int) -> np.ndarray:
        return tint_ratios(n, residual=self.residual)

    def generate(self, base: Color, target: Color, n: int) -> List[PaletteEntry]:
        ratios = self.ratios(n)
        out: List[PaletteEntry] = []
        for t in ratios:
            ratio = float(t)
            out.append(
                PaletteEntry(
                    color=blend(base, target, ratio),
                    ratio=ratio,
                    label=format_percentage(ratio),
                )
            )
        log.debug(
            "palette %s -> %s: %d steps, residual %.4f",
            base.to_css(),
            target.to_css(),
            len(out),
            self.residual,
        )
        return out

    def step(self, base: Color, target: Color, index: int, n: int) -> Color:
        """Colour of step `index` alone, without building the palette."""
        n = _check_count(n)
        if isinstance(index, bool) or not isinstance(index, numbers.Integral):
            raise ValueError(f"index must be an integer, got {index!r}")
        if not 0 <= index < n:
            raise ValueError(f"index must lie in [0, {n}), got {index}")
        return blend(base, target, float(self.ratios(n)[index]))


def generate(req: GenerationRequest) -> List[PaletteEntry]:
    return TintPalette(residual=req.residual).generate(req.base, req.target, req.count)


def adjust_color(
    base: Color,
    target: Color,
    index: int,
    count: int,
    *,
    residual: float = DEFAULT_RESIDUAL,
) -> Color:
    return TintPalette(residual=residual).step(base, target, index, count)


__all__ = [
    "DEFAULT_RESIDUAL",
    "GenerationRequest",
    "PaletteEntry",
    "TintPalette",
    "adjust_color",
    "format_percentage",
    "generate",
    "tint_ratios",
]
