# bgftool/dither/kernels.py
from __future__ import annotations

"""
Error-diffusion kernels.

Each kernel is a tuple of (weight, (dx, dy)) taps relative to the current
pixel. Offsets only reach forward in raster order (dy > 0, or dy == 0 and
dx > 0). Weights sum to 1.0.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

Tap = Tuple[float, Tuple[int, int]]


@dataclass(frozen=True)
class DiffusionKernel:
    """Named table of diffusion taps."""

    name: str
    taps: Tuple[Tap, ...]

    @property
    def total_weight(self) -> float:
        return sum(w for w, _ in self.taps)

    def as_rows(self) -> Tuple[Tuple[int, int, float], ...]:
        """(dx, dy, weight) triples, the order the diffusion loop reads them."""
        return tuple((dx, dy, w) for w, (dx, dy) in self.taps)


FLOYD_STEINBERG = DiffusionKernel(
    "floyd-steinberg",
    (
        (7 / 16, (1, 0)),
        (3 / 16, (-1, 1)),
        (5 / 16, (0, 1)),
        (1 / 16, (1, 1)),
    ),
)

JARVIS_JUDICE_NINKE = DiffusionKernel(
    "jarvis-judice-ninke",
    (
        (7 / 48, (1, 0)),
        (5 / 48, (2, 0)),
        (3 / 48, (-2, 1)),
        (5 / 48, (-1, 1)),
        (7 / 48, (0, 1)),
        (5 / 48, (1, 1)),
        (3 / 48, (2, 1)),
        (1 / 48, (-2, 2)),
        (3 / 48, (-1, 2)),
        (5 / 48, (0, 2)),
        (3 / 48, (1, 2)),
        (1 / 48, (2, 2)),
    ),
)

STUCKI = DiffusionKernel(
    "stucki",
    (
        (8 / 42, (1, 0)),
        (4 / 42, (2, 0)),
        (2 / 42, (-2, 1)),
        (4 / 42, (-1, 1)),
        (8 / 42, (0, 1)),
        (4 / 42, (1, 1)),
        (2 / 42, (2, 1)),
        (1 / 42, (-2, 2)),
        (2 / 42, (-1, 2)),
        (4 / 42, (0, 2)),
        (2 / 42, (1, 2)),
        (1 / 42, (2, 2)),
    ),
)

# Atkinson's six taps, normalised to 1/6 each so the full error is kept.
ATKINSON = DiffusionKernel(
    "atkinson",
    (
        (1 / 6, (1, 0)),
        (1 / 6, (2, 0)),
        (1 / 6, (-1, 1)),
        (1 / 6, (0, 1)),
        (1 / 6, (1, 1)),
        (1 / 6, (0, 2)),
    ),
)

BURKES = DiffusionKernel(
    "burkes",
    (
        (8 / 32, (1, 0)),
        (4 / 32, (2, 0)),
        (2 / 32, (-2, 1)),
        (4 / 32, (-1, 1)),
        (8 / 32, (0, 1)),
        (4 / 32, (1, 1)),
        (2 / 32, (2, 1)),
    ),
)

SIERRA = DiffusionKernel(
    "sierra",
    (
        (5 / 32, (1, 0)),
        (3 / 32, (2, 0)),
        (2 / 32, (-2, 1)),
        (4 / 32, (-1, 1)),
        (5 / 32, (0, 1)),
        (4 / 32, (1, 1)),
        (2 / 32, (2, 1)),
        (2 / 32, (-1, 2)),
        (3 / 32, (0, 2)),
        (2 / 32, (1, 2)),
    ),
)

TWO_ROW_SIERRA = DiffusionKernel(
    "two-row-sierra",
    (
        (4 / 16, (1, 0)),
        (3 / 16, (2, 0)),
        (1 / 16, (-2, 1)),
        (2 / 16, (-1, 1)),
        (3 / 16, (0, 1)),
        (2 / 16, (1, 1)),
        (1 / 16, (2, 1)),
    ),
)

SIERRA_LITE = DiffusionKernel(
    "sierra-lite",
    (
        (2 / 4, (1, 0)),
        (1 / 4, (-1, 1)),
        (1 / 4, (0, 1)),
    ),
)

KERNELS: Dict[str, DiffusionKernel] = {
    k.name: k
    for k in (
        FLOYD_STEINBERG,
        JARVIS_JUDICE_NINKE,
        STUCKI,
        ATKINSON,
        BURKES,
        SIERRA,
        TWO_ROW_SIERRA,
        SIERRA_LITE,
    )
}

__all__ = [
    "Tap",
    "DiffusionKernel",
    "FLOYD_STEINBERG",
    "JARVIS_JUDICE_NINKE",
    "STUCKI",
    "ATKINSON",
    "BURKES",
    "SIERRA",
    "TWO_ROW_SIERRA",
    "SIERRA_LITE",
    "KERNELS",
]
