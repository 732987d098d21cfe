# bgftool/palette.py
from __future__ import annotations

"""
Immutable 256-entry palette with nearest-colour lookup.

Exports:
  Palette(table=PALETTE)
    .values                      uint8 [256,3], read-only
    .transparent_color()      -> (254, (0, 255, 255))
    .find_closest(rgb)        -> (index, RGBTuple)
    .find_closest_many(rgbs)  -> int array [N]
    .index_of(rgb) / .map_color(rgb)
    .render(indices, w, h)    -> uint8 [H,W,3]
  get_palette() -> shared default Palette

Notes:
  - Colours are given in byte scale (0..255). Floats outside that range are
    fine; they are compared as-is.
  - Distance is squared Euclidean in RGB. Same ordering as Euclidean.
  - The transparent index is never returned by a search.
  - Ties go to the lowest index. The table holds duplicate colours, so this
    matters, and it keeps results independent of how work is chunked.
"""

from functools import lru_cache
from typing import Sequence, Tuple

import numpy as np

from .core_types import RGBTuple, U8Image, coerce_to_rgb_tuple
from .errors import ConfigurationError, InvalidColorValue
from .palette_data import PALETTE, PALETTE_SIZE, TRANSPARENT_COLOR, TRANSPARENT_INDEX

# Rows per block in the vectorised search. Three (rows, 255) float64 temporaries.
SEARCH_CHUNK = 4096


class Palette:
    """Fixed colour table. Never mutated after construction."""

    __slots__ = ("_values", "_search_rgb", "_search_idx")

    def __init__(self, table: Sequence[Sequence[int]] = PALETTE) -> None:
        values = np.array(table, dtype=np.int64)
        if values.shape != (PALETTE_SIZE, 3):
            raise ConfigurationError(
                f"palette must be {PALETTE_SIZE}x3, got {values.shape}"
            )
        if values.min() < 0 or values.max() > 255:
            raise ConfigurationError("palette channels must be bytes")
        values = values.astype(np.uint8)
        values.flags.writeable = False
        self._values = values

        # Candidate rows in index order, transparent slot removed.
        keep = np.arange(PALETTE_SIZE) != TRANSPARENT_INDEX
        search_rgb = values[keep].astype(np.float64)
        search_idx = np.nonzero(keep)[0].astype(np.intp)
        search_rgb.flags.writeable = False
        search_idx.flags.writeable = False
        self._search_rgb = search_rgb
        self._search_idx = search_idx

    def __len__(self) -> int:
        return PALETTE_SIZE

    def __getitem__(self, index: int) -> RGBTuple:
        return coerce_to_rgb_tuple(self._values[index])

    @property
    def values(self) -> U8Image:
        return self._values

    def transparent_color(self) -> Tuple[int, RGBTuple]:
        """Transparent slot and its marker colour (constants, not table data)."""
        return TRANSPARENT_INDEX, TRANSPARENT_COLOR

    def find_closest(self, color: Sequence[float]) -> Tuple[int, RGBTuple]:
        """Nearest non-transparent entry to one RGB triple (byte scale)."""
        c = np.asarray(color, dtype=np.float64).reshape(-1)
        if c.shape[0] != 3:
            raise ValueError("expected an RGB triple")
        j = int(self.find_closest_many(c[None, :])[0])
        return j, self[j]

    def find_closest_many(self, colors: np.ndarray) -> np.ndarray:
        """
        Vectorised find_closest over (N,3) byte-scale colours.

        Returns intp [N] palette indices. Each row is reduced on its own, so the
        answer for a pixel does not depend on which block it lands in.
        """
        pts = np.asarray(colors, dtype=np.float64).reshape(-1, 3)
        if pts.shape[0] == 0:
            return np.zeros((0,), dtype=np.intp)
        if not np.all(np.isfinite(pts)):
            raise InvalidColorValue("non-finite colour in search input")

        pal = self._search_rgb
        out = np.empty((pts.shape[0],), dtype=np.intp)
        for s in range(0, pts.shape[0], SEARCH_CHUNK):
            block = pts[s : s + SEARCH_CHUNK]
            dr = block[:, 0, None] - pal[None, :, 0]
            dg = block[:, 1, None] - pal[None, :, 1]
            db = block[:, 2, None] - pal[None, :, 2]
            dist2 = dr * dr + dg * dg + db * db
            # argmin keeps the first minimum, i.e. the lowest palette index.
            out[s : s + block.shape[0]] = self._search_idx[np.argmin(dist2, axis=1)]
        return out

    def index_of(self, color: Sequence[float]) -> int:
        """Colour-quantiser adapter: nearest index."""
        index, _ = self.find_closest(color)
        return index

    def map_color(self, color: Sequence[float]) -> RGBTuple:
        """Colour-quantiser adapter: nearest colour."""
        _, closest = self.find_closest(color)
        return closest

    def render(self, indices: np.ndarray, width: int, height: int) -> U8Image:
        """Reverse mapping, index -> RGB, no dithering. Returns uint8 [H,W,3]."""
        idx = np.asarray(indices, dtype=np.uint8).reshape(-1)
        if idx.shape[0] != width * height:
            raise ValueError(
                f"index buffer holds {idx.shape[0]} entries, expected {width * height}"
            )
        return self._values[idx].reshape(height, width, 3)


@lru_cache(maxsize=1)
def get_palette() -> Palette:
    """Process-wide default palette, built once."""
    return Palette()


__all__ = ["Palette", "get_palette", "SEARCH_CHUNK"]
