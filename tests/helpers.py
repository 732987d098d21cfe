from typing import Dict

import numpy as np

from bgftool.palette_data import PALETTE, TRANSPARENT_COLOR, TRANSPARENT_INDEX


def first_index_by_colour() -> Dict[tuple, int]:
    """Lowest searchable index for every distinct palette colour."""
    seen: Dict[tuple, int] = {}
    for i, rgb in enumerate(PALETTE):
        if i == TRANSPARENT_INDEX or rgb == TRANSPARENT_COLOR:
            continue
        seen.setdefault(rgb, i)
    return seen


def solid_image(height: int, width: int, rgba) -> np.ndarray:
    img = np.empty((height, width, 4), dtype=np.float32)
    img[...] = np.asarray(rgba, dtype=np.float32)
    return img


def random_image(height: int, width: int, seed: int = 1234, alpha=None) -> np.ndarray:
    rng = np.random.default_rng(seed)
    img = rng.random((height, width, 4), dtype=np.float32)
    if alpha is not None:
        img[..., 3] = alpha
    return img


def indices_to_image(indices, alpha: float = 1.0) -> np.ndarray:
    """One-row unit-float image whose pixels are the given palette colours."""
    rgb = np.array([PALETTE[i] for i in indices], dtype=np.float32) / 255.0
    img = np.empty((1, len(indices), 4), dtype=np.float32)
    img[0, :, :3] = rgb
    img[0, :, 3] = alpha
    return img
