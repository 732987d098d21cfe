# bgftool/image_io.py
from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import F32Image, U8Image
from .errors import BgfToolError

"""
Image I/O helpers: decode any Pillow-readable file to unit-float RGBA, and
write rendered RGB bitmaps back out.
"""


# Single-channel modes wider than 8 bits. Pillow has no wide RGB mode.
_WIDE_GREY_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I", "F")


def _wide_grey_to_rgba_f32(im: Image.Image) -> F32Image:
    if im.mode == "F":
        grey = np.asarray(im, dtype=np.float32)
    else:
        grey = np.asarray(im.convert("I"), dtype=np.float32) / np.float32(65535.0)
    rgba = np.ones(grey.shape + (4,), dtype=np.float32)
    rgba[..., :3] = np.clip(grey, 0.0, 1.0)[..., None]
    return rgba


def load_image_rgba_f32(path: Path) -> F32Image:
    """
    Decode to float32 RGBA in [0,1]. Returns (H,W,4).
    16-bit and float greyscale keep their precision; everything else goes
    through Pillow's 8-bit RGBA.
    """
    try:
        with Image.open(path) as im0:
            im = ImageOps.exif_transpose(im0)
            if im.mode in _WIDE_GREY_MODES:
                return _wide_grey_to_rgba_f32(im)
            arr = np.asarray(im.convert("RGBA"), dtype=np.uint8)
    except UnidentifiedImageError as exc:
        raise BgfToolError(f"cannot decode image {path}") from exc
    return arr.astype(np.float32) / np.float32(255.0)


def save_image_rgb(path: Path, rgb: U8Image) -> Path:
    """Save a uint8 (H,W,3) array. Format follows the file extension."""
    if rgb.dtype != np.uint8 or rgb.ndim != 3 or rgb.shape[-1] != 3:
        raise TypeError("expected uint8 (H,W,3) image")
    Image.fromarray(np.ascontiguousarray(rgb)).save(path)
    return path


__all__ = ["load_image_rgba_f32", "save_image_rgb"]
