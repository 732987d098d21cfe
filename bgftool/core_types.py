# bgftool/core_types.py
from __future__ import annotations

"""
Core type aliases and lightweight helpers shared by the engine and the codec.
"""

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .errors import ConfigurationError

# Basic aliases

RGBTuple = Tuple[int, int, int]

F32Image = NDArray[np.float32]  # (H, W, 4) RGBA in [0, 1]
U8Image = NDArray[np.uint8]  # (H, W, 3)
IndexBuffer = NDArray[np.uint8]  # (H*W,) palette indices, row-major
NoiseBlock = NDArray[np.float32]  # (N, 4) per-pixel perturbations


# Small helpers


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Helpful when extracting values from NumPy rows.
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        flat = value.reshape(-1)
        return (int(flat[0]), int(flat[1]), int(flat[2]))
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


def unit_to_u8(rgb: np.ndarray) -> NDArray[np.uint8]:
    """Clamp unit floats to [0, 1] and round to bytes, keeping the shape."""
    scaled = np.rint(np.clip(rgb, 0.0, 1.0) * 255.0)
    return scaled.astype(np.uint8)


def assert_f32_image_rgba(image: np.ndarray) -> F32Image:
    """Validate an (H,W,4) float image and return it as contiguous float32."""
    if not isinstance(image, np.ndarray) or image.ndim != 3 or image.shape[-1] != 4:
        shape = getattr(image, "shape", None)
        raise ConfigurationError(f"expected (H,W,4) RGBA float image, got {shape}")
    if not np.issubdtype(image.dtype, np.floating):
        raise ConfigurationError(f"expected float image, got dtype {image.dtype}")
    return np.ascontiguousarray(image, dtype=np.float32)


__all__ = [
    # aliases / types
    "RGBTuple",
    "F32Image",
    "U8Image",
    "IndexBuffer",
    "NoiseBlock",
    # helpers
    "coerce_to_rgb_tuple",
    "unit_to_u8",
    "assert_f32_image_rgba",
]
