# bgftool/dither/engine.py
from __future__ import annotations

"""
Continuous RGBA -> palette index conversion.

Two regimes, picked by strategy and never mixed in one call:

- Noise strategies (none, r2, pcg): every pixel is independent. Rows are
  sharded across a thread pool; each shard reads the shared palette and
  noise source and writes its own slice of the output. Transparency is
  decided on the source colour, then the colour is perturbed and quantised.
- Error diffusion (eight kernels): one thread, row-major, single pass.
  Transparency is decided on the colour after accumulated error is added.

Any error aborts the conversion. No partial buffer is returned.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from ..core_types import F32Image, IndexBuffer, assert_f32_image_rgba, unit_to_u8
from ..errors import ConfigurationError, InvalidColorValue
from ..palette import Palette, get_palette
from ..palette_data import TRANSPARENT_COLOR, TRANSPARENT_INDEX
from ..utils import (
    debug_log,
    format_seconds_compact,
    print_progress_line,
    split_rows_into_parts,
)
from .kernels import KERNELS, DiffusionKernel
from .noise import NoiseSource, NoNoise, PcgNoise, R2Noise, apply_noise

# Below this many rows the noise path stays on the calling thread.
MIN_ROWS_FOR_THREADS = 64


class Strategy(str, Enum):
    """Dither strategy. Noise variants first, then the diffusion kernels."""

    NONE = "none"
    R2 = "r2"
    PCG = "pcg"
    FLOYD_STEINBERG = "floyd-steinberg"
    JARVIS_JUDICE_NINKE = "jarvis-judice-ninke"
    STUCKI = "stucki"
    ATKINSON = "atkinson"
    BURKES = "burkes"
    SIERRA = "sierra"
    TWO_ROW_SIERRA = "two-row-sierra"
    SIERRA_LITE = "sierra-lite"

    @classmethod
    def parse(cls, value: Union[str, "Strategy"]) -> "Strategy":
        if isinstance(value, Strategy):
            return value
        key = str(value).strip().lower().replace("_", "-")
        try:
            return cls(key)
        except ValueError:
            names = ", ".join(s.value for s in cls)
            raise ConfigurationError(
                f"unknown dither strategy {value!r} (expected one of: {names})"
            ) from None

    @property
    def kernel(self) -> Optional[DiffusionKernel]:
        return KERNELS.get(self.value)

    @property
    def is_diffusion(self) -> bool:
        return self.value in KERNELS


@dataclass(frozen=True)
class DitherConfig:
    """
    Conversion settings.

    transparency_clip: alpha below this maps to the transparent index.
    r2_seed / pcg_seed: seeds for the matching noise strategy.
    workers: threads for the noise strategies. Diffusion always uses one.
    """

    strategy: Strategy = Strategy.NONE
    transparency_clip: float = 0.5
    r2_seed: float = 0.0
    pcg_seed: int = 0
    workers: int = 1
    progress: bool = False
    debug: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "strategy", Strategy.parse(self.strategy))
        clip = float(self.transparency_clip)
        if not (0.0 <= clip <= 1.0):
            raise ConfigurationError(f"transparency_clip must be in [0, 1], got {clip}")
        object.__setattr__(self, "transparency_clip", clip)
        if int(self.workers) < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")


def make_noise_source(config: DitherConfig, sample_count: int) -> NoiseSource:
    """Build the noise source for a noise strategy. Diffusion gets NoNoise."""
    if config.strategy is Strategy.R2:
        return R2Noise(config.r2_seed)
    if config.strategy is Strategy.PCG:
        return PcgNoise(config.pcg_seed, sample_count)
    return NoNoise()


# Per-pixel helpers


def _transparent_mask(pixels: np.ndarray, clip: float) -> np.ndarray:
    """Rows of an (N,4) block that map to the transparent index."""
    marker = np.array(TRANSPARENT_COLOR, dtype=np.uint8)
    is_marker = np.all(unit_to_u8(pixels[:, :3]) == marker, axis=1)
    return (pixels[:, 3] < clip) | is_marker


def _is_transparent(pixel: np.ndarray, clip: float) -> bool:
    if pixel[3] < clip:
        return True
    return tuple(unit_to_u8(pixel[:3]).tolist()) == TRANSPARENT_COLOR


# Noise regime


def _dither_noise_rows(
    flat: np.ndarray,
    width: int,
    span: Tuple[int, int],
    palette: Palette,
    noise: NoiseSource,
    clip: float,
) -> np.ndarray:
    """Quantise rows [start, end). Returns the matching output slice."""
    start, end = span
    lo, hi = start * width, end * width
    px = flat[lo:hi].astype(np.float64)
    out = np.full((hi - lo,), TRANSPARENT_INDEX, dtype=np.uint8)

    visible = ~_transparent_mask(px, clip)
    if np.any(visible):
        pixel_idx = np.arange(lo, hi, dtype=np.int64)[visible]
        perturbed = apply_noise(
            px[visible], noise.get_many(pixel_idx).astype(np.float64)
        )
        out[visible] = palette.find_closest_many(perturbed[:, :3] * 255.0)
    return out


def _dither_noise(
    image: F32Image,
    palette: Palette,
    noise: NoiseSource,
    clip: float,
    workers: int,
) -> IndexBuffer:
    height, width, _ = image.shape
    flat = image.reshape(-1, 4)
    out = np.empty((height * width,), dtype=np.uint8)

    if workers <= 1 or height < MIN_ROWS_FOR_THREADS:
        spans = [(0, height)]
    else:
        spans = split_rows_into_parts(height, workers)

    def run_one(span: Tuple[int, int]) -> Tuple[Tuple[int, int], np.ndarray]:
        return span, _dither_noise_rows(flat, width, span, palette, noise, clip)

    if len(spans) == 1:
        results = [run_one(spans[0])]
    else:
        with ThreadPoolExecutor(max_workers=workers) as ex:
            # list() re-raises the first worker failure here.
            results = list(ex.map(run_one, spans))

    for (start, end), chunk in results:
        out[start * width : end * width] = chunk
    return out


# Diffusion regime


def _dither_diffuse(
    image: F32Image,
    palette: Palette,
    kernel: DiffusionKernel,
    clip: float,
    progress: bool,
) -> IndexBuffer:
    height, width, _ = image.shape
    src = image.astype(np.float64)
    out = np.empty((height * width,), dtype=np.uint8)

    # Fresh per call; never shared.
    error_acc = np.zeros((height, width, 4), dtype=np.float64)

    # Palette colours as opaque unit RGBA, so error = adjusted - target.
    targets = np.ones((len(palette), 4), dtype=np.float64)
    targets[:, :3] = palette.values.astype(np.float64) / 255.0

    taps = kernel.as_rows()
    last_pct = -1

    for y in range(height):
        row_base = y * width
        for x in range(width):
            adjusted = src[y, x] + error_acc[y, x]

            if _is_transparent(adjusted, clip):
                out[row_base + x] = TRANSPARENT_INDEX
                continue

            j = int(palette.find_closest_many((adjusted[:3] * 255.0)[None, :])[0])
            out[row_base + x] = j

            quant_err = adjusted - targets[j]
            for dx, dy, weight in taps:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height:
                    error_acc[ny, nx] += weight * quant_err

        if progress:
            pct = int(100 * (y + 1) / height)
            if pct > last_pct:
                print_progress_line(
                    f"[{kernel.name}] {pct:3d}%", final=(y + 1 == height)
                )
                last_pct = pct

    return out


# Public entry


def dither(
    image: np.ndarray,
    palette: Optional[Palette] = None,
    config: Optional[DitherConfig] = None,
    *,
    noise: Optional[NoiseSource] = None,
) -> IndexBuffer:
    """
    Convert an (H,W,4) unit-float RGBA image to a row-major uint8 index buffer.

    Args:
      image   : float [H,W,4], channels in [0,1]
      palette : defaults to the built-in BGF palette
      config  : DitherConfig, defaults to no dithering with clip 0.5
      noise   : override the noise source built from config (noise strategies)

    Returns:
      uint8 [H*W]. Empty when either dimension is zero.

    Raises:
      ConfigurationError : bad shape, or a PCG table smaller than H*W
      IndexOutOfRange    : noise lookup past the sample table
      InvalidColorValue  : non-finite channel values
    """
    img = assert_f32_image_rgba(image)
    palette = palette if palette is not None else get_palette()
    config = config if config is not None else DitherConfig()

    height, width, _ = img.shape
    if height == 0 or width == 0:
        return np.zeros((0,), dtype=np.uint8)

    if not np.all(np.isfinite(img)):
        raise InvalidColorValue("image holds non-finite channel values")

    t0 = time.perf_counter()
    kernel = config.strategy.kernel
    if kernel is not None:
        out = _dither_diffuse(
            img, palette, kernel, config.transparency_clip, config.progress
        )
    else:
        if noise is None:
            noise = make_noise_source(config, width * height)
        if isinstance(noise, PcgNoise) and noise.sample_count < width * height:
            raise ConfigurationError(
                f"PCG noise holds {noise.sample_count} samples, "
                f"image needs {width * height}"
            )
        out = _dither_noise(
            img, palette, noise, config.transparency_clip, int(config.workers)
        )

    if config.debug:
        debug_log(
            f"dither {config.strategy.value} {width}x{height} "
            f"in {format_seconds_compact(time.perf_counter() - t0)}"
        )
    return out


__all__ = [
    "Strategy",
    "DitherConfig",
    "MIN_ROWS_FOR_THREADS",
    "make_noise_source",
    "dither",
]
