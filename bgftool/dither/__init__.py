# bgftool/dither/__init__.py
"""
Dither engine API.

Provides:
  dither(image, palette=None, config=None, *, noise=None) -> uint8 [H*W]
    Map an (H,W,4) unit-float RGBA image to palette indices.

  DitherConfig(strategy, transparency_clip, r2_seed, pcg_seed, workers, ...)
  Strategy: none | r2 | pcg | floyd-steinberg | jarvis-judice-ninke | stucki
            | atkinson | burkes | sierra | two-row-sierra | sierra-lite

Notes:
  - Noise strategies run row shards on a thread pool; output does not depend
    on the worker count.
  - Diffusion strategies run one strict raster-order pass on one thread.
  - Pixels with alpha below the clip, or matching the marker colour, map to
    the transparent index 254.
"""

from .engine import DitherConfig, Strategy, dither, make_noise_source
from .kernels import KERNELS, DiffusionKernel
from .noise import NoNoise, NoiseSource, PcgNoise, R2Noise

__all__ = [
    "dither",
    "DitherConfig",
    "Strategy",
    "make_noise_source",
    "KERNELS",
    "DiffusionKernel",
    "NoNoise",
    "R2Noise",
    "PcgNoise",
    "NoiseSource",
]
