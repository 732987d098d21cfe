# bgftool/dither/noise.py
from __future__ import annotations

"""
Per-pixel noise sources for the noise-dither strategies.

Every source maps a row-major pixel index to four floats (R, G, B, A).
RGB lies in [-1, 1), alpha in [0, 1). Alpha stays non-negative so noise
never drags an opaque pixel towards the transparency clip.

  NoNoise  : zeros
  R2Noise  : additive recurrence on the generalised golden ratio, d=4
  PcgNoise : PCG64 samples drawn once at construction

Sources are read-only after construction and safe to share across threads.
"""

from typing import Union

import numpy as np

from ..core_types import NoiseBlock
from ..errors import ConfigurationError, IndexOutOfRange

CHANNELS = 4

# Fixed-point iterations for the generalised golden ratio.
PHI_ITERATIONS = 10


def generalised_golden_ratio(d: int, iterations: int = PHI_ITERATIONS) -> float:
    """Positive root of x^(d+1) = x + 1, by iterating x <- (1+x)^(1/(d+1))."""
    x = 2.0
    for _ in range(iterations):
        x = (1.0 + x) ** (1.0 / (d + 1))
    return x


def _frac(values: np.ndarray) -> np.ndarray:
    """Fractional part keeping the sign of the input (x - trunc(x))."""
    return np.modf(values)[0]


def _as_index_array(indices: np.ndarray) -> np.ndarray:
    idx = np.asarray(indices, dtype=np.int64).reshape(-1)
    if idx.size and int(idx.min()) < 0:
        raise IndexOutOfRange(f"negative noise index {int(idx.min())}")
    return idx


class NoNoise:
    """Identity source. Perturbation is always zero."""

    def get(self, index: int) -> NoiseBlock:
        return np.zeros((CHANNELS,), dtype=np.float32)

    def get_many(self, indices: np.ndarray) -> NoiseBlock:
        idx = _as_index_array(indices)
        return np.zeros((idx.shape[0], CHANNELS), dtype=np.float32)


class R2Noise:
    """
    Low-discrepancy R2 sequence. A pure function of the pixel index.

    Channel i of 1-based sample k is frac(seed + alpha[i] * k), where
    alpha[i] = frac((1/g)^(i+1)) and g is the generalised golden ratio for
    four dimensions.
    """

    def __init__(self, seed: float = 0.0) -> None:
        seed = float(seed)
        if not np.isfinite(seed):
            raise ConfigurationError(f"R2 seed must be finite, got {seed}")
        g = generalised_golden_ratio(CHANNELS)
        inv = 1.0 / g
        self.seed = seed
        self.alpha = np.array(
            [_frac(np.float64(inv ** (i + 1))) for i in range(CHANNELS)],
            dtype=np.float64,
        )
        self.alpha.flags.writeable = False

    def get(self, index: int) -> NoiseBlock:
        return self.get_many(np.array([index]))[0]

    def get_many(self, indices: np.ndarray) -> NoiseBlock:
        idx = _as_index_array(indices)
        k = (idx + 1).astype(np.float64)
        raw = _frac(self.seed + self.alpha[None, :] * k[:, None])
        out = raw.astype(np.float32)
        out[:, :3] = (raw[:, :3] * 2.0 - 1.0).astype(np.float32)
        return out


class PcgNoise:
    """
    PCG64 white noise, one 4-float sample per pixel index, precomputed.

    Lookups past sample_count raise IndexOutOfRange. Wrapping would repeat
    the pattern visibly, so it is not offered.
    """

    def __init__(self, seed: int = 0, sample_count: int = 0) -> None:
        seed = int(seed)
        sample_count = int(sample_count)
        if not 0 <= seed < 2**64:
            raise ConfigurationError(f"PCG seed must fit in 64 bits, got {seed}")
        if sample_count < 0:
            raise ConfigurationError(f"negative PCG sample count {sample_count}")
        rng = np.random.Generator(np.random.PCG64(seed))
        samples = rng.random((sample_count, CHANNELS), dtype=np.float32)
        samples[:, :3] = samples[:, :3] * np.float32(2.0) - np.float32(1.0)
        samples.flags.writeable = False
        self.seed = seed
        self.samples = samples

    @property
    def sample_count(self) -> int:
        return int(self.samples.shape[0])

    def get(self, index: int) -> NoiseBlock:
        return self.get_many(np.array([index]))[0]

    def get_many(self, indices: np.ndarray) -> NoiseBlock:
        idx = _as_index_array(indices)
        if idx.size and int(idx.max()) >= self.sample_count:
            raise IndexOutOfRange(
                f"PCG noise index {int(idx.max())} past {self.sample_count} samples"
            )
        return self.samples[idx]


NoiseSource = Union[NoNoise, R2Noise, PcgNoise]


def apply_noise(colors: np.ndarray, noise: np.ndarray) -> np.ndarray:
    """Multiplicative perturbation: c' = c + c * n, per channel."""
    return colors + colors * noise


__all__ = [
    "CHANNELS",
    "NoNoise",
    "R2Noise",
    "PcgNoise",
    "NoiseSource",
    "apply_noise",
    "generalised_golden_ratio",
]
