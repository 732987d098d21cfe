import math

import numpy as np
import pytest

from bgftool.dither.noise import (
    NoNoise,
    PcgNoise,
    R2Noise,
    apply_noise,
    generalised_golden_ratio,
)
from bgftool.errors import ConfigurationError, IndexOutOfRange


def test_golden_ratio_in_one_dimension():
    assert generalised_golden_ratio(1, iterations=60) == pytest.approx(
        (1 + math.sqrt(5)) / 2
    )


def test_generalised_ratio_for_four_channels_solves_recurrence():
    g = generalised_golden_ratio(4)
    assert g ** 5 == pytest.approx(g + 1, rel=1e-6)


def test_no_noise_is_zero():
    src = NoNoise()
    assert src.get(5).tolist() == [0.0, 0.0, 0.0, 0.0]
    assert src.get_many(np.arange(10)).shape == (10, 4)
    assert not src.get_many(np.arange(10)).any()


def test_r2_first_sample():
    g = generalised_golden_ratio(4)
    sample = R2Noise(0.0).get(0)
    assert sample[0] == pytest.approx(2.0 / g - 1.0, abs=1e-6)
    assert sample[3] == pytest.approx(g ** -4, abs=1e-6)


def test_r2_ranges():
    samples = R2Noise(0.25).get_many(np.arange(5000))
    assert samples.dtype == np.float32
    assert samples[:, :3].min() >= -1.0
    assert samples[:, :3].max() < 1.0
    assert samples[:, 3].min() >= 0.0
    assert samples[:, 3].max() < 1.0


def test_r2_is_pure_function_of_index():
    a = R2Noise(0.5)
    b = R2Noise(0.5)
    idx = np.array([0, 17, 4096, 99999])
    assert np.array_equal(a.get_many(idx), b.get_many(idx))
    assert np.array_equal(a.get(17), a.get_many(idx)[1])


def test_r2_seed_shifts_sequence():
    idx = np.arange(16)
    assert not np.array_equal(R2Noise(0.0).get_many(idx), R2Noise(0.3).get_many(idx))


def test_r2_rejects_non_finite_seed():
    with pytest.raises(ConfigurationError):
        R2Noise(float("nan"))


def test_pcg_ranges_and_count():
    src = PcgNoise(seed=42, sample_count=4000)
    assert src.sample_count == 4000
    assert src.samples[:, :3].min() >= -1.0
    assert src.samples[:, :3].max() < 1.0
    assert src.samples[:, 3].min() >= 0.0
    assert src.samples[:, 3].max() < 1.0


def test_pcg_is_deterministic_per_seed():
    a = PcgNoise(seed=7, sample_count=64)
    b = PcgNoise(seed=7, sample_count=64)
    c = PcgNoise(seed=8, sample_count=64)
    assert np.array_equal(a.samples, b.samples)
    assert not np.array_equal(a.samples, c.samples)


def test_pcg_lookup_past_table_fails():
    src = PcgNoise(seed=0, sample_count=10)
    assert src.get(9).shape == (4,)
    with pytest.raises(IndexOutOfRange):
        src.get(10)
    with pytest.raises(IndexOutOfRange):
        src.get_many(np.array([0, 3, 11]))


def test_pcg_index_error_is_an_index_error():
    with pytest.raises(IndexError):
        PcgNoise(seed=0, sample_count=0).get(0)


@pytest.mark.parametrize("seed", [-1, 2**64])
def test_pcg_rejects_seed_outside_64_bits(seed):
    with pytest.raises(ConfigurationError):
        PcgNoise(seed=seed, sample_count=1)


def test_apply_noise_scales_channels():
    colours = np.array([[0.5, 0.0, 1.0, 1.0]])
    noise = np.array([[0.5, 0.9, -1.0, 0.25]])
    assert apply_noise(colours, noise).tolist() == [[0.75, 0.0, 0.0, 1.25]]
