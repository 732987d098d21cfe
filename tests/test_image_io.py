import numpy as np
import pytest
from PIL import Image

from bgftool.errors import BgfToolError
from bgftool.image_io import load_image_rgba_f32, save_image_rgb


def test_rgba_png_scaled_to_unit(tmp_path):
    rgba = np.array([[[255, 0, 51, 255], [0, 102, 0, 0]]], dtype=np.uint8)
    path = tmp_path / "a.png"
    Image.fromarray(rgba).save(path)
    img = load_image_rgba_f32(path)
    assert img.dtype == np.float32
    assert img.shape == (1, 2, 4)
    assert np.allclose(img[0, 0], (1.0, 0.0, 0.2, 1.0))
    assert np.allclose(img[0, 1], (0.0, 0.4, 0.0, 0.0))


def test_sixteen_bit_grey_keeps_precision(tmp_path):
    # 25828 sits between two 8-bit levels (100 * 257 = 25700, 101 * 257 = 25957).
    grey = np.array([[25828, 65535], [0, 1]], dtype=np.uint16)
    path = tmp_path / "deep.png"
    Image.fromarray(grey).save(path)
    img = load_image_rgba_f32(path)
    assert img.shape == (2, 2, 4)
    assert img[0, 0, 0] == pytest.approx(25828 / 65535, abs=1e-6)
    assert img[0, 0, 0] != pytest.approx(100 / 255, abs=1e-4)
    assert np.allclose(img[0, 0, :3], img[0, 0, 0])
    assert img[0, 1, 0] == pytest.approx(1.0)
    assert np.all(img[..., 3] == 1.0)


def test_float_grey_clamped(tmp_path):
    grey = np.array([[0.25, 1.5], [-0.5, 0.123456]], dtype=np.float32)
    path = tmp_path / "f.tiff"
    Image.fromarray(grey).save(path)
    img = load_image_rgba_f32(path)
    assert img[0, 0, 0] == pytest.approx(0.25)
    assert img[0, 1, 0] == pytest.approx(1.0)
    assert img[1, 0, 0] == pytest.approx(0.0)
    assert img[1, 1, 2] == pytest.approx(0.123456)


def test_undecodable_file(tmp_path):
    path = tmp_path / "junk.png"
    path.write_bytes(b"not an image")
    with pytest.raises(BgfToolError):
        load_image_rgba_f32(path)


def test_save_rejects_non_rgb(tmp_path):
    with pytest.raises(TypeError):
        save_image_rgb(tmp_path / "x.png", np.zeros((2, 2, 4), dtype=np.uint8))
