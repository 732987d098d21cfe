import json
from pathlib import Path

import numpy as np
import pytest

from bgftool.bgf import Bgf, Bitmap, Compression, Group, Hotspot
from bgftool.conf import BgfConf, BitmapConf
from bgftool.errors import ConfigurationError


def _bgf() -> Bgf:
    first = Bitmap.from_indices(np.zeros(4, dtype=np.uint8), (2, 2), Compression.ZLIB)
    first.offset = (3, -1)
    first.hotspots = [Hotspot(2, (1, 1))]
    second = Bitmap.from_indices(np.zeros(3, dtype=np.uint8), (3, 1))
    return Bgf(
        name="chest",
        bitmaps=[first, second],
        index_groups=[Group([0, 1]), Group([1])],
        shrink_factor=4,
    )


def test_from_bgf_describes_container():
    conf = BgfConf.from_bgf(_bgf())
    assert conf.name == "chest"
    assert conf.max_indices == 2
    assert conf.shrink_factor == 4
    assert conf.index_groups == [[0, 1], [1]]
    assert conf.bitmaps[0].compression is Compression.ZLIB
    assert conf.bitmaps[0].hotspots == [Hotspot(2, (1, 1))]
    assert conf.bitmaps[1].size == (3, 1)


def test_json_shape():
    conf = BgfConf.from_bgf(_bgf())
    conf.bitmaps[0].path = Path("chest_0000.png")
    obj = json.loads(conf.to_json())
    assert obj["bitmaps"][0] == {
        "size": [2, 2],
        "offset": [3, -1],
        "hotspots": [{"number": 2, "position": [1, 1]}],
        "compression": "zlib",
        "path": "chest_0000.png",
    }
    assert obj["index_groups"] == [{"indices": [0, 1]}, {"indices": [1]}]
    assert obj["max_indices"] == 2


def test_json_roundtrip(tmp_path):
    conf = BgfConf.from_bgf(_bgf())
    conf.bitmaps[1].path = Path("sub") / "chest_0001.bmp"
    path = conf.save(tmp_path / "chest.json")
    assert BgfConf.load(path) == conf


def test_defaults_for_optional_fields():
    conf = BitmapConf.from_dict({"size": [4, 5], "path": "a.png"})
    assert conf.offset == (0, 0)
    assert conf.hotspots == []
    assert conf.compression is Compression.NONE


def test_missing_required_field():
    with pytest.raises(ConfigurationError):
        BitmapConf.from_dict({"path": "a.png"})
    with pytest.raises(ConfigurationError):
        BgfConf.from_dict({"bitmaps": []})


def test_unknown_compression():
    with pytest.raises(ConfigurationError):
        BitmapConf.from_dict({"size": [1, 1], "path": "a.png", "compression": "lz4"})


def test_bad_pair():
    with pytest.raises(ConfigurationError):
        BitmapConf.from_dict({"size": [1, 2, 3], "path": "a.png"})


def test_invalid_json():
    with pytest.raises(ConfigurationError):
        BgfConf.from_json("{not json")
    with pytest.raises(ConfigurationError):
        BgfConf.from_json("[]")
