import json

import numpy as np

from bgftool.bgf import Bgf, Bitmap, Compression, Group, Hotspot
from bgftool.cli import main
from bgftool.palette_data import TRANSPARENT_INDEX


def _write_source(tmp_path, exact_indices):
    picks = exact_indices[:11] + [TRANSPARENT_INDEX]
    frame = Bitmap.from_indices(np.array(picks, dtype=np.uint8), (4, 3), Compression.ZLIB)
    frame.offset = (5, 6)
    frame.hotspots = [Hotspot(1, (2, 2))]
    small = Bitmap.from_indices(np.array(exact_indices[-2:], dtype=np.uint8), (1, 2))
    bgf = Bgf(
        name="goblin",
        bitmaps=[frame, small],
        index_groups=[Group([1, 0])],
        shrink_factor=3,
    )
    return bgf, bgf.save(tmp_path / "goblin.bgf")


def test_decompile_then_compile_roundtrip(tmp_path, exact_indices, capsys):
    src, bgf_path = _write_source(tmp_path, exact_indices)
    out_dir = tmp_path / "out"

    assert (
        main(
            [
                "decompile",
                "--input-bgf",
                str(bgf_path),
                "--output-dir",
                str(out_dir),
                "--image-ext",
                "png",
            ]
        )
        == 0
    )
    assert (out_dir / "goblin_0000.png").exists()
    assert (out_dir / "goblin_0001.png").exists()
    conf = json.loads((out_dir / "goblin.json").read_text())
    assert [b["path"] for b in conf["bitmaps"]] == ["goblin_0000.png", "goblin_0001.png"]
    assert conf["bitmaps"][0]["compression"] == "zlib"

    rebuilt = tmp_path / "rebuilt.bgf"
    assert (
        main(
            [
                "compile",
                "--input-conf",
                str(out_dir / "goblin.json"),
                "--output-bgf",
                str(rebuilt),
                "--dither",
                "none",
                "--workers",
                "1",
            ]
        )
        == 0
    )
    back = Bgf.load(rebuilt)
    assert back.name == "goblin"
    assert back.shrink_factor == 3
    assert [g.indices for g in back.index_groups] == [[1, 0]]
    for before, restored in zip(src.bitmaps, back.bitmaps):
        assert restored.size == before.size
        assert restored.offset == before.offset
        assert restored.hotspots == before.hotspots
        assert restored.compression is before.compression
        assert restored.pixels().tolist() == before.pixels().tolist()

    out = capsys.readouterr().out
    assert "=== goblin.bgf ===" in out
    assert "[compile] Dither: none" in out


def test_compile_with_diffusion(tmp_path, exact_indices):
    _, bgf_path = _write_source(tmp_path, exact_indices)
    out_dir = tmp_path / "out"
    main(["decompile", "--input-bgf", str(bgf_path), "--output-dir", str(out_dir)])
    rebuilt = tmp_path / "fs.bgf"
    status = main(
        [
            "compile",
            "--input-conf",
            str(out_dir / "goblin.json"),
            "--output-bgf",
            str(rebuilt),
            "--dither",
            "floyd-steinberg",
        ]
    )
    assert status == 0
    assert Bgf.load(rebuilt).bitmaps[0].pixels().shape == (12,)


def test_missing_input_exits_2(tmp_path, capsys):
    status = main(
        [
            "decompile",
            "--input-bgf",
            str(tmp_path / "nope.bgf"),
            "--output-dir",
            str(tmp_path),
        ]
    )
    assert status == 2
    assert "[error] not found" in capsys.readouterr().err


def test_corrupt_container_exits_1(tmp_path, capsys):
    bad = tmp_path / "bad.bgf"
    bad.write_bytes(b"nope")
    status = main(["decompile", "--input-bgf", str(bad), "--output-dir", str(tmp_path)])
    assert status == 1
    assert "magic number" in capsys.readouterr().err
