# bgftool/cli.py
"""
bgftool command line.

Usage:
  bgftool decompile --input-bgf FILE --output-dir DIR --image-ext png
  bgftool compile --input-conf FILE --output-bgf FILE [--dither S]
                  [--transparency-clip T] [--r2-seed X] [--pcg-seed N]
                  [--workers W] [--debug]

decompile:
  Writes <stem>_<NNNN>.<ext> for every bitmap plus <stem>.json describing
  geometry, hotspots, compression and index groups.

compile:
  Reads such a JSON file, dithers each referenced image to the palette and
  writes the container. Image paths resolve relative to the JSON file.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

from .bgf import Bgf, Bitmap, BitmapImageOptions, Group
from .conf import BgfConf
from .dither import DitherConfig, Strategy
from .errors import BgfToolError
from .utils import (
    debug_log,
    default_workers,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bgftool",
        description="Convert BGF sprite containers to and from standard images.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    dec = sub.add_parser("decompile", help="Extract bitmaps and a JSON description")
    dec.add_argument("--input-bgf", type=Path, required=True, help="Source .bgf file")
    dec.add_argument(
        "--output-dir", type=Path, required=True, help="Directory for images and JSON"
    )
    dec.add_argument(
        "--image-ext", default="png", help="Image extension, e.g. png or bmp"
    )
    dec.add_argument("--debug", action="store_true", help="Verbose details")

    com = sub.add_parser("compile", help="Build a .bgf from a JSON description")
    com.add_argument("--input-conf", type=Path, required=True, help="JSON description")
    com.add_argument("--output-bgf", type=Path, required=True, help="Output .bgf file")
    com.add_argument(
        "--dither",
        choices=[s.value for s in Strategy],
        default=Strategy.NONE.value,
        help="Dither strategy.",
    )
    com.add_argument(
        "--transparency-clip",
        type=float,
        default=0.5,
        help="Alpha below this becomes the transparent index.",
    )
    com.add_argument("--r2-seed", type=float, default=0.0, help="Seed for r2 noise")
    com.add_argument("--pcg-seed", type=int, default=0, help="Seed for pcg noise")
    com.add_argument(
        "--workers",
        type=int,
        default=default_workers(),
        help="Threads for the noise strategies",
    )
    com.add_argument("--debug", action="store_true", help="Verbose details")
    return parser


def decompile(input_bgf: Path, output_dir: Path, image_ext: str, debug: bool) -> Path:
    """Extract every bitmap to an image and write the JSON description."""
    t_start = time.perf_counter()
    print_banner(input_bgf.name)

    bgf = Bgf.load(input_bgf)
    name = input_bgf.stem
    ext = image_ext.lstrip(".")
    output_dir.mkdir(parents=True, exist_ok=True)

    conf = BgfConf.from_bgf(bgf)
    for index, (bitmap, entry) in enumerate(zip(bgf.bitmaps, conf.bitmaps)):
        image_path = output_dir / f"{name}_{index:04}.{ext}"
        bitmap.save_image(image_path)
        entry.path = image_path.relative_to(output_dir)
        if debug:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Bitmap", index),
                        ("Size", f"{bitmap.width}x{bitmap.height}"),
                        ("Hotspots", len(bitmap.hotspots)),
                        ("Compression", bitmap.compression.value),
                    ]
                )
            )

    conf_path = conf.save(output_dir / f"{name}.json")
    log(
        f"Wrote {conf_path.name} | bitmaps={len(bgf.bitmaps)} | groups={len(bgf.index_groups)}"
    )
    log(f"Total time {format_seconds_compact(time.perf_counter() - t_start)}")
    return conf_path


def compile_conf(
    input_conf: Path, output_bgf: Path, config: DitherConfig, debug: bool
) -> Path:
    """Dither every image named in the JSON description and write the container."""
    t_start = time.perf_counter()
    print_banner(input_conf.name)

    conf = BgfConf.load(input_conf)
    base_dir = input_conf.parent

    bitmaps: List[Bitmap] = []
    for index, entry in enumerate(conf.bitmaps):
        image_path = base_dir / entry.path
        options = BitmapImageOptions(compression=entry.compression, dither=config)
        t0 = time.perf_counter()
        bitmap = Bitmap.from_image(image_path, options)
        if bitmap.size != entry.size:
            warn(
                f"{entry.path}: image is {bitmap.width}x{bitmap.height}, "
                f"config says {entry.size[0]}x{entry.size[1]}; using the image size"
            )
        bitmap.offset = entry.offset
        bitmap.hotspots = list(entry.hotspots)
        bitmaps.append(bitmap)
        if debug:
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Bitmap", index),
                        ("Source", str(entry.path)),
                        ("Size", f"{bitmap.width}x{bitmap.height}"),
                        ("Bytes", len(bitmap.data)),
                        ("Time", format_seconds_compact(time.perf_counter() - t0)),
                    ]
                )
            )

    bgf = Bgf(
        name=conf.name,
        bitmaps=bitmaps,
        index_groups=[Group(list(g)) for g in conf.index_groups],
        shrink_factor=conf.shrink_factor,
    )
    bgf.save(output_bgf)

    log(f"Wrote {output_bgf.name} | bitmaps={len(bitmaps)} | dither={config.strategy.value}")
    log(f"Total time {format_seconds_compact(time.perf_counter() - t_start)}")
    return output_bgf


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    enable_line_buffered_stdout()
    args = build_parser().parse_args(argv)

    try:
        if args.command == "decompile":
            if not args.input_bgf.exists():
                error(f"not found: {args.input_bgf}")
                return 2
            decompile(args.input_bgf, args.output_dir, args.image_ext, args.debug)
        else:
            if not args.input_conf.exists():
                error(f"not found: {args.input_conf}")
                return 2
            config = DitherConfig(
                strategy=Strategy.parse(args.dither),
                transparency_clip=args.transparency_clip,
                r2_seed=args.r2_seed,
                pcg_seed=args.pcg_seed,
                workers=args.workers,
                progress=Strategy.parse(args.dither).is_diffusion,
                debug=args.debug,
            )
            print_config_line(
                "compile",
                [
                    ("Dither", config.strategy.value),
                    ("Clip", config.transparency_clip),
                    ("Workers", config.workers),
                ],
            )
            compile_conf(args.input_conf, args.output_bgf, config, args.debug)
    except (BgfToolError, OSError) as exc:
        error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
