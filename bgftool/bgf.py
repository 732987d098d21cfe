# bgftool/bgf.py
from __future__ import annotations

"""
BGF sprite container: read, write, and image conversion.

Layout (all integers little-endian):

  magic        4 bytes  b"BGF\\x11"
  version      i32
  name         32 bytes, NUL-terminated
  bitmaps      i32 count
  groups       i32 count
  max indices  i32
  shrink       i32
  bitmap * n:  width i32, height i32, x i32, y i32,
               hotspot count u8, hotspots (number i8, x i32, y i32),
               compression u8 (0 raw, 1 zlib), length i32, data
  group * n:   count i32, indices i32 * count

Bitmap data is one palette index per pixel, row-major.
"""

import struct
import zlib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple

import numpy as np

from .core_types import IndexBuffer, U8Image
from .dither import DitherConfig, dither
from .errors import BgfFormatError
from .image_io import load_image_rgba_f32, save_image_rgb
from .palette import Palette, get_palette

MAGIC_NUMBER = b"BGF\x11"
CURRENT_BGF_VERSION = 10
MAX_BITMAP_NAME_LEN = 32
ZLIB_LEVEL = 9

_I32 = struct.Struct("<i")
_U8 = struct.Struct("<B")
_HEADER_COUNTS = struct.Struct("<iiii")
_BITMAP_GEOMETRY = struct.Struct("<iiii")
_HOTSPOT = struct.Struct("<bii")
_DATA_HEADER = struct.Struct("<Bi")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise BgfFormatError(f"truncated BGF stream: wanted {size} bytes, got {got}")
    return data


def _unpack(stream: BinaryIO, fmt: struct.Struct) -> Tuple:
    return fmt.unpack(_read_exact(stream, fmt.size))


def _pack(fmt: struct.Struct, *values: int) -> bytes:
    try:
        return fmt.pack(*values)
    except struct.error as exc:
        raise BgfFormatError(f"value out of range for BGF field: {values}") from exc


class Compression(str, Enum):
    """Bitmap data encoding. Values are the names used in JSON configs."""

    NONE = "none"
    ZLIB = "zlib"

    @property
    def flag(self) -> int:
        return 0 if self is Compression.NONE else 1

    @classmethod
    def from_flag(cls, flag: int) -> "Compression":
        if flag == 0:
            return cls.NONE
        if flag == 1:
            return cls.ZLIB
        raise BgfFormatError(f"invalid compression flag {flag}")


@dataclass(frozen=True)
class Hotspot:
    """Numbered attachment point on a bitmap."""

    number: int
    position: Tuple[int, int]

    @classmethod
    def read(cls, stream: BinaryIO) -> "Hotspot":
        number, x, y = _unpack(stream, _HOTSPOT)
        return cls(number, (x, y))

    def write(self, stream: BinaryIO) -> None:
        stream.write(_pack(_HOTSPOT, self.number, self.position[0], self.position[1]))


@dataclass
class BitmapImageOptions:
    """How to build a bitmap from a source image."""

    compression: Compression = Compression.NONE
    dither: DitherConfig = field(default_factory=DitherConfig)


@dataclass
class Bitmap:
    """One frame: geometry, hotspots and (possibly compressed) index data."""

    size: Tuple[int, int]
    offset: Tuple[int, int] = (0, 0)
    hotspots: List[Hotspot] = field(default_factory=list)
    data: bytes = b""
    compression: Compression = Compression.NONE

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @classmethod
    def read(cls, stream: BinaryIO) -> "Bitmap":
        width, height, off_x, off_y = _unpack(stream, _BITMAP_GEOMETRY)
        (hotspot_count,) = _unpack(stream, _U8)
        hotspots = [Hotspot.read(stream) for _ in range(hotspot_count)]
        flag, length = _unpack(stream, _DATA_HEADER)
        compression = Compression.from_flag(flag)
        if length < 0:
            raise BgfFormatError(f"negative bitmap data length {length}")
        data = _read_exact(stream, length)
        return cls((width, height), (off_x, off_y), hotspots, data, compression)

    def write(self, stream: BinaryIO) -> None:
        if len(self.hotspots) > 255:
            raise BgfFormatError(f"too many hotspots ({len(self.hotspots)} > 255)")
        stream.write(
            _pack(
                _BITMAP_GEOMETRY,
                self.size[0],
                self.size[1],
                self.offset[0],
                self.offset[1],
            )
        )
        stream.write(_pack(_U8, len(self.hotspots)))
        for hotspot in self.hotspots:
            hotspot.write(stream)
        stream.write(_pack(_DATA_HEADER, self.compression.flag, len(self.data)))
        stream.write(self.data)

    def pixels(self) -> IndexBuffer:
        """Decompressed palette indices, uint8 [W*H]."""
        raw = self.data
        if self.compression is Compression.ZLIB:
            try:
                raw = zlib.decompress(raw)
            except zlib.error as exc:
                raise BgfFormatError(f"corrupt zlib bitmap data: {exc}") from exc
        expected = self.width * self.height
        if len(raw) != expected:
            raise BgfFormatError(
                f"bitmap data holds {len(raw)} pixels, expected {expected}"
            )
        return np.frombuffer(raw, dtype=np.uint8)

    def to_image(self, palette: Optional[Palette] = None) -> U8Image:
        """Render through the palette. Returns uint8 [H,W,3]."""
        palette = palette if palette is not None else get_palette()
        return palette.render(self.pixels(), self.width, self.height)

    def save_image(self, path: Path, palette: Optional[Palette] = None) -> Path:
        return save_image_rgb(path, self.to_image(palette))

    @classmethod
    def from_indices(
        cls,
        indices: IndexBuffer,
        size: Tuple[int, int],
        compression: Compression = Compression.NONE,
    ) -> "Bitmap":
        """Wrap a raw index buffer, compressing when asked."""
        raw = np.asarray(indices, dtype=np.uint8).tobytes()
        if len(raw) != size[0] * size[1]:
            raise BgfFormatError(
                f"index buffer holds {len(raw)} pixels, size is {size[0]}x{size[1]}"
            )
        if compression is Compression.ZLIB:
            raw = zlib.compress(raw, ZLIB_LEVEL)
        return cls(size=size, data=raw, compression=compression)

    @classmethod
    def from_image(
        cls,
        path: Path,
        options: Optional[BitmapImageOptions] = None,
        palette: Optional[Palette] = None,
    ) -> "Bitmap":
        """Decode an image file and dither it into a new bitmap."""
        options = options if options is not None else BitmapImageOptions()
        rgba = load_image_rgba_f32(path)
        height, width, _ = rgba.shape
        indices = dither(rgba, palette, options.dither)
        return cls.from_indices(indices, (width, height), options.compression)


@dataclass
class Group:
    """Ordered list of bitmap indices (one animation or facing)."""

    indices: List[int] = field(default_factory=list)

    @classmethod
    def read(cls, stream: BinaryIO) -> "Group":
        (count,) = _unpack(stream, _I32)
        if count < 0:
            raise BgfFormatError(f"negative index group length {count}")
        if count == 0:
            return cls([])
        values = struct.unpack(f"<{count}i", _read_exact(stream, 4 * count))
        return cls(list(values))

    def write(self, stream: BinaryIO) -> None:
        stream.write(_pack(_I32, len(self.indices)))
        if self.indices:
            stream.write(_pack(struct.Struct(f"<{len(self.indices)}i"), *self.indices))


def _check_group_indices(groups: List[Group], bitmap_count: int) -> None:
    for group in groups:
        for index in group.indices:
            if not 0 <= index < bitmap_count:
                raise BgfFormatError(
                    f"group index {index} out of range for {bitmap_count} bitmaps"
                )


def _decode_name(raw: bytes) -> str:
    end = raw.find(b"\x00")
    if end < 0:
        raise BgfFormatError("BGF name is not NUL-terminated")
    return raw[:end].decode("utf-8", errors="replace")


def _encode_name(name: str) -> bytes:
    encoded = name.encode("utf-8")
    if b"\x00" in encoded:
        raise BgfFormatError("BGF name contains a NUL byte")
    if len(encoded) + 1 > MAX_BITMAP_NAME_LEN:
        raise BgfFormatError(
            f"BGF name is too long ({len(encoded)} bytes, max {MAX_BITMAP_NAME_LEN - 1})"
        )
    return encoded.ljust(MAX_BITMAP_NAME_LEN, b"\x00")


@dataclass
class Bgf:
    """Whole container: name, bitmaps and index groups."""

    name: str
    bitmaps: List[Bitmap] = field(default_factory=list)
    index_groups: List[Group] = field(default_factory=list)
    shrink_factor: int = 1
    version: int = CURRENT_BGF_VERSION

    @property
    def max_indices(self) -> int:
        """Largest group length, as written to the header. Not checked on read."""
        return max((len(g.indices) for g in self.index_groups), default=0)

    @classmethod
    def read(cls, stream: BinaryIO) -> "Bgf":
        if _read_exact(stream, len(MAGIC_NUMBER)) != MAGIC_NUMBER:
            raise BgfFormatError("magic number is invalid")
        (version,) = _unpack(stream, _I32)
        name = _decode_name(_read_exact(stream, MAX_BITMAP_NAME_LEN))
        bitmap_count, group_count, _max_indices, shrink_factor = _unpack(
            stream, _HEADER_COUNTS
        )
        if bitmap_count < 0 or group_count < 0:
            raise BgfFormatError("negative bitmap or group count")

        bitmaps = [Bitmap.read(stream) for _ in range(bitmap_count)]

        groups = [Group.read(stream) for _ in range(group_count)]
        _check_group_indices(groups, bitmap_count)

        return cls(
            name=name,
            bitmaps=bitmaps,
            index_groups=groups,
            shrink_factor=shrink_factor,
            version=version,
        )

    def write(self, stream: BinaryIO) -> None:
        """Serialise. Always stamps CURRENT_BGF_VERSION."""
        _check_group_indices(self.index_groups, len(self.bitmaps))
        stream.write(MAGIC_NUMBER)
        stream.write(_pack(_I32, CURRENT_BGF_VERSION))
        stream.write(_encode_name(self.name))
        stream.write(
            _pack(
                _HEADER_COUNTS,
                len(self.bitmaps),
                len(self.index_groups),
                self.max_indices,
                self.shrink_factor,
            )
        )
        for bitmap in self.bitmaps:
            bitmap.write(stream)
        for group in self.index_groups:
            group.write(stream)

    @classmethod
    def load(cls, path: Path) -> "Bgf":
        with open(path, "rb") as fh:
            return cls.read(fh)

    def save(self, path: Path) -> Path:
        with open(path, "wb") as fh:
            self.write(fh)
        return path


__all__ = [
    "MAGIC_NUMBER",
    "CURRENT_BGF_VERSION",
    "MAX_BITMAP_NAME_LEN",
    "Compression",
    "Hotspot",
    "BitmapImageOptions",
    "Bitmap",
    "Group",
    "Bgf",
]
