# bgftool/conf.py
from __future__ import annotations

"""
JSON description of a BGF container.

Decompiling writes one of these next to the extracted images; compiling
reads it back. Shape:

  {
    "version": 10,
    "name": "orc",
    "bitmaps": [
      {"size": [w, h], "offset": [x, y],
       "hotspots": [{"number": 1, "position": [x, y]}],
       "compression": "none" | "zlib",
       "path": "orc_0000.png"}
    ],
    "index_groups": [{"indices": [0, 1, 2]}],
    "max_indices": 3,
    "shrink_factor": 1
  }

Bitmap paths are relative to the JSON file.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

from .bgf import CURRENT_BGF_VERSION, Bgf, Compression, Hotspot
from .errors import ConfigurationError


def _pair(value: Any, what: str) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigurationError(f"{what} must be a two-element list, got {value!r}")
    return (int(value[0]), int(value[1]))


def _require(obj: Mapping[str, Any], key: str, what: str) -> Any:
    if key not in obj:
        raise ConfigurationError(f"{what} is missing '{key}'")
    return obj[key]


@dataclass
class BitmapConf:
    size: Tuple[int, int]
    offset: Tuple[int, int] = (0, 0)
    hotspots: List[Hotspot] = field(default_factory=list)
    compression: Compression = Compression.NONE
    path: Path = Path()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": list(self.size),
            "offset": list(self.offset),
            "hotspots": [
                {"number": h.number, "position": list(h.position)}
                for h in self.hotspots
            ],
            "compression": self.compression.value,
            "path": self.path.as_posix(),
        }

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "BitmapConf":
        what = "bitmap entry"
        hotspots = [
            Hotspot(
                int(_require(h, "number", "hotspot")),
                _pair(_require(h, "position", "hotspot"), "hotspot position"),
            )
            for h in obj.get("hotspots", [])
        ]
        raw_compression = obj.get("compression", Compression.NONE.value)
        try:
            compression = Compression(raw_compression)
        except ValueError:
            raise ConfigurationError(
                f"unknown compression {raw_compression!r} (expected none or zlib)"
            ) from None
        return cls(
            size=_pair(_require(obj, "size", what), "bitmap size"),
            offset=_pair(obj.get("offset", [0, 0]), "bitmap offset"),
            hotspots=hotspots,
            compression=compression,
            path=Path(str(_require(obj, "path", what))),
        )


@dataclass
class BgfConf:
    name: str
    bitmaps: List[BitmapConf] = field(default_factory=list)
    index_groups: List[List[int]] = field(default_factory=list)
    max_indices: int = 0
    shrink_factor: int = 1
    version: int = CURRENT_BGF_VERSION

    @classmethod
    def from_bgf(cls, bgf: Bgf) -> "BgfConf":
        """Describe a decoded container. Bitmap paths are left empty."""
        return cls(
            name=bgf.name,
            bitmaps=[
                BitmapConf(
                    size=b.size,
                    offset=b.offset,
                    hotspots=list(b.hotspots),
                    compression=b.compression,
                )
                for b in bgf.bitmaps
            ],
            index_groups=[list(g.indices) for g in bgf.index_groups],
            max_indices=bgf.max_indices,
            shrink_factor=bgf.shrink_factor,
            version=bgf.version,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "name": self.name,
            "bitmaps": [b.to_dict() for b in self.bitmaps],
            "index_groups": [{"indices": list(g)} for g in self.index_groups],
            "max_indices": self.max_indices,
            "shrink_factor": self.shrink_factor,
        }

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "BgfConf":
        if not isinstance(obj, Mapping):
            raise ConfigurationError("BGF config must be a JSON object")
        groups = [
            [int(i) for i in _require(g, "indices", "index group")]
            for g in obj.get("index_groups", [])
        ]
        return cls(
            name=str(_require(obj, "name", "BGF config")),
            bitmaps=[BitmapConf.from_dict(b) for b in obj.get("bitmaps", [])],
            index_groups=groups,
            max_indices=int(obj.get("max_indices", 0)),
            shrink_factor=int(obj.get("shrink_factor", 1)),
            version=int(obj.get("version", CURRENT_BGF_VERSION)),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "BgfConf":
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"invalid BGF config JSON: {exc}") from exc
        return cls.from_dict(obj)

    @classmethod
    def load(cls, path: Path) -> "BgfConf":
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def save(self, path: Path) -> Path:
        Path(path).write_text(self.to_json() + "\n", encoding="utf-8")
        return path


__all__ = ["BitmapConf", "BgfConf"]
