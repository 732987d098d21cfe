# bgftool/__init__.py
"""
bgftool package.

Purpose:
  Convert BGF 256-colour sprite containers to and from standard images.
  See bgftool/cli.py for the command line.

Public API:
  dither        : continuous RGBA -> palette index conversion (bgftool.dither).
  DitherConfig  : strategy, transparency clip, seeds, workers.
  Strategy      : none / r2 / pcg and the eight error-diffusion kernels.
  Palette       : fixed 256-entry table with nearest-colour lookup.
  Bgf, Bitmap   : container codec (bgftool.bgf).
  BgfConf       : JSON description of a container (bgftool.conf).
  errors        : ConfigurationError, IndexOutOfRange, InvalidColorValue, ...

Quick start:
  from bgftool import dither, DitherConfig, get_palette
  indices = dither(rgba_f32, get_palette(), DitherConfig(strategy="r2"))
"""

__version__ = "0.1.0"

from . import core_types
from . import errors
from . import palette_data
from . import utils

from .palette import Palette, get_palette  # noqa: E402
from .dither import DitherConfig, Strategy, dither  # noqa: E402
from .bgf import Bgf, Bitmap, BitmapImageOptions, Compression, Group, Hotspot  # noqa: E402
from .conf import BgfConf, BitmapConf  # noqa: E402
from .errors import (  # noqa: E402
    BgfFormatError,
    BgfToolError,
    ConfigurationError,
    IndexOutOfRange,
    InvalidColorValue,
)

__all__ = [
    "__version__",
    "core_types",
    "errors",
    "palette_data",
    "utils",
    "Palette",
    "get_palette",
    "dither",
    "DitherConfig",
    "Strategy",
    "Bgf",
    "Bitmap",
    "BitmapImageOptions",
    "Compression",
    "Group",
    "Hotspot",
    "BgfConf",
    "BitmapConf",
    "BgfToolError",
    "BgfFormatError",
    "ConfigurationError",
    "IndexOutOfRange",
    "InvalidColorValue",
]
