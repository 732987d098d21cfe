# bgftool/errors.py
"""
Exception types raised by the engine and the container codec.

Engine errors abort the whole conversion; nothing catches them below the CLI.
"""


class BgfToolError(Exception):
    """Base class for every error raised by bgftool."""


class ConfigurationError(BgfToolError, ValueError):
    """Invalid engine setup: bad clip, unknown strategy, undersized noise table."""


class IndexOutOfRange(BgfToolError, IndexError):
    """Noise lookup past the end of the precomputed sample table."""


class InvalidColorValue(BgfToolError, ValueError):
    """Non-finite channel value; nearest-colour ordering is undefined."""


class BgfFormatError(BgfToolError, ValueError):
    """Malformed or unsupported BGF container."""


__all__ = [
    "BgfToolError",
    "ConfigurationError",
    "IndexOutOfRange",
    "InvalidColorValue",
    "BgfFormatError",
]
