"""Elma Core - Shared format primitives for level and replay files."""
from .crypt import crypt_top10
from .errors import *  # noqa: F401,F403
from .errors import __all__ as _error_names
from .position import Position
from .text import ascii_pad, format_time, parse_time, trim_cstring

__all__ = ["Position", "trim_cstring", "ascii_pad", "format_time", "parse_time", "crypt_top10", *_error_names]
