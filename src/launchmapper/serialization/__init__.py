"""Reading and writing mapping documents."""

from .codec import MAPPING_TYPES, dump, format, load, parse

__all__ = [
    "MAPPING_TYPES",
    "dump",
    "format",
    "load",
    "parse",
]
