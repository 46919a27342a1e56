"""Frontend package - .analog text to blocks, skeleton and parsed script."""

from .attributes import parse_attributes
from .blocks import Blocks, extract_blocks
from .classify import build_skeleton, classify
from .parse import Script, parse_script

__all__ = [
    "Blocks",
    "Script",
    "build_skeleton",
    "classify",
    "extract_blocks",
    "parse_attributes",
    "parse_script",
]
