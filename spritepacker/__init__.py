"""
spritepacker - Pack images into the fewest fixed-size sprite sheets

A small Python library and CLI for building texture atlases: give it image
sizes (or image files) and it assigns each one a sheet and a position, with no
rotation, no overlap and no padding.
"""

from spritepacker.client import SpritePacker, PackResult
from spritepacker.packing import Rectangle, Placement, PackingDriver, pack_rectangles
from spritepacker.exceptions import PackingError, ParseError, OversizedRectangleError, InternalInvariantError

__version__ = "0.1.0"
__all__ = [
    "SpritePacker",
    "PackResult",
    "Rectangle",
    "Placement",
    "PackingDriver",
    "pack_rectangles",
    "PackingError",
    "ParseError",
    "OversizedRectangleError",
    "InternalInvariantError",
]
