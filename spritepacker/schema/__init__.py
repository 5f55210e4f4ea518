"""Atlas manifest schema definitions."""
from .manifest import (
    AtlasManifest,
    SheetEntry,
    SpriteEntry,
)

__all__ = [
    "AtlasManifest",
    "SheetEntry",
    "SpriteEntry",
]
