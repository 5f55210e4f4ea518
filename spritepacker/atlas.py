"""
Sprite sheet renderer

Loads source images, packs their sizes into fixed-size sheets and pastes each
image at its placement on a transparent RGBA canvas. Writes one PNG per sheet
plus a JSON manifest:

    output_dir/
      sheet_1.png
      sheet_2.png
      manifest.json
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Sequence, Union

from PIL import Image

from spritepacker.formats import to_manifest
from spritepacker.packing.driver import DEFAULT_SHEET_SIZE, PackingDriver
from spritepacker.packing.models import Placement, Rectangle
from spritepacker.schema.manifest import AtlasManifest

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def load_images(paths: Sequence[PathLike]) -> Dict[str, Image.Image]:
    """
    Load source images keyed by file name.

    Raises:
        FileNotFoundError: If a path does not exist
        ValueError: If two paths share a file name
    """
    images: Dict[str, Image.Image] = {}
    for path in paths:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Image not found: {path}")
        if path.name in images:
            raise ValueError(f"Duplicate image name: {path.name}")
        with Image.open(path) as img:
            images[path.name] = img.convert('RGBA')
    logger.info(f"Loaded {len(images)} images")
    return images


def image_rectangles(images: Dict[str, Image.Image]) -> List[Rectangle]:
    """Sizes of the loaded images, labelled with their names."""
    return [Rectangle(img.width, img.height, name) for name, img in images.items()]


def render_sheet(
    placements: Sequence[Placement],
    images: Dict[str, Image.Image],
    sheet_width: int = DEFAULT_SHEET_SIZE,
    sheet_height: int = DEFAULT_SHEET_SIZE,
) -> Image.Image:
    """
    Paste every placed image into a new transparent sheet.

    Raises:
        KeyError: If a placement refers to an image that was not loaded
        ValueError: If a loaded image does not match its placement's size
    """
    sheet = Image.new('RGBA', (sheet_width, sheet_height), (0, 0, 0, 0))
    for p in placements:
        source = images[p.key]
        if source.size != (p.width, p.height):
            raise ValueError(
                f"Image {p.key} is {source.width}x{source.height}, placement expects {p.width}x{p.height}"
            )
        sheet.paste(source, (p.x, p.y))
    return sheet


def build_atlas(
    paths: Sequence[PathLike],
    output_dir: PathLike,
    sheet_width: int = DEFAULT_SHEET_SIZE,
    sheet_height: int = DEFAULT_SHEET_SIZE,
    prefix: str = "sheet",
) -> AtlasManifest:
    """
    Pack image files into sprite sheets and write them to disk.

    Args:
        paths: Source image files
        output_dir: Directory for the sheet PNGs and manifest.json (created if missing)
        sheet_width: Sheet width in pixels
        sheet_height: Sheet height in pixels
        prefix: Sheet file name prefix ('sheet' -> sheet_1.png, sheet_2.png, ...)

    Returns:
        The manifest that was written

    Raises:
        FileNotFoundError: If an image is missing
        OversizedRectangleError: If an image is larger than a sheet
    """
    images = load_images(paths)
    sheets = PackingDriver(sheet_width, sheet_height).pack(image_rectangles(images))

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    names = []
    for index, placements in enumerate(sheets, start=1):
        name = f"{prefix}_{index}.png"
        render_sheet(placements, images, sheet_width, sheet_height).save(output_dir / name, format='PNG')
        names.append(name)

    manifest = to_manifest(sheets, sheet_width, sheet_height, image_names=names)
    with open(output_dir / "manifest.json", 'w') as f:
        json.dump(manifest.model_dump(), f, indent=2)

    logger.info(f"Wrote {len(names)} sheets for {len(images)} images to {output_dir}")
    return manifest
