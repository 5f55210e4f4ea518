"""
Text and JSON formats for packing input and output.

Input is a whitespace-separated list of `WxH` size tokens, optionally
preceded by the number of tokens that follow:

    10
    864x480 78x107 410x321 188x167 315x274
    229x163 629x236 39x32 193x56 543x155

Text output lists each sheet with a 1-indexed header and one `WxH X Y` line
per placement:

    sheet 1
    864x480 0 0
    410x321 0 480

    sheet 2
    629x236 0 0
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from spritepacker.exceptions import ParseError
from spritepacker.packing.models import Placement, Rectangle
from spritepacker.schema.manifest import AtlasManifest, SheetEntry, SpriteEntry

logger = logging.getLogger(__name__)

_SIZE_RE = re.compile(r'^(\d+)[xX](\d+)$')


def parse_size(token: str, key: Optional[str] = None) -> Rectangle:
    """
    Parse one `WxH` token.

    Raises:
        ParseError: If the token is malformed or either dimension is zero
    """
    match = _SIZE_RE.match(token.strip())
    if not match:
        raise ParseError(f"Invalid size token {token!r}, expected WxH (e.g. 64x32)")
    width, height = int(match.group(1)), int(match.group(2))
    if width == 0 or height == 0:
        raise ParseError(f"Invalid size token {token!r}, dimensions must be positive")
    return Rectangle(width, height, key)


def parse_sizes(text: str) -> List[Rectangle]:
    """
    Parse a listing of `WxH` tokens, with an optional leading count.

    Raises:
        ParseError: On a malformed token, or when a leading count does not
            match the number of tokens that follow
    """
    tokens = text.split()
    if tokens and tokens[0].isdecimal():
        expected = int(tokens[0])
        tokens = tokens[1:]
        if expected != len(tokens):
            raise ParseError(f"Input declares {expected} sizes but lists {len(tokens)}")

    rects = [parse_size(token) for token in tokens]
    logger.debug(f"Parsed {len(rects)} sizes")
    return rects


def format_sheets(sheets: Sequence[Sequence[Placement]]) -> str:
    """Render sheets as `sheet N` blocks of `WxH X Y` lines."""
    lines = []
    for index, placements in enumerate(sheets, start=1):
        lines.append(f"sheet {index}")
        lines.extend(str(p) for p in placements)
        lines.append("")
    return "\n".join(lines) + ("\n" if lines else "")


def to_manifest(
    sheets: Sequence[Sequence[Placement]],
    sheet_width: int,
    sheet_height: int,
    image_names: Optional[Sequence[str]] = None,
) -> AtlasManifest:
    """
    Build a validated manifest from packed sheets.

    Args:
        sheets: Placements per sheet
        sheet_width: Sheet width in pixels
        sheet_height: Sheet height in pixels
        image_names: Optional rendered file name per sheet
    """
    if image_names is not None and len(image_names) != len(sheets):
        raise ValueError(f"Got {len(image_names)} image names for {len(sheets)} sheets")

    entries = []
    for i, placements in enumerate(sheets):
        entries.append(SheetEntry(
            index=i + 1,
            image=image_names[i] if image_names is not None else None,
            sprites=[
                SpriteEntry(name=p.key, width=p.width, height=p.height, x=p.x, y=p.y)
                for p in placements
            ],
        ))
    return AtlasManifest(sheet_width=sheet_width, sheet_height=sheet_height, sheets=entries)


def load_manifest(data: Dict[str, Any]) -> AtlasManifest:
    """
    Validate manifest JSON data.

    Raises:
        ValueError: If the data is not a valid manifest (bad fields,
            overlapping or out-of-bounds sprites)
    """
    try:
        return AtlasManifest.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid atlas manifest: {e}") from e


def manifest_to_sheets(manifest: AtlasManifest) -> List[List[Placement]]:
    """Convert a manifest back into placements per sheet."""
    return [
        [Placement(s.width, s.height, s.x, s.y, s.name) for s in sheet.sprites]
        for sheet in manifest.sheets
    ]
