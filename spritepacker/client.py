"""
Core spritepacker client API

Provides the main SpritePacker class for packing sizes or image files, and the
PackResult class for formatting and saving a packing run.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from spritepacker.atlas import PathLike, build_atlas
from spritepacker.config import PackingConfig
from spritepacker.formats import format_sheets, parse_size, to_manifest
from spritepacker.packing import PackingDriver, Placement, Rectangle
from spritepacker.schema.manifest import AtlasManifest


SizeLike = Union[Rectangle, str, Tuple[int, int]]


@dataclass
class PackResult:
    """
    Outcome of one packing run.

    Attributes:
        sheets: Placements per sheet, in placement order
        sheet_width: Width of every sheet
        sheet_height: Height of every sheet
    """
    sheets: List[List[Placement]]
    sheet_width: int
    sheet_height: int

    def __len__(self) -> int:
        return len(self.sheets)

    def to_text(self) -> str:
        """`sheet N` blocks with one `WxH X Y` line per placement."""
        return format_sheets(self.sheets)

    def to_manifest(self) -> AtlasManifest:
        return to_manifest(self.sheets, self.sheet_width, self.sheet_height)

    def to_json(self) -> dict:
        """
        Manifest as plain JSON-serializable data.

        Example:
            >>> result = SpritePacker().pack(["64x64"])
            >>> result.to_json()["sheets"][0]["sprites"][0]
            {'name': None, 'width': 64, 'height': 64, 'x': 0, 'y': 0}
        """
        return self.to_manifest().model_dump()

    def stats(self) -> Dict[str, Any]:
        """Sheet count, sprite count and per-sheet utilization."""
        sheet_area = self.sheet_width * self.sheet_height
        utilization = [
            sum(p.width * p.height for p in placements) / sheet_area
            for placements in self.sheets
        ]
        return {
            'sheets': len(self.sheets),
            'sprites': sum(len(s) for s in self.sheets),
            'sheet_size': [self.sheet_width, self.sheet_height],
            'utilization': utilization,
        }

    def save(self, path: str, filetype: Optional[str] = None) -> None:
        """
        Save the result with automatic format detection.

        Args:
            path: Output file path
            filetype: 'txt' or 'json'. If None, inferred from file extension.

        Examples:
            >>> result.save("sheets.txt")   # sheet N / WxH X Y listing
            >>> result.save("sheets.json")  # atlas manifest
        """
        if filetype is None:
            filetype = self._infer_filetype(path)

        if filetype == "txt":
            with open(path, 'w') as f:
                f.write(self.to_text())
        elif filetype == "json":
            with open(path, 'w') as f:
                json.dump(self.to_json(), f, indent=2)
        else:
            raise ValueError(f"Unsupported filetype: {filetype}")

    @staticmethod
    def _infer_filetype(path: str) -> str:
        """Infer file type from extension"""
        ext = path.split('.')[-1].lower()
        if ext in ['txt', 'json']:
            return ext
        raise ValueError(
            f"Cannot infer filetype from extension: {ext}. "
            f"Supported: .txt, .json"
        )


class SpritePacker:
    """
    Main client for packing sprites into fixed-size sheets.

    Examples:
        Pack sizes:
        >>> sp = SpritePacker()
        >>> result = sp.pack(["864x480", "629x236", (39, 32)])
        >>> print(result.to_text())

        Build sheet images from files:
        >>> sp = SpritePacker(sheet_width=2048, sheet_height=2048)
        >>> manifest = sp.build_atlas(["hero.png", "tree.png"], "out/")
    """

    def __init__(self, sheet_width: Optional[int] = None, sheet_height: Optional[int] = None):
        """
        Initialize the packer.

        Args:
            sheet_width: Sheet width in pixels (default: SPRITEPACKER_SHEET_WIDTH or 1024)
            sheet_height: Sheet height in pixels (default: SPRITEPACKER_SHEET_HEIGHT or 1024)
        """
        self.config = PackingConfig.from_env().override(sheet_width, sheet_height)
        self.driver = PackingDriver(self.config.sheet_width, self.config.sheet_height)

    @property
    def sheet_width(self) -> int:
        return self.config.sheet_width

    @property
    def sheet_height(self) -> int:
        return self.config.sheet_height

    def pack(self, sizes: Iterable[SizeLike]) -> PackResult:
        """
        Pack sizes into sheets.

        Args:
            sizes: Rectangles, 'WxH' strings or (width, height) tuples

        Returns:
            PackResult with the placements per sheet

        Raises:
            ParseError: If a string size is malformed
            OversizedRectangleError: If a size is larger than a sheet
        """
        rects = [self._to_rectangle(s) for s in sizes]
        sheets = self.driver.pack(rects)
        return PackResult(sheets=sheets, sheet_width=self.sheet_width, sheet_height=self.sheet_height)

    def build_atlas(self, paths: Sequence[PathLike], output_dir: PathLike, prefix: str = "sheet") -> AtlasManifest:
        """
        Render image files into sheet PNGs plus manifest.json in output_dir.

        Convenience method that wraps spritepacker.atlas.build_atlas() with
        this client's sheet size.
        """
        return build_atlas(paths, output_dir, self.sheet_width, self.sheet_height, prefix=prefix)

    @staticmethod
    def _to_rectangle(size: SizeLike) -> Rectangle:
        if isinstance(size, Rectangle):
            return size
        if isinstance(size, str):
            return parse_size(size)
        width, height = size
        return Rectangle(width, height)
