"""
Multi-sheet packing driver.

Orders the input tallest-first, then fills one sheet after another until every
rectangle has been placed.
"""

import logging
from typing import Iterable, List, Sequence

from spritepacker.exceptions import InternalInvariantError, OversizedRectangleError
from spritepacker.packing.models import Placement, Rectangle
from spritepacker.packing.sheet import SheetPacker

logger = logging.getLogger(__name__)

DEFAULT_SHEET_SIZE = 1024


def order_by_height(rects: Iterable[Rectangle]) -> List[Rectangle]:
    """
    Sort rectangles tallest first, wider first among equal heights.

    The sort is stable, so rectangles of identical size keep their input order.
    """
    return sorted(rects, key=lambda r: (r.height, r.width), reverse=True)


def check_fits(rects: Iterable[Rectangle], sheet_width: int, sheet_height: int) -> None:
    """
    Raises:
        OversizedRectangleError: For the first rectangle that is wider or
            taller than the sheet
    """
    for rect in rects:
        if rect.width > sheet_width or rect.height > sheet_height:
            raise OversizedRectangleError(rect, sheet_width, sheet_height)


class PackingDriver:
    """
    Packs rectangles into as few fixed-size sheets as the greedy heuristic finds.

    Example:
        >>> driver = PackingDriver(1024, 1024)
        >>> sheets = driver.pack([Rectangle(700, 700), Rectangle(700, 700)])
        >>> len(sheets)
        2
    """

    def __init__(self, sheet_width: int = DEFAULT_SHEET_SIZE, sheet_height: int = DEFAULT_SHEET_SIZE):
        if sheet_width <= 0 or sheet_height <= 0:
            raise ValueError(f"Sheet size must be positive, got {sheet_width}x{sheet_height}")
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height

    def pack(self, rects: Sequence[Rectangle]) -> List[List[Placement]]:
        """
        Pack rectangles into sheets.

        Args:
            rects: Rectangles to pack (the input sequence is not modified)

        Returns:
            One list of placements per sheet, each in placement order

        Raises:
            OversizedRectangleError: If any rectangle is larger than a sheet
                (checked before anything is packed)
        """
        check_fits(rects, self.sheet_width, self.sheet_height)
        pending = order_by_height(rects)

        sheets: List[List[Placement]] = []
        while pending:
            packer = SheetPacker(self.sheet_width, self.sheet_height)
            placed = packer.consume(pending)
            if placed == 0:
                raise InternalInvariantError(
                    f"Empty sheet with {len(pending)} rectangles pending, first is {pending[0]}"
                )
            sheets.append(packer.placements)
            logger.info(
                f"Sheet {len(sheets)}: placed {placed} rectangles "
                f"({packer.utilization:.1%} used), {len(pending)} remaining"
            )

        logger.info(f"Packed {len(rects)} rectangles into {len(sheets)} sheets of {self.sheet_width}x{self.sheet_height}")
        return sheets


def pack_rectangles(
    rects: Sequence[Rectangle],
    sheet_width: int = DEFAULT_SHEET_SIZE,
    sheet_height: int = DEFAULT_SHEET_SIZE,
) -> List[List[Placement]]:
    """Shortcut for PackingDriver(sheet_width, sheet_height).pack(rects)."""
    return PackingDriver(sheet_width, sheet_height).pack(rects)
