"""
Single-sheet packer.

Places rectangles first-fit into one sheet's free-space grid: rows are scanned
top to bottom, and within each row tall enough for the rectangle, columns are
scanned left to right looking for a contiguous run of free cells wide enough.
The first such run wins, even when a tighter gap exists further on.
"""

import logging
from typing import List, Optional, Tuple

from spritepacker.exceptions import InternalInvariantError
from spritepacker.packing.grid import FreeSpaceGrid
from spritepacker.packing.models import Placement, Rectangle

logger = logging.getLogger(__name__)


class SheetPacker:
    """Packs rectangles into one fixed-size sheet."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.grid = FreeSpaceGrid(width, height)
        self._placements: List[Placement] = []

    @property
    def placements(self) -> List[Placement]:
        """Placements made so far, in placement order."""
        return list(self._placements)

    @property
    def utilization(self) -> float:
        """Fraction of the sheet area covered by placements."""
        used = sum(p.width * p.height for p in self._placements)
        return used / (self.width * self.height)

    def __len__(self) -> int:
        return len(self._placements)

    def _find_slot(self, rect: Rectangle) -> Optional[Tuple[int, int, int, int]]:
        """Return (row, column, x, y) of the first free run that fits, or None."""
        grid = self.grid
        y = 0
        for row, row_height in enumerate(grid.rows):
            if row_height >= rect.height:
                x = 0
                run_column = None
                run_x = 0
                run_width = 0
                for column, column_width in enumerate(grid.columns):
                    if grid.is_occupied(row, column):
                        run_column = None
                        run_width = 0
                    else:
                        if run_column is None:
                            run_column = column
                            run_x = x
                        run_width += column_width
                        if run_width >= rect.width:
                            return row, run_column, run_x, y
                    x += column_width
            y += row_height
        return None

    def _check_candidate(self, candidate: Placement) -> None:
        if not candidate.fits_within(self.width, self.height):
            raise InternalInvariantError(
                f"Placement {candidate} leaves the {self.width}x{self.height} sheet"
            )
        for existing in self._placements:
            if candidate.overlaps(existing):
                raise InternalInvariantError(
                    f"Placement {candidate} overlaps existing placement {existing}"
                )

    def try_place(self, rect: Rectangle) -> Optional[Placement]:
        """
        Place a rectangle at the first free position that can hold it.

        Args:
            rect: Rectangle to place

        Returns:
            The new Placement, or None if the rectangle does not fit in the
            sheet's remaining free space

        Raises:
            InternalInvariantError: If the free-space grid produced a position
                that overlaps an earlier placement or leaves the sheet
        """
        slot = self._find_slot(rect)
        if slot is None:
            return None

        row, column, x, y = slot
        placement = Placement(rect.width, rect.height, x, y, rect.key)
        self._check_candidate(placement)

        self._placements.append(placement)
        self.grid.occupy(row, column, rect.width, rect.height, self._placements)
        logger.debug(f"Placed {rect} at ({x}, {y}); grid now {len(self.grid.rows)}x{len(self.grid.columns)}")
        return placement

    def consume(self, pending: List[Rectangle]) -> int:
        """
        Place as many pending rectangles as possible in a single pass.

        Placed rectangles are removed from `pending` in place; the rest stay
        in their original order. A rectangle that fails is not retried in the
        same pass, even if later placements change the free space.

        Returns:
            Number of rectangles placed
        """
        placed = 0
        i = 0
        while i < len(pending):
            if self.try_place(pending[i]) is not None:
                del pending[i]
                placed += 1
            else:
                i += 1
        return placed

    def __repr__(self) -> str:
        return f"SheetPacker({self.width}x{self.height}, placements={len(self._placements)})"
