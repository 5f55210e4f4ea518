"""
Per-sheet free-space grid.

The sheet is cut into a grid by two partitions: column widths (summing to the
sheet width) and row heights (summing to the sheet height). Every placement
edge lies on a grid line, so each cell is either completely covered by some
placement or completely free.

Grid after placing A (600x400) then B (700x200) into a 1024x1024 sheet:

        600     100    324
    +----------+---+-------+
    |    A     | . |   .   |  400
    +----------+---+-------+
    |    B         |   .   |  200   <- B spans columns 0 and 1
    +----------+---+-------+
    |    .     | . |   .   |  424
    +----------+---+-------+

Cells are never merged back; a grid lives for exactly one sheet.
"""

import logging
from itertools import accumulate
from typing import Iterable, List

import numpy as np

from spritepacker.exceptions import InternalInvariantError
from spritepacker.packing.models import Placement

logger = logging.getLogger(__name__)


def split_partition(partition: List[int], index: int, required: int) -> None:
    """
    Split a partition so that a span of `required` units starts at `index`
    and ends exactly on an entry boundary.

    The list is modified in place:
    - required == partition[index]: already aligned
    - required < partition[index]: the entry becomes [required, rest]
    - required > partition[index]: whole entries are consumed until the
      leftover fits one entry, which is then split as above

    Raises:
        InternalInvariantError: If the span runs past the end of the partition
    """
    current = partition[index]
    if required == current:
        return

    if required < current:
        partition[index] = current - required
        partition.insert(index, required)
        return

    remaining = required - current
    i = index + 1
    while True:
        if i >= len(partition):
            raise InternalInvariantError(
                f"Span of {required} starting at entry {index} overruns partition {partition}"
            )
        if remaining <= partition[i]:
            break
        remaining -= partition[i]
        i += 1

    if remaining < partition[i]:
        partition[i] -= remaining
        partition.insert(i, remaining)


class FreeSpaceGrid:
    """Row/column decomposition of one sheet with an occupancy flag per cell."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.columns: List[int] = [width]
        self.rows: List[int] = [height]
        self.occupied = np.zeros((1, 1), dtype=bool)

    def column_offsets(self) -> List[int]:
        """Left x coordinate of every column."""
        return [0] + list(accumulate(self.columns))[:-1]

    def row_offsets(self) -> List[int]:
        """Top y coordinate of every row."""
        return [0] + list(accumulate(self.rows))[:-1]

    def is_occupied(self, row: int, column: int) -> bool:
        return bool(self.occupied[row, column])

    def free_area(self) -> int:
        """Total area of the free cells."""
        cell_areas = np.outer(self.rows, self.columns)
        return int(cell_areas[~self.occupied].sum())

    def occupy(
        self,
        row: int,
        column: int,
        width: int,
        height: int,
        placements: Iterable[Placement],
    ) -> None:
        """
        Carve a width x height region starting at cell (row, column) out of
        the partitions, then recompute occupancy for the whole sheet.

        Args:
            row: Row index of the cell the region starts in
            column: Column index of the cell the region starts in
            width: Region width (may span several columns)
            height: Region height (may span several rows)
            placements: Every placement made in this sheet so far, including
                the one that occupies the region
        """
        split_partition(self.columns, column, width)
        split_partition(self.rows, row, height)
        self.recompute(placements)

    def recompute(self, placements: Iterable[Placement]) -> None:
        """Rebuild the occupancy array from scratch against all placements."""
        col_edges = np.concatenate(([0], np.cumsum(self.columns)))
        row_edges = np.concatenate(([0], np.cumsum(self.rows)))
        col_start, col_end = col_edges[:-1], col_edges[1:]
        row_start, row_end = row_edges[:-1], row_edges[1:]

        occupied = np.zeros((len(self.rows), len(self.columns)), dtype=bool)
        for p in placements:
            in_cols = (col_start < p.right) & (col_end > p.x)
            in_rows = (row_start < p.bottom) & (row_end > p.y)
            occupied |= np.outer(in_rows, in_cols)

        self.occupied = occupied
        self.check_invariants()

    def check_invariants(self) -> None:
        """
        Raises:
            InternalInvariantError: If the partitions no longer tile the sheet
                or the occupancy array has the wrong shape
        """
        if sum(self.columns) != self.width or any(c <= 0 for c in self.columns):
            raise InternalInvariantError(
                f"Column partition {self.columns} does not tile width {self.width}"
            )
        if sum(self.rows) != self.height or any(r <= 0 for r in self.rows):
            raise InternalInvariantError(
                f"Row partition {self.rows} does not tile height {self.height}"
            )
        expected = (len(self.rows), len(self.columns))
        if self.occupied.shape != expected:
            raise InternalInvariantError(
                f"Occupancy shape {self.occupied.shape} does not match grid {expected}"
            )

    def __repr__(self) -> str:
        return f"FreeSpaceGrid({self.width}x{self.height}, rows={len(self.rows)}, columns={len(self.columns)})"
