"""
Packing engine.

Free-space grid, single-sheet first-fit packer and the multi-sheet driver.
"""
from .models import Rectangle, Placement
from .grid import FreeSpaceGrid, split_partition
from .sheet import SheetPacker
from .driver import PackingDriver, DEFAULT_SHEET_SIZE, check_fits, order_by_height, pack_rectangles

__all__ = [
    'Rectangle',
    'Placement',
    'FreeSpaceGrid',
    'split_partition',
    'SheetPacker',
    'PackingDriver',
    'DEFAULT_SHEET_SIZE',
    'check_fits',
    'order_by_height',
    'pack_rectangles',
]
