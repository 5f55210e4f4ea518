"""
Value types shared by the packing engine.

A Rectangle is an unplaced image size; a Placement is the same size pinned to
an (x, y) origin inside one sheet. Both are immutable.
"""

from dataclasses import dataclass
from typing import Optional


def _check_dimension(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class Rectangle:
    """Size of one source image."""
    width: int
    height: int
    key: Optional[str] = None  # Caller label (file name, sprite id); ignored by the packer

    def __post_init__(self):
        _check_dimension("width", self.width)
        _check_dimension("height", self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class Placement:
    """A rectangle placed at (x, y) inside a sheet, top-left origin."""
    width: int
    height: int
    x: int
    y: int
    key: Optional[str] = None

    def __post_init__(self):
        _check_dimension("width", self.width)
        _check_dimension("height", self.height)
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Placement origin must be non-negative, got ({self.x}, {self.y})")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def rectangle(self) -> Rectangle:
        return Rectangle(self.width, self.height, self.key)

    def overlaps(self, other: "Placement") -> bool:
        """Half-open overlap test; touching edges do not count."""
        return (
            self.x < other.right and other.x < self.right
            and self.y < other.bottom and other.y < self.bottom
        )

    def fits_within(self, sheet_width: int, sheet_height: int) -> bool:
        return self.right <= sheet_width and self.bottom <= sheet_height

    def __str__(self) -> str:
        return f"{self.width}x{self.height} {self.x} {self.y}"
