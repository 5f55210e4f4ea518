"""Custom exceptions for sprite packing operations"""


class PackingError(Exception):
    """Base exception for packing errors"""
    pass


class ParseError(PackingError):
    """Malformed size token or input listing (e.g. '12by40' instead of '12x40')"""
    pass


class OversizedRectangleError(PackingError):
    """Rectangle wider or taller than the sheet, so it can never be placed"""

    def __init__(self, rectangle, sheet_width: int, sheet_height: int):
        self.rectangle = rectangle
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height
        label = f" ({rectangle.key})" if getattr(rectangle, "key", None) else ""
        super().__init__(
            f"Rectangle {rectangle.width}x{rectangle.height}{label} does not fit "
            f"in a {sheet_width}x{sheet_height} sheet"
        )


class InternalInvariantError(PackingError):
    """Free-space bookkeeping went inconsistent (indicates a packer bug)"""
    pass
