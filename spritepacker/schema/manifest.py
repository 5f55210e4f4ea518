"""
Atlas manifest schema

The manifest is the JSON description of a packing run: the sheet size and,
for every sheet, where each sprite was placed.

COORDINATE SYSTEM:
- Origin at the top-left corner of the sheet
- +X to the right, +Y downwards
- All values are integer pixels

EXAMPLE:
    {
      "schema_version": "1.0",
      "sheet_width": 1024,
      "sheet_height": 1024,
      "sheets": [
        {
          "index": 1,
          "image": "sheet_1.png",
          "sprites": [
            {"name": "hero.png", "width": 864, "height": 480, "x": 0, "y": 0}
          ]
        }
      ]
    }

Sheets are 1-indexed and listed in packing order; sprites within a sheet are
listed in the order they were placed, not in input order.
"""

from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator


class SpriteEntry(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: Optional[str] = Field(None, description="Source image name, if known.")
    width: int = Field(..., gt=0, description="Sprite width in pixels.")
    height: int = Field(..., gt=0, description="Sprite height in pixels.")
    x: int = Field(..., ge=0, description="Left edge inside the sheet.")
    y: int = Field(..., ge=0, description="Top edge inside the sheet.")

    def overlaps(self, other: SpriteEntry) -> bool:
        return (
            self.x < other.x + other.width and other.x < self.x + self.width
            and self.y < other.y + other.height and other.y < self.y + self.height
        )


class SheetEntry(BaseModel):
    model_config = ConfigDict(extra='forbid')

    index: int = Field(..., ge=1, description="1-based sheet number.")
    image: Optional[str] = Field(None, description="Rendered sheet file name, if rendered.")
    sprites: List[SpriteEntry] = Field(default_factory=list, description="Sprites in placement order.")

    @field_validator('sprites')
    @classmethod
    def validate_no_overlap(cls, v):
        for i, a in enumerate(v):
            for b in v[i + 1:]:
                if a.overlaps(b):
                    raise ValueError(
                        f"Sprites {a.width}x{a.height}@({a.x},{a.y}) and "
                        f"{b.width}x{b.height}@({b.x},{b.y}) overlap"
                    )
        return v


class AtlasManifest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    schema_version: str = Field('1.0', description="Schema version.")
    sheet_width: int = Field(..., gt=0, description="Width of every sheet in pixels.")
    sheet_height: int = Field(..., gt=0, description="Height of every sheet in pixels.")
    sheets: List[SheetEntry] = Field(default_factory=list, description="Sheets in packing order.")

    @model_validator(mode='after')
    def validate_bounds(self):
        for sheet in self.sheets:
            for sprite in sheet.sprites:
                if sprite.x + sprite.width > self.sheet_width or sprite.y + sprite.height > self.sheet_height:
                    raise ValueError(
                        f"Sprite {sprite.width}x{sprite.height} at ({sprite.x},{sprite.y}) leaves "
                        f"sheet {sheet.index} ({self.sheet_width}x{self.sheet_height})"
                    )
        return self

    @property
    def sprite_count(self) -> int:
        return sum(len(s.sprites) for s in self.sheets)


# Rebuild models for forward references
SpriteEntry.model_rebuild()
SheetEntry.model_rebuild()
AtlasManifest.model_rebuild()
