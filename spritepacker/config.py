"""
Packing configuration.

Sheet dimensions default to 1024x1024 and can be overridden from the
environment:

    SPRITEPACKER_SHEET_SIZE    square sheet size (sets both dimensions)
    SPRITEPACKER_SHEET_WIDTH   sheet width (wins over SHEET_SIZE)
    SPRITEPACKER_SHEET_HEIGHT  sheet height (wins over SHEET_SIZE)
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from spritepacker.packing.driver import DEFAULT_SHEET_SIZE

ENV_SHEET_SIZE = "SPRITEPACKER_SHEET_SIZE"
ENV_SHEET_WIDTH = "SPRITEPACKER_SHEET_WIDTH"
ENV_SHEET_HEIGHT = "SPRITEPACKER_SHEET_HEIGHT"


class PackingConfig(BaseModel):
    model_config = ConfigDict(extra='forbid', frozen=True)

    sheet_width: int = Field(DEFAULT_SHEET_SIZE, gt=0, description="Sheet width in pixels.")
    sheet_height: int = Field(DEFAULT_SHEET_SIZE, gt=0, description="Sheet height in pixels.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PackingConfig":
        """
        Build a config from environment variables, falling back to defaults.

        Raises:
            ValueError: If a variable is set but is not a positive integer
        """
        env = os.environ if environ is None else environ
        values = {}

        size = env.get(ENV_SHEET_SIZE)
        if size:
            values['sheet_width'] = size
            values['sheet_height'] = size
        if env.get(ENV_SHEET_WIDTH):
            values['sheet_width'] = env[ENV_SHEET_WIDTH]
        if env.get(ENV_SHEET_HEIGHT):
            values['sheet_height'] = env[ENV_SHEET_HEIGHT]

        try:
            return cls(**values)
        except ValidationError as e:
            raise ValueError(f"Invalid sheet size in environment: {e}") from e

    def override(self, sheet_width: Optional[int] = None, sheet_height: Optional[int] = None) -> "PackingConfig":
        """Return a copy with any explicitly given dimensions replaced."""
        updates = {}
        if sheet_width is not None:
            updates['sheet_width'] = sheet_width
        if sheet_height is not None:
            updates['sheet_height'] = sheet_height
        if not updates:
            return self
        return PackingConfig(**{**self.model_dump(), **updates})
