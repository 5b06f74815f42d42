"""Validated run settings shared by the CLI and the viewer."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_SPEED = 20


class MapType(str, Enum):
    RANDOM = "random"
    NOISE = "noise"
    MAZE = "maze"


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class SearchSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    height: int = Field(default=40, gt=0)
    width: int = Field(default=100, gt=0)
    map_type: MapType = MapType.RANDOM
    speed: int = Field(default=1, ge=0, le=MAX_SPEED)
    seed: int | None = None
    direction: Direction = Direction.FORWARD

    @model_validator(mode="after")
    def validate_area(self) -> "SearchSettings":
        if self.height * self.width < 2:
            raise ValueError("grid needs at least two cells")
        return self
