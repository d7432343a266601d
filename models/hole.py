from pydantic import Field
from typing import Optional

from .base import FrozenGolfModel
from .coordinate import Coordinate


class HoleLayout(FrozenGolfModel):
    """A hole's par and anchor coordinates, as stored for a course."""
    number: int = Field(..., ge=1, le=18)
    par: int = Field(..., ge=3, le=6)
    handicap: Optional[int] = Field(None, ge=1, le=18)
    tee: Optional[Coordinate] = None
    pin: Optional[Coordinate] = None