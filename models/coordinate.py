import math

from pydantic import Field, field_validator

from .base import FrozenGolfModel


class Coordinate(FrozenGolfModel):
    """WGS-84 latitude/longitude pair in decimal degrees."""
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    @field_validator('latitude', 'longitude')
    @classmethod
    def validate_finite(cls, v):
        if not math.isfinite(v):
            raise ValueError("Coordinate values must be finite numbers")
        return v
