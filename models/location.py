from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import BaseGolfModel, FrozenGolfModel
from .coordinate import Coordinate


class PositionOnHole(str, Enum):
    """Coarse classification of where a player stands on a hole."""
    TEE = "tee"
    FAIRWAY = "fairway"
    GREEN = "green"
    UNKNOWN = "unknown"


def _as_utc(v: datetime) -> datetime:
    # Naive device timestamps are taken to be UTC so they compare with stored ones.
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class LocationSample(FrozenGolfModel):
    """A single GPS update reported by the player's device."""
    coordinate: Coordinate
    accuracy_meters: Optional[float] = Field(None, ge=0)
    speed_mps: Optional[float] = Field(None, ge=0)
    timestamp: datetime

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v):
        return _as_utc(v)


class PositionReading(FrozenGolfModel):
    """Where a coordinate sits relative to the course layout."""
    detected_hole: Optional[int] = None
    distance_to_pin: Optional[float] = None
    distance_to_tee: Optional[float] = None
    position: PositionOnHole = PositionOnHole.UNKNOWN
    within_boundaries: bool = True


class TrackedLocation(BaseGolfModel):
    """A location sample enriched with position data, as persisted per round."""
    id: Optional[str] = None
    user_id: str
    round_id: str
    course_id: Optional[str] = None
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    accuracy_meters: Optional[float] = None
    movement_speed_mps: Optional[float] = None
    detected_hole: Optional[int] = None
    distance_to_pin: Optional[float] = None
    distance_to_tee: Optional[float] = None
    position_on_hole: PositionOnHole = PositionOnHole.UNKNOWN
    within_boundaries: bool = True
    timestamp: datetime

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v):
        return _as_utc(v)

    @classmethod
    def from_sample(
        cls,
        user_id: str,
        round_id: str,
        course_id: Optional[str],
        sample: LocationSample,
        reading: PositionReading,
    ) -> "TrackedLocation":
        """Combine a raw sample with its position reading."""
        return cls(
            user_id=user_id,
            round_id=round_id,
            course_id=course_id,
            latitude=sample.coordinate.latitude,
            longitude=sample.coordinate.longitude,
            accuracy_meters=sample.accuracy_meters,
            movement_speed_mps=sample.speed_mps,
            detected_hole=reading.detected_hole,
            distance_to_pin=reading.distance_to_pin,
            distance_to_tee=reading.distance_to_tee,
            position_on_hole=reading.position,
            within_boundaries=reading.within_boundaries,
            timestamp=sample.timestamp,
        )

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)
