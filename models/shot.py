from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import BaseGolfModel, FrozenGolfModel
from .coordinate import Coordinate


class ShotEvent(FrozenGolfModel):
    """A swing inferred from the transition between two consecutive samples."""
    distance_meters: float = Field(..., ge=0)
    duration_seconds: float = Field(..., ge=0)
    estimated_club: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    start: Optional[Coordinate] = None
    end: Optional[Coordinate] = None
    timestamp: datetime


class ShotEventSummary(BaseGolfModel):
    """A numbered shot as reported back with a hole result."""
    shot_number: int = Field(..., ge=1)
    distance_meters: float
    estimated_club: Optional[str] = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    timestamp: datetime


class MovementAnalysis(BaseGolfModel):
    """Outcome of comparing a sample to its predecessor in the movement window."""
    shot_detected: bool = False
    shot: Optional[ShotEvent] = None
    estimated_distance: Optional[float] = None
    duration_seconds: Optional[float] = None
    speed_mps: Optional[float] = None
    analysis_notes: List[str] = Field(default_factory=list)
