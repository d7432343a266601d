"""API request bodies for the tracking and scoring endpoints."""

from pydantic import BaseModel, Field
from typing import List, Optional

from models import Coordinate, LocationSample, ShotEvent


class LocationUpdateRequest(BaseModel):
    user_id: str
    sample: LocationSample


class HoleCompletionAnalysisRequest(BaseModel):
    location: Coordinate


class HoleCompletionRequest(BaseModel):
    user_id: str
    final_location: Coordinate
    # Omit to use the shots tracked for this hole during the session.
    shot_events: Optional[List[ShotEvent]] = None


class ScoreValidationRequest(BaseModel):
    user_id: str
    detected_score: int
    user_confirmed_score: Optional[int] = Field(None, ge=0, le=30)


class SessionEndResponse(BaseModel):
    ended: bool
