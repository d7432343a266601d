"""Result objects returned by the public tracking and scoring entry points."""

from datetime import datetime, timezone
from pydantic import Field
from typing import List, Optional

from .base import BaseGolfModel
from .location import PositionOnHole
from .shot import ShotEvent, ShotEventSummary

MAX_REASONABLE_SCORE = 12


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LocationProcessingResult(BaseGolfModel):
    """Everything derived from one location update."""
    success: bool = False
    detected_hole: Optional[int] = None
    distance_to_pin: Optional[float] = None
    distance_to_tee: Optional[float] = None
    position_on_hole: Optional[PositionOnHole] = None
    is_within_boundaries: bool = True
    shot_detected: bool = False
    shot: Optional[ShotEvent] = None
    messages: List[str] = Field(default_factory=list)
    processed_at: datetime = Field(default_factory=_utcnow)


class HoleCompletionAnalysis(BaseGolfModel):
    """Proximity-based judgement of whether a hole has been finished."""
    distance_to_hole: Optional[float] = None
    is_near_hole: bool = False
    is_on_green: bool = False
    completion_confidence: float = Field(0.0, ge=0.0, le=1.0)
    recommended_action: str = ""
    analysis_notes: List[str] = Field(default_factory=list)


class AutoScoreResult(BaseGolfModel):
    """Detected score recommendation for a completed hole."""
    hole_completed: bool = False
    detected_score: Optional[int] = Field(None, ge=1, le=MAX_REASONABLE_SCORE)
    distance_to_hole: Optional[float] = None
    shot_events: List[ShotEventSummary] = Field(default_factory=list)
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    requires_confirmation: bool = True
    detection_reasons: List[str] = Field(default_factory=list)
    commentary: Optional[str] = None
    processed_at: datetime = Field(default_factory=_utcnow)


class ScoreValidationResult(BaseGolfModel):
    """Outcome of reconciling a user-confirmed score with the detected one."""
    original_detected_score: int
    final_score: int
    user_corrected: bool = False
    validation_confidence: float = Field(0.0, ge=0.0, le=1.0)
    validation_notes: List[str] = Field(default_factory=list)
    recording_successful: bool = False
    commentary: Optional[str] = None


class ScoreSuggestion(BaseGolfModel):
    """Best guess at a hole score before the player confirms it."""
    suggested_score: int
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    alternative_scores: List[int] = Field(default_factory=list)
    reasoning: List[str] = Field(default_factory=list)
    detected_shot_count: int = 0
    notable_events: List[str] = Field(default_factory=list)
