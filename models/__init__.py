from .base import BaseGolfModel, FrozenGolfModel
from .coordinate import Coordinate
from .hole import HoleLayout
from .location import LocationSample, PositionOnHole, PositionReading, TrackedLocation
from .results import (
    MAX_REASONABLE_SCORE,
    AutoScoreResult,
    HoleCompletionAnalysis,
    LocationProcessingResult,
    ScoreSuggestion,
    ScoreValidationResult,
)
from .round import Round, RoundStatus
from .shot import MovementAnalysis, ShotEvent, ShotEventSummary

__all__ = [
    "BaseGolfModel",
    "FrozenGolfModel",
    "Coordinate",
    "HoleLayout",
    "LocationSample",
    "PositionOnHole",
    "PositionReading",
    "TrackedLocation",
    "MAX_REASONABLE_SCORE",
    "AutoScoreResult",
    "HoleCompletionAnalysis",
    "LocationProcessingResult",
    "ScoreSuggestion",
    "ScoreValidationResult",
    "Round",
    "RoundStatus",
    "MovementAnalysis",
    "ShotEvent",
    "ShotEventSummary",
]
