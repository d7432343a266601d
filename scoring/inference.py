"""Score inference from accumulated shots and hole-completion analysis."""

from typing import List, Sequence

from models import (
    MAX_REASONABLE_SCORE,
    AutoScoreResult,
    HoleCompletionAnalysis,
    ShotEvent,
    ShotEventSummary,
)

HIGH_CONFIDENCE_THRESHOLD = 0.8
MEDIUM_CONFIDENCE_THRESHOLD = 0.6
MAX_PAR_DEVIATION = 3


def summarize_shots(shots: Sequence[ShotEvent]) -> List[ShotEventSummary]:
    """Number shots in the order they were played."""
    ordered = sorted(shots, key=lambda s: s.timestamp)
    return [
        ShotEventSummary(
            shot_number=i,
            distance_meters=round(shot.distance_meters, 1),
            estimated_club=shot.estimated_club,
            confidence=shot.confidence,
            timestamp=shot.timestamp,
        )
        for i, shot in enumerate(ordered, start=1)
    ]


def calculate_score_from_shots(shot_count: int, par: int) -> int:
    """Shot count capped at the maximum; par when nothing was detected."""
    if shot_count == 0:
        return par
    return min(shot_count, MAX_REASONABLE_SCORE)


def calculate_detection_confidence(shot_count: int, completion: HoleCompletionAnalysis) -> float:
    confidence = 0.5
    if completion.is_near_hole:
        confidence += 0.3
    if shot_count > 0:
        confidence += 0.2
    return round(min(confidence, 1.0), 2)


def should_require_confirmation(confidence: float, score: int, par: int) -> bool:
    """Low confidence or an unusual score relative to par needs the player's say."""
    return confidence < HIGH_CONFIDENCE_THRESHOLD or abs(score - par) > MAX_PAR_DEVIATION


def detection_reasons(shot_count: int, completion: HoleCompletionAnalysis) -> List[str]:
    reasons = []
    if completion.is_near_hole:
        reasons.append("Player is near the hole")
    if shot_count > 0:
        reasons.append(f"Detected {shot_count} shots")
    else:
        reasons.append("No shot events detected - using location analysis")
    return reasons


def infer_score(
    shots: Sequence[ShotEvent], completion: HoleCompletionAnalysis, par: int
) -> AutoScoreResult:
    """Detected score, confidence and reasons for a hole (commentary not included).

    A hole that is not yet completed gets no score and always requires
    confirmation.
    """
    result = AutoScoreResult(
        hole_completed=completion.is_near_hole,
        distance_to_hole=completion.distance_to_hole,
    )

    if not completion.is_near_hole:
        if completion.distance_to_hole is not None:
            result.detection_reasons.append(
                f"Player not near hole (distance: {completion.distance_to_hole:.1f}m)"
            )
        else:
            result.detection_reasons.extend(completion.analysis_notes)
        result.requires_confirmation = True
        return result

    summaries = summarize_shots(shots)
    shot_count = len(summaries)

    result.shot_events = summaries
    result.detected_score = calculate_score_from_shots(shot_count, par)
    result.confidence = calculate_detection_confidence(shot_count, completion)
    result.requires_confirmation = should_require_confirmation(
        result.confidence, result.detected_score, par
    )
    result.detection_reasons.extend(detection_reasons(shot_count, completion))
    return result


def wants_commentary(result: AutoScoreResult) -> bool:
    return result.hole_completed and result.confidence >= MEDIUM_CONFIDENCE_THRESHOLD
