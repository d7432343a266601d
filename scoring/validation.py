"""Reconciliation of detected and user-confirmed scores."""

from typing import List, Optional

from models import MAX_REASONABLE_SCORE, ScoreValidationResult

UNCORRECTED_CONFIDENCE = 0.9
CORRECTION_CONFIDENCE = {0: 0.9, 1: 0.7, 2: 0.5}
LARGE_CORRECTION_CONFIDENCE = 0.3


def validate_score_reasonableness(score: int) -> List[str]:
    """Advisory notes; none of them block recording on their own."""
    if score < 1:
        return ["Score cannot be less than 1"]
    if score > MAX_REASONABLE_SCORE:
        return [f"Score unusually high (>{MAX_REASONABLE_SCORE})"]
    return ["Score within reasonable range"]


def calculate_validation_confidence(detected_score: int, final_score: int, user_corrected: bool) -> float:
    """Confidence drops as the player's correction gets larger."""
    if not user_corrected:
        return UNCORRECTED_CONFIDENCE
    difference = abs(detected_score - final_score)
    return CORRECTION_CONFIDENCE.get(difference, LARGE_CORRECTION_CONFIDENCE)


def is_recordable(score: int) -> bool:
    """Whether a score can be written without corrupting the hole record."""
    return score >= 1


def reconcile_score(detected_score: int, user_confirmed_score: Optional[int] = None) -> ScoreValidationResult:
    """Pick the final score and grade it. Pure: same inputs, same result."""
    final_score = user_confirmed_score if user_confirmed_score is not None else detected_score
    corrected = user_confirmed_score is not None and user_confirmed_score != detected_score

    return ScoreValidationResult(
        original_detected_score=detected_score,
        final_score=final_score,
        user_corrected=corrected,
        validation_confidence=calculate_validation_confidence(detected_score, final_score, corrected),
        validation_notes=validate_score_reasonableness(final_score),
    )
