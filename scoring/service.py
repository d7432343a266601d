"""Public scoring entry points: completion analysis, score inference, validation."""

import logging
from typing import List, Optional

from database.interfaces import CourseRepository, RoundRepository
from llm.commentary import CommentaryService
from models import (
    MAX_REASONABLE_SCORE,
    AutoScoreResult,
    Coordinate,
    HoleCompletionAnalysis,
    ScoreSuggestion,
    ScoreValidationResult,
    ShotEvent,
)
from scoring.completion import analyze_completion, unable_to_analyze
from scoring.inference import calculate_score_from_shots, infer_score, wants_commentary
from scoring.validation import is_recordable, reconcile_score
from tracking.service import LocationTrackingService

logger = logging.getLogger(__name__)

DEFAULT_PAR = 4


class AutoScoreService:
    """Turns tracked play into a confirmed hole score.

    None of the public methods raise; failures come back as conservative
    results that ask the player to confirm.
    """

    def __init__(
        self,
        course_repo: CourseRepository,
        round_repo: RoundRepository,
        commentary: Optional[CommentaryService] = None,
        tracking: Optional[LocationTrackingService] = None,
    ):
        self._courses = course_repo
        self._rounds = round_repo
        self._commentary = commentary or CommentaryService()
        self._tracking = tracking

    # ================================================================
    # Hole completion
    # ================================================================

    async def analyze_hole_completion(
        self, course_id: str, hole_number: int, location: Coordinate
    ) -> HoleCompletionAnalysis:
        try:
            hole = await self._courses.get_hole_by_number(course_id, hole_number)
            return analyze_completion(location, hole)
        except Exception:
            logger.exception(
                "Error analyzing hole completion for course %s, hole %s", course_id, hole_number
            )
            return unable_to_analyze("Error during analysis")

    async def process_hole_completion(
        self,
        user_id: str,
        round_id: str,
        hole_number: int,
        final_location: Coordinate,
        shot_events: Optional[List[ShotEvent]] = None,
    ) -> AutoScoreResult:
        """Detect the score for a hole the player appears to have finished.

        Uses ``shot_events`` when given, otherwise the shots the live
        tracking session accumulated for the hole.
        """
        logger.info(
            "Processing hole completion for user %s, round %s, hole %s",
            user_id, round_id, hole_number,
        )
        try:
            round_ = await self._rounds.get_round(round_id)
            if round_ is None:
                return AutoScoreResult(detection_reasons=["Round not found"])

            hole = await self._courses.get_hole_by_number(round_.course_id, hole_number)
            if hole is None:
                return AutoScoreResult(detection_reasons=["Hole information not found"])

            if shot_events is None:
                shot_events = self._session_shots(user_id, round_id, hole_number)

            completion = analyze_completion(final_location, hole)
            result = infer_score(shot_events, completion, hole.par)

            if wants_commentary(result):
                result.commentary = await self._commentary.hole_commentary(
                    user_id, round_id, hole_number, result.detected_score, hole.par
                )

            if result.hole_completed:
                logger.info(
                    "Hole completion processed: score %s, confidence %.2f",
                    result.detected_score, result.confidence,
                )
            return result
        except Exception:
            logger.exception(
                "Error processing hole completion for user %s, round %s, hole %s",
                user_id, round_id, hole_number,
            )
            return AutoScoreResult(detection_reasons=["Error processing hole completion"])

    # ================================================================
    # Validation and recording
    # ================================================================

    async def validate_and_record_score(
        self,
        user_id: str,
        round_id: str,
        hole_number: int,
        detected_score: int,
        user_confirmed_score: Optional[int] = None,
    ) -> ScoreValidationResult:
        """Reconcile, then persist the final score. Check ``recording_successful``."""
        result = reconcile_score(detected_score, user_confirmed_score)

        if not is_recordable(result.final_score):
            result.validation_notes.append("Score not recorded: invalid score")
            return result

        try:
            await self._rounds.update_hole_score(round_id, hole_number, result.final_score)
        except Exception as e:
            logger.error(
                "Failed to record score for user %s, round %s, hole %s: %s",
                user_id, round_id, hole_number, e,
            )
            result.validation_notes.append(f"Failed to record score: {e}")
            return result

        result.recording_successful = True
        result.validation_notes.append("Score successfully recorded")
        logger.info(
            "Score validated and recorded: user %s, round %s, hole %s, score %s",
            user_id, round_id, hole_number, result.final_score,
        )

        if self._tracking is not None:
            self._tracking.clear_hole(user_id, round_id, hole_number)

        par = await self._hole_par(round_id, hole_number)
        result.commentary = await self._commentary.hole_commentary(
            user_id, round_id, hole_number, result.final_score, par
        )
        return result

    # ================================================================
    # Suggestions
    # ================================================================

    async def get_score_suggestion(
        self, user_id: str, round_id: str, hole_number: int
    ) -> ScoreSuggestion:
        """Score suggestion from shots tracked so far on the hole."""
        try:
            round_ = await self._rounds.get_round(round_id)
            hole = (
                await self._courses.get_hole_by_number(round_.course_id, hole_number)
                if round_ else None
            )
        except Exception:
            logger.exception(
                "Error getting score suggestion for user %s, round %s, hole %s",
                user_id, round_id, hole_number,
            )
            return ScoreSuggestion(
                suggested_score=DEFAULT_PAR,
                confidence=0.1,
                reasoning=["Error occurred during analysis"],
            )

        if hole is None:
            return ScoreSuggestion(
                suggested_score=DEFAULT_PAR,
                confidence=0.1,
                alternative_scores=[DEFAULT_PAR + 1, DEFAULT_PAR + 2],
                reasoning=["Hole information not found - assuming par 4"],
            )

        shots = self._session_shots(user_id, round_id, hole_number)
        suggested = calculate_score_from_shots(len(shots), hole.par)
        alternatives = [s for s in (suggested + 1, suggested + 2) if s <= MAX_REASONABLE_SCORE]

        if not shots:
            return ScoreSuggestion(
                suggested_score=suggested,
                confidence=0.5,
                alternative_scores=alternatives,
                reasoning=["No shots tracked on this hole - based on par"],
                notable_events=["Insufficient data for detailed analysis"],
            )

        longest = max(shots, key=lambda s: s.distance_meters)
        average_confidence = sum(s.confidence for s in shots) / len(shots)
        return ScoreSuggestion(
            suggested_score=suggested,
            confidence=round(min(0.5 + 0.3 * average_confidence, 0.8), 2),
            alternative_scores=alternatives,
            reasoning=[f"Based on {len(shots)} tracked shots"],
            detected_shot_count=len(shots),
            notable_events=[
                f"Longest shot: {longest.distance_meters:.0f}m ({longest.estimated_club})"
            ],
        )

    # ================================================================
    # Private helpers
    # ================================================================

    def _session_shots(self, user_id: str, round_id: str, hole_number: int) -> List[ShotEvent]:
        if self._tracking is None:
            return []
        return self._tracking.shots_for_hole(user_id, round_id, hole_number)

    async def _hole_par(self, round_id: str, hole_number: int) -> int:
        try:
            round_ = await self._rounds.get_round(round_id)
            if round_ is None:
                return DEFAULT_PAR
            hole = await self._courses.get_hole_by_number(round_.course_id, hole_number)
            return hole.par if hole else DEFAULT_PAR
        except Exception as e:
            logger.warning("Could not look up par for round %s, hole %s: %s", round_id, hole_number, e)
            return DEFAULT_PAR
