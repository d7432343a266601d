"""Per-sample orchestration: position, movement, persistence, context forwarding."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from database.interfaces import CourseRepository, LocationStore, RoundRepository
from llm.commentary import CommentaryService
from models import (
    LocationProcessingResult,
    LocationSample,
    MovementAnalysis,
    PositionReading,
    ShotEvent,
    TrackedLocation,
)
from tracking.layout import CourseLayoutIndex
from tracking.movement import WINDOW_RETENTION, MovementAnalyzer, WindowEntry
from tracking.position import PositionTracker
from tracking.session import RoundSession, SessionClosedError, SessionRegistry

logger = logging.getLogger(__name__)


class LocationTrackingService:
    """Entry point for incoming GPS samples.

    Samples for a round are processed strictly in arrival order through that
    round's session; different rounds proceed concurrently. Course layouts are
    loaded once per course and shared.
    """

    def __init__(
        self,
        course_repo: CourseRepository,
        round_repo: RoundRepository,
        location_store: LocationStore,
        commentary: Optional[CommentaryService] = None,
        analyzer: Optional[MovementAnalyzer] = None,
    ):
        self._courses = course_repo
        self._rounds = round_repo
        self._locations = location_store
        self._commentary = commentary or CommentaryService()
        self._analyzer = analyzer or MovementAnalyzer()
        self._layouts: Dict[str, CourseLayoutIndex] = {}
        self.sessions = SessionRegistry(on_create=self._restore_job)

    # ================================================================
    # Public API
    # ================================================================

    async def process_location_update(
        self, user_id: str, round_id: str, sample: LocationSample
    ) -> LocationProcessingResult:
        """Enrich, analyze and persist one sample. Never raises."""
        try:
            session = self.sessions.get_or_create(user_id, round_id)
            return await session.run(lambda: self._process(session, sample))
        except SessionClosedError:
            logger.info("Dropped location update for closed round %s", round_id)
            return LocationProcessingResult(
                success=False, messages=["Tracking session has ended for this round"]
            )
        except Exception:
            logger.exception(
                "Error processing location update for user %s, round %s", user_id, round_id
            )
            return LocationProcessingResult(
                success=False, messages=["Error processing location update"]
            )

    async def get_layout(self, course_id: str) -> CourseLayoutIndex:
        """Cached layout for a course, loaded on first use.

        A failed or empty load yields an empty index, which is not cached, so
        the next sample retries. An empty index detects no hole and counts
        every position as in-bounds.
        """
        layout = self._layouts.get(course_id)
        if layout is not None:
            return layout

        try:
            layout = await CourseLayoutIndex.load(self._courses, course_id)
        except Exception as e:
            logger.warning("Could not load hole layout for course %s: %s", course_id, e)
            return CourseLayoutIndex(course_id, [])

        if layout:
            self._layouts[course_id] = layout
        else:
            logger.warning("Course %s has no hole layout data", course_id)
        return layout

    async def get_recent_location_history(
        self, user_id: str, round_id: str, limit_minutes: int = 60
    ) -> List[TrackedLocation]:
        """User's stored samples for a round, newest first."""
        try:
            cutoff = datetime.now(timezone.utc) - timedelta(minutes=limit_minutes)
            locations = await self._locations.get_since(round_id, cutoff)
        except Exception:
            logger.exception(
                "Error getting recent location history for user %s, round %s", user_id, round_id
            )
            return []
        mine = [loc for loc in locations if loc.user_id == user_id]
        return sorted(mine, key=lambda loc: loc.timestamp, reverse=True)

    def shots_for_hole(self, user_id: str, round_id: str, hole_number: int) -> List[ShotEvent]:
        session = self.sessions.get(user_id, round_id)
        return session.shots_for_hole(hole_number) if session else []

    def clear_hole(self, user_id: str, round_id: str, hole_number: int) -> None:
        session = self.sessions.get(user_id, round_id)
        if session is not None:
            session.clear_hole(hole_number)

    def end_session(self, user_id: str, round_id: str) -> bool:
        """Discard a round's window and pending work immediately."""
        ended = self.sessions.discard(user_id, round_id)
        if ended:
            self._commentary.forget_round(round_id)
        return ended

    # ================================================================
    # Session jobs
    # ================================================================

    def _restore_job(self, session: RoundSession):
        async def restore() -> int:
            return await self._restore_window(session)
        return restore

    async def _restore_window(self, session: RoundSession) -> int:
        """Replay stored samples into a fresh session's window."""
        cutoff = datetime.now(timezone.utc) - WINDOW_RETENTION
        try:
            stored = await self._locations.get_since(session.round_id, cutoff)
        except Exception as e:
            logger.warning("Could not restore movement window for round %s: %s", session.round_id, e)
            return 0

        restored = 0
        for loc in sorted(stored, key=lambda l: l.timestamp):
            if loc.user_id != session.user_id:
                continue
            session.window.append(WindowEntry(loc.coordinate, loc.movement_speed_mps, loc.timestamp))
            if loc.detected_hole is not None:
                session.current_hole = loc.detected_hole
            restored += 1
        if restored:
            logger.info("Restored %d samples for round %s", restored, session.round_id)
        return restored

    async def _process(self, session: RoundSession, sample: LocationSample) -> LocationProcessingResult:
        result = LocationProcessingResult()
        user_id, round_id = session.user_id, session.round_id

        round_ = await self._rounds.get_round(round_id)
        if round_ is None:
            result.messages.append("Round not found")
            return result
        if not round_.is_active:
            logger.info("Round %s is %s; ending its tracking sessions", round_id, round_.status.value)
            self.sessions.discard_round(round_id)
            self._commentary.forget_round(round_id)
            result.messages.append("Round is not active")
            return result

        layout = await self.get_layout(round_.course_id)
        reading = PositionTracker(layout).read(sample.coordinate)
        movement = self._analyzer.analyze(session.window, sample)
        _apply_reading(result, reading)

        # Session state changes only after the sample is stored.
        try:
            await self._locations.create(
                TrackedLocation.from_sample(user_id, round_id, round_.course_id, sample, reading)
            )
        except Exception:
            logger.exception("Failed to store location for user %s, round %s", user_id, round_id)
            result.messages.append("Failed to store location")
            return result

        session.window.append(WindowEntry.from_sample(sample))
        if reading.detected_hole is not None:
            session.current_hole = reading.detected_hole
        if movement.shot is not None:
            session.record_shot(reading.detected_hole, movement.shot)
        _apply_movement(result, movement)

        await self._commentary.forward_location_context(
            user_id,
            round_id,
            sample.coordinate.latitude,
            sample.coordinate.longitude,
            reading.detected_hole,
            reading.distance_to_pin,
        )

        result.success = True
        result.processed_at = datetime.now(timezone.utc)
        logger.debug(
            "Processed location update for user %s, round %s, hole %s",
            user_id, round_id, reading.detected_hole,
        )
        return result


def _apply_reading(result: LocationProcessingResult, reading: PositionReading) -> None:
    result.detected_hole = reading.detected_hole
    result.distance_to_pin = reading.distance_to_pin
    result.distance_to_tee = reading.distance_to_tee
    result.position_on_hole = reading.position
    result.is_within_boundaries = reading.within_boundaries


def _apply_movement(result: LocationProcessingResult, movement: MovementAnalysis) -> None:
    result.shot_detected = movement.shot_detected
    if movement.shot is None:
        return
    result.shot = movement.shot
    result.messages.append(f"Shot detected: ~{movement.shot.distance_meters:.0f}m")
    if movement.shot.estimated_club:
        result.messages.append(f"Estimated club: {movement.shot.estimated_club}")
