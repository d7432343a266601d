"""Repository interfaces consumed by the tracking and scoring services.

Any class with matching method signatures satisfies these protocols; the
asyncpg repositories in ``database.repositories`` are the production ones.
"""

from datetime import datetime
from typing import List, Optional, Protocol

from models import HoleLayout, Round, TrackedLocation


class CourseRepository(Protocol):
    """Hole layouts for a course."""

    async def get_hole_by_number(
        self, course_id: str, hole_number: int
    ) -> Optional[HoleLayout]:
        """Return the hole, or None when the course has no such hole."""
        ...

    async def get_holes_by_course(self, course_id: str) -> List[HoleLayout]:
        """Return all holes of a course ordered by number (empty if unknown)."""
        ...


class RoundRepository(Protocol):
    """Round lookups and hole score writes."""

    async def get_round(self, round_id: str) -> Optional[Round]:
        ...

    async def update_hole_score(
        self, round_id: str, hole_number: int, score: int
    ) -> None:
        """Persist a hole score. Raises on failure."""
        ...


class LocationStore(Protocol):
    """Persistence and replay of enriched location samples."""

    async def create(self, location: TrackedLocation) -> TrackedLocation:
        ...

    async def get_since(
        self, round_id: str, cutoff: datetime
    ) -> List[TrackedLocation]:
        """Samples for a round at or after ``cutoff``, oldest first."""
        ...
