"""Persistence and replay of tracked locations."""

import asyncpg
from datetime import datetime
from typing import List

from models import TrackedLocation
from database.converters import parse_uuid, tracked_location_from_row, tracked_location_to_row
from database.exceptions import IntegrityError


class LocationRepositoryDB:
    """Async store for users.locations."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def create(self, location: TrackedLocation) -> TrackedLocation:
        """Insert an enriched sample. Returns it with its database id."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO users.locations
                       (user_id, round_id, course_id, latitude, longitude,
                        accuracy_meters, movement_speed_mps, current_hole_detected,
                        distance_to_pin_meters, distance_to_tee_meters,
                        position_on_hole, course_boundary_status, recorded_at)
                       VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13)
                       RETURNING *""",
                    *tracked_location_to_row(location),
                )
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(str(e)) from e
        return tracked_location_from_row(row)

    async def get_since(self, round_id: str, cutoff: datetime) -> List[TrackedLocation]:
        """Samples for a round recorded at or after cutoff, oldest first."""
        rid = parse_uuid(round_id)
        if rid is None:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM users.locations
                   WHERE round_id = $1 AND recorded_at >= $2
                   ORDER BY recorded_at""",
                rid, cutoff,
            )
            return [tracked_location_from_row(r) for r in rows]
