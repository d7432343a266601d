"""Read access to hole layouts in the courses schema."""

import asyncpg
from typing import List, Optional

from models import HoleLayout
from database.converters import hole_layout_from_row, parse_uuid

_HOLE_COLUMNS = """hole_number, par, handicap,
                   tee_latitude, tee_longitude, pin_latitude, pin_longitude"""


class CourseRepositoryDB:
    """Async lookups of hole anchors and par."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_holes_by_course(self, course_id: str) -> List[HoleLayout]:
        """All holes for a course ordered by number; empty for an unknown course."""
        cid = parse_uuid(course_id)
        if cid is None:
            return []
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"""SELECT {_HOLE_COLUMNS} FROM courses.holes
                    WHERE course_id = $1 ORDER BY hole_number""",
                cid,
            )
            return [hole_layout_from_row(r) for r in rows]

    async def get_hole_by_number(
        self, course_id: str, hole_number: int
    ) -> Optional[HoleLayout]:
        """A single hole, or None if the course has no such hole."""
        cid = parse_uuid(course_id)
        if cid is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""SELECT {_HOLE_COLUMNS} FROM courses.holes
                    WHERE course_id = $1 AND hole_number = $2""",
                cid, hole_number,
            )
            if not row:
                return None
            return hole_layout_from_row(row)
