"""Round lookups and hole score writes."""

import asyncpg
from typing import Optional

from models import Round
from database.converters import parse_uuid, round_from_row
from database.exceptions import IntegrityError, NotFoundError


class RoundRepositoryDB:
    """Async access to users.rounds and users.hole_scores."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_round(self, round_id: str) -> Optional[Round]:
        """The round, or None if it does not exist or the id is malformed."""
        rid = parse_uuid(round_id)
        if rid is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM users.rounds WHERE id = $1", rid
            )
            if not row:
                return None
            return round_from_row(row)

    async def update_hole_score(
        self, round_id: str, hole_number: int, score: int
    ) -> None:
        """Insert or update the strokes for one hole and refresh the round total."""
        rid = parse_uuid(round_id)
        if rid is None:
            raise NotFoundError(f"Round {round_id} not found")
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    round_row = await conn.fetchrow(
                        "SELECT course_id FROM users.rounds WHERE id = $1",
                        rid,
                    )
                    if not round_row:
                        raise NotFoundError(f"Round {round_id} not found")

                    hole_row = await conn.fetchrow(
                        """SELECT id, par FROM courses.holes
                           WHERE course_id = $1 AND hole_number = $2""",
                        round_row["course_id"], hole_number,
                    )
                    hole_id = hole_row["id"] if hole_row else None
                    par_played = hole_row["par"] if hole_row else None

                    await conn.execute(
                        """INSERT INTO users.hole_scores
                           (round_id, hole_id, hole_number, strokes, par_played)
                           VALUES ($1, $2, $3, $4, $5)
                           ON CONFLICT (round_id, hole_number)
                           DO UPDATE SET strokes = EXCLUDED.strokes,
                                         par_played = COALESCE(EXCLUDED.par_played, users.hole_scores.par_played)""",
                        rid, hole_id, hole_number, score, par_played,
                    )

                    await conn.execute(
                        """UPDATE users.rounds
                           SET total_score = (SELECT SUM(strokes) FROM users.hole_scores
                                              WHERE round_id = $1),
                               current_hole = $2
                           WHERE id = $1""",
                        rid, hole_number,
                    )
        except asyncpg.CheckViolationError as e:
            raise IntegrityError(str(e)) from e
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(str(e)) from e
