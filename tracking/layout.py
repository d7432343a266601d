"""Read-only per-course lookup of hole anchors and par."""

from typing import Dict, Iterable, Iterator, Optional

from models import HoleLayout


class CourseLayoutIndex:
    """Holes of one course keyed by number, iterated in hole-number order.

    Built once per course and shared between sessions; never mutated after
    construction.
    """

    def __init__(self, course_id: str, holes: Iterable[HoleLayout]):
        self.course_id = course_id
        self._holes: Dict[int, HoleLayout] = {}
        for hole in sorted(holes, key=lambda h: h.number):
            # First row wins if the repository returns duplicates.
            self._holes.setdefault(hole.number, hole)

    @classmethod
    async def load(cls, course_repo, course_id: str) -> "CourseLayoutIndex":
        """Build an index from a CourseRepository."""
        holes = await course_repo.get_holes_by_course(course_id)
        return cls(course_id, holes)

    def get(self, hole_number: Optional[int]) -> Optional[HoleLayout]:
        if hole_number is None:
            return None
        return self._holes.get(hole_number)

    def __iter__(self) -> Iterator[HoleLayout]:
        return iter(self._holes.values())

    def __len__(self) -> int:
        return len(self._holes)

    def __bool__(self) -> bool:
        return bool(self._holes)
