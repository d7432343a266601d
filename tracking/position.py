"""Position of a coordinate relative to a course's holes."""

from typing import Optional

from models import Coordinate, HoleLayout, PositionOnHole, PositionReading
from tracking.geodesy import distance
from tracking.layout import CourseLayoutIndex

TEE_AREA_RADIUS_METERS = 20.0
GREEN_AREA_RADIUS_METERS = 25.0
GREEN_APPROACH_METERS = 50.0
PIN_DETECTION_RADIUS_METERS = 100.0
MAX_HOLE_DETECTION_METERS = 500.0
COURSE_BOUNDARY_BUFFER_METERS = 600.0


class PositionTracker:
    """Answers hole, distance and boundary questions against one course layout.

    Missing holes or anchors never raise: they yield ``None``, ``UNKNOWN``,
    or an in-bounds answer.
    """

    def __init__(self, layout: CourseLayoutIndex):
        self._layout = layout

    def detect_current_hole(self, coord: Coordinate) -> Optional[int]:
        """Nearest hole by tee (or pin when within 100m), or None beyond 500m."""
        closest: Optional[int] = None
        min_distance = float("inf")

        for hole in self._layout:
            if hole.tee is not None:
                to_tee = distance(coord, hole.tee)
                if to_tee < min_distance:
                    min_distance = to_tee
                    closest = hole.number

            if hole.pin is not None:
                to_green = distance(coord, hole.pin)
                if to_green < min_distance and to_green < PIN_DETECTION_RADIUS_METERS:
                    min_distance = to_green
                    closest = hole.number

        return closest if min_distance <= MAX_HOLE_DETECTION_METERS else None

    def distance_to_pin(self, hole_number: int, coord: Coordinate) -> Optional[float]:
        hole = self._layout.get(hole_number)
        if hole is None or hole.pin is None:
            return None
        return distance(coord, hole.pin)

    def distance_to_tee(self, hole_number: int, coord: Coordinate) -> Optional[float]:
        hole = self._layout.get(hole_number)
        if hole is None or hole.tee is None:
            return None
        return distance(coord, hole.tee)

    def position_on_hole(self, hole_number: int, coord: Coordinate) -> PositionOnHole:
        hole = self._layout.get(hole_number)
        if hole is None:
            return PositionOnHole.UNKNOWN
        return classify_position(hole, coord)

    def within_course_boundaries(self, coord: Coordinate) -> bool:
        """Coarse containment: within 600m of any tee or pin.

        An empty layout means the course could not be resolved, which is
        treated as in-bounds.
        """
        if not self._layout:
            return True
        for hole in self._layout:
            for anchor in (hole.tee, hole.pin):
                if anchor is not None and distance(coord, anchor) <= COURSE_BOUNDARY_BUFFER_METERS:
                    return True
        return False

    def read(self, coord: Coordinate) -> PositionReading:
        """Full position reading for a coordinate."""
        hole_number = self.detect_current_hole(coord)
        within = self.within_course_boundaries(coord)
        if hole_number is None:
            return PositionReading(within_boundaries=within)

        return PositionReading(
            detected_hole=hole_number,
            distance_to_pin=self.distance_to_pin(hole_number, coord),
            distance_to_tee=self.distance_to_tee(hole_number, coord),
            position=self.position_on_hole(hole_number, coord),
            within_boundaries=within,
        )


def classify_position(hole: HoleLayout, coord: Coordinate) -> PositionOnHole:
    """tee / green / fairway / unknown for a coordinate on a given hole."""
    to_tee = distance(coord, hole.tee) if hole.tee is not None else None
    to_pin = distance(coord, hole.pin) if hole.pin is not None else None

    if to_tee is not None and to_tee <= TEE_AREA_RADIUS_METERS:
        return PositionOnHole.TEE
    if to_pin is not None and to_pin <= GREEN_AREA_RADIUS_METERS:
        return PositionOnHole.GREEN

    # Without both anchors there is nothing to place the player between.
    if to_tee is not None and to_pin is not None:
        if to_pin < GREEN_APPROACH_METERS:
            return PositionOnHole.GREEN
        if to_tee > TEE_AREA_RADIUS_METERS and to_pin > GREEN_AREA_RADIUS_METERS:
            return PositionOnHole.FAIRWAY

    return PositionOnHole.UNKNOWN
