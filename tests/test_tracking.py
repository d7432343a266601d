import math
import pytest
from datetime import datetime, timedelta, timezone

from models import Coordinate, HoleLayout, LocationSample, PositionOnHole
from tracking.geodesy import EARTH_RADIUS_METERS, distance, haversine
from tracking.layout import CourseLayoutIndex
from tracking.movement import (
    MovementAnalyzer,
    MovementWindow,
    WindowEntry,
    calculate_shot_confidence,
    estimate_club,
)
from tracking.position import PositionTracker, classify_position

METERS_PER_DEGREE_LAT = EARTH_RADIUS_METERS * math.pi / 180
ORIGIN = Coordinate(latitude=40.0, longitude=-75.0)
T0 = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


def _north(coord: Coordinate, meters: float) -> Coordinate:
    """Helper: coordinate `meters` due north (negative for south)."""
    return Coordinate(
        latitude=coord.latitude + meters / METERS_PER_DEGREE_LAT,
        longitude=coord.longitude,
    )


def _sample(coord: Coordinate, seconds: float, speed=None) -> LocationSample:
    """Helper: sample `seconds` after T0."""
    return LocationSample(coordinate=coord, speed_mps=speed, timestamp=T0 + timedelta(seconds=seconds))


def _two_hole_layout() -> CourseLayoutIndex:
    """Helper: hole 1 tee at ORIGIN, pin 400m N; hole 2 tee 420m N, pin 800m N."""
    return CourseLayoutIndex("c1", [
        HoleLayout(number=2, par=4, tee=_north(ORIGIN, 420), pin=_north(ORIGIN, 800)),
        HoleLayout(number=1, par=4, tee=ORIGIN, pin=_north(ORIGIN, 400)),
    ])


# ================================================================
# Geodesy
# ================================================================

def test_distance_is_symmetric_and_zero_on_self():
    a = Coordinate(latitude=51.5074, longitude=-0.1278)
    b = Coordinate(latitude=48.8566, longitude=2.3522)

    assert distance(a, a) == 0.0
    assert math.isclose(distance(a, b), distance(b, a), rel_tol=1e-12)
    # London-Paris is roughly 343.5 km
    assert 340_000 < distance(a, b) < 347_000


def test_distance_along_meridian():
    assert math.isclose(distance(ORIGIN, _north(ORIGIN, 250)), 250.0, abs_tol=1e-6)


def test_haversine_rejects_non_finite():
    with pytest.raises(ValueError):
        haversine(float("nan"), 0.0, 0.0, 0.0)


# ================================================================
# CourseLayoutIndex
# ================================================================

def test_layout_orders_holes_by_number():
    layout = _two_hole_layout()
    assert [h.number for h in layout] == [1, 2]
    assert layout.get(2).par == 4
    assert layout.get(7) is None
    assert layout.get(None) is None


@pytest.mark.asyncio
async def test_layout_load_from_repository():
    class Repo:
        async def get_holes_by_course(self, course_id):
            return [HoleLayout(number=1, par=3, tee=ORIGIN)]

    layout = await CourseLayoutIndex.load(Repo(), "c1")
    assert len(layout) == 1
    assert layout.course_id == "c1"


# ================================================================
# PositionTracker
# ================================================================

def test_detect_hole_respects_detection_radius():
    layout = CourseLayoutIndex("c1", [
        HoleLayout(number=1, par=4, tee=ORIGIN, pin=_north(ORIGIN, 350)),
        HoleLayout(number=2, par=3, tee=Coordinate(latitude=40.0, longitude=-74.9)),
    ])
    tracker = PositionTracker(layout)

    assert tracker.detect_current_hole(_north(ORIGIN, -499)) == 1
    assert tracker.detect_current_hole(_north(ORIGIN, -501)) is None


def test_detect_hole_prefers_nearby_green():
    tracker = PositionTracker(_two_hole_layout())

    # 5m from hole 1's pin beats 15m from hole 2's tee
    assert tracker.detect_current_hole(_north(ORIGIN, 405)) == 1
    # 2m from hole 2's tee beats 18m from hole 1's pin
    assert tracker.detect_current_hole(_north(ORIGIN, 418)) == 2


def test_detect_hole_ignores_distant_pins():
    # Pin more than 100m away never counts, even when it is the closest anchor.
    layout = CourseLayoutIndex("c1", [HoleLayout(number=1, par=4, pin=ORIGIN)])
    assert PositionTracker(layout).detect_current_hole(_north(ORIGIN, 150)) is None


def test_position_on_hole_classification():
    hole = HoleLayout(number=1, par=4, tee=ORIGIN, pin=_north(ORIGIN, 400))

    assert classify_position(hole, _north(ORIGIN, 10)) == PositionOnHole.TEE
    assert classify_position(hole, _north(ORIGIN, 390)) == PositionOnHole.GREEN
    assert classify_position(hole, _north(ORIGIN, 360)) == PositionOnHole.GREEN   # approach < 50m
    assert classify_position(hole, _north(ORIGIN, 200)) == PositionOnHole.FAIRWAY


def test_position_unknown_without_both_anchors():
    pin_only = HoleLayout(number=1, par=3, pin=ORIGIN)
    tee_only = HoleLayout(number=2, par=3, tee=ORIGIN)

    assert classify_position(pin_only, _north(ORIGIN, 100)) == PositionOnHole.UNKNOWN
    assert classify_position(tee_only, _north(ORIGIN, 100)) == PositionOnHole.UNKNOWN
    assert PositionTracker(_two_hole_layout()).position_on_hole(9, ORIGIN) == PositionOnHole.UNKNOWN


def test_distances_missing_anchor_or_hole():
    layout = CourseLayoutIndex("c1", [HoleLayout(number=1, par=3, tee=ORIGIN)])
    tracker = PositionTracker(layout)

    assert tracker.distance_to_pin(1, ORIGIN) is None
    assert tracker.distance_to_tee(1, ORIGIN) == 0.0
    assert tracker.distance_to_tee(5, ORIGIN) is None


def test_course_boundaries():
    tracker = PositionTracker(_two_hole_layout())

    assert tracker.within_course_boundaries(_north(ORIGIN, -550)) is True
    assert tracker.within_course_boundaries(_north(ORIGIN, -700)) is False
    # Unknown course: treated as in-bounds
    assert PositionTracker(CourseLayoutIndex("c1", [])).within_course_boundaries(ORIGIN) is True


def test_read_without_detection():
    reading = PositionTracker(_two_hole_layout()).read(_north(ORIGIN, -700))

    assert reading.detected_hole is None
    assert reading.position == PositionOnHole.UNKNOWN
    assert reading.within_boundaries is False


def test_read_on_fairway():
    reading = PositionTracker(_two_hole_layout()).read(_north(ORIGIN, 200))

    assert reading.detected_hole == 1
    assert reading.position == PositionOnHole.FAIRWAY
    assert math.isclose(reading.distance_to_pin, 200.0, abs_tol=1e-6)
    assert math.isclose(reading.distance_to_tee, 200.0, abs_tol=1e-6)


# ================================================================
# MovementWindow
# ================================================================

def test_window_ages_out_by_timestamp():
    window = MovementWindow()
    window.append(WindowEntry(ORIGIN, 0.0, T0))
    window.append(WindowEntry(ORIGIN, 0.0, T0 + timedelta(minutes=30)))
    assert len(window) == 2

    window.append(WindowEntry(ORIGIN, 0.0, T0 + timedelta(hours=3)))
    assert len(window) == 1
    assert window.latest.timestamp == T0 + timedelta(hours=3)


def test_analyzer_ignores_predecessor_outside_lookback():
    analyzer = MovementAnalyzer()
    window = MovementWindow()
    window.append(WindowEntry(ORIGIN, 0.0, T0))

    stale = analyzer.analyze(window, _sample(_north(ORIGIN, 100), 6 * 60, speed=10.0))
    assert stale.shot_detected is False
    assert stale.analysis_notes == ["Insufficient location history for analysis"]

    recent = analyzer.analyze(window, _sample(_north(ORIGIN, 100), 4 * 60, speed=10.0))
    assert recent.estimated_distance == pytest.approx(100.0)


def test_analyze_leaves_window_unchanged():
    analyzer = MovementAnalyzer()
    window = MovementWindow()
    window.append(WindowEntry.from_sample(_sample(ORIGIN, 0, speed=0.5)))

    result = analyzer.analyze(window, _sample(_north(ORIGIN, 200), 10, speed=15.0))

    assert result.shot_detected is True
    assert len(window) == 1
    assert window.latest.timestamp == T0


# ================================================================
# MovementAnalyzer
# ================================================================

def test_first_sample_has_insufficient_history():
    result = MovementAnalyzer().analyze(MovementWindow(), _sample(ORIGIN, 0, speed=0.0))

    assert result.shot_detected is False
    assert result.analysis_notes == ["Insufficient location history for analysis"]


def test_shot_detected_after_stationary_sample():
    analyzer = MovementAnalyzer()
    window = MovementWindow()
    window.append(WindowEntry.from_sample(_sample(ORIGIN, 0, speed=0.5)))
    result = analyzer.analyze(window, _sample(_north(ORIGIN, 200), 10, speed=15.0))

    assert result.shot_detected is True
    assert result.shot.confidence >= 0.8
    assert result.shot.estimated_club in ("3-Wood", "5-Wood")
    assert result.shot.start == ORIGIN
    assert result.analysis_notes[0].startswith("Shot detected: 200m")


def test_no_shot_when_too_slow_in_time():
    analyzer = MovementAnalyzer()
    window = MovementWindow()
    window.append(WindowEntry.from_sample(_sample(ORIGIN, 0, speed=0.5)))
    result = analyzer.analyze(window, _sample(_north(ORIGIN, 200), 60, speed=3.3))

    assert result.shot_detected is False
    assert result.shot is None
    assert "likely walking" in result.analysis_notes[0]


def test_no_shot_during_sustained_fast_movement():
    # Riding in a cart: the previous sample was already fast.
    analyzer = MovementAnalyzer()
    window = MovementWindow()
    window.append(WindowEntry.from_sample(_sample(ORIGIN, 0, speed=6.0)))
    result = analyzer.analyze(window, _sample(_north(ORIGIN, 120), 10, speed=6.0))

    assert result.shot_detected is False


def test_missing_prior_speed_counts_as_stationary():
    analyzer = MovementAnalyzer()
    window = MovementWindow()
    window.append(WindowEntry.from_sample(_sample(ORIGIN, 0)))
    result = analyzer.analyze(window, _sample(_north(ORIGIN, 60), 5))

    assert result.shot_detected is True
    assert result.shot.estimated_club == "Lob Wedge"


def test_short_movement_is_not_a_shot():
    analyzer = MovementAnalyzer()
    window = MovementWindow()
    window.append(WindowEntry.from_sample(_sample(ORIGIN, 0, speed=0.0)))
    result = analyzer.analyze(window, _sample(_north(ORIGIN, 15), 3, speed=0.0))

    assert result.shot_detected is False
    assert result.estimated_distance == pytest.approx(15.0)


def test_non_increasing_timestamp_is_not_a_shot():
    analyzer = MovementAnalyzer()
    window = MovementWindow()
    window.append(WindowEntry.from_sample(_sample(ORIGIN, 10, speed=0.0)))
    result = analyzer.analyze(window, _sample(_north(ORIGIN, 100), 10, speed=0.0))

    assert result.shot_detected is False
    assert result.speed_mps == 0.0


def test_shot_confidence_adjustments():
    assert calculate_shot_confidence(50, 10, 5) == 0.5
    assert calculate_shot_confidence(150, 10, 15) == 0.8
    assert calculate_shot_confidence(250, 10, 25) == 1.0
    # GPS jitter penalty
    assert calculate_shot_confidence(30, 1, 30) == 0.5


@pytest.mark.parametrize("meters, club", [
    (280, "Driver"),
    (250, "Driver"),
    (249.9, "3-Wood"),
    (185, "5-Wood"),
    (165, "4-Iron"),
    (140, "6-Iron"),
    (125, "8-Iron"),
    (100, "Pitching Wedge"),
    (85, "Sand Wedge"),
    (50, "Lob Wedge"),
    (49, "Short Iron"),
])
def test_club_table(meters, club):
    assert estimate_club(meters) == club
