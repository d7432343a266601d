from .geodesy import EARTH_RADIUS_METERS, distance, haversine
from .layout import CourseLayoutIndex
from .movement import MovementAnalyzer, MovementWindow, estimate_club
from .position import PositionTracker, classify_position
from .service import LocationTrackingService
from .session import RoundSession, SessionClosedError, SessionRegistry

__all__ = [
    "EARTH_RADIUS_METERS",
    "distance",
    "haversine",
    "CourseLayoutIndex",
    "MovementAnalyzer",
    "MovementWindow",
    "estimate_club",
    "PositionTracker",
    "classify_position",
    "LocationTrackingService",
    "RoundSession",
    "SessionClosedError",
    "SessionRegistry",
]
