"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the normalized DB schema
and the tracking models.
"""

from typing import Optional, Tuple
from uuid import UUID

from models import Coordinate, HoleLayout, PositionOnHole, Round, RoundStatus, TrackedLocation


# ================================================================
# Row -> Model (reads)
# ================================================================

def _coordinate(lat, lon) -> Optional[Coordinate]:
    """Two nullable NUMERIC columns -> Coordinate (None if either is NULL)."""
    if lat is None or lon is None:
        return None
    return Coordinate(latitude=float(lat), longitude=float(lon))


def _float(value) -> Optional[float]:
    return float(value) if value is not None else None


def parse_uuid(value: str) -> Optional[UUID]:
    """Id string -> UUID, or None when it is not a valid UUID."""
    try:
        return UUID(value)
    except (TypeError, ValueError):
        return None


def hole_layout_from_row(row) -> HoleLayout:
    """courses.holes row -> HoleLayout model."""
    return HoleLayout(
        number=row["hole_number"],
        par=row["par"],
        handicap=row["handicap"],
        tee=_coordinate(row["tee_latitude"], row["tee_longitude"]),
        pin=_coordinate(row["pin_latitude"], row["pin_longitude"]),
    )


def round_from_row(row) -> Round:
    """users.rounds row -> Round model."""
    return Round(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        course_id=str(row["course_id"]),
        status=RoundStatus(row["status"]) if row["status"] else RoundStatus.IN_PROGRESS,
        current_hole=row["current_hole"],
        started_at=row["started_at"],
    )


def tracked_location_from_row(row) -> TrackedLocation:
    """users.locations row -> TrackedLocation model."""
    return TrackedLocation(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        round_id=str(row["round_id"]),
        course_id=str(row["course_id"]) if row["course_id"] else None,
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        accuracy_meters=_float(row["accuracy_meters"]),
        movement_speed_mps=_float(row["movement_speed_mps"]),
        detected_hole=row["current_hole_detected"],
        distance_to_pin=_float(row["distance_to_pin_meters"]),
        distance_to_tee=_float(row["distance_to_tee_meters"]),
        position_on_hole=PositionOnHole(row["position_on_hole"] or "unknown"),
        within_boundaries=bool(row["course_boundary_status"]),
        timestamp=row["recorded_at"],
    )


# ================================================================
# Model -> Row (writes)
# ================================================================

def tracked_location_to_row(location: TrackedLocation) -> Tuple:
    """TrackedLocation -> users.locations insert tuple (13 columns)."""
    return (
        UUID(location.user_id),
        UUID(location.round_id),
        UUID(location.course_id) if location.course_id else None,
        location.latitude,
        location.longitude,
        location.accuracy_meters,
        location.movement_speed_mps,
        location.detected_hole,
        location.distance_to_pin,
        location.distance_to_tee,
        location.position_on_hole.value,
        location.within_boundaries,
        location.timestamp,
    )
