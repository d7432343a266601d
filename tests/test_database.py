import pytest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

from database.converters import (
    hole_layout_from_row,
    parse_uuid,
    round_from_row,
    tracked_location_from_row,
    tracked_location_to_row,
)
from database.db_manager import DatabaseManager
from database.connection import DatabasePool
from database.exceptions import DatabaseError, NotFoundError
from database.repositories.course_repo import CourseRepositoryDB
from database.repositories.location_repo import LocationRepositoryDB
from database.repositories.round_repo import RoundRepositoryDB
from models import PositionOnHole, RoundStatus, TrackedLocation

RECORDED_AT = datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc)


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def mock_pool():
    pool = MagicMock()
    conn = AsyncMock()
    conn.transaction = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    pool.acquire.return_value.__aexit__.return_value = False
    conn.transaction.return_value.__aexit__.return_value = False
    return pool, conn


def _hole_row(hole_number=1, *, par=4, pin=True):
    """Helper: minimal courses.holes row dict."""
    return {
        "hole_number": hole_number,
        "par": par,
        "handicap": 7,
        "tee_latitude": Decimal("40.0000000"),
        "tee_longitude": Decimal("-75.0000000"),
        "pin_latitude": Decimal("40.0034000") if pin else None,
        "pin_longitude": Decimal("-75.0000000") if pin else None,
    }


def _round_row(round_id, *, status="in_progress"):
    """Helper: minimal users.rounds row dict."""
    return {
        "id": round_id,
        "user_id": uuid4(),
        "course_id": uuid4(),
        "status": status,
        "current_hole": 3,
        "total_score": 14,
        "started_at": RECORDED_AT,
    }


def _location_row(**overrides):
    """Helper: minimal users.locations row dict."""
    row = {
        "id": uuid4(),
        "user_id": uuid4(),
        "round_id": uuid4(),
        "course_id": uuid4(),
        "latitude": Decimal("40.0001000"),
        "longitude": Decimal("-75.0002000"),
        "accuracy_meters": Decimal("4.50"),
        "movement_speed_mps": None,
        "current_hole_detected": 2,
        "distance_to_pin_meters": Decimal("143.20"),
        "distance_to_tee_meters": Decimal("210.75"),
        "position_on_hole": "fairway",
        "course_boundary_status": True,
        "recorded_at": RECORDED_AT,
    }
    row.update(overrides)
    return row


# ================================================================
# converters.py: pure function tests (no mocks needed)
# ================================================================

def test_hole_layout_converter_maps_anchors():
    hole = hole_layout_from_row(_hole_row(5, par=3))

    assert hole.number == 5
    assert hole.par == 3
    assert hole.tee.latitude == 40.0
    assert hole.pin.latitude == pytest.approx(40.0034)


def test_hole_layout_converter_null_pin():
    hole = hole_layout_from_row(_hole_row(pin=False))

    assert hole.pin is None
    assert hole.tee is not None


def test_round_converter():
    rid = uuid4()
    r = round_from_row(_round_row(rid, status="paused"))

    assert r.id == str(rid)
    assert r.status == RoundStatus.PAUSED
    assert r.current_hole == 3
    assert r.is_active


def test_tracked_location_converter_reads_numeric_columns():
    row = _location_row()
    loc = tracked_location_from_row(row)

    assert loc.id == str(row["id"])
    assert loc.latitude == pytest.approx(40.0001)
    assert loc.accuracy_meters == 4.5
    assert loc.movement_speed_mps is None
    assert loc.detected_hole == 2
    assert loc.distance_to_pin == pytest.approx(143.2)
    assert loc.position_on_hole == PositionOnHole.FAIRWAY
    assert loc.within_boundaries is True


def test_tracked_location_converter_defaults_unknown_position():
    loc = tracked_location_from_row(_location_row(position_on_hole=None, course_id=None))

    assert loc.position_on_hole == PositionOnHole.UNKNOWN
    assert loc.course_id is None


def test_tracked_location_to_row_column_order():
    user_id, round_id = str(uuid4()), str(uuid4())
    loc = TrackedLocation(
        user_id=user_id,
        round_id=round_id,
        latitude=40.0,
        longitude=-75.0,
        detected_hole=1,
        position_on_hole=PositionOnHole.GREEN,
        within_boundaries=False,
        timestamp=RECORDED_AT,
    )

    row = tracked_location_to_row(loc)

    assert len(row) == 13
    assert row[0] == UUID(user_id)
    assert row[1] == UUID(round_id)
    assert row[2] is None
    assert row[10] == "green"
    assert row[11] is False
    assert row[12] == RECORDED_AT


# ================================================================
# CourseRepositoryDB
# ================================================================

@pytest.mark.asyncio
async def test_get_holes_by_course(mock_pool):
    pool, conn = mock_pool
    conn.fetch.return_value = [_hole_row(1), _hole_row(2, par=5)]
    course_id = str(uuid4())

    holes = await CourseRepositoryDB(pool).get_holes_by_course(course_id)

    assert [h.number for h in holes] == [1, 2]
    assert conn.fetch.await_args.args[1] == UUID(course_id)


@pytest.mark.asyncio
async def test_get_hole_by_number_missing(mock_pool):
    pool, conn = mock_pool
    conn.fetchrow.return_value = None

    assert await CourseRepositoryDB(pool).get_hole_by_number(str(uuid4()), 19) is None


# ================================================================
# RoundRepositoryDB
# ================================================================

@pytest.mark.asyncio
async def test_get_round(mock_pool):
    pool, conn = mock_pool
    rid = uuid4()
    conn.fetchrow.return_value = _round_row(rid)

    r = await RoundRepositoryDB(pool).get_round(str(rid))

    assert r.id == str(rid)
    conn.fetchrow.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_round_missing(mock_pool):
    pool, conn = mock_pool
    conn.fetchrow.return_value = None

    assert await RoundRepositoryDB(pool).get_round(str(uuid4())) is None


@pytest.mark.asyncio
async def test_update_hole_score_upserts_and_refreshes_total(mock_pool):
    pool, conn = mock_pool
    course_id, hole_id = uuid4(), uuid4()
    conn.fetchrow.side_effect = [
        {"course_id": course_id},
        {"id": hole_id, "par": 4},
    ]
    rid = str(uuid4())

    await RoundRepositoryDB(pool).update_hole_score(rid, 3, 5)

    assert conn.execute.await_count == 2
    insert_args = conn.execute.await_args_list[0].args
    assert "INSERT INTO users.hole_scores" in insert_args[0]
    assert insert_args[1:] == (UUID(rid), hole_id, 3, 5, 4)
    update_args = conn.execute.await_args_list[1].args
    assert "total_score" in update_args[0]
    assert update_args[1:] == (UUID(rid), 3)


@pytest.mark.asyncio
async def test_update_hole_score_unknown_round(mock_pool):
    pool, conn = mock_pool
    conn.fetchrow.return_value = None

    with pytest.raises(NotFoundError):
        await RoundRepositoryDB(pool).update_hole_score(str(uuid4()), 1, 4)

    conn.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_malformed_round_id_is_not_found(mock_pool):
    pool, conn = mock_pool
    repo = RoundRepositoryDB(pool)

    assert await repo.get_round("not-a-uuid") is None
    with pytest.raises(NotFoundError):
        await repo.update_hole_score("not-a-uuid", 1, 4)

    pool.acquire.assert_not_called()


# ================================================================
# LocationRepositoryDB
# ================================================================

@pytest.mark.asyncio
async def test_create_location_returns_stored_row(mock_pool):
    pool, conn = mock_pool
    stored = _location_row()
    conn.fetchrow.return_value = stored
    loc = TrackedLocation(
        user_id=str(stored["user_id"]),
        round_id=str(stored["round_id"]),
        latitude=40.0001,
        longitude=-75.0002,
        timestamp=RECORDED_AT,
    )

    created = await LocationRepositoryDB(pool).create(loc)

    assert created.id == str(stored["id"])
    args = conn.fetchrow.await_args.args
    assert "RETURNING *" in args[0]
    assert len(args) == 14


@pytest.mark.asyncio
async def test_get_since(mock_pool):
    pool, conn = mock_pool
    conn.fetch.return_value = [_location_row(), _location_row(current_hole_detected=3)]
    rid = str(uuid4())

    locations = await LocationRepositoryDB(pool).get_since(rid, RECORDED_AT)

    assert [loc.detected_hole for loc in locations] == [2, 3]
    assert conn.fetch.await_args.args[1:] == (UUID(rid), RECORDED_AT)


@pytest.mark.asyncio
async def test_malformed_ids_return_empty_lookups(mock_pool):
    pool, conn = mock_pool

    assert await LocationRepositoryDB(pool).get_since("r1", RECORDED_AT) == []
    assert await CourseRepositoryDB(pool).get_holes_by_course("c1") == []
    assert await CourseRepositoryDB(pool).get_hole_by_number("c1", 1) is None
    conn.fetch.assert_not_awaited()
    conn.fetchrow.assert_not_awaited()


def test_parse_uuid():
    uid = uuid4()

    assert parse_uuid(str(uid)) == uid
    assert parse_uuid("round-42") is None
    assert parse_uuid(None) is None


# ================================================================
# DatabaseManager
# ================================================================

def test_database_manager_shares_pool(mock_pool):
    pool, _ = mock_pool
    manager = DatabaseManager(pool)

    assert manager.pool is pool
    assert isinstance(manager.courses, CourseRepositoryDB)
    assert isinstance(manager.rounds, RoundRepositoryDB)
    assert isinstance(manager.locations, LocationRepositoryDB)


@pytest.mark.asyncio
async def test_initialize_schema_runs_schema_file(mock_pool):
    pool, conn = mock_pool

    await DatabaseManager(pool).initialize_schema()

    sql = conn.execute.await_args.args[0]
    assert "CREATE TABLE IF NOT EXISTS users.locations" in sql


@pytest.mark.asyncio
async def test_initialize_schema_missing_file(mock_pool, tmp_path):
    pool, conn = mock_pool

    with pytest.raises(DatabaseError):
        await DatabaseManager(pool, schema_path=str(tmp_path / "missing.sql")).initialize_schema()
    conn.execute.assert_not_awaited()


# ================================================================
# DatabasePool
# ================================================================

@pytest.mark.asyncio
async def test_health_check_without_pool():
    assert await DatabasePool().health_check() is False


@pytest.mark.asyncio
async def test_health_check_failure_is_reported(mock_pool):
    pool, conn = mock_pool
    conn.fetchval.side_effect = OSError("connection refused")
    dbp = DatabasePool()
    dbp._pool = pool

    assert await dbp.health_check() is False


def test_pool_property_requires_initialize():
    with pytest.raises(RuntimeError):
        DatabasePool().pool
