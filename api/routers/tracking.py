"""Location tracking endpoints."""

from fastapi import APIRouter, Depends, Query
from typing import List

from api.dependencies import get_tracking
from api.schemas import LocationUpdateRequest, SessionEndResponse
from models import LocationProcessingResult, TrackedLocation
from tracking.service import LocationTrackingService

router = APIRouter()


@router.post("/{round_id}/locations", response_model=LocationProcessingResult)
async def process_location_update(
    round_id: str,
    req: LocationUpdateRequest,
    tracking: LocationTrackingService = Depends(get_tracking),
):
    return await tracking.process_location_update(req.user_id, round_id, req.sample)


@router.get("/{round_id}/locations", response_model=List[TrackedLocation])
async def get_recent_locations(
    round_id: str,
    user_id: str = Query(...),
    minutes: int = Query(60, ge=1, le=240),
    tracking: LocationTrackingService = Depends(get_tracking),
):
    return await tracking.get_recent_location_history(user_id, round_id, limit_minutes=minutes)


@router.delete("/{round_id}/session", response_model=SessionEndResponse)
async def end_session(
    round_id: str,
    user_id: str = Query(...),
    tracking: LocationTrackingService = Depends(get_tracking),
):
    """Stop tracking a round and drop its in-memory state."""
    return SessionEndResponse(ended=tracking.end_session(user_id, round_id))
