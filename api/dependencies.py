from fastapi import Request

from scoring.service import AutoScoreService
from tracking.service import LocationTrackingService


def get_tracking(request: Request) -> LocationTrackingService:
    """FastAPI dependency that provides the LocationTrackingService."""
    return request.app.state.tracking


def get_scoring(request: Request) -> AutoScoreService:
    """FastAPI dependency that provides the AutoScoreService."""
    return request.app.state.scoring
