"""Hole completion and scoring endpoints."""

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import get_scoring
from api.schemas import (
    HoleCompletionAnalysisRequest,
    HoleCompletionRequest,
    ScoreValidationRequest,
)
from models import (
    AutoScoreResult,
    HoleCompletionAnalysis,
    ScoreSuggestion,
    ScoreValidationResult,
)
from scoring.service import AutoScoreService

router = APIRouter()


@router.post(
    "/courses/{course_id}/holes/{hole_number}/analysis",
    response_model=HoleCompletionAnalysis,
)
async def analyze_hole_completion(
    course_id: str,
    req: HoleCompletionAnalysisRequest,
    hole_number: int = Path(..., ge=1, le=18),
    scoring: AutoScoreService = Depends(get_scoring),
):
    return await scoring.analyze_hole_completion(course_id, hole_number, req.location)


@router.post(
    "/rounds/{round_id}/holes/{hole_number}/complete",
    response_model=AutoScoreResult,
)
async def process_hole_completion(
    round_id: str,
    req: HoleCompletionRequest,
    hole_number: int = Path(..., ge=1, le=18),
    scoring: AutoScoreService = Depends(get_scoring),
):
    return await scoring.process_hole_completion(
        req.user_id, round_id, hole_number, req.final_location, req.shot_events
    )


@router.post(
    "/rounds/{round_id}/holes/{hole_number}/score",
    response_model=ScoreValidationResult,
)
async def validate_and_record_score(
    round_id: str,
    req: ScoreValidationRequest,
    hole_number: int = Path(..., ge=1, le=18),
    scoring: AutoScoreService = Depends(get_scoring),
):
    return await scoring.validate_and_record_score(
        req.user_id, round_id, hole_number, req.detected_score, req.user_confirmed_score
    )


@router.get(
    "/rounds/{round_id}/holes/{hole_number}/suggestion",
    response_model=ScoreSuggestion,
)
async def get_score_suggestion(
    round_id: str,
    user_id: str = Query(...),
    hole_number: int = Path(..., ge=1, le=18),
    scoring: AutoScoreService = Depends(get_scoring),
):
    return await scoring.get_score_suggestion(user_id, round_id, hole_number)
