# Comment: Speech scoring endpoints (FastAPI APIRouter).
#          Handles: validate body -> score pinyin transcript -> respond.

from __future__ import annotations

from fastapi import APIRouter

from schemas import ScoreRequest, ScoreResponse, ValidationErrorResponse
from services.pinyin_scorer import score_pronunciation


router = APIRouter(prefix="/api/speech", tags=["speech"])


@router.post(
    "/score",
    response_model=ScoreResponse,
    responses={400: {"model": ValidationErrorResponse}},
)
def score_speech(payload: ScoreRequest):
    """Score spoken or typed pinyin against the expected answer."""
    # ScoreValidationError is rendered by the app-level handler.
    result = score_pronunciation(payload.expected, payload.transcript)
    return result.to_response()
