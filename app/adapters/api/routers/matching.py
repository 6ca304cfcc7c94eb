# app\adapters\api\routers\matching.py
from fastapi import APIRouter, Depends, status
from dependency_injector.wiring import inject, Provide
from pydantic import BaseModel, Field
import structlog

from app.core.domain.models import MatchResult
from app.core.domain.phonetics import normalize
from app.core.use_cases.score_attempt import ScoreAttempt
from app.shared.container import Container

logger = structlog.get_logger()

router = APIRouter(prefix="/match", tags=["Matching"])

# --- Request / Response Models ---

class MatchRequest(BaseModel):
    input: str = Field(..., description="What the user typed or said (may be misspelled)")
    target: str = Field(..., description="Target-language reference word")

class MatchResponse(MatchResult):
    input_skeleton: str
    target_skeleton: str

class SkeletonRequest(BaseModel):
    text: str

class SkeletonResponse(BaseModel):
    text: str
    skeleton: str

# --- Endpoints ---

@router.post(
    "",
    response_model=MatchResponse,
    status_code=status.HTTP_200_OK,
    summary="Score a recall attempt against a target word"
)
@inject
async def match_attempt(
    request: MatchRequest,
    use_case: ScoreAttempt = Depends(Provide[Container.score_attempt_use_case]),
):
    """
    Compares the phonetic skeletons of `input` and `target`.

    **Returns:** similarity (0-100), `status` (`win`/`lookup`) and
    `match_type` (`exact`/`phonetic`/`none`). Never fails for string input.
    """
    result = use_case.execute(request.input, request.target)
    return MatchResponse(
        **result.model_dump(),
        input_skeleton=normalize(request.input),
        target_skeleton=normalize(request.target),
    )

@router.post(
    "/skeleton",
    response_model=SkeletonResponse,
    summary="Show the phonetic skeleton of a text"
)
async def skeleton(request: SkeletonRequest):
    return SkeletonResponse(text=request.text, skeleton=normalize(request.text))
