"""POST /v1/score - Credit score with a selectable strategy"""

import logging
from typing import Dict
from fastapi import APIRouter, Depends, HTTPException, Request

from credit_engine.api.v1.schemas import ProfileRequest, ScoreResponse
from credit_engine.api.dependencies import get_request_id, get_strategy
from credit_engine.domain.scoring import calculate_all_scores, calculate_score
from credit_engine.domain.strategies import ScoringStrategy
from credit_engine.infrastructure.observability.metrics import record_score

router = APIRouter()


@router.post("/score", response_model=ScoreResponse)
def score_profile(
    request_body: ProfileRequest,
    request: Request,
    strategy: ScoringStrategy = Depends(get_strategy),
):
    """
    Score a profile with one strategy.

    Invalid profiles are not HTTP errors: they come back with
    success=false, the sentinel score 300 and the validation errors.
    """
    profile = request_body.to_profile()

    try:
        result = calculate_score(profile, strategy)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_score(result.strategy, result.success)
    return result.to_dict()


@router.post("/score/all", response_model=Dict[str, ScoreResponse])
def score_profile_all_strategies(request_body: ProfileRequest, request: Request):
    """Score a profile with every strategy for side-by-side comparison"""
    profile = request_body.to_profile()

    try:
        results = calculate_all_scores(profile)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    for result in results.values():
        record_score(result.strategy, result.success)
    return {name: result.to_dict() for name, result in results.items()}
