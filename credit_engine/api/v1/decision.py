"""POST /v1/decision - Loan eligibility decision endpoint"""

import time
import logging
from fastapi import APIRouter, HTTPException, Request

from credit_engine.api.v1.schemas import DecisionResponse, ProfileRequest
from credit_engine.api.dependencies import get_request_id
from credit_engine.domain.decision import make_loan_decision
from credit_engine.infrastructure.observability.metrics import record_decision
from credit_engine.infrastructure.observability.logging import log_decision

router = APIRouter()


@router.post("/decision", response_model=DecisionResponse)
def create_decision(request_body: ProfileRequest, request: Request):
    """
    Make a loan decision with explanation and recommendations.

    Flow:
    1. Score the profile with the AI-Based strategy
    2. Approve when the score reaches 580
    3. Explain the outcome factor by factor
    4. Recommend loan products (approved) or improvements (denied)
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)
    profile = request_body.to_profile()

    try:
        decision = make_loan_decision(profile)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    duration_ms = (time.perf_counter() - start_time) * 1000
    record_decision(decision.approved, decision.score)
    log_decision(
        request_id,
        decision.approved,
        decision.score,
        decision.risk_level,
        decision.strategy,
        duration_ms,
    )

    return decision.to_dict()
