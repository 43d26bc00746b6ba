"""POST /v1/profile/* - Check raw financial fields and report derived metrics"""

import logging
from fastapi import APIRouter, HTTPException, Request

from credit_engine.api.v1.schemas import ProfileMetricsResponse, ProfileRequest, ValidationResponse
from credit_engine.api.dependencies import get_request_id
from credit_engine.domain.validation import validate_profile

router = APIRouter()


@router.post("/profile/validate", response_model=ValidationResponse)
def validate(request_body: ProfileRequest, request: Request):
    """
    Validate a financial profile.

    Returns:
        is_valid plus the ordered list of rule violations
    """
    profile = request_body.to_profile()

    try:
        result = validate_profile(profile)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return ValidationResponse(is_valid=result.is_valid, errors=result.errors)


@router.post("/profile/metrics", response_model=ProfileMetricsResponse)
def profile_metrics(request_body: ProfileRequest, request: Request):
    """Raw fields, every derived ratio and a one-line financial health summary"""
    profile = request_body.to_profile()

    try:
        metrics = profile.to_dict()
        metrics["financial_health"] = profile.financial_health_summary
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return metrics
