"""Dependency injection for FastAPI endpoints"""

from typing import Optional
from fastapi import Query, Request
from credit_engine.config import settings
from credit_engine.domain.strategies import ScoringStrategy, strategy_by_name


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_strategy(
    strategy: Optional[str] = Query(None, description="Scoring strategy name"),
) -> ScoringStrategy:
    """Resolve the requested strategy; unknown names fall back to Standard"""
    return strategy_by_name(strategy or settings.default_strategy)
