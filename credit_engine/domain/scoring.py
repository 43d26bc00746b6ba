"""Score calculator - runs a strategy and classifies the result"""

import logging
from typing import Dict, Sequence, Union

from credit_engine.domain.models import BreakdownItem, FinancialProfile, ScoreResult
from credit_engine.domain.strategies import (
    AIBasedStrategy,
    ScoringStrategy,
    all_strategies,
    strategy_by_name,
)
from credit_engine.domain.validation import validate_profile
from credit_engine.utils.formatting import (
    format_currency,
    format_out_of_hundred,
    format_percent,
    format_years,
)

logger = logging.getLogger(__name__)

MIN_SCORE = 300
MAX_SCORE = 850
# Returned for profiles that fail validation
SENTINEL_SCORE = MIN_SCORE

# Breakdown thresholds as [low, mid, high]
DTI_THRESHOLDS = (20, 36, 50)
INCOME_THRESHOLDS = (3000, 5000, 10000)
EMPLOYMENT_THRESHOLDS = (40, 60, 80)
SAVINGS_THRESHOLDS = (5, 10, 20)


def scale_score(raw_score: int) -> int:
    """
    Map a raw 0-100 strategy score onto the 300-850 band.

    Integer floor: raw 0 -> 300, raw 51 -> 580, raw 100 -> 850.
    """
    raw_score = min(max(raw_score, 0), 100)
    return MIN_SCORE + (raw_score * (MAX_SCORE - MIN_SCORE)) // 100


def get_risk_level(score: int) -> str:
    if score >= 750:
        return "Very Low"
    if score >= 700:
        return "Low"
    if score >= 650:
        return "Moderate"
    if score >= 600:
        return "High"
    return "Very High"


def get_score_rating(score: int) -> str:
    if score >= 800:
        return "Exceptional"
    if score >= 740:
        return "Very Good"
    if score >= 670:
        return "Good"
    if score >= 580:
        return "Fair"
    return "Poor"


def get_approval_probability(score: int) -> int:
    """Approval probability in percent for a scaled score"""
    if score >= 750:
        return 95
    if score >= 700:
        return 85
    if score >= 650:
        return 70
    if score >= 600:
        return 50
    if score >= 550:
        return 30
    return 15


def get_impact_level(value: float, thresholds: Sequence[float], lower_is_better: bool = True) -> str:
    """
    Tag a metric as Positive/Neutral/Negative.

    Lower-is-better metrics compare against the first two thresholds
    (ascending); higher-is-better metrics against the last two (descending).
    """
    if lower_is_better:
        if value < thresholds[0]:
            return "Positive"
        if value < thresholds[1]:
            return "Neutral"
        return "Negative"

    if value > thresholds[2]:
        return "Positive"
    if value > thresholds[1]:
        return "Neutral"
    return "Negative"


def get_age_impact(age: int) -> str:
    if 30 <= age <= 50:
        return "Positive"
    if 25 <= age < 30 or 50 < age <= 60:
        return "Neutral"
    return "Negative"


def build_breakdown(profile: FinancialProfile) -> Dict[str, BreakdownItem]:
    """Contributing factors in display order: dti, income, employment, savings, age"""
    dti = profile.debt_to_income_ratio
    stability = profile.employment_stability_score
    savings_rate = profile.savings_rate

    return {
        "dti": BreakdownItem(
            label="Debt-to-Income Ratio",
            value=format_percent(dti),
            impact=get_impact_level(dti, DTI_THRESHOLDS),
        ),
        "income": BreakdownItem(
            label="Monthly Income",
            value=format_currency(profile.monthly_income),
            impact=get_impact_level(profile.monthly_income, INCOME_THRESHOLDS, lower_is_better=False),
        ),
        "employment": BreakdownItem(
            label="Employment Stability",
            value=format_out_of_hundred(stability),
            impact=get_impact_level(stability, EMPLOYMENT_THRESHOLDS, lower_is_better=False),
        ),
        "savings": BreakdownItem(
            label="Savings Rate",
            value=format_percent(savings_rate),
            impact=get_impact_level(savings_rate, SAVINGS_THRESHOLDS, lower_is_better=False),
        ),
        "age": BreakdownItem(
            label="Age",
            value=format_years(profile.age),
            impact=get_age_impact(profile.age),
        ),
    }


def calculate_score(
    profile: FinancialProfile, strategy: Union[str, ScoringStrategy, None] = None
) -> ScoreResult:
    """
    Main entry point: validate, score with a strategy, classify.

    The strategy is passed per call, as an instance or a name resolved
    through strategy_by_name (AI-Based when omitted). Invalid profiles
    return success=False with the sentinel score 300 instead of raising.
    """
    if isinstance(strategy, str):
        strategy = strategy_by_name(strategy)
    strategy = strategy or AIBasedStrategy()

    validation = validate_profile(profile)
    if not validation.is_valid:
        logger.warning(
            "Scoring skipped: profile failed validation",
            extra={"strategy": strategy.name, "errors": validation.errors},
        )
        return ScoreResult(
            success=False,
            score=SENTINEL_SCORE,
            strategy=strategy.name,
            errors=validation.errors,
        )

    raw_score = strategy.calculate_score(profile)
    score = scale_score(raw_score)

    logger.debug(
        "Profile scored",
        extra={"strategy": strategy.name, "raw_score": raw_score, "score": score},
    )

    return ScoreResult(
        success=True,
        score=score,
        raw_score=raw_score,
        risk_level=get_risk_level(score),
        rating=get_score_rating(score),
        strategy=strategy.name,
        approval_probability=get_approval_probability(score),
        breakdown=build_breakdown(profile),
        financial_health=profile.financial_health_summary,
    )


def calculate_all_scores(profile: FinancialProfile) -> Dict[str, ScoreResult]:
    """Score the profile with every strategy, keyed by strategy name"""
    return {strategy.name: calculate_score(profile, strategy) for strategy in all_strategies()}
