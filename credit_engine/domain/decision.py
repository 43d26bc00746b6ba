"""Loan decision engine - approval gate, explanations and recommendations"""

import logging
import math
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from credit_engine.domain.models import (
    EmploymentType,
    FinancialProfile,
    ImprovementRecommendation,
    LoanDecision,
    LoanRecommendation,
)
from credit_engine.domain.scoring import SENTINEL_SCORE, calculate_score
from credit_engine.domain.strategies import AIBasedStrategy, ScoringStrategy, strategy_by_name

logger = logging.getLogger(__name__)

# Single hard gate: scores at or above this are approved
APPROVAL_THRESHOLD = 580


@dataclass
class Explanation:
    """Ordered decision reasons and factors"""

    reasons: List[str] = field(default_factory=list)
    positive_factors: List[str] = field(default_factory=list)
    negative_factors: List[str] = field(default_factory=list)


def is_approved(score: int) -> bool:
    return score >= APPROVAL_THRESHOLD


def get_interest_rate_range(score: int) -> Tuple[float, float]:
    """Annual interest band in percent"""
    if score >= 750:
        return (4.5, 6.5)
    if score >= 700:
        return (6.5, 8.5)
    if score >= 650:
        return (8.5, 11.5)
    if score >= 600:
        return (11.5, 14.5)
    return (14.5, 18.5)


def _floor_amount(amount: float) -> int:
    """Floor to whole currency units, saturating at the largest finite float"""
    return math.floor(min(amount, sys.float_info.max))


def get_max_loan_amount(profile: FinancialProfile, score: int) -> int:
    """
    Largest loan the applicant can carry.

    The lower of annual income times a score multiplier and three years of
    disposable income, floored.
    """
    if score >= 750:
        multiplier = 4.0
    elif score >= 700:
        multiplier = 3.5
    elif score >= 650:
        multiplier = 3.0
    elif score >= 600:
        multiplier = 2.5
    else:
        multiplier = 2.0

    max_by_income = profile.annual_income * multiplier
    max_by_disposable = profile.disposable_income * 36

    return _floor_amount(min(max_by_income, max_by_disposable))


def generate_explanation(profile: FinancialProfile, approved: bool) -> Explanation:
    """
    Explain a decision factor by factor.

    Factors are evaluated in order: DTI, income, employment, savings, age,
    loan-to-income. The approve/deny reason is prepended last so it always
    comes first.
    """
    explanation = Explanation()
    positive = explanation.positive_factors
    negative = explanation.negative_factors
    reasons = explanation.reasons

    dti = profile.debt_to_income_ratio
    if dti < 20:
        positive.append("Excellent debt-to-income ratio")
        reasons.append("Your debt-to-income ratio is excellent (under 20%)")
    elif dti < 36:
        positive.append("Good debt-to-income ratio")
        reasons.append("Your debt-to-income ratio is within acceptable range")
    elif dti < 50:
        negative.append("High debt-to-income ratio")
        reasons.append(f"Your debt-to-income ratio is high ({dti:.1f}%)")
    else:
        negative.append("Very high debt burden")
        reasons.append(f"Your debt-to-income ratio is too high ({dti:.1f}%)")

    if profile.monthly_income > 5000:
        positive.append("Strong income level")
        reasons.append("Your monthly income is strong")
    elif profile.monthly_income > 3000:
        positive.append("Adequate income level")
    else:
        negative.append("Low income level")
        reasons.append("Your income level may limit loan approval")

    stability = profile.employment_stability_score
    if stability > 70:
        positive.append("Stable employment history")
        reasons.append("Your employment is stable and secure")
    elif stability > 50:
        positive.append("Acceptable employment status")
    elif stability > 0:
        negative.append("Limited employment stability")
        reasons.append("Your employment stability could be stronger")
    else:
        negative.append("No current employment")
        reasons.append("Currently unemployed - major risk factor")

    savings_rate = profile.savings_rate
    if savings_rate > 20:
        positive.append("Excellent savings discipline")
        reasons.append("You demonstrate excellent financial discipline")
    elif savings_rate > 10:
        positive.append("Good savings habits")
    elif savings_rate > 0:
        negative.append("Limited savings")
    else:
        negative.append("No savings capacity")
        reasons.append("No disposable income for savings - high risk")

    if 30 <= profile.age <= 50:
        positive.append("Optimal age range for borrowing")
    elif profile.age < 25:
        negative.append("Young borrower - limited credit history expected")
    elif profile.age > 60:
        negative.append("Near retirement age - repayment concerns")

    loan_to_income = profile.loan_to_income_ratio
    if loan_to_income > 4:
        negative.append("Loan amount too high relative to income")
        reasons.append("Requested loan amount is very high compared to your income")
    elif loan_to_income > 3:
        negative.append("High loan-to-income ratio")
    elif loan_to_income < 2:
        positive.append("Reasonable loan amount requested")

    if approved:
        reasons.insert(0, "✅ Loan APPROVED - Credit score meets minimum requirements")
    else:
        reasons.insert(
            0, f"❌ Loan DENIED - Credit score below minimum threshold ({APPROVAL_THRESHOLD})"
        )

    return explanation


def get_improvement_recommendations(profile: FinancialProfile) -> List[ImprovementRecommendation]:
    """Actions for a denied applicant, one per failed threshold, in fixed order"""
    recommendations = []

    dti = profile.debt_to_income_ratio
    if dti > 36:
        recommendations.append(
            ImprovementRecommendation(
                title="Reduce Your Debt-to-Income Ratio",
                description=(
                    f"Your DTI is {dti:.1f}%. Try to reduce expenses or pay down "
                    "existing debts to get below 36%."
                ),
                priority="high",
                icon="trending-down",
            )
        )

    if profile.monthly_income < 3000:
        recommendations.append(
            ImprovementRecommendation(
                title="Increase Your Income",
                description=(
                    "Consider additional income sources or negotiate a raise to "
                    "improve your financial position."
                ),
                priority="high",
                icon="trending-up",
            )
        )

    if profile.employment_stability_score < 50:
        recommendations.append(
            ImprovementRecommendation(
                title="Improve Employment Stability",
                description="Seek permanent employment or build a longer employment history.",
                priority="medium",
                icon="briefcase",
            )
        )

    if profile.savings_rate < 10:
        recommendations.append(
            ImprovementRecommendation(
                title="Build Your Savings",
                description=(
                    "Try to save at least 10% of your monthly income to demonstrate "
                    "financial discipline."
                ),
                priority="medium",
                icon="wallet",
            )
        )

    if profile.existing_debts > 0:
        recommendations.append(
            ImprovementRecommendation(
                title="Pay Down Existing Debts",
                description=(
                    "Focus on reducing your existing debt burden before applying for new loans."
                ),
                priority="high",
                icon="card",
            )
        )

    if profile.loan_to_income_ratio > 3:
        recommendations.append(
            ImprovementRecommendation(
                title="Request a Lower Loan Amount",
                description=(
                    "Consider requesting a smaller loan amount relative to your annual income."
                ),
                priority="medium",
                icon="cash",
            )
        )

    return recommendations


def _shift_band(band: Tuple[float, float], low: float, high: float) -> Tuple[float, float]:
    return (band[0] + low, band[1] + high)


def get_loan_recommendations(profile: FinancialProfile, score: int) -> List[LoanRecommendation]:
    """
    Loan products for an approved applicant.

    Personal and Auto loans are always offered; Home loans need monthly
    income above 5000; Business loans are only for the self-employed.
    """
    max_amount = get_max_loan_amount(profile, score)
    interest_range = get_interest_rate_range(score)

    recommendations = [
        LoanRecommendation(
            loan_type="Personal Loan",
            description="Unsecured loan for any purpose",
            max_amount=max_amount,
            interest_rate=interest_range,
            term="1-5 years",
            icon="person",
            suitability="Highly Suitable" if score >= 700 else "Suitable",
        )
    ]

    if profile.monthly_income > 5000:
        recommendations.append(
            LoanRecommendation(
                loan_type="Home Loan",
                description="Mortgage for home purchase",
                max_amount=max_amount * 5,
                interest_rate=_shift_band(interest_range, -1, -1),
                term="15-30 years",
                icon="home",
                suitability="Highly Suitable" if score >= 680 else "Suitable",
            )
        )

    recommendations.append(
        LoanRecommendation(
            loan_type="Auto Loan",
            description="Loan for vehicle purchase",
            max_amount=_floor_amount(min(max_amount * 2, profile.monthly_income * 48)),
            interest_rate=_shift_band(interest_range, -0.5, -0.5),
            term="3-7 years",
            icon="car",
            suitability="Suitable" if score >= 650 else "Fair",
        )
    )

    if profile.employment_type.lower() == EmploymentType.SELF_EMPLOYED.value:
        recommendations.append(
            LoanRecommendation(
                loan_type="Business Loan",
                description="Loan for business purposes",
                max_amount=_floor_amount(max_amount * 1.5),
                interest_rate=_shift_band(interest_range, 1, 2),
                term="1-10 years",
                icon="briefcase",
                suitability="Suitable" if score >= 670 else "Consider",
            )
        )

    return recommendations


def make_loan_decision(
    profile: FinancialProfile, strategy: Union[str, ScoringStrategy, None] = None
) -> LoanDecision:
    """
    Main entry point: score the profile and decide.

    Flow:
    1. Score with the AI-Based strategy (unless another, or its name, is given)
    2. Invalid profile -> denied with confidence 0, validation errors as reasons
    3. Approve when score >= 580
    4. Explain the decision factor by factor
    5. Recommend loan products (approved) or improvements (denied)
    """
    if isinstance(strategy, str):
        strategy = strategy_by_name(strategy)
    strategy = strategy or AIBasedStrategy()
    score_result = calculate_score(profile, strategy)

    if not score_result.success:
        # Derived metrics are meaningless for NaN or infinite fields
        if profile.has_finite_values:
            recommendations = get_improvement_recommendations(profile)
        else:
            recommendations = []
        return LoanDecision(
            approved=False,
            confidence=0,
            score=SENTINEL_SCORE,
            reasons=list(score_result.errors),
            recommendations=recommendations,
            approval_threshold=APPROVAL_THRESHOLD,
            strategy=strategy.name,
        )

    score = score_result.score
    approved = is_approved(score)
    explanation = generate_explanation(profile, approved)

    if approved:
        recommendations = get_loan_recommendations(profile, score)
    else:
        recommendations = get_improvement_recommendations(profile)

    decision = LoanDecision(
        approved=approved,
        confidence=score_result.approval_probability,
        score=score,
        risk_level=score_result.risk_level,
        reasons=explanation.reasons,
        positive_factors=explanation.positive_factors,
        negative_factors=explanation.negative_factors,
        recommendations=recommendations,
        interest_rate_range=get_interest_rate_range(score),
        max_loan_amount=get_max_loan_amount(profile, score),
        breakdown=score_result.breakdown,
        financial_health=score_result.financial_health,
        approval_threshold=APPROVAL_THRESHOLD,
        strategy=strategy.name,
    )

    logger.debug(
        "Loan decision made",
        extra={"approved": approved, "score": score, "risk_level": score_result.risk_level},
    )
    return decision
