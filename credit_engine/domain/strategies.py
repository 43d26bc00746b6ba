"""Interchangeable scoring formulas mapping a profile to a raw 0-100 score"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Dict, List, Type

from credit_engine.domain.models import EmploymentType, FinancialProfile

logger = logging.getLogger(__name__)

MIN_RAW_SCORE = 0
MAX_RAW_SCORE = 100

CONSERVATIVE_LOAN_THRESHOLD = 500_000
STANDARD_LOAN_THRESHOLD = 100_000


def clamp_raw_score(score: float) -> int:
    """Clamp to the 0-100 raw band; applying it twice changes nothing"""
    if math.isnan(score):
        return MIN_RAW_SCORE
    return int(min(max(score, MIN_RAW_SCORE), MAX_RAW_SCORE))


class ScoringStrategy(ABC):
    """Contract for every scoring formula"""

    name: str = ""

    @abstractmethod
    def calculate_score(self, profile: FinancialProfile) -> int:
        """Return a raw credit score in [0, 100]"""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ConservativeStrategy(ScoringStrategy):
    """
    Strict model for large loans.

    Weights (max points):
    - 30: Annual income
    - 25: Debt-to-income ratio (above 50% earns nothing)
    - 20: Savings rate
    - 15: Employment stability
    - 10: Age band
    """

    name = "Conservative"

    def calculate_score(self, profile: FinancialProfile) -> int:
        score = 0

        income = profile.annual_income
        if income >= 100_000:
            score += 30
        elif income >= 50_000:
            score += 20
        elif income >= 30_000:
            score += 10
        elif income >= 15_000:
            score += 5

        dti = profile.debt_to_income_ratio
        if dti < 20:
            score += 25
        elif dti < 30:
            score += 20
        elif dti < 40:
            score += 10
        elif dti < 50:
            score += 5

        savings_rate = profile.savings_rate
        if savings_rate >= 30:
            score += 20
        elif savings_rate >= 20:
            score += 15
        elif savings_rate >= 10:
            score += 10
        elif savings_rate >= 5:
            score += 5

        score += int(profile.employment_stability_score * 0.15)

        if 35 <= profile.age <= 55:
            score += 10
        elif 25 <= profile.age < 60:
            score += 7
        elif profile.age >= 21:
            score += 3

        return clamp_raw_score(score)


class StandardStrategy(ScoringStrategy):
    """
    Balanced model, the fallback for general applications.

    Weights (max points):
    - 25: Annual income
    - 30: Debt-to-income ratio
    - 20: Annual disposable income
    - 15: Employment stability
    - 10: Estimated net worth
    """

    name = "Standard"

    def calculate_score(self, profile: FinancialProfile) -> int:
        score = 0

        income = profile.annual_income
        if income >= 80_000:
            score += 25
        elif income >= 40_000:
            score += 18
        elif income >= 20_000:
            score += 12
        elif income >= 10_000:
            score += 6

        dti = profile.debt_to_income_ratio
        if dti < 25:
            score += 30
        elif dti < 35:
            score += 22
        elif dti < 45:
            score += 15
        elif dti < 60:
            score += 8

        disposable = profile.annual_disposable_income
        if disposable >= 30_000:
            score += 20
        elif disposable >= 15_000:
            score += 15
        elif disposable >= 5_000:
            score += 10
        elif disposable > 0:
            score += 5

        score += int(profile.employment_stability_score * 0.15)

        net_worth = profile.estimated_net_worth
        if net_worth >= 500_000:
            score += 10
        elif net_worth >= 200_000:
            score += 8
        elif net_worth >= 50_000:
            score += 5
        elif net_worth > 0:
            score += 3

        return clamp_raw_score(score)


class AggressiveStrategy(ScoringStrategy):
    """
    Lenient model for small loans and first-time borrowers.

    Starts from a 20 point base, then adds (max points):
    - 20: Annual income
    - 25: Debt-to-income ratio (tolerates up to 90%)
    - 15: Annual disposable income
    - 15: Employment status
    - 10: Years at current job
    - 15: Age band
    """

    name = "Aggressive"

    EMPLOYED_TYPES = (EmploymentType.PERMANENT.value, EmploymentType.CONTRACT.value)

    def calculate_score(self, profile: FinancialProfile) -> int:
        score = 20

        income = profile.annual_income
        if income >= 50_000:
            score += 20
        elif income >= 25_000:
            score += 15
        elif income >= 15_000:
            score += 10
        elif income >= 8_000:
            score += 5

        dti = profile.debt_to_income_ratio
        if dti < 35:
            score += 25
        elif dti < 50:
            score += 18
        elif dti < 70:
            score += 10
        elif dti < 90:
            score += 5

        disposable = profile.annual_disposable_income
        if disposable >= 10_000:
            score += 15
        elif disposable >= 5_000:
            score += 12
        elif disposable >= 2_000:
            score += 8
        elif disposable > 0:
            score += 5

        employment_type = profile.employment_type.lower()
        if employment_type in self.EMPLOYED_TYPES:
            score += 15
        elif employment_type == EmploymentType.SELF_EMPLOYED.value:
            score += 10

        if profile.employment_years >= 3:
            score += 10
        elif profile.employment_years >= 1:
            score += 7
        elif profile.employment_years >= 0.5:
            score += 4

        if 25 <= profile.age <= 60:
            score += 15
        elif profile.age >= 21:
            score += 10

        return clamp_raw_score(score)


class AIBasedStrategy(ScoringStrategy):
    """
    Default production scorer.

    Placeholder blend of the five signal families until a trained model
    replaces it. Each component is continuous rather than tiered:
    - 25: Annual income, saturating at 120k
    - 25: Inverse debt-to-income ratio
    - 20: Savings rate, saturating at 30%
    - 20: Employment stability
    - 10: Inverse age risk
    """

    name = "AI-Based"

    INCOME_CEILING = 120_000
    SAVINGS_CEILING = 30

    def calculate_score(self, profile: FinancialProfile) -> int:
        income_points = min(max(profile.annual_income, 0) / self.INCOME_CEILING, 1.0) * 25
        dti_points = (1 - profile.debt_to_income_ratio / 100) * 25
        savings_points = min(profile.savings_rate / self.SAVINGS_CEILING, 1.0) * 20
        employment_points = profile.employment_stability_score * 0.2
        # age_risk_score spans 10 (best) to 70 (worst)
        age_points = (70 - profile.age_risk_score) / 60 * 10

        score = income_points + dti_points + savings_points + employment_points + age_points
        return clamp_raw_score(score)


_STRATEGIES_BY_NAME: Dict[str, Type[ScoringStrategy]] = {
    "conservative": ConservativeStrategy,
    "standard": StandardStrategy,
    "balanced": StandardStrategy,
    "aggressive": AggressiveStrategy,
    "ai-based": AIBasedStrategy,
    "ai_based": AIBasedStrategy,
    "ai": AIBasedStrategy,
}


def strategy_for_loan_amount(loan_amount: float) -> ScoringStrategy:
    """
    Pick a strategy by loan size.

    - >= 500k: Conservative
    - >= 100k: Standard
    - otherwise: Aggressive
    """
    if loan_amount >= CONSERVATIVE_LOAN_THRESHOLD:
        return ConservativeStrategy()
    elif loan_amount >= STANDARD_LOAN_THRESHOLD:
        return StandardStrategy()
    else:
        return AggressiveStrategy()


def strategy_by_name(name: str) -> ScoringStrategy:
    """Case-insensitive lookup; unknown names fall back to Standard"""
    strategy_cls = _STRATEGIES_BY_NAME.get((name or "").strip().lower())
    if strategy_cls is None:
        logger.warning(
            "Unknown scoring strategy, falling back to Standard",
            extra={"requested_strategy": name},
        )
        return StandardStrategy()
    return strategy_cls()


def all_strategies() -> List[ScoringStrategy]:
    """Every strategy, in comparison order"""
    return [ConservativeStrategy(), StandardStrategy(), AggressiveStrategy(), AIBasedStrategy()]
