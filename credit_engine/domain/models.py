"""Domain models - pure Python dataclasses representing business entities"""

import math
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from credit_engine.domain.exceptions import InvalidProfileDataError


class EmploymentType(str, Enum):
    """Recognised employment types"""

    PERMANENT = "permanent"
    CONTRACT = "contract"
    SELF_EMPLOYED = "self-employed"
    UNEMPLOYED = "unemployed"


# Base stability points by employment type; anything else gets the default tier
EMPLOYMENT_BASE_SCORES: Dict[str, int] = {
    EmploymentType.PERMANENT.value: 80,
    EmploymentType.CONTRACT.value: 60,
    EmploymentType.SELF_EMPLOYED.value: 50,
    EmploymentType.UNEMPLOYED.value: 0,
}
DEFAULT_EMPLOYMENT_BASE_SCORE = 40

# snake_case field -> accepted raw keys (storage/UI layers send camelCase)
_FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "monthly_income": ("monthly_income", "monthlyIncome"),
    "monthly_expenses": ("monthly_expenses", "monthlyExpenses"),
    "existing_debts": ("existing_debts", "existingDebts"),
    "age": ("age",),
    "employment_type": ("employment_type", "employmentType"),
    "employment_years": ("employment_years", "employmentYears"),
    "requested_loan_amount": ("requested_loan_amount", "requestedLoanAmount"),
}


def _lookup(fields: Mapping[str, Any], name: str) -> Any:
    for key in _FIELD_ALIASES[name]:
        value = fields.get(key)
        if value is not None and value != "":
            return value
    return None


def _to_number(name: str, value: Any) -> float:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise InvalidProfileDataError(f"{name} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).replace(",", "").strip())
        except ValueError:
            raise InvalidProfileDataError(f"{name} must be a number, got {value!r}")

    if not math.isfinite(number):
        raise InvalidProfileDataError(f"{name} must be a finite number, got {value!r}")
    return number


def _to_int(name: str, value: Any) -> int:
    return int(_to_number(name, value))


@dataclass(frozen=True)
class FinancialProfile:
    """
    One applicant's financial snapshot at scoring time.

    existing_debts is an annual total; it is amortised over 12 months
    wherever a monthly figure is needed. Derived metrics are properties so
    they always reflect the current field values.
    """

    monthly_income: float = 0
    monthly_expenses: float = 0
    existing_debts: float = 0
    age: int = 0
    employment_type: str = EmploymentType.UNEMPLOYED.value
    employment_years: float = 0
    requested_loan_amount: float = 0

    @classmethod
    def from_mapping(cls, fields: Mapping[str, Any]) -> "FinancialProfile":
        """
        Build a profile from raw user-entered fields.

        Accepts snake_case or camelCase keys. Missing or empty values default
        to 0 (employment type defaults to unemployed); numeric strings are
        coerced.

        Raises:
            InvalidProfileDataError: If a numeric field is unparseable or not finite
        """
        if not isinstance(fields, Mapping):
            raise InvalidProfileDataError("Profile fields must be a mapping")

        employment_type = _lookup(fields, "employment_type")
        if employment_type is None:
            employment_type = EmploymentType.UNEMPLOYED.value

        return cls(
            monthly_income=_to_number("monthly_income", _lookup(fields, "monthly_income")),
            monthly_expenses=_to_number("monthly_expenses", _lookup(fields, "monthly_expenses")),
            existing_debts=_to_number("existing_debts", _lookup(fields, "existing_debts")),
            age=_to_int("age", _lookup(fields, "age")),
            employment_type=str(employment_type),
            employment_years=_to_number("employment_years", _lookup(fields, "employment_years")),
            requested_loan_amount=_to_number(
                "requested_loan_amount", _lookup(fields, "requested_loan_amount")
            ),
        )

    @property
    def has_finite_values(self) -> bool:
        """False when any numeric field is NaN or infinite"""
        numbers = (
            self.monthly_income,
            self.monthly_expenses,
            self.existing_debts,
            self.age,
            self.employment_years,
            self.requested_loan_amount,
        )
        return all(math.isfinite(number) for number in numbers)

    @property
    def annual_income(self) -> float:
        return self.monthly_income * 12

    @property
    def monthly_debt_payment(self) -> float:
        return self.existing_debts / 12

    @property
    def debt_to_income_ratio(self) -> float:
        """Expenses plus amortised debt as a percentage of income, capped at 100"""
        if self.monthly_income <= 0:
            return 100.0

        total_monthly_debt = self.monthly_expenses + self.monthly_debt_payment
        dti = total_monthly_debt / self.monthly_income * 100
        return max(0.0, min(dti, 100.0))

    @property
    def disposable_income(self) -> float:
        """Monthly income left after expenses and debt service, never negative"""
        remaining = self.monthly_income - self.monthly_expenses - self.monthly_debt_payment
        return max(remaining, 0.0)

    @property
    def annual_disposable_income(self) -> float:
        return self.disposable_income * 12

    @property
    def savings_rate(self) -> float:
        if self.monthly_income <= 0:
            return 0.0
        return max(self.disposable_income / self.monthly_income * 100, 0.0)

    @property
    def loan_to_income_ratio(self) -> float:
        """Requested amount relative to annual income (0 when there is no income)"""
        if self.annual_income <= 0:
            return 0.0
        return self.requested_loan_amount / self.annual_income

    @property
    def employment_stability_score(self) -> int:
        base_score = EMPLOYMENT_BASE_SCORES.get(
            self.employment_type.lower(), DEFAULT_EMPLOYMENT_BASE_SCORE
        )
        # Tenure adds up to 20 points
        years_bonus = min(self.employment_years * 2, 20)
        return int(min(base_score + years_bonus, 100))

    @property
    def age_risk_score(self) -> int:
        """Age risk from 0-100, lower is better (peak earning years score 10)"""
        if self.age < 21:
            return 70
        if self.age < 25:
            return 50
        if self.age < 30:
            return 30
        if self.age < 50:
            return 10
        if self.age < 60:
            return 20
        if self.age < 65:
            return 40
        return 60

    @property
    def estimated_net_worth(self) -> float:
        """Rough asset proxy: one year of disposable income less outstanding debt"""
        return self.annual_disposable_income - self.existing_debts

    @property
    def financial_health_summary(self) -> str:
        dti = self.debt_to_income_ratio
        savings_rate = self.savings_rate

        if dti < 20 and savings_rate > 20:
            return "Excellent financial health"
        elif dti < 36 and savings_rate > 10:
            return "Good financial health"
        elif dti < 50:
            return "Fair financial health"
        else:
            return "Poor financial health - high debt burden"

    def to_dict(self) -> Dict[str, Any]:
        """Raw fields plus every derived metric, as plain serialisable data"""
        data = asdict(self)
        data.update(
            debt_to_income_ratio=self.debt_to_income_ratio,
            disposable_income=self.disposable_income,
            savings_rate=self.savings_rate,
            loan_to_income_ratio=self.loan_to_income_ratio,
            employment_stability_score=self.employment_stability_score,
            age_risk_score=self.age_risk_score,
        )
        return data


@dataclass
class ValidationResult:
    """Outcome of profile validation; errors keep rule order"""

    is_valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class BreakdownItem:
    """One contributing factor in a score breakdown"""

    label: str
    value: str
    impact: str  # "Positive" | "Neutral" | "Negative"


@dataclass
class ScoreResult:
    """Output of the score calculator"""

    success: bool
    score: int
    raw_score: int = 0
    risk_level: Optional[str] = None
    rating: Optional[str] = None
    strategy: Optional[str] = None
    approval_probability: int = 0
    breakdown: Dict[str, BreakdownItem] = field(default_factory=dict)
    financial_health: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ImprovementRecommendation:
    """Suggested action for a denied applicant"""

    title: str
    description: str
    priority: str  # "high" | "medium"
    icon: str


@dataclass
class LoanRecommendation:
    """Loan product an approved applicant qualifies for"""

    loan_type: str
    description: str
    max_amount: int
    interest_rate: Tuple[float, float]
    term: str
    icon: str
    suitability: str


Recommendation = Union[LoanRecommendation, ImprovementRecommendation]


@dataclass
class LoanDecision:
    """Approval outcome with explanation and recommendations"""

    approved: bool
    confidence: int
    score: int
    risk_level: Optional[str] = None
    reasons: List[str] = field(default_factory=list)
    positive_factors: List[str] = field(default_factory=list)
    negative_factors: List[str] = field(default_factory=list)
    recommendations: List[Recommendation] = field(default_factory=list)
    interest_rate_range: Optional[Tuple[float, float]] = None
    max_loan_amount: int = 0
    breakdown: Dict[str, BreakdownItem] = field(default_factory=dict)
    financial_health: Optional[str] = None
    approval_threshold: int = 580
    strategy: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
