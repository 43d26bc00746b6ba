"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional, Tuple, Union

from credit_engine.domain.models import FinancialProfile


class ProfileRequest(BaseModel):
    """
    Raw financial fields as entered by the applicant.

    Accepts snake_case or camelCase keys. Business rules (positive income,
    adult age, ...) are checked by the domain validator, not here, so that
    violations come back as data rather than HTTP errors. NaN and infinite
    numbers pass through to FinancialProfile.from_mapping, which rejects
    them with InvalidProfileDataError (a 422).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    monthly_income: float = Field(0, description="Monthly income")
    monthly_expenses: float = Field(0, description="Monthly expenses")
    existing_debts: float = Field(0, description="Existing debts, annual total")
    age: float = Field(0, description="Age in years, truncated to whole years")
    employment_type: str = Field("unemployed", description="permanent | contract | self-employed | unemployed")
    employment_years: float = Field(0, description="Years in current employment")
    requested_loan_amount: float = Field(0, description="Requested loan amount")

    def to_profile(self) -> FinancialProfile:
        return FinancialProfile.from_mapping(self.model_dump())


class ValidationResponse(BaseModel):
    """Response for POST /v1/profile/validate"""

    is_valid: bool
    errors: List[str]


class BreakdownItemSchema(BaseModel):
    """Single contributing factor"""

    label: str
    value: str
    impact: str


class ScoreResponse(BaseModel):
    """Response for POST /v1/score"""

    success: bool
    score: int
    raw_score: int
    risk_level: Optional[str] = None
    rating: Optional[str] = None
    strategy: Optional[str] = None
    approval_probability: int
    breakdown: Dict[str, BreakdownItemSchema]
    financial_health: Optional[str] = None
    errors: List[str]


class LoanRecommendationSchema(BaseModel):
    """Loan product offered to an approved applicant"""

    loan_type: str
    description: str
    max_amount: int
    interest_rate: Tuple[float, float]
    term: str
    icon: str
    suitability: str


class ImprovementRecommendationSchema(BaseModel):
    """Improvement step suggested to a denied applicant"""

    title: str
    description: str
    priority: str
    icon: str


class DecisionResponse(BaseModel):
    """Response for POST /v1/decision"""

    approved: bool
    confidence: int
    score: int
    risk_level: Optional[str] = None
    reasons: List[str]
    positive_factors: List[str]
    negative_factors: List[str]
    recommendations: List[Union[LoanRecommendationSchema, ImprovementRecommendationSchema]]
    interest_rate_range: Optional[Tuple[float, float]] = None
    max_loan_amount: int
    breakdown: Dict[str, BreakdownItemSchema]
    financial_health: Optional[str] = None
    approval_threshold: int
    strategy: Optional[str] = None


class ProfileMetricsResponse(BaseModel):
    """Response for POST /v1/profile/metrics"""

    monthly_income: float
    monthly_expenses: float
    existing_debts: float
    age: int
    employment_type: str
    employment_years: float
    requested_loan_amount: float
    debt_to_income_ratio: float
    disposable_income: float
    savings_rate: float
    loan_to_income_ratio: float
    employment_stability_score: int
    age_risk_score: int
    financial_health: str
