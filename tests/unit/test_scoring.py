"""Unit tests for the score calculator"""

import pytest
from dataclasses import replace
from credit_engine.domain.models import FinancialProfile
from credit_engine.domain.scoring import (
    SENTINEL_SCORE,
    calculate_all_scores,
    calculate_score,
    get_age_impact,
    get_approval_probability,
    get_impact_level,
    get_risk_level,
    get_score_rating,
    scale_score,
)
from credit_engine.domain.strategies import AggressiveStrategy, ConservativeStrategy
from credit_engine.utils.formatting import format_currency


def test_scale_score_band():
    """Test raw 0-100 maps onto 300-850"""
    assert scale_score(0) == 300
    assert scale_score(50) == 575
    assert scale_score(51) == 580
    assert scale_score(100) == 850
    # Out-of-range raw scores are clamped first
    assert scale_score(-10) == 300
    assert scale_score(180) == 850


def test_risk_level_thresholds():
    """Test risk level boundaries"""
    assert get_risk_level(850) == "Very Low"
    assert get_risk_level(750) == "Very Low"
    assert get_risk_level(749) == "Low"
    assert get_risk_level(700) == "Low"
    assert get_risk_level(650) == "Moderate"
    assert get_risk_level(600) == "High"
    assert get_risk_level(599) == "Very High"
    assert get_risk_level(300) == "Very High"


def test_score_rating_thresholds():
    """Test rating boundaries"""
    assert get_score_rating(800) == "Exceptional"
    assert get_score_rating(740) == "Very Good"
    assert get_score_rating(670) == "Good"
    assert get_score_rating(580) == "Fair"
    assert get_score_rating(579) == "Poor"


def test_approval_probability_thresholds():
    """Test approval probability buckets"""
    assert [get_approval_probability(s) for s in (750, 700, 650, 600, 550, 549)] == [95, 85, 70, 50, 30, 15]


def test_impact_level_lower_is_better():
    """Test ascending thresholds for metrics where lower is better"""
    thresholds = (20, 36, 50)
    assert get_impact_level(19.9, thresholds) == "Positive"
    assert get_impact_level(20, thresholds) == "Neutral"
    assert get_impact_level(36, thresholds) == "Negative"


def test_impact_level_higher_is_better():
    """Test descending thresholds for metrics where higher is better"""
    thresholds = (3000, 5000, 10000)
    assert get_impact_level(10001, thresholds, lower_is_better=False) == "Positive"
    assert get_impact_level(10000, thresholds, lower_is_better=False) == "Neutral"
    assert get_impact_level(5000, thresholds, lower_is_better=False) == "Negative"


@pytest.mark.parametrize(
    "age,expected",
    [(24, "Negative"), (25, "Neutral"), (29, "Neutral"), (30, "Positive"), (50, "Positive"), (51, "Neutral"), (60, "Neutral"), (61, "Negative")],
)
def test_age_impact_bands(age, expected):
    """Test dedicated age band rule"""
    assert get_age_impact(age) == expected


def test_calculate_score_defaults_to_ai_based(scenario_profile: FinancialProfile):
    """Test complete scoring flow with the default strategy"""
    result = calculate_score(scenario_profile)

    assert result.success is True
    assert result.strategy == "AI-Based"
    assert result.raw_score == 61
    assert result.score == 635
    assert result.risk_level == "High"
    assert result.rating == "Fair"
    assert result.approval_probability == 50
    assert result.errors == []


def test_calculate_score_breakdown(scenario_profile: FinancialProfile):
    """Test breakdown factors, order and impact tags"""
    breakdown = calculate_score(scenario_profile).breakdown

    assert list(breakdown) == ["dti", "income", "employment", "savings", "age"]
    assert breakdown["dti"].value == "76.67%"
    assert breakdown["dti"].impact == "Negative"
    assert breakdown["income"].value == "$5,000"
    assert breakdown["income"].impact == "Negative"
    assert breakdown["employment"].value == "90/100"
    assert breakdown["employment"].impact == "Positive"
    assert breakdown["savings"].value == "23.33%"
    assert breakdown["savings"].impact == "Positive"
    assert breakdown["age"].value == "35 years"
    assert breakdown["age"].impact == "Positive"


def test_calculate_score_with_explicit_strategy(scenario_profile: FinancialProfile):
    """Test strategy is passed per call"""
    conservative = calculate_score(scenario_profile, ConservativeStrategy())
    aggressive = calculate_score(scenario_profile, AggressiveStrategy())

    assert conservative.strategy == "Conservative"
    assert conservative.raw_score == 58
    assert aggressive.raw_score == 100
    assert aggressive.score == 850


def test_invalid_profile_returns_sentinel(scenario_profile: FinancialProfile):
    """Test underage profile degrades to the sentinel score instead of raising"""
    result = calculate_score(replace(scenario_profile, age=17))

    assert result.success is False
    assert result.score == SENTINEL_SCORE == 300
    assert result.errors == ["Age must be at least 18"]
    assert result.risk_level is None
    assert result.breakdown == {}


def test_calculate_score_is_repeatable(scenario_profile: FinancialProfile):
    """Test scoring an unchanged profile twice gives identical results"""
    assert calculate_score(scenario_profile) == calculate_score(scenario_profile)


def test_calculate_all_scores(scenario_profile: FinancialProfile):
    """Test every strategy is run and keyed by name"""
    results = calculate_all_scores(scenario_profile)

    assert list(results) == ["Conservative", "Standard", "Aggressive", "AI-Based"]
    assert {name: r.raw_score for name, r in results.items()} == {
        "Conservative": 58,
        "Standard": 44,
        "Aggressive": 100,
        "AI-Based": 61,
    }
    assert all(300 <= r.score <= 850 for r in results.values())


def test_score_result_serialises_to_plain_data(scenario_profile: FinancialProfile):
    """Test results convert to dicts of plain values"""
    data = calculate_score(scenario_profile).to_dict()

    assert data["score"] == 635
    assert data["breakdown"]["age"] == {"label": "Age", "value": "35 years", "impact": "Positive"}


def test_format_currency():
    """Test currency display"""
    assert format_currency(5000) == "$5,000"
    assert format_currency(12500.0) == "$12,500"
    assert format_currency(1234.5) == "$1,234.50"


def test_calculate_score_accepts_strategy_name(scenario_profile: FinancialProfile):
    """Test a strategy name is resolved like the factory does"""
    result = calculate_score(scenario_profile, "Conservative")

    assert result.strategy == "Conservative"
    assert result.raw_score == 58
    assert calculate_score(scenario_profile, "ai").strategy == "AI-Based"


def test_calculate_score_unknown_name_uses_standard(scenario_profile: FinancialProfile):
    """Test unknown strategy names fall back to Standard"""
    result = calculate_score(scenario_profile, "experimental")

    assert result.strategy == "Standard"
    assert result.raw_score == 44


def test_calculate_score_reports_financial_health(strong_profile, scenario_profile):
    """Test successful results carry the profile's health summary"""
    assert calculate_score(strong_profile).financial_health == "Excellent financial health"
    assert calculate_score(scenario_profile).financial_health == "Poor financial health - high debt burden"
    assert calculate_score(replace(scenario_profile, age=17)).financial_health is None


@pytest.mark.parametrize("income", [float("inf"), float("nan")])
def test_non_finite_profile_returns_sentinel(scenario_profile: FinancialProfile, income):
    """Test NaN or infinite income degrades to the sentinel score"""
    result = calculate_score(replace(scenario_profile, monthly_income=income))

    assert result.success is False
    assert result.score == SENTINEL_SCORE
    assert result.errors == ["Financial values must be finite numbers"]
