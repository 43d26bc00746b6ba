"""Profile validation - the single gate before a score can be trusted"""

import logging
from typing import Any, Mapping, Union

from credit_engine.domain.models import FinancialProfile, ValidationResult

logger = logging.getLogger(__name__)

MIN_AGE = 18
MAX_AGE = 100


def validate_profile(profile: Union[FinancialProfile, Mapping[str, Any]]) -> ValidationResult:
    """
    Check a profile against the business rules.

    Errors are collected, never raised, in this fixed order:
    income, expenses, debts, minimum age, maximum age, employment years,
    requested loan amount, then a final check that every number is finite.

    Raw field mappings are accepted too and parsed via
    FinancialProfile.from_mapping (which raises InvalidProfileDataError on
    non-numeric or non-finite input).
    """
    if not isinstance(profile, FinancialProfile):
        profile = FinancialProfile.from_mapping(profile)

    errors = []

    if profile.monthly_income <= 0:
        errors.append("Monthly income must be greater than 0")

    if profile.monthly_expenses < 0:
        errors.append("Monthly expenses cannot be negative")

    if profile.existing_debts < 0:
        errors.append("Existing debts cannot be negative")

    if profile.age < MIN_AGE:
        errors.append(f"Age must be at least {MIN_AGE}")

    if profile.age > MAX_AGE:
        errors.append("Please enter a valid age")

    if profile.employment_years < 0:
        errors.append("Employment years cannot be negative")

    if profile.requested_loan_amount <= 0:
        errors.append("Requested loan amount must be greater than 0")

    # NaN slips past every comparison above
    if not profile.has_finite_values:
        errors.append("Financial values must be finite numbers")

    if errors:
        logger.debug("Profile failed validation", extra={"error_count": len(errors)})

    return ValidationResult(is_valid=not errors, errors=errors)
