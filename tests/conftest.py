"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from credit_engine.api.main import create_app
from credit_engine.domain.models import FinancialProfile


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def strong_profile() -> FinancialProfile:
    """Well-paid permanent employee with low outgoings"""
    return FinancialProfile(
        monthly_income=12000,
        monthly_expenses=2000,
        existing_debts=0,
        age=40,
        employment_type="permanent",
        employment_years=10,
        requested_loan_amount=20000,
    )


@pytest.fixture
def weak_profile() -> FinancialProfile:
    """Young, unemployed applicant spending more than they earn"""
    return FinancialProfile(
        monthly_income=1000,
        monthly_expenses=1200,
        existing_debts=6000,
        age=20,
        employment_type="unemployed",
        employment_years=0,
        requested_loan_amount=50000,
    )


@pytest.fixture
def scenario_profile() -> FinancialProfile:
    """Reference applicant: 5000 income, 3000 expenses, 10000 annual debt"""
    return FinancialProfile(
        monthly_income=5000,
        monthly_expenses=3000,
        existing_debts=10000,
        age=35,
        employment_type="permanent",
        employment_years=5,
        requested_loan_amount=50000,
    )


@pytest.fixture
def profile_payload() -> dict:
    """camelCase request body as sent by the mobile app"""
    return {
        "monthlyIncome": 12000,
        "monthlyExpenses": 2000,
        "existingDebts": 0,
        "age": 40,
        "employmentType": "permanent",
        "employmentYears": 10,
        "requestedLoanAmount": 20000,
    }
