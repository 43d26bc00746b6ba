"""
E2E tests for applicant personas through the HTTP adapter.

Applicant personas:
- salaried_professional: strong income, low outgoings, approval expected
- graduate_first_job: young contract worker, small loan
- self_employed_owner: self-employed, business loan offered when approved
- overstretched_borrower: outgoings exceed income, decline expected
- retiree_large_loan: big request relative to income
"""

import pytest
from fastapi.testclient import TestClient

PERSONAS = {
    "salaried_professional": {
        "monthlyIncome": 9000,
        "monthlyExpenses": 2500,
        "existingDebts": 6000,
        "age": 42,
        "employmentType": "permanent",
        "employmentYears": 12,
        "requestedLoanAmount": 40000,
    },
    "graduate_first_job": {
        "monthlyIncome": 3200,
        "monthlyExpenses": 1800,
        "existingDebts": 3000,
        "age": 23,
        "employmentType": "contract",
        "employmentYears": 1,
        "requestedLoanAmount": 8000,
    },
    "self_employed_owner": {
        "monthlyIncome": 7000,
        "monthlyExpenses": 2000,
        "existingDebts": 0,
        "age": 38,
        "employmentType": "self-employed",
        "employmentYears": 6,
        "requestedLoanAmount": 30000,
    },
    "overstretched_borrower": {
        "monthlyIncome": 2200,
        "monthlyExpenses": 2100,
        "existingDebts": 18000,
        "age": 29,
        "employmentType": "contract",
        "employmentYears": 0,
        "requestedLoanAmount": 25000,
    },
    "retiree_large_loan": {
        "monthlyIncome": 2500,
        "monthlyExpenses": 1500,
        "existingDebts": 0,
        "age": 67,
        "employmentType": "unemployed",
        "employmentYears": 0,
        "requestedLoanAmount": 150000,
    },
}


@pytest.mark.integration
def test_salaried_professional_approval(client: TestClient):
    """
    salaried_professional: strong, stable finances
    Expected: Approve with a low risk band and three loan products
    """
    response = client.post("/v1/decision", json=PERSONAS["salaried_professional"])

    assert response.status_code == 200
    data = response.json()
    assert data["approved"] is True, "salaried_professional should be approved"
    assert data["risk_level"] in ("Very Low", "Low")
    assert [r["loan_type"] for r in data["recommendations"]] == ["Personal Loan", "Home Loan", "Auto Loan"]
    assert data["max_loan_amount"] > PERSONAS["salaried_professional"]["requestedLoanAmount"]


@pytest.mark.integration
def test_graduate_first_job(client: TestClient):
    """
    graduate_first_job: thin history, modest income
    Expected: Either outcome, but explanation flags the young borrower
    """
    response = client.post("/v1/decision", json=PERSONAS["graduate_first_job"])

    assert response.status_code == 200
    data = response.json()
    assert "Young borrower - limited credit history expected" in data["negative_factors"]
    if data["approved"]:
        assert data["score"] >= 580
    else:
        assert data["score"] < 580


@pytest.mark.integration
def test_self_employed_owner_business_loan(client: TestClient):
    """
    self_employed_owner: healthy self-employed applicant
    Expected: Approve and include a business loan
    """
    response = client.post("/v1/decision", json=PERSONAS["self_employed_owner"])

    assert response.status_code == 200
    data = response.json()
    assert data["approved"] is True
    assert "Business Loan" in [r["loan_type"] for r in data["recommendations"]]


@pytest.mark.integration
def test_overstretched_borrower_decline(client: TestClient):
    """
    overstretched_borrower: outgoings exceed income
    Expected: Decline with debt-focused improvement steps
    """
    response = client.post("/v1/decision", json=PERSONAS["overstretched_borrower"])

    assert response.status_code == 200
    data = response.json()
    assert data["approved"] is False
    titles = [r["title"] for r in data["recommendations"]]
    assert titles[0] == "Reduce Your Debt-to-Income Ratio"
    assert "Pay Down Existing Debts" in titles


@pytest.mark.integration
def test_retiree_large_loan(client: TestClient):
    """
    retiree_large_loan: request five times annual income
    Expected: Loan-to-income flagged, retirement concern noted
    """
    response = client.post("/v1/decision", json=PERSONAS["retiree_large_loan"])

    assert response.status_code == 200
    data = response.json()
    assert "Loan amount too high relative to income" in data["negative_factors"]
    assert "Near retirement age - repayment concerns" in data["negative_factors"]


@pytest.mark.integration
def test_strategy_comparison_for_every_persona(client: TestClient):
    """Test every persona gets four bounded scores"""
    for name, payload in PERSONAS.items():
        response = client.post("/v1/score/all", json=payload)
        assert response.status_code == 200, name
        scores = {strategy: result["score"] for strategy, result in response.json().items()}
        assert len(scores) == 4
        assert all(300 <= score <= 850 for score in scores.values()), name
