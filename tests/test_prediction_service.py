import asyncio
from datetime import date

import pytest

from models.transaction import INCOME, Transaction
from services.prediction_service import PredictionService, build_financial_data, format_predictions
from services.summary_service import aggregate
from utils.errors import RateLimitError


def test_financial_data_shape(sample_transactions):
    summary = aggregate(sample_transactions, today=date(2025, 3, 20))
    data = build_financial_data(summary, sample_transactions)

    assert data["totalIncome"] == 60000
    assert data["totalExpenses"] == 50000
    assert data["netCashflow"] == 10000
    assert data["monthlyProfit"] == 40000
    assert data["categoryBreakdown"] == {
        "rent": 15000,
        "salary": 30000,
        "marketing": 7000,
        "utilities": 0,
        "courses": 50000,
    }
    assert data["recentTransactions"][0] == {
        "type": "income",
        "category": "courses",
        "amount": 50000,
        "date": "2025-03-05",
    }


def test_recent_transactions_are_capped():
    transactions = [Transaction(INCOME, "other", i + 1, date(2025, 1, 1)) for i in range(30)]
    data = build_financial_data(aggregate(transactions), transactions, limit=20)
    assert len(data["recentTransactions"]) == 20
    assert data["recentTransactions"][-1]["amount"] == 20


class _Predictor:
    def __init__(self):
        self.results = []

    async def __call__(self, financial_data):
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def test_latest_survives_a_failed_refresh(state):
    fake = _Predictor()
    fake.results = [{"summary": "first"}, RateLimitError()]
    service = PredictionService(predictor=fake)
    assert service.latest(state.user_id) is None

    assert asyncio.run(service.generate(state)) == {"summary": "first"}
    with pytest.raises(RateLimitError):
        asyncio.run(service.generate(state))
    assert service.latest(state.user_id) == {"summary": "first"}


def test_latest_is_per_account(state):
    fake = _Predictor()
    fake.results = [{"summary": "mine"}]
    service = PredictionService(predictor=fake)
    asyncio.run(service.generate(state))
    assert service.latest(state.user_id + 1) is None


def test_format_tolerates_partial_results():
    text = format_predictions({
        "sixMonthGrowth": {"percentage": 12, "trend": "up"},
        "marketOpportunities": ["STEM camps"],
        "summary": "Healthy",
    })
    assert "12%" in text
    assert "STEM camps" in text
    assert "Healthy" in text
    assert format_predictions({}).startswith("🔮")
