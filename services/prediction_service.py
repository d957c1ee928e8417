"""
services/prediction_service.py
------------------------------
Builds the financial-data payload for the prediction model and keeps the
last successful predictions per account.

A failed regeneration never clears what was shown before: ``latest``
keeps returning the previous result until a new call succeeds.
"""

from datetime import date
from typing import Awaitable, Callable, Iterable, Optional

from ai.predictor import request_predictions
from config import RECENT_TRANSACTIONS_LIMIT
from models.summary import DashboardSummary
from models.transaction import Transaction
from services.finance_state import FinanceState
from utils.errors import PredictionError
from utils.formatting import format_currency
from utils.logger import get_logger

logger = get_logger(__name__)


def build_financial_data(
    summary: DashboardSummary,
    transactions: Iterable[Transaction],
    limit: int = RECENT_TRANSACTIONS_LIMIT,
) -> dict:
    """
    The JSON blob sent to the model.

    Args:
        summary: Current dashboard summary.
        transactions: Transactions newest first; the first ``limit`` are included.
    """
    recent = []
    for tx in transactions:
        if len(recent) >= limit:
            break
        recent.append(tx.to_json())

    return {
        "totalIncome": summary.total_income,
        "totalExpenses": summary.total_expense,
        "netCashflow": summary.profit,
        "monthlyIncome": summary.monthly_income,
        "monthlyExpense": summary.monthly_expense,
        "monthlyProfit": summary.monthly_profit,
        "categoryBreakdown": {
            "rent": summary.rent_total,
            "salary": summary.salary_total,
            "marketing": summary.marketing_total,
            "utilities": summary.utilities_total,
            "courses": summary.courses_revenue,
        },
        "recentTransactions": recent,
    }


class PredictionService:
    """Generates predictions and remembers the last good result per account."""

    def __init__(self, predictor: Callable[[dict], Awaitable[dict]] = request_predictions):
        self._predictor = predictor
        self._latest: dict[int, dict] = {}

    def latest(self, user_id: int) -> Optional[dict]:
        return self._latest.get(user_id)

    async def generate(self, state: FinanceState, today: Optional[date] = None) -> dict:
        """
        Request fresh predictions for the account behind ``state``.

        Raises:
            PredictionError (or a subclass): The previous predictions stay in place.
        """
        financial_data = build_financial_data(state.summary(today), state.transactions)
        try:
            predictions = await self._predictor(financial_data)
        except PredictionError as e:
            logger.warning(f"Predictions for user {state.user_id} failed: {e}")
            raise
        self._latest[state.user_id] = predictions
        logger.info(f"Stored new predictions for user {state.user_id}")
        return predictions


def format_predictions(predictions: dict) -> str:
    """Render the loosely-typed predictions dict as a chat message."""
    lines = ["🔮 AI Predictions & Insights\n"]

    growth = predictions.get("sixMonthGrowth") or {}
    if growth:
        lines.append(
            f"📈 6-month growth: {growth.get('percentage', 0)}% ({growth.get('trend', 'n/a')})"
        )
        if growth.get("analysis"):
            lines.append(f"   {growth['analysis']}")

    profit_loss = predictions.get("profitLoss") or {}
    if profit_loss:
        lines.append(
            f"💰 Expected profit/loss: {format_currency(profit_loss.get('expected') or 0)} "
            f"(confidence: {profit_loss.get('confidence', 'n/a')})"
        )
        for factor in profit_loss.get("factors") or []:
            lines.append(f"   • {factor}")

    burn = predictions.get("burnRate") or {}
    if burn:
        lines.append(f"🔥 Burn rate: {format_currency(burn.get('monthly') or 0)}/month, {burn.get('trend', '')}")

    runway = predictions.get("cashRunway") or {}
    if runway:
        lines.append(f"⏳ Cash runway: {runway.get('months', 'n/a')} months")
        if runway.get("recommendation"):
            lines.append(f"   {runway['recommendation']}")

    opportunities = predictions.get("marketOpportunities") or []
    if opportunities:
        lines.append("💡 Opportunities:")
        lines.extend(f"   • {item}" for item in opportunities)

    risk = predictions.get("riskAssessment") or {}
    if risk:
        lines.append(f"🛡️ Risk level: {risk.get('level', 'n/a')}")
        lines.extend(f"   • {item}" for item in risk.get("risks") or [])

    if predictions.get("summary"):
        lines.append(f"\n📝 {predictions['summary']}")

    return "\n".join(lines)
