"""
services/chart_service.py
--------------------------
Renders dashboard charts with matplotlib and returns them as PNG
BytesIO buffers ready to send as photos.
"""

import calendar
import io

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for server use
import matplotlib.pyplot as plt

from config import DEFAULT_CURRENCY
from models.summary import DashboardSummary
from services.report_service import FlowStats
from utils.logger import get_logger

logger = get_logger(__name__)

plt.rcParams["font.family"] = "DejaVu Sans"
plt.rcParams["figure.facecolor"] = "#1a1a2e"
plt.rcParams["text.color"] = "#e0e0e0"
plt.rcParams["axes.facecolor"] = "#1a1a2e"

_INCOME_COLOR = "#4ECDC4"
_EXPENSE_COLOR = "#FF6B6B"


def _to_png(fig) -> io.BytesIO:
    plt.tight_layout()
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=150, bbox_inches="tight",
                facecolor=fig.get_facecolor())
    buf.seek(0)
    plt.close(fig)
    return buf


class ChartService:
    """Generates visual charts from summaries and breakdowns."""

    def cashflow_pie(self, summary: DashboardSummary) -> io.BytesIO | None:
        """
        Donut chart of total income against total expenses.

        Returns:
            PNG buffer, or None when both totals are zero.
        """
        values = [max(summary.total_income, 0.0), max(summary.total_expense, 0.0)]
        if not any(values):
            return None

        labels = ["Income", "Expenses"]
        fig, ax = plt.subplots(figsize=(8, 6))
        wedges, _, autotexts = ax.pie(
            values,
            labels=None,
            autopct=lambda pct: f"{pct:.1f}%",
            colors=[_INCOME_COLOR, _EXPENSE_COLOR],
            startangle=90,
            pctdistance=0.82,
            wedgeprops=dict(width=0.5, edgecolor="#1a1a2e", linewidth=2),
        )
        for autotext in autotexts:
            autotext.set_color("white")
            autotext.set_fontsize(10)
            autotext.set_fontweight("bold")

        ax.legend(
            wedges,
            [f"{label}: {value:,.0f} {DEFAULT_CURRENCY}" for label, value in zip(labels, values)],
            loc="center left",
            bbox_to_anchor=(1, 0, 0.5, 1),
            fontsize=10,
            frameon=False,
        )
        ax.set_title(
            f"Cash flow\nNet: {summary.profit:,.0f} {DEFAULT_CURRENCY}",
            fontsize=14, fontweight="bold", pad=20,
        )

        logger.info("Generated cash-flow pie chart")
        return _to_png(fig)

    def monthly_bar(self, breakdown: list[FlowStats], year: int) -> io.BytesIO | None:
        """
        Grouped bars of income and expenses for each month of ``year``.

        Args:
            breakdown: Twelve FlowStats, January first.

        Returns:
            PNG buffer, or None when the year has no transactions.
        """
        if not any(m.count for m in breakdown):
            return None

        positions = range(len(breakdown))
        width = 0.4
        fig, ax = plt.subplots(figsize=(11, 5))
        ax.bar([p - width / 2 for p in positions], [m.income for m in breakdown],
               width=width, color=_INCOME_COLOR, label="Income", zorder=3)
        ax.bar([p + width / 2 for p in positions], [m.expense for m in breakdown],
               width=width, color=_EXPENSE_COLOR, label="Expenses", zorder=3)

        ax.set_xticks(list(positions))
        ax.set_xticklabels([calendar.month_abbr[i + 1] for i in positions],
                           fontsize=9, color="#e0e0e0")
        ax.set_ylabel(f"Amount ({DEFAULT_CURRENCY})", fontsize=11, color="#e0e0e0")
        ax.set_title(f"Income vs expenses - {year}", fontsize=13, fontweight="bold", pad=15)
        ax.legend(frameon=False)

        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)
        ax.spines["left"].set_color("#444")
        ax.spines["bottom"].set_color("#444")
        ax.tick_params(colors="#e0e0e0")
        ax.grid(axis="y", alpha=0.2, color="#888")
        ax.set_axisbelow(True)

        logger.info(f"Generated monthly bar chart for {year}")
        return _to_png(fig)
