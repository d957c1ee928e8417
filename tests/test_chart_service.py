from services.chart_service import ChartService
from services.report_service import yearly_breakdown
from services.summary_service import aggregate

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def test_cashflow_pie(sample_transactions):
    buf = ChartService().cashflow_pie(aggregate(sample_transactions))
    assert buf.read(8) == PNG_MAGIC


def test_cashflow_pie_without_data():
    assert ChartService().cashflow_pie(aggregate([])) is None


def test_monthly_bar(sample_transactions):
    buf = ChartService().monthly_bar(yearly_breakdown(sample_transactions, 2025), 2025)
    assert buf.read(8) == PNG_MAGIC


def test_monthly_bar_for_empty_year(sample_transactions):
    assert ChartService().monthly_bar(yearly_breakdown(sample_transactions, 2020), 2020) is None
