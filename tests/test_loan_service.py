import pytest

from models.loan import LOAN_COMPLETED, Loan
from services.loan_service import calculate_emi, loan_portfolio


def test_zero_rate_is_plain_division():
    assert calculate_emi(1200, 0, 12) == 100
    # not rounded when there is no interest
    assert calculate_emi(1000, 0, 3) == pytest.approx(333.3333333)


def test_known_installment():
    # 100,000 at 12% over 12 months
    assert calculate_emi(100000, 12, 12) == 8885.0


def test_result_is_a_whole_unit():
    emi = calculate_emi(500000, 10.5, 36)
    assert emi == int(emi)


@pytest.mark.parametrize("principal,rate,months", [
    (100000, 12, 12),
    (500000, 9, 60),
    (25000, 18, 6),
    (1000000, 7.5, 240),
])
def test_installments_cover_principal(principal, rate, months):
    emi = calculate_emi(principal, rate, months)
    assert emi > 0
    assert emi * months >= principal


def test_single_installment_includes_one_month_interest():
    assert calculate_emi(12000, 12, 1) == 12120.0


def test_portfolio_totals():
    loans = [
        Loan("Equipment", 100000, 12, 12, 8885, paid_emi_count=2, id="l1"),
        Loan("Van", 50000, 0, 10, 5000, paid_emi_count=10, status=LOAN_COMPLETED, id="l2"),
    ]
    portfolio = loan_portfolio(loans)
    assert portfolio.total_outstanding == 10 * 8885
    assert portfolio.total_principal == 150000
    assert portfolio.monthly_emi == 8885
    assert portfolio.active_count == 1


def test_empty_portfolio():
    portfolio = loan_portfolio([])
    assert portfolio.total_outstanding == 0
    assert portfolio.active_count == 0
