"""Unit tests for automatic debt payment schedule generation"""

from datetime import date
from budget_gateway.domain.models import DebtAccount
from budget_gateway.domain.payments import generate_payment_schedule, payment_amount

TODAY = date(2025, 3, 15)


def make_debt(**overrides) -> DebtAccount:
    fields = dict(
        debt_id="debt-1",
        name="Card",
        balance=1500.0,
        minimum_payment=75.0,
        payment_day=31,
    )
    fields.update(overrides)
    return DebtAccount(**fields)


def test_schedule_covers_three_months_back_to_six_ahead():
    schedule = generate_payment_schedule([make_debt()], today=TODAY)

    assert len(schedule) == 10
    assert schedule[0].month_year == date(2024, 12, 1)
    assert schedule[-1].month_year == date(2025, 9, 1)
    assert all(p.status == "pending" for p in schedule)


def test_payment_day_clamped_to_month_length():
    """Day 31 falls on the last day of shorter months"""
    schedule = generate_payment_schedule([make_debt()], today=TODAY)
    dates = {p.month_year: p.payment_date for p in schedule}

    assert dates[date(2025, 2, 1)] == date(2025, 2, 28)
    assert dates[date(2025, 4, 1)] == date(2025, 4, 30)
    assert dates[date(2025, 3, 1)] == date(2025, 3, 31)


def test_schedule_respects_start_and_end_dates():
    debt = make_debt(start_date=date(2025, 3, 10), end_date=date(2025, 5, 20))
    schedule = generate_payment_schedule([debt], today=TODAY)

    assert [p.month_year for p in schedule] == [date(2025, 3, 1), date(2025, 4, 1), date(2025, 5, 1)]


def test_schedule_skips_settled_and_unpaid_debts():
    debts = [
        make_debt(debt_id="settled", balance=0.0),
        make_debt(debt_id="no-minimum", minimum_payment=0.0),
    ]

    assert generate_payment_schedule(debts, today=TODAY) == []


def test_installment_amount_overrides_minimum():
    assert payment_amount(make_debt(is_installment=True, installment_amount=120.0)) == 120.0
    assert payment_amount(make_debt(is_installment=True, installment_amount=None)) == 75.0
    assert payment_amount(make_debt(is_installment=False, installment_amount=120.0)) == 75.0
