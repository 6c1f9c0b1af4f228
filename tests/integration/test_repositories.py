"""Repository tests against the SQLite test database"""

from datetime import date

import pytest
from sqlalchemy.orm import Session

from budget_gateway.domain.payments import generate_payment_schedule
from budget_gateway.domain.payoff import simulate
from budget_gateway.infrastructure.database.repositories import (
    DebtRepository,
    PaymentRepository,
    to_account,
    to_snapshot,
)

pytestmark = pytest.mark.integration


def test_to_snapshot_derives_promotional_months(db: Session):
    debt = DebtRepository(db).create_debt(
        "user_1",
        name="Balance Transfer",
        balance=3000.0,
        apr=21.0,
        minimum_payment=90.0,
        promotional_apr=0.0,
        promotional_apr_end_date=date(2025, 9, 30),
    )

    snapshot = to_snapshot(debt, today=date(2025, 3, 10))

    assert snapshot.promotional_months_remaining == 7
    assert snapshot.effective_apr() == 0.0
    assert snapshot.debt_id == str(debt.id)


def test_promotion_ending_later_this_month_is_still_active(db: Session):
    debt = DebtRepository(db).create_debt(
        "user_1",
        name="Store Card",
        balance=1000.0,
        apr=24.0,
        minimum_payment=1000.0,
        promotional_apr=0.0,
        promotional_apr_end_date=date(2025, 1, 28),
    )

    snapshot = to_snapshot(debt, today=date(2025, 1, 2))
    result = simulate([snapshot], start_date=date(2025, 1, 2))

    assert snapshot.promotional_months_remaining == 1
    assert snapshot.effective_apr() == 0.0
    assert result.months_to_payoff == 1
    assert result.total_interest_paid == 0.0


def test_sync_schedule_skips_tracked_months(db: Session):
    debt = DebtRepository(db).create_debt(
        "user_1", name="Card", balance=1200.0, apr=18.0, minimum_payment=60.0, payment_day=31
    )
    repo = PaymentRepository(db)
    schedule = generate_payment_schedule([to_account(debt)], today=date(2025, 1, 20))
    owners = {str(debt.id): "user_1"}

    assert repo.sync_schedule(owners, schedule) == (10, 0)
    assert repo.sync_schedule(owners, schedule) == (0, 10)

    payments = repo.get_payments_by_debt(debt.id)
    assert len(payments) == 10
    assert payments[0].month_year == date(2024, 10, 1)
    assert payments[4].payment_date == date(2025, 2, 28)
    assert all(p.status == "pending" for p in payments)
