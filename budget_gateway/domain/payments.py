"""Automatic monthly debt payment schedule generation"""

from datetime import date
from typing import Iterable, List

from budget_gateway.domain.models import DebtAccount, ScheduledPayment
from budget_gateway.utils.date_utils import add_months, clamp_day, month_start

# Three months back, the current month and six ahead
DEFAULT_MONTH_OFFSETS = range(-3, 7)


def payment_amount(debt: DebtAccount) -> float:
    """Installment amount for scheduled installment debts, otherwise the minimum payment"""
    if debt.is_installment and debt.installment_amount:
        return debt.installment_amount
    return debt.minimum_payment


def is_within_schedule(debt: DebtAccount, target_month: date) -> bool:
    """True when target_month falls inside the debt's start/end months"""
    if debt.start_date and target_month < month_start(debt.start_date):
        return False
    if debt.end_date and target_month > month_start(debt.end_date):
        return False
    return True


def generate_payment_schedule(
    debts: List[DebtAccount],
    today: date | None = None,
    month_offsets: Iterable[int] = DEFAULT_MONTH_OFFSETS,
) -> List[ScheduledPayment]:
    """
    Build pending payment tracker entries around the current month.

    Requirements:
    - Only debts with a balance and a minimum payment
    - Respect start_date / end_date months
    - Payment day clamped to the month's length (31 → 28/29/30)

    Returns:
        Entries ordered by month, then by input debt order
    """
    if today is None:
        today = date.today()

    active = [d for d in debts if d.balance > 0 and d.minimum_payment > 0]
    current_month = month_start(today)

    schedule = []
    for offset in month_offsets:
        target_month = add_months(current_month, offset)
        for debt in active:
            if not is_within_schedule(debt, target_month):
                continue

            schedule.append(
                ScheduledPayment(
                    debt_id=debt.debt_id,
                    month_year=target_month,
                    payment_date=clamp_day(target_month.year, target_month.month, debt.payment_day),
                    amount=payment_amount(debt),
                )
            )

    return schedule
