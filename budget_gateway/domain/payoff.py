"""Debt payoff simulator - month-by-month avalanche/snowball amortization"""

import copy
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional

from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.models import DebtSnapshot, PayoffMilestone, SimulationResult
from budget_gateway.utils.date_utils import add_months

AVALANCHE = "avalanche"
SNOWBALL = "snowball"
STRATEGIES = (AVALANCHE, SNOWBALL)

DEFAULT_MONTH_CAP = 600

# Balances this close to zero are float noise, not money owed
SETTLED_EPSILON = 1e-9

_SORT_KEYS: Dict[str, Callable[[DebtSnapshot], float]] = {
    AVALANCHE: lambda d: -d.effective_apr(),
    SNOWBALL: lambda d: d.balance,
}


@dataclass
class _RunOutcome:
    months: int
    converged: bool
    total_interest: float
    balance_history: List[float] = field(default_factory=list)
    payoff_order: List[PayoffMilestone] = field(default_factory=list)


def validate_inputs(debts: List[DebtSnapshot], extra_payment: float, strategy: str, month_cap: int) -> None:
    """
    Reject invalid simulation input before any month is simulated.

    Raises:
        InvalidInputError: negative amounts/rates, non-positive cap, unknown strategy
    """
    if strategy not in STRATEGIES:
        raise InvalidInputError(f"Unknown payoff strategy: {strategy!r}")
    if month_cap <= 0:
        raise InvalidInputError("month_cap must be positive")
    if extra_payment < 0:
        raise InvalidInputError("extra_payment cannot be negative")

    for debt in debts:
        if debt.balance < 0:
            raise InvalidInputError(f"{debt.label}: balance cannot be negative")
        if debt.apr < 0:
            raise InvalidInputError(f"{debt.label}: APR cannot be negative")
        if debt.minimum_payment < 0:
            raise InvalidInputError(f"{debt.label}: minimum payment cannot be negative")
        if debt.promotional_apr is not None and debt.promotional_apr < 0:
            raise InvalidInputError(f"{debt.label}: promotional APR cannot be negative")
        if debt.promotional_months_remaining is not None and debt.promotional_months_remaining < 0:
            raise InvalidInputError(f"{debt.label}: promotional months cannot be negative")


def _run(debts: List[DebtSnapshot], extra_payment: float, strategy: str, month_cap: int) -> _RunOutcome:
    """Simulate one scenario on a private copy of the debts"""
    working = copy.deepcopy(debts)
    sort_key = _SORT_KEYS[strategy]
    outcome = _RunOutcome(months=0, converged=True, total_interest=0.0)

    def active() -> bool:
        return any(d.balance > SETTLED_EPSILON for d in working)

    while active():
        if outcome.months >= month_cap:
            outcome.converged = False
            break

        # Promotional windows and balances move every month, so re-sort each time
        working.sort(key=sort_key)
        open_before = [d for d in working if d.balance > SETTLED_EPSILON]

        for debt in open_before:
            interest = debt.balance * (debt.effective_apr() / 100 / 12)
            outcome.total_interest += interest
            if debt.minimum_payment >= debt.balance:
                # Closing payment: the minimum covers principal, settle it with this month's interest
                payment = debt.balance + interest
            else:
                payment = min(debt.minimum_payment, debt.balance + interest)
            debt.balance = debt.balance + interest - payment
            if debt.promotional_months_remaining:
                debt.promotional_months_remaining -= 1

        extra_left = extra_payment
        for debt in working:
            if extra_left <= 0:
                break
            if debt.balance > SETTLED_EPSILON:
                applied = min(extra_left, debt.balance)
                debt.balance -= applied
                extra_left -= applied

        outcome.months += 1

        for debt in open_before:
            if debt.balance <= SETTLED_EPSILON:
                debt.balance = 0.0
                outcome.payoff_order.append(PayoffMilestone(label=debt.label, month=outcome.months))
        outcome.balance_history.append(sum(d.balance for d in working))

    return outcome


def simulate(
    debts: List[DebtSnapshot],
    extra_payment: float = 0.0,
    strategy: str = AVALANCHE,
    month_cap: Optional[int] = None,
    start_date: Optional[date] = None,
) -> SimulationResult:
    """
    Project months to debt-free, payoff date and total interest.

    Requirements:
    - Each month: accrue interest at apr/12, pay the minimum (capped at what is
      owed; a minimum that covers the principal closes the debt), then send the extra payment to debts in strategy order
    - Avalanche orders by effective APR (highest first), snowball by balance
      (smallest first); ordering is recomputed every month
    - Stops at month_cap; a run that still owes money is non-convergent and
      has no payoff date
    - With extra_payment > 0, a minimum-payments-only baseline is simulated the
      same way to report interest_saved (never negative)

    Args:
        debts: Debt snapshots (never mutated)
        extra_payment: Amount paid on top of minimums every month
        strategy: "avalanche" or "snowball"
        month_cap: Simulation horizon (default DEFAULT_MONTH_CAP)
        start_date: Date the simulation starts from (default: today)

    Returns:
        SimulationResult; projected_payoff_date is None when not converged

    Example:
        1000 @ 24% APR, minimum 1000 → interest 20 in month 1, paid off in 1 month
    """
    if month_cap is None:
        month_cap = DEFAULT_MONTH_CAP
    validate_inputs(debts, extra_payment, strategy, month_cap)

    if start_date is None:
        start_date = date.today()

    scenario = _run(debts, extra_payment, strategy, month_cap)

    interest_saved = None
    months_saved = None
    if extra_payment > 0:
        baseline = _run(debts, 0.0, strategy, month_cap)
        interest_saved = max(0.0, baseline.total_interest - scenario.total_interest)
        if baseline.converged and scenario.converged:
            months_saved = max(0, baseline.months - scenario.months)

    return SimulationResult(
        strategy=strategy,
        extra_payment=extra_payment,
        month_cap=month_cap,
        months_to_payoff=scenario.months,
        converged=scenario.converged,
        projected_payoff_date=add_months(start_date, scenario.months) if scenario.converged else None,
        total_interest_paid=scenario.total_interest,
        interest_saved=interest_saved,
        months_saved=months_saved,
        balance_history=scenario.balance_history,
        payoff_order=scenario.payoff_order,
    )
