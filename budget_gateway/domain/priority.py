"""Debt priority scoring for the priority card view"""

import math
from typing import List

from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.models import DebtPriority, DebtSnapshot, PrioritySummary

PRIORITY_METHODS = ("avalanche", "snowball", "hybrid")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _ratio(value: float, maximum: float) -> float:
    return value / maximum if maximum > 0 else 0.0


def calculate_priority_score(debt: DebtSnapshot, debts: List[DebtSnapshot], method: str) -> int:
    """
    Score a debt from 0 to 10 relative to the other debts.

    Scoring:
    - avalanche: APR relative to the highest APR
    - snowball: distance below the largest balance (smaller balance scores higher)
    - hybrid: half APR component, half balance component

    This ranking is independent of the payoff simulator's ordering.
    """
    max_apr = max(d.apr for d in debts)
    max_balance = max(d.balance for d in debts)

    apr_component = _ratio(debt.apr, max_apr)
    balance_component = _ratio(max_balance - debt.balance, max_balance)

    if method == "avalanche":
        return _round_half_up(apr_component * 10)
    elif method == "snowball":
        return _round_half_up(balance_component * 10)
    elif method == "hybrid":
        return _round_half_up(apr_component * 5 + balance_component * 5)
    raise InvalidInputError(f"Unknown priority method: {method!r}")


def priority_band(score: int) -> str:
    """Map score to display band: 8+ high, 5+ medium, otherwise low"""
    if score >= 8:
        return "high"
    elif score >= 5:
        return "medium"
    return "low"


def payoff_progress(debt: DebtSnapshot) -> float:
    """Share of a year's worth of minimum payments relative to the balance, capped at 100"""
    if debt.minimum_payment == 0 or debt.balance == 0:
        return 0.0
    months_to_payoff = debt.balance / debt.minimum_payment
    return min(100.0, max(0.0, (12 / months_to_payoff) * 100))


def score_debts(debts: List[DebtSnapshot], method: str = "avalanche") -> List[DebtPriority]:
    """Score every debt and return them highest priority first"""
    if method not in PRIORITY_METHODS:
        raise InvalidInputError(f"Unknown priority method: {method!r}")
    if not debts:
        return []

    priorities = []
    for debt in debts:
        score = calculate_priority_score(debt, debts, method)
        priorities.append(
            DebtPriority(
                debt=debt,
                score=score,
                band=priority_band(score),
                payoff_progress=payoff_progress(debt),
            )
        )

    return sorted(priorities, key=lambda p: p.score, reverse=True)


def summarize_priorities(debts: List[DebtSnapshot]) -> PrioritySummary:
    """Totals plus the rough months-to-debt-free estimate (balance / minimums)"""
    total_minimum = sum(d.minimum_payment for d in debts)
    total_balance = sum(d.balance for d in debts)
    estimated = math.ceil(total_balance / total_minimum) if total_minimum > 0 else None

    return PrioritySummary(
        total_minimum_payments=total_minimum,
        total_balance=total_balance,
        estimated_months=estimated,
    )
