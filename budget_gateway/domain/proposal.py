"""Monthly surplus allocation proposal"""

from typing import List, Optional

from budget_gateway.domain.models import DebtSnapshot, MonthlyProposal, ProposalItem

DEBT_SHARE = 0.5
EMERGENCY_SHARE = 0.3
VARIABLE_SHARE = 0.2


def highest_apr_debt(debts: List[DebtSnapshot]) -> Optional[DebtSnapshot]:
    """First debt with the highest effective APR, or None"""
    target = None
    for debt in debts:
        if target is None or debt.effective_apr() > target.effective_apr():
            target = debt
    return target


def build_monthly_proposal(
    cash_flow: float,
    monthly_savings: float,
    debts: List[DebtSnapshot],
) -> MonthlyProposal:
    """
    Split the monthly surplus (cash flow minus planned savings).

    Allocation:
    - 50% extra payment to the highest-APR debt
    - 30% emergency fund
    - 20% variable expenses buffer
    """
    surplus = max(0.0, cash_flow - monthly_savings)
    target = highest_apr_debt(debts)

    debt_amount = surplus * DEBT_SHARE
    emergency_amount = surplus * EMERGENCY_SHARE
    variable_amount = surplus * VARIABLE_SHARE

    items = [
        ProposalItem(
            category="Highest APR Debt",
            name=target.label if target else "No debts",
            amount=debt_amount,
            share=DEBT_SHARE,
            can_apply=target is not None,
            debt_id=(target.debt_id or target.label) if target else None,
        ),
        ProposalItem(
            category="Emergency Fund",
            name="Emergency Savings",
            amount=emergency_amount,
            share=EMERGENCY_SHARE,
            can_apply=True,
        ),
        ProposalItem(
            category="Variable Expenses Buffer",
            name="Variable Expenses",
            amount=variable_amount,
            share=VARIABLE_SHARE,
            can_apply=True,
        ),
    ]

    return MonthlyProposal(
        cash_flow=cash_flow,
        monthly_savings=monthly_savings,
        surplus=surplus,
        items=items,
    )
