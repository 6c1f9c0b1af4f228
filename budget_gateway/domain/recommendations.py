"""Rule-based debt recommendations"""

from typing import List

from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.models import DebtSnapshot, Recommendation

PROMOTION_WARNING_MONTHS = 3
HIGH_APR_THRESHOLD = 15.0


def prioritize_by_effective_apr(debts: List[DebtSnapshot]) -> List[DebtSnapshot]:
    """Open debts ordered by effective APR, highest first (input order on ties)"""
    return sorted((d for d in debts if d.balance > 0), key=lambda d: -d.effective_apr())


def promotion_ending_soon(debt: DebtSnapshot) -> bool:
    return (
        debt.promotional_apr is not None
        and debt.promotional_months_remaining is not None
        and 0 < debt.promotional_months_remaining <= PROMOTION_WARNING_MONTHS
    )


def build_recommendations(debts: List[DebtSnapshot], extra_payment: float = 0.0) -> List[Recommendation]:
    """
    Advice for the debt dashboard, most urgent first.

    Rules:
    - No open debts: a single debt-free message
    - Promotional APR ending within 3 months: warn about the first such debt
    - Extra payment available: apply it to the top effective-APR debt
    - Two or more debts: focus on the first, then the second
    - Effective APR above 15%: suggest consolidating those debts
    """
    if extra_payment < 0:
        raise InvalidInputError("Extra payment cannot be negative")

    ordered = prioritize_by_effective_apr(debts)
    if not ordered:
        return [Recommendation(kind="debt_free", message="No debts registered. You're debt-free!")]

    recommendations = []

    ending = [d for d in ordered if promotion_ending_soon(d)]
    if ending:
        debt = ending[0]
        months = debt.promotional_months_remaining
        recommendations.append(
            Recommendation(
                kind="promotion_ending",
                message=(
                    f"URGENT: {debt.label}'s promotional APR ({debt.promotional_apr:g}%) ends in "
                    f"{months} month{'s' if months != 1 else ''}. APR will increase to {debt.apr:g}%. "
                    "Prioritize this debt!"
                ),
                debt_labels=[debt.label],
            )
        )

    top = ordered[0]
    if extra_payment > 0:
        recommendations.append(
            Recommendation(
                kind="extra_payment",
                message=(
                    f"Apply {extra_payment:.2f} extra to {top.label} "
                    f"(current APR: {top.effective_apr():g}%) to save on interest."
                ),
                debt_labels=[top.label],
            )
        )

    if len(ordered) > 1:
        second = ordered[1]
        recommendations.append(
            Recommendation(
                kind="focus_order",
                message=f"Focus on {top.label} first, then move to {second.label}.",
                debt_labels=[top.label, second.label],
            )
        )

    high_apr = [d.label for d in ordered if d.effective_apr() > HIGH_APR_THRESHOLD]
    if high_apr:
        recommendations.append(
            Recommendation(
                kind="consolidate",
                message=(
                    f"Consider consolidating high-APR debts ({', '.join(high_apr)}) "
                    "into a lower-rate loan."
                ),
                debt_labels=high_apr,
            )
        )

    return recommendations
