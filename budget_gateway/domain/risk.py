"""Debt-to-income risk assessment"""

from budget_gateway.domain.exceptions import InsufficientDataError, InvalidInputError
from budget_gateway.domain.models import DebtRiskAssessment

HIGH_DEBT_RATIO_ALERT = "high_debt_ratio"


def debt_to_income_ratio(total_monthly_debt: float, total_monthly_income: float) -> float:
    """Monthly debt obligations as a percentage of monthly income"""
    if total_monthly_income <= 0:
        raise InsufficientDataError("No income recorded; cannot compute debt-to-income ratio")
    if total_monthly_debt < 0:
        raise InvalidInputError("Monthly debt total cannot be negative")
    return total_monthly_debt * 100 / total_monthly_income


def assess_debt_to_income(
    total_monthly_debt: float,
    total_monthly_income: float,
    warning_threshold: float = 35.0,
    critical_threshold: float = 40.0,
) -> DebtRiskAssessment:
    """
    Classify debt-to-income ratio into risk levels.

    Thresholds:
    - ratio >= critical (40%): high risk, critical alert
    - ratio > warning (35%): medium risk, approaching the limit
    - otherwise: no alert
    """
    ratio = debt_to_income_ratio(total_monthly_debt, total_monthly_income)

    if ratio >= critical_threshold:
        return DebtRiskAssessment(
            debt_to_income_ratio=ratio,
            risk_level="high",
            should_alert=True,
            message=(
                f"Critical alert: your debt-to-income ratio is {ratio:.1f}%. "
                f"It's recommended to keep it below {critical_threshold:.0f}%. "
                "Consider debt consolidation or financial counseling."
            ),
        )
    elif ratio > warning_threshold:
        return DebtRiskAssessment(
            debt_to_income_ratio=ratio,
            risk_level="medium",
            should_alert=True,
            message=(
                f"Warning: your debt-to-income ratio is {ratio:.1f}%. "
                f"It's approaching the recommended limit of {warning_threshold:.0f}%. "
                "Consider reducing expenses or increasing debt payments."
            ),
        )

    return DebtRiskAssessment(
        debt_to_income_ratio=ratio,
        risk_level="none",
        should_alert=False,
        message=f"Your debt-to-income ratio is {ratio:.1f}%.",
    )
