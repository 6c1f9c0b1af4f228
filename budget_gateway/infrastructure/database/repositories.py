"""Data access layer for budgeting entities"""

import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from budget_gateway.infrastructure.database.models import Debt, DebtPayment, DebtRiskAlert, PaymentProposal
from budget_gateway.domain.models import (
    DebtAccount,
    DebtRiskAssessment,
    DebtSnapshot,
    MonthlyProposal,
    ScheduledPayment,
    SimulationResult,
)
from budget_gateway.utils.date_utils import months_started_before


def to_snapshot(db_debt: Debt, today: Optional[date] = None) -> DebtSnapshot:
    """Convert a stored debt into a simulator snapshot"""
    promotional_months = None
    if db_debt.promotional_apr is not None and db_debt.promotional_apr_end_date is not None:
        promotional_months = months_started_before(today or date.today(), db_debt.promotional_apr_end_date)

    return DebtSnapshot(
        balance=db_debt.balance,
        apr=db_debt.apr,
        minimum_payment=db_debt.minimum_payment,
        promotional_apr=db_debt.promotional_apr,
        promotional_months_remaining=promotional_months,
        name=db_debt.name,
        debt_id=str(db_debt.id),
    )


def to_account(db_debt: Debt) -> DebtAccount:
    """Convert a stored debt into its payment schedule view"""
    return DebtAccount(
        debt_id=str(db_debt.id),
        name=db_debt.name,
        balance=db_debt.balance,
        minimum_payment=db_debt.minimum_payment,
        payment_day=db_debt.payment_day,
        is_installment=bool(db_debt.is_installment),
        installment_amount=db_debt.installment_amount,
        start_date=db_debt.start_date,
        end_date=db_debt.end_date,
    )


class DebtRepository:
    """Repository for user debts"""

    def __init__(self, db: Session):
        self.db = db

    def create_debt(self, user_id: str, **fields: Any) -> Debt:
        """Persist a new debt"""
        db_debt = Debt(user_id=user_id, **fields)
        self.db.add(db_debt)
        self.db.flush()
        return db_debt

    def get_debts_by_user(self, user_id: str, active_only: bool = False) -> List[Debt]:
        """Fetch a user's debts, oldest first so ordering ties are stable"""
        query = self.db.query(Debt).filter(Debt.user_id == user_id)
        if active_only:
            query = query.filter(Debt.balance > 0)
        return query.order_by(Debt.created_at.asc(), Debt.name.asc()).all()

    def get_debt(self, user_id: str, debt_id: uuid.UUID) -> Optional[Debt]:
        return (
            self.db.query(Debt)
            .filter(Debt.id == debt_id, Debt.user_id == user_id)
            .first()
        )

    def get_all_active(self) -> List[Debt]:
        """Active debts across all users (scheduled payment generation)"""
        return (
            self.db.query(Debt)
            .filter(Debt.balance > 0, Debt.minimum_payment > 0)
            .order_by(Debt.user_id.asc(), Debt.created_at.asc())
            .all()
        )


class PaymentRepository:
    """Repository for the debt payment tracker"""

    def __init__(self, db: Session):
        self.db = db

    def payment_exists(self, debt_id: uuid.UUID, month_year: date) -> bool:
        return (
            self.db.query(DebtPayment.id)
            .filter(DebtPayment.debt_id == debt_id, DebtPayment.month_year == month_year)
            .first()
            is not None
        )

    def sync_schedule(self, user_ids: Dict[str, str], schedule: List[ScheduledPayment]) -> Tuple[int, int]:
        """
        Insert scheduled payments that are not tracked yet.

        Args:
            user_ids: debt_id -> owning user_id
            schedule: Generated entries

        Returns:
            (generated, skipped) counts
        """
        generated = 0
        skipped = 0
        for entry in schedule:
            debt_uuid = uuid.UUID(entry.debt_id)
            if self.payment_exists(debt_uuid, entry.month_year):
                skipped += 1
                continue

            self.db.add(
                DebtPayment(
                    user_id=user_ids[entry.debt_id],
                    debt_id=debt_uuid,
                    month_year=entry.month_year,
                    payment_date=entry.payment_date,
                    amount=entry.amount,
                    status=entry.status,
                    notes="Auto-generated payment",
                )
            )
            # Flush so a duplicate entry later in the same schedule is detected
            self.db.flush()
            generated += 1

        return generated, skipped

    def get_payments_by_debt(self, debt_id: uuid.UUID) -> List[DebtPayment]:
        return (
            self.db.query(DebtPayment)
            .filter(DebtPayment.debt_id == debt_id)
            .order_by(DebtPayment.month_year.asc())
            .all()
        )


class AlertRepository:
    """Repository for debt risk alerts"""

    def __init__(self, db: Session):
        self.db = db

    def create_alert(self, user_id: str, alert_type: str, assessment: DebtRiskAssessment) -> DebtRiskAlert:
        db_alert = DebtRiskAlert(
            user_id=user_id,
            alert_type=alert_type,
            risk_level=assessment.risk_level,
            debt_to_income_ratio=assessment.debt_to_income_ratio,
            message=assessment.message,
        )
        self.db.add(db_alert)
        self.db.flush()
        return db_alert

    def has_recent_alert(self, user_id: str, alert_type: str, days: int) -> bool:
        """True when an alert of this type was raised within the last `days` days"""
        since = datetime.now(timezone.utc) - timedelta(days=days)
        return (
            self.db.query(DebtRiskAlert.id)
            .filter(
                DebtRiskAlert.user_id == user_id,
                DebtRiskAlert.alert_type == alert_type,
                DebtRiskAlert.created_at >= since,
            )
            .first()
            is not None
        )

    def get_alerts_by_user(self, user_id: str, unacknowledged_only: bool = False, limit: int = 50) -> List[DebtRiskAlert]:
        query = self.db.query(DebtRiskAlert).filter(DebtRiskAlert.user_id == user_id)
        if unacknowledged_only:
            query = query.filter(DebtRiskAlert.acknowledged.is_(False))
        return query.order_by(DebtRiskAlert.created_at.desc()).limit(limit).all()

    def acknowledge(self, user_id: str, alert_id: uuid.UUID) -> Optional[DebtRiskAlert]:
        db_alert = (
            self.db.query(DebtRiskAlert)
            .filter(DebtRiskAlert.id == alert_id, DebtRiskAlert.user_id == user_id)
            .first()
        )
        if db_alert is None:
            return None

        db_alert.acknowledged = True
        db_alert.acknowledged_at = datetime.now(timezone.utc)
        self.db.flush()
        return db_alert


class ProposalRepository:
    """Repository for saved monthly proposals"""

    def __init__(self, db: Session):
        self.db = db

    def create_proposal(self, user_id: str, proposal: MonthlyProposal, result: SimulationResult) -> PaymentProposal:
        db_proposal = PaymentProposal(
            user_id=user_id,
            cash_flow=proposal.cash_flow,
            monthly_savings=proposal.monthly_savings,
            surplus=proposal.surplus,
            strategy=result.strategy,
            allocations=[
                {
                    "category": item.category,
                    "name": item.name,
                    "amount": item.amount,
                    "share": item.share,
                    "can_apply": item.can_apply,
                    "debt_id": item.debt_id,
                }
                for item in proposal.items
            ],
            months_to_payoff=result.months_to_payoff,
            converged=result.converged,
            projected_payoff_date=result.projected_payoff_date,
            total_interest_paid=result.total_interest_paid,
            interest_saved=result.interest_saved,
        )
        self.db.add(db_proposal)
        self.db.flush()
        return db_proposal

    def get_proposal_by_id(self, proposal_id: uuid.UUID) -> Optional[PaymentProposal]:
        return (
            self.db.query(PaymentProposal)
            .filter(PaymentProposal.id == proposal_id)
            .first()
        )
