"""SQLAlchemy ORM models for debts, payment tracker, risk alerts and proposals"""

import uuid
from sqlalchemy import Column, Boolean, Float, DateTime, Date, Integer, ForeignKey, Text, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Debt(Base):
    """Debt owned by a user (credit card, loan, installment purchase)"""

    __tablename__ = "debts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    profile_id = Column(Text, nullable=True)
    name = Column(Text, nullable=False)
    bank = Column(Text, nullable=True)
    balance = Column(Float, nullable=False)
    apr = Column(Float, nullable=False)
    minimum_payment = Column(Float, nullable=False)
    payment_day = Column(Integer, nullable=False, default=1)
    promotional_apr = Column(Float, nullable=True)
    promotional_apr_end_date = Column(Date, nullable=True)
    is_installment = Column(Boolean, nullable=False, default=False)
    installment_amount = Column(Float, nullable=True)
    number_of_installments = Column(Integer, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    payments = relationship("DebtPayment", back_populates="debt", cascade="all, delete-orphan")


class DebtPayment(Base):
    """Payment tracker entry for a debt in a given month"""

    __tablename__ = "debt_payments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    debt_id = Column(UUID(as_uuid=True), ForeignKey("debts.id", ondelete="CASCADE"), nullable=False)
    month_year = Column(Date, nullable=False)
    payment_date = Column(Date, nullable=False)
    amount = Column(Float, nullable=False)
    status = Column(Text, nullable=False, default="pending")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    debt = relationship("Debt", back_populates="payments")


class DebtRiskAlert(Base):
    """Debt-to-income alert raised for a user"""

    __tablename__ = "debt_risk_alerts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    alert_type = Column(Text, nullable=False)
    risk_level = Column(Text, nullable=False)
    debt_to_income_ratio = Column(Float, nullable=False)
    message = Column(Text, nullable=False)
    acknowledged = Column(Boolean, nullable=False, default=False)
    acknowledged_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class PaymentProposal(Base):
    """Saved surplus allocation with its payoff projection"""

    __tablename__ = "payment_proposals"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    cash_flow = Column(Float, nullable=False)
    monthly_savings = Column(Float, nullable=False)
    surplus = Column(Float, nullable=False)
    strategy = Column(Text, nullable=False)
    allocations = Column(JSON, nullable=False)
    months_to_payoff = Column(Integer, nullable=False)
    converged = Column(Boolean, nullable=False)
    projected_payoff_date = Column(Date, nullable=True)
    total_interest_paid = Column(Float, nullable=False)
    interest_saved = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
