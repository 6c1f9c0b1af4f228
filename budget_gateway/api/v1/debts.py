"""POST/GET /v1/debts, GET /v1/debts/priority and GET /v1/debts/recommendations"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import (
    DebtCreateRequest,
    DebtListResponse,
    DebtPrioritySchema,
    DebtResponse,
    PriorityResponse,
    RecommendationSchema,
    RecommendationsResponse,
)
from budget_gateway.infrastructure.database.models import Debt
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.infrastructure.database.repositories import DebtRepository, to_snapshot
from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.priority import PRIORITY_METHODS, score_debts, summarize_priorities
from budget_gateway.domain.recommendations import build_recommendations

router = APIRouter()


def to_debt_response(db_debt: Debt) -> DebtResponse:
    return DebtResponse(
        debt_id=str(db_debt.id),
        name=db_debt.name,
        bank=db_debt.bank,
        balance=db_debt.balance,
        apr=db_debt.apr,
        minimum_payment=db_debt.minimum_payment,
        payment_day=db_debt.payment_day,
        promotional_apr=db_debt.promotional_apr,
        promotional_apr_end_date=db_debt.promotional_apr_end_date,
        is_installment=bool(db_debt.is_installment),
        installment_amount=db_debt.installment_amount,
        start_date=db_debt.start_date,
        end_date=db_debt.end_date,
    )


@router.post("/debts", response_model=DebtResponse, status_code=201)
def create_debt(request_body: DebtCreateRequest, db: Session = Depends(get_db)):
    """Record a new debt for a user"""
    if request_body.start_date and request_body.end_date and request_body.end_date < request_body.start_date:
        raise HTTPException(status_code=422, detail="end_date must not be before start_date")

    fields = request_body.model_dump(exclude={"user_id"})
    try:
        db_debt = DebtRepository(db).create_debt(request_body.user_id, **fields)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error creating debt: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return to_debt_response(db_debt)


@router.get("/debts", response_model=DebtListResponse)
def list_debts(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """List a user's debts with balance and minimum payment totals"""
    debts = DebtRepository(db).get_debts_by_user(user_id)

    return DebtListResponse(
        user_id=user_id,
        total_balance=round(sum(d.balance for d in debts), 2),
        total_minimum_payments=round(sum(d.minimum_payment for d in debts), 2),
        debts=[to_debt_response(d) for d in debts],
    )


@router.get("/debts/priority", response_model=PriorityResponse)
def get_debt_priority(
    user_id: str = Query(..., description="User identifier"),
    method: str = Query("avalanche", description=f"One of {', '.join(PRIORITY_METHODS)}"),
    db: Session = Depends(get_db),
):
    """
    Score active debts 1-10 for the priority card view.

    Scores rank debts relative to each other and are not payoff projections.
    """
    snapshots = [to_snapshot(d) for d in DebtRepository(db).get_debts_by_user(user_id, active_only=True)]

    try:
        priorities = score_debts(snapshots, method)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))

    summary = summarize_priorities(snapshots)

    return PriorityResponse(
        user_id=user_id,
        method=method,
        total_minimum_payments=round(summary.total_minimum_payments, 2),
        total_balance=round(summary.total_balance, 2),
        estimated_months=summary.estimated_months,
        debts=[
            DebtPrioritySchema(
                debt_id=p.debt.debt_id,
                name=p.debt.name,
                balance=p.debt.balance,
                apr=p.debt.apr,
                minimum_payment=p.debt.minimum_payment,
                score=p.score,
                band=p.band,
                payoff_progress=round(p.payoff_progress, 1),
            )
            for p in priorities
        ],
    )


@router.get("/debts/recommendations", response_model=RecommendationsResponse)
def get_debt_recommendations(
    user_id: str = Query(..., description="User identifier"),
    extra_payment: float = Query(0.0, ge=0, description="Extra amount available this month"),
    db: Session = Depends(get_db),
):
    """Rule-based payoff advice over the user's active debts"""
    snapshots = [to_snapshot(d) for d in DebtRepository(db).get_debts_by_user(user_id, active_only=True)]

    try:
        recommendations = build_recommendations(snapshots, extra_payment)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return RecommendationsResponse(
        user_id=user_id,
        recommendations=[
            RecommendationSchema(kind=r.kind, message=r.message, debt_labels=r.debt_labels)
            for r in recommendations
        ],
    )
