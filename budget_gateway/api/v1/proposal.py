"""POST /v1/proposal and GET /v1/proposal/{proposal_id} - Monthly surplus allocation"""

import uuid
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import AllocationSchema, ProposalRequest, ProposalResponse
from budget_gateway.api.dependencies import get_request_id
from budget_gateway.config import settings
from budget_gateway.infrastructure.database.models import PaymentProposal
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.infrastructure.database.repositories import DebtRepository, ProposalRepository, to_snapshot
from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.payoff import AVALANCHE, simulate
from budget_gateway.domain.proposal import build_monthly_proposal
from budget_gateway.infrastructure.observability.metrics import record_forecast

router = APIRouter()


def to_proposal_response(db_proposal: PaymentProposal) -> ProposalResponse:
    return ProposalResponse(
        proposal_id=str(db_proposal.id),
        user_id=db_proposal.user_id,
        surplus=round(db_proposal.surplus, 2),
        strategy=db_proposal.strategy,
        allocations=[
            AllocationSchema(**{**item, "amount": round(item["amount"], 2)})
            for item in db_proposal.allocations
        ],
        converged=db_proposal.converged,
        months_to_payoff=db_proposal.months_to_payoff,
        projected_payoff_date=db_proposal.projected_payoff_date if db_proposal.converged else None,
        total_interest_paid=round(db_proposal.total_interest_paid, 2),
        interest_saved=round(db_proposal.interest_saved, 2) if db_proposal.interest_saved is not None else None,
        created_at=db_proposal.created_at.isoformat(),
    )


@router.post("/proposal", response_model=ProposalResponse, status_code=201)
def create_proposal(
    request_body: ProposalRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Propose how to split this month's surplus and project its effect.

    Flow:
    1. Build the 50/30/20 allocation from cash flow minus planned savings
    2. Simulate payoff with the debt allocation as extra payment, highest APR first
       so the projection follows the proposed target
    3. Persist proposal + projection
    """
    request_id = get_request_id(request)

    try:
        stored = DebtRepository(db).get_debts_by_user(request_body.user_id, active_only=True)
        snapshots = [to_snapshot(d) for d in stored]

        proposal = build_monthly_proposal(request_body.cash_flow, request_body.monthly_savings, snapshots)
        result = simulate(
            snapshots,
            extra_payment=proposal.debt_allocation,
            strategy=AVALANCHE,
            month_cap=settings.simulation_month_cap,
        )

        db_proposal = ProposalRepository(db).create_proposal(request_body.user_id, proposal, result)
        db.commit()

    except InvalidInputError as e:
        db.rollback()
        logging.warning(f"Invalid proposal input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_forecast(result.strategy, result.converged, result.months_to_payoff)
    return to_proposal_response(db_proposal)


@router.get("/proposal/{proposal_id}", response_model=ProposalResponse)
def get_proposal(proposal_id: str, db: Session = Depends(get_db)):
    """Retrieve a saved proposal"""
    try:
        proposal_uuid = uuid.UUID(proposal_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid proposal ID format")

    db_proposal = ProposalRepository(db).get_proposal_by_id(proposal_uuid)
    if not db_proposal:
        raise HTTPException(status_code=404, detail="Proposal not found")

    return to_proposal_response(db_proposal)
