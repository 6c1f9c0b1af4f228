"""POST /v1/forecast - Debt payoff projection endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import ForecastRequest, ForecastResponse, PayoffMilestoneSchema
from budget_gateway.api.dependencies import get_request_id
from budget_gateway.config import settings
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.infrastructure.database.repositories import DebtRepository, to_snapshot
from budget_gateway.domain.exceptions import InvalidInputError
from budget_gateway.domain.models import DebtSnapshot, SimulationResult
from budget_gateway.domain.payoff import simulate
from budget_gateway.infrastructure.observability.metrics import record_forecast
from budget_gateway.infrastructure.observability.logging import log_forecast
from budget_gateway.utils.date_utils import split_months

router = APIRouter()


def resolve_month_cap(requested: int | None) -> int:
    """Requested cap or the configured default, bounded by the configured maximum"""
    month_cap = requested or settings.simulation_month_cap
    if month_cap > settings.simulation_max_month_cap:
        raise InvalidInputError(
            f"month_cap cannot exceed {settings.simulation_max_month_cap} months"
        )
    return month_cap


def to_forecast_response(result: SimulationResult) -> ForecastResponse:
    """
    Format a simulation result for display.

    Currency values are rounded to cents here and only here; a non-convergent
    run is reported as "undetermined" with no date or duration.
    """
    years = months = payoff_month = None
    if result.converged:
        years, months = split_months(result.months_to_payoff)
        payoff_month = result.projected_payoff_date.strftime("%Y-%m")

    return ForecastResponse(
        strategy=result.strategy,
        extra_payment=round(result.extra_payment, 2),
        month_cap=result.month_cap,
        converged=result.converged,
        payoff_status="paid_off" if result.converged else "undetermined",
        months_to_payoff=result.months_to_payoff,
        projected_payoff_date=result.projected_payoff_date,
        payoff_month=payoff_month,
        duration_years=years,
        duration_months=months,
        total_interest_paid=round(result.total_interest_paid, 2),
        interest_saved=round(result.interest_saved, 2) if result.interest_saved is not None else None,
        months_saved=result.months_saved,
        balance_history=[round(balance, 2) for balance in result.balance_history],
        payoff_order=[PayoffMilestoneSchema(label=m.label, month=m.month) for m in result.payoff_order],
    )


@router.post("/forecast", response_model=ForecastResponse)
def create_forecast(
    request_body: ForecastRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Project debt payoff for stored or inline debts.

    Flow:
    1. Gather debts (inline list, else the user's active stored debts)
    2. Run the payoff simulation with the requested extra payment and strategy
    3. Record metrics and logs
    4. Return the display-ready projection
    """
    start_time = time.time()
    request_id = get_request_id(request)

    if request_body.debts is None and request_body.user_id is None:
        raise HTTPException(status_code=422, detail="Provide user_id or debts")

    try:
        if request_body.debts is not None:
            snapshots = [DebtSnapshot(**debt.model_dump()) for debt in request_body.debts]
        else:
            stored = DebtRepository(db).get_debts_by_user(request_body.user_id, active_only=True)
            snapshots = [to_snapshot(d) for d in stored]

        result = simulate(
            snapshots,
            extra_payment=request_body.extra_payment,
            strategy=request_body.strategy,
            month_cap=resolve_month_cap(request_body.month_cap),
            start_date=request_body.start_date,
        )

    except InvalidInputError as e:
        logging.warning(f"Invalid forecast input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_forecast(result.strategy, result.converged, result.months_to_payoff)
    log_forecast(
        request_id,
        request_body.user_id,
        result.strategy,
        result.converged,
        result.months_to_payoff,
        len(snapshots),
        duration_ms,
    )

    return to_forecast_response(result)
