"""Debt-to-income risk check and alert endpoints"""

import uuid
import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import AlertListResponse, AlertSchema, RiskCheckRequest, RiskCheckResponse
from budget_gateway.api.dependencies import get_notification_client, get_request_id
from budget_gateway.config import settings
from budget_gateway.infrastructure.clients.notifications import NotificationClient
from budget_gateway.infrastructure.database.models import DebtRiskAlert
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.infrastructure.database.repositories import AlertRepository, DebtRepository
from budget_gateway.domain.exceptions import InsufficientDataError, InvalidInputError
from budget_gateway.domain.risk import HIGH_DEBT_RATIO_ALERT, assess_debt_to_income
from budget_gateway.infrastructure.observability.metrics import record_risk_alert
from budget_gateway.infrastructure.observability.logging import log_risk_check

router = APIRouter()


def to_alert_schema(db_alert: DebtRiskAlert) -> AlertSchema:
    return AlertSchema(
        alert_id=str(db_alert.id),
        alert_type=db_alert.alert_type,
        risk_level=db_alert.risk_level,
        debt_to_income_ratio=round(db_alert.debt_to_income_ratio, 2),
        message=db_alert.message,
        acknowledged=db_alert.acknowledged,
        acknowledged_at=db_alert.acknowledged_at.isoformat() if db_alert.acknowledged_at else None,
        created_at=db_alert.created_at.isoformat(),
    )


@router.post("/risk/check", response_model=RiskCheckResponse)
def check_debt_risk(
    request_body: RiskCheckRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    notification_client: NotificationClient = Depends(get_notification_client),
):
    """
    Compare monthly debt payments against monthly income.

    Flow:
    1. Sum minimum payments of the user's active debts
    2. Classify the debt-to-income ratio
    3. Raise an alert unless one was raised within the cooldown window
    4. Email the alert in the background when an address is given
    """
    request_id = get_request_id(request)

    try:
        debts = DebtRepository(db).get_debts_by_user(request_body.user_id, active_only=True)
        monthly_debt = sum(d.minimum_payment for d in debts)

        assessment = assess_debt_to_income(
            monthly_debt,
            request_body.monthly_income,
            warning_threshold=settings.dti_warning_threshold,
            critical_threshold=settings.dti_critical_threshold,
        )

        alert_id = None
        alert_repo = AlertRepository(db)
        if assessment.should_alert and not alert_repo.has_recent_alert(
            request_body.user_id, HIGH_DEBT_RATIO_ALERT, settings.alert_cooldown_days
        ):
            db_alert = alert_repo.create_alert(request_body.user_id, HIGH_DEBT_RATIO_ALERT, assessment)
            alert_id = str(db_alert.id)
            db.commit()

            record_risk_alert(assessment.risk_level)
            if request_body.email:
                background_tasks.add_task(
                    notification_client.send_debt_alert,
                    request_body.email,
                    assessment.risk_level,
                    assessment.message,
                )

    except (InsufficientDataError, InvalidInputError) as e:
        db.rollback()
        logging.warning(f"Risk check rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    log_risk_check(
        request_id,
        request_body.user_id,
        assessment.risk_level,
        assessment.debt_to_income_ratio,
        alert_id is not None,
    )

    return RiskCheckResponse(
        debt_to_income_ratio=round(assessment.debt_to_income_ratio, 2),
        risk_level=assessment.risk_level,
        message=assessment.message,
        alert_created=alert_id is not None,
        alert_id=alert_id,
    )


@router.get("/risk/alerts", response_model=AlertListResponse)
def list_alerts(
    user_id: str = Query(..., description="User identifier"),
    unacknowledged: bool = Query(False, description="Only alerts not yet acknowledged"),
    db: Session = Depends(get_db),
):
    """Recent debt risk alerts, newest first"""
    alerts = AlertRepository(db).get_alerts_by_user(user_id, unacknowledged_only=unacknowledged)
    return AlertListResponse(user_id=user_id, alerts=[to_alert_schema(a) for a in alerts])


@router.post("/risk/alerts/{alert_id}/acknowledge", response_model=AlertSchema)
def acknowledge_alert(
    alert_id: str,
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """Mark an alert as acknowledged"""
    try:
        alert_uuid = uuid.UUID(alert_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid alert ID format")

    db_alert = AlertRepository(db).acknowledge(user_id, alert_uuid)
    if not db_alert:
        raise HTTPException(status_code=404, detail="Alert not found")

    db.commit()
    return to_alert_schema(db_alert)
