"""POST /v1/payments/generate - Automatic debt payment tracker entries"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import PaymentGenerateRequest, PaymentGenerateResponse
from budget_gateway.api.dependencies import get_request_id
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.infrastructure.database.repositories import DebtRepository, PaymentRepository, to_account
from budget_gateway.domain.payments import generate_payment_schedule
from budget_gateway.infrastructure.observability.metrics import payments_generated_counter

router = APIRouter()


@router.post("/payments/generate", response_model=PaymentGenerateResponse)
def generate_payments(
    request_body: PaymentGenerateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Create pending payment entries from 3 months back to 6 months ahead.

    Months that already have an entry for a debt are skipped, so the job can
    run repeatedly.
    """
    request_id = get_request_id(request)

    try:
        debt_repo = DebtRepository(db)
        if request_body.user_id:
            stored = [
                d for d in debt_repo.get_debts_by_user(request_body.user_id, active_only=True)
                if d.minimum_payment > 0
            ]
        else:
            stored = debt_repo.get_all_active()

        if not stored:
            return PaymentGenerateResponse(
                generated=0,
                skipped=0,
                debts_processed=0,
                message="No active debts to process",
            )

        owners = {str(d.id): d.user_id for d in stored}
        schedule = generate_payment_schedule([to_account(d) for d in stored], today=request_body.today)
        generated, skipped = PaymentRepository(db).sync_schedule(owners, schedule)
        db.commit()

    except Exception as e:
        db.rollback()
        logging.error(f"Payment generation failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    payments_generated_counter.inc(generated)
    logging.info(
        "Payment generation completed",
        extra={
            "request_id": request_id,
            "step": "payments_generated",
            "generated": generated,
            "skipped": skipped,
            "debts_processed": len(stored),
        },
    )

    return PaymentGenerateResponse(
        generated=generated,
        skipped=skipped,
        debts_processed=len(stored),
        message=f"Generated {generated} new automatic debt payments ({skipped} already existed)",
    )
