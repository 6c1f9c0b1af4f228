"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from budget_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding timestamp, level and service name to each record"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on stdout"""
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


def log_forecast(
    request_id: str,
    user_id: Optional[str],
    strategy: str,
    converged: bool,
    months_to_payoff: int,
    debt_count: int,
    duration_ms: float,
) -> None:
    """Log payoff forecast outcome"""
    logging.info(
        "Forecast completed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "forecast_complete",
            "strategy": strategy,
            "outcome": "converged" if converged else "non_convergent",
            "months_to_payoff": months_to_payoff,
            "debt_count": debt_count,
            "duration_ms": duration_ms,
        },
    )


def log_risk_check(
    request_id: str,
    user_id: str,
    risk_level: str,
    ratio: float,
    alert_created: bool,
) -> None:
    """Log debt-to-income check outcome"""
    logging.info(
        "Risk check completed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "risk_check_complete",
            "risk_level": risk_level,
            "debt_to_income_ratio": round(ratio, 2),
            "alert_created": alert_created,
        },
    )
